"""
Admin authentication schemas.
"""

from pydantic import Field
from typing import Optional

from models.base import BaseSchema


class LoginRequest(BaseSchema):
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1)


class SessionResponse(BaseSchema):
    """Session issued by Supabase Auth."""

    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    user_id: str
    email: Optional[str] = None


class AdminUser(BaseSchema):
    id: str
    email: Optional[str] = None
