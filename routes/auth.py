"""
Admin authentication routes.
"""

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials
import structlog

from models.auth import LoginRequest, SessionResponse, AdminUser
from services.auth_service import get_auth_service
from routes.dependencies import bearer_scheme, handle_error, require_admin

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/login", response_model=SessionResponse)
async def login(data: LoginRequest):
    """
    Sign in with email and password.

    Send the returned access_token as a Bearer token on admin routes.

    Raises:
        401: Invalid credentials
    """
    try:
        return get_auth_service().sign_in(data.email, data.password)

    except Exception as e:
        return handle_error(e)


@router.post("/logout", status_code=204, dependencies=[Depends(require_admin)])
async def logout(credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)):
    """Revoke the caller's session. The same token is rejected afterwards."""
    try:
        get_auth_service().sign_out(credentials.credentials)
        return None

    except Exception as e:
        return handle_error(e)


@router.get("/me", response_model=AdminUser)
async def me(user: AdminUser = Depends(require_admin)):
    """The admin behind the current token."""
    return user
