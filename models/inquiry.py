"""
Contact inquiry schemas for validation and serialization.
"""

import re
from pydantic import Field, field_validator
from typing import Optional
from enum import Enum

from models.base import BaseSchema, TimestampMixin


EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class InquiryStatus(str, Enum):
    """Read-state filter for the inquiries list."""
    ALL = "all"
    READ = "read"
    UNREAD = "unread"


class InquiryCreate(BaseSchema):
    """
    Contact form submission.

    Required: name, email, message
    """

    name: str = Field(..., max_length=200, description="Sender name")
    email: str = Field(..., max_length=254, description="Sender email")
    phone: Optional[str] = Field(None, max_length=50)
    company: Optional[str] = Field(None, max_length=200)
    product_interest: Optional[str] = Field(
        None,
        max_length=140,
        description="Category slug or 'general'"
    )
    message: str = Field(..., max_length=5000, description="Message body")

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("email")
    @classmethod
    def email_valid(cls, v: str) -> str:
        if not v:
            raise ValueError("Email is required")
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email address")
        return v

    @field_validator("message")
    @classmethod
    def message_required(cls, v: str) -> str:
        if not v:
            raise ValueError("Message is required")
        return v


class InquiryResponse(BaseSchema, TimestampMixin):
    """Inquiry response with all fields."""

    id: str
    name: str
    email: str
    phone: Optional[str] = None
    company: Optional[str] = None
    product_interest: Optional[str] = None
    message: str
    read: bool = False


class InquiryListResponse(BaseSchema):
    """Page of inquiries plus the unread badge count."""

    data: list[InquiryResponse]
    total: int
    page: int
    page_size: int
    total_pages: int
    unread_count: int
