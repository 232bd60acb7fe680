"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    TimestampMixin,
    PaginationParams,
    PaginatedResponse
)
from models.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryListResponse,
)
from models.product import (
    CategoryRef,
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse,
)
from models.blog import (
    BlogPostCreate,
    BlogPostUpdate,
    BlogPostResponse,
    BlogPostListResponse,
    BlogPostDetail,
)
from models.inquiry import (
    InquiryStatus,
    InquiryCreate,
    InquiryResponse,
    InquiryListResponse,
)
from models.company_settings import (
    DEFAULT_COMPANY_SETTINGS,
    CompanySettingsUpdate,
    CompanySettingsResponse,
)
from models.trending import (
    CurationStatus,
    TrendingSaveRequest,
    TrendingBoardResponse,
)
from models.auth import (
    LoginRequest,
    SessionResponse,
    AdminUser,
)
from models.dashboard import DashboardStats

__all__ = [
    # Base
    "BaseSchema",
    "TimestampMixin",
    "PaginationParams",
    "PaginatedResponse",

    # Category
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "CategoryListResponse",

    # Product
    "CategoryRef",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "ProductListResponse",

    # Blog
    "BlogPostCreate",
    "BlogPostUpdate",
    "BlogPostResponse",
    "BlogPostListResponse",
    "BlogPostDetail",

    # Inquiry
    "InquiryStatus",
    "InquiryCreate",
    "InquiryResponse",
    "InquiryListResponse",

    # Company settings
    "DEFAULT_COMPANY_SETTINGS",
    "CompanySettingsUpdate",
    "CompanySettingsResponse",

    # Trending
    "CurationStatus",
    "TrendingSaveRequest",
    "TrendingBoardResponse",

    # Auth
    "LoginRequest",
    "SessionResponse",
    "AdminUser",

    # Dashboard
    "DashboardStats",
]
