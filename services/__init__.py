"""
Business logic services.

Each service handles one domain area.
"""

from services.storage_service import StorageService
from services.category_service import CategoryService, get_category_service
from services.product_service import ProductService, get_product_service
from services.trending_service import (
    TrendingService,
    TrendingSelection,
    TrendingCuration,
    get_trending_service,
)
from services.blog_service import BlogService, get_blog_service
from services.inquiry_service import InquiryService, get_inquiry_service
from services.company_settings_service import (
    CompanySettingsService,
    get_company_settings_service,
)
from services.auth_service import AuthService, get_auth_service
from services.dashboard_service import DashboardService, get_dashboard_service

__all__ = [
    "StorageService",
    "CategoryService",
    "get_category_service",
    "ProductService",
    "get_product_service",
    "TrendingService",
    "TrendingSelection",
    "TrendingCuration",
    "get_trending_service",
    "BlogService",
    "get_blog_service",
    "InquiryService",
    "get_inquiry_service",
    "CompanySettingsService",
    "get_company_settings_service",
    "AuthService",
    "get_auth_service",
    "DashboardService",
    "get_dashboard_service",
]
