"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.auth import router as auth_router
from routes.categories import router as categories_router
from routes.products import router as products_router
from routes.blog import router as blog_router
from routes.inquiries import router as inquiries_router
from routes.company_settings import router as company_settings_router
from routes.trending import router as trending_router, admin_router as trending_admin_router
from routes.dashboard import router as dashboard_router

__all__ = [
    "auth_router",
    "categories_router",
    "products_router",
    "blog_router",
    "inquiries_router",
    "company_settings_router",
    "trending_router",
    "trending_admin_router",
    "dashboard_router",
]
