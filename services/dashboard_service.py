"""
Admin dashboard aggregates.
"""

from typing import Optional
import structlog

from config import settings
from models.dashboard import DashboardStats
from services.blog_service import get_blog_service
from services.category_service import get_category_service
from services.inquiry_service import get_inquiry_service
from services.product_service import get_product_service

logger = structlog.get_logger(__name__)


class DashboardService:
    """Counts for the dashboard cards and the recent inquiries panel."""

    def get_stats(self) -> DashboardStats:
        logger.info("getting_dashboard_stats")

        products = get_product_service()
        inquiries = get_inquiry_service()

        stats = DashboardStats(
            total_categories=get_category_service().count(),
            total_products=products.count(),
            total_blog_posts=get_blog_service().count(),
            unread_inquiries=inquiries.count_unread(),
            trending_products=products.count(trending_only=True),
            recent_inquiries=inquiries.get_recent(settings.recent_inquiries_limit),
        )

        logger.info(
            "dashboard_stats_retrieved",
            categories=stats.total_categories,
            products=stats.total_products,
            unread=stats.unread_inquiries
        )
        return stats


# Singleton instance for convenience
_dashboard_service: Optional[DashboardService] = None

def get_dashboard_service() -> DashboardService:
    """Get or create DashboardService instance."""
    global _dashboard_service
    if _dashboard_service is None:
        _dashboard_service = DashboardService()
    return _dashboard_service
