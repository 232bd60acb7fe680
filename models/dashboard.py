"""
Admin dashboard schemas.
"""

from models.base import BaseSchema
from models.inquiry import InquiryResponse


class DashboardStats(BaseSchema):
    """Headline counts plus the latest contact inquiries."""

    total_categories: int
    total_products: int
    total_blog_posts: int
    unread_inquiries: int
    trending_products: int
    recent_inquiries: list[InquiryResponse]
