"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ConflictError,
    DuplicateError,
    ExternalServiceError,
    DatabaseError,
    AuthenticationError,

    # Categories
    CategoryNotFoundError,
    CategorySlugExistsError,

    # Products
    ProductNotFoundError,

    # Blog
    BlogPostNotFoundError,
    BlogSlugExistsError,

    # Inquiries
    InquiryNotFoundError,

    # Storage / images
    StorageError,
    InvalidImageError,

    # Trending
    TrendingSelectionError,
    TrendingSaveError,

    # Notifications
    TelegramError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "DuplicateError",
    "ExternalServiceError",
    "DatabaseError",
    "AuthenticationError",

    # Categories
    "CategoryNotFoundError",
    "CategorySlugExistsError",

    # Products
    "ProductNotFoundError",

    # Blog
    "BlogPostNotFoundError",
    "BlogSlugExistsError",

    # Inquiries
    "InquiryNotFoundError",

    # Storage / images
    "StorageError",
    "InvalidImageError",

    # Trending
    "TrendingSelectionError",
    "TrendingSaveError",

    # Notifications
    "TelegramError",
]
