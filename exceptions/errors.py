"""
Custom exception classes for the application.

Every error carries a stable code, an HTTP status and a details dict so
routes can render it with AppError.to_dict().
"""

from typing import Optional, Any
from datetime import datetime


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "PRODUCT_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.utcnow().isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ConflictError(AppError):
    """Conflict with existing resource (409)."""

    def __init__(
        self,
        message: str,
        code: str = "CONFLICT",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=409,
            details=details
        )


class DuplicateError(ConflictError):
    """Duplicate resource (409)."""

    def __init__(
        self,
        resource: str,
        field: str,
        value: str
    ):
        super().__init__(
            code=f"{resource.upper()}_{field.upper()}_EXISTS",
            message=f"{resource} with this {field} already exists",
            details={field: value}
        )


class ExternalServiceError(AppError):
    """External service failure (503)."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=f"{service.upper()}_ERROR",
            message=message,
            status_code=503,
            details={"service": service, **(details or {})}
        )


class DatabaseError(AppError):
    """Database operation failed (500)."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


class AuthenticationError(AppError):
    """Missing or invalid credentials (401)."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(
            code="AUTHENTICATION_FAILED",
            message=message,
            status_code=401
        )


# ===================
# CATEGORY ERRORS
# ===================

class CategoryNotFoundError(NotFoundError):
    """Category not found."""

    def __init__(self, category_id: str):
        super().__init__(
            resource="Category",
            identifier=category_id,
            code="CATEGORY_NOT_FOUND"
        )


class CategorySlugExistsError(DuplicateError):
    """Category slug already exists."""

    def __init__(self, slug: str):
        super().__init__(
            resource="Category",
            field="slug",
            value=slug
        )


# ===================
# PRODUCT ERRORS
# ===================

class ProductNotFoundError(NotFoundError):
    """Product not found."""

    def __init__(self, product_id: str):
        super().__init__(
            resource="Product",
            identifier=product_id,
            code="PRODUCT_NOT_FOUND"
        )


# ===================
# BLOG ERRORS
# ===================

class BlogPostNotFoundError(NotFoundError):
    """Blog post not found."""

    def __init__(self, identifier: str):
        super().__init__(
            resource="Blog post",
            identifier=identifier,
            code="BLOG_POST_NOT_FOUND"
        )


class BlogSlugExistsError(DuplicateError):
    """Blog post slug already exists."""

    def __init__(self, slug: str):
        super().__init__(
            resource="Blog post",
            field="slug",
            value=slug
        )


# ===================
# INQUIRY ERRORS
# ===================

class InquiryNotFoundError(NotFoundError):
    """Contact inquiry not found."""

    def __init__(self, inquiry_id: str):
        super().__init__(
            resource="Inquiry",
            identifier=inquiry_id,
            code="INQUIRY_NOT_FOUND"
        )


# ===================
# STORAGE / IMAGE ERRORS
# ===================

class StorageError(ExternalServiceError):
    """Object storage upload or removal failed."""

    def __init__(self, operation: str, path: str, message: str):
        super().__init__(
            service="storage",
            message=f"Storage {operation} failed: {message}",
            details={"operation": operation, "path": path}
        )


class InvalidImageError(ValidationError):
    """Uploaded file is not a readable image."""

    def __init__(self, filename: Optional[str], reason: str):
        super().__init__(
            code="INVALID_IMAGE",
            message=f"Invalid image: {reason}",
            details={"filename": filename}
        )


# ===================
# TRENDING ERRORS
# ===================

class TrendingSelectionError(ValidationError):
    """Requested trending selection is not applicable."""

    def __init__(self, message: str, product_ids: list[str]):
        super().__init__(
            code="TRENDING_INVALID_SELECTION",
            message=message,
            details={"product_ids": product_ids}
        )


class TrendingSaveError(AppError):
    """
    Saving the trending order failed partway.

    Persisted state may be inconsistent: phase 1 cleared every flag and
    only the first `completed` products of the selection were re-flagged.
    """

    def __init__(
        self,
        phase: str,
        message: str,
        completed: int = 0,
        failed_product_id: Optional[str] = None
    ):
        super().__init__(
            code="TRENDING_SAVE_FAILED",
            message=message or "Failed to save trending products",
            status_code=500,
            details={
                "phase": phase,
                "completed": completed,
                "failed_product_id": failed_product_id
            }
        )


# ===================
# NOTIFICATION ERRORS
# ===================

class TelegramError(AppError):
    """Telegram API error."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            code="TELEGRAM_ERROR",
            message=message,
            status_code=500,
            details=details
        )
