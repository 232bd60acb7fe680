"""
Category schemas for validation and serialization.
"""

from pydantic import Field
from typing import Optional

from models.base import BaseSchema, TimestampMixin


class CategoryCreate(BaseSchema):
    """
    Create a new category.

    Required: name
    Optional: slug (derived from name when blank), description
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=120,
        description="Category name",
        examples=["T-Shirts", "Hoodies"]
    )
    slug: Optional[str] = Field(
        None,
        max_length=140,
        description="URL slug (auto-generated from name if blank)"
    )
    description: Optional[str] = Field(
        None,
        max_length=2000,
        description="Category description"
    )


class CategoryUpdate(BaseSchema):
    """
    Update existing category.

    All fields optional - only provided fields are updated.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=120)
    slug: Optional[str] = Field(None, max_length=140)
    description: Optional[str] = Field(None, max_length=2000)


class CategoryResponse(BaseSchema, TimestampMixin):
    """Category response with all fields."""

    id: str = Field(..., description="Category UUID")
    name: str = Field(..., description="Category name")
    slug: str = Field(..., description="URL slug")
    description: Optional[str] = Field(None, description="Category description")
    image: Optional[str] = Field(None, description="Storage path of the category image")
    image_url: Optional[str] = Field(None, description="Public URL of the category image")


class CategoryListResponse(BaseSchema):
    """Page of categories."""

    data: list[CategoryResponse]
    total: int
    page: int
    page_size: int
    total_pages: int
