"""
Product schemas for validation and serialization.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional

from models.base import BaseSchema, TimestampMixin


class CategoryRef(BaseModel):
    """Category embedded in product reads."""
    id: str
    name: str
    slug: str


class ProductCreate(BaseSchema):
    """
    Create a new product.

    Required: name
    Optional: description, category_id
    Images are uploaded alongside, not passed here.
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Product name",
        examples=["Classic Pullover Hoodie"]
    )
    description: Optional[str] = Field(
        None,
        max_length=5000,
        description="Product description"
    )
    category_id: Optional[str] = Field(
        None,
        description="Category UUID"
    )


class ProductUpdate(BaseSchema):
    """
    Update existing product.

    All fields optional - only provided fields are updated.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    category_id: Optional[str] = Field(None)


class ProductResponse(BaseSchema, TimestampMixin):
    """
    Product response with all fields.

    Used for GET responses and the trending workflow.
    """

    id: str = Field(..., description="Product UUID")
    name: str = Field(..., description="Product name")
    description: Optional[str] = Field(None, description="Product description")
    category_id: Optional[str] = Field(None, description="Category UUID")
    category: Optional[CategoryRef] = Field(None, description="Embedded category")
    images: list[str] = Field(default_factory=list, description="Storage paths or URLs")
    image_urls: list[str] = Field(default_factory=list, description="Public image URLs")
    is_trending: bool = Field(False, description="Featured on the homepage")
    trending_order: int = Field(0, description="0-based display position among trending products")

    @field_validator("images", mode="before")
    @classmethod
    def null_images_empty(cls, v):
        return v or []

    @field_validator("is_trending", "trending_order", mode="before")
    @classmethod
    def null_trending_defaults(cls, v, info):
        # Rows created before the trending columns existed carry NULLs
        if v is None:
            return False if info.field_name == "is_trending" else 0
        return v


class ProductListResponse(BaseSchema):
    """List of products."""

    data: list[ProductResponse]
    total: int
