"""
Blog post schemas for validation and serialization.
"""

from pydantic import Field
from typing import Optional

from models.base import BaseSchema, TimestampMixin


class BlogPostCreate(BaseSchema):
    """
    Create a new blog post.

    Required: title, content
    Optional: slug (derived from title when blank), excerpt, flags
    """

    title: str = Field(..., min_length=1, max_length=250, description="Post title")
    slug: Optional[str] = Field(None, max_length=270, description="URL slug")
    excerpt: Optional[str] = Field(None, max_length=1000, description="Short summary")
    content: str = Field(..., min_length=1, description="Post body")
    featured: bool = Field(False, description="Show as the featured post")
    published: bool = Field(False, description="Visible on the public blog")


class BlogPostUpdate(BaseSchema):
    """
    Update existing blog post.

    All fields optional - only provided fields are updated.
    """

    title: Optional[str] = Field(None, min_length=1, max_length=250)
    slug: Optional[str] = Field(None, max_length=270)
    excerpt: Optional[str] = Field(None, max_length=1000)
    content: Optional[str] = Field(None, min_length=1)
    featured: Optional[bool] = None
    published: Optional[bool] = None


class BlogPostResponse(BaseSchema, TimestampMixin):
    """Blog post response with all fields."""

    id: str
    title: str
    slug: str
    excerpt: Optional[str] = None
    content: Optional[str] = None
    cover_image: Optional[str] = None
    cover_image_url: Optional[str] = None
    featured: bool = False
    published: bool = False


class BlogPostListResponse(BaseSchema):
    """List of blog posts."""

    data: list[BlogPostResponse]
    total: int


class BlogPostDetail(BaseSchema):
    """Single post with a few other posts to read next."""

    post: BlogPostResponse
    related: list[BlogPostResponse]
