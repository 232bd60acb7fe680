"""
Blog API routes.

Public routes only ever return published posts.
"""

from fastapi import APIRouter, Depends, File, Form, UploadFile
from typing import Optional
import structlog

from config import settings
from models.blog import (
    BlogPostCreate,
    BlogPostUpdate,
    BlogPostResponse,
    BlogPostListResponse,
    BlogPostDetail,
)
from services.blog_service import get_blog_service
from routes.dependencies import handle_error, read_upload, require_admin

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# PUBLIC ROUTES
# ===================

@router.get("", response_model=BlogPostListResponse)
async def list_posts():
    """Published posts, newest first."""
    try:
        posts = get_blog_service().get_all(published_only=True)
        return BlogPostListResponse(data=posts, total=len(posts))

    except Exception as e:
        return handle_error(e)


@router.get("/featured", response_model=Optional[BlogPostResponse])
async def get_featured_post():
    """Newest post that is both featured and published, or null."""
    try:
        return get_blog_service().get_featured()

    except Exception as e:
        return handle_error(e)


# ===================
# ADMIN ROUTES
# ===================

@router.get(
    "/admin/all",
    response_model=BlogPostListResponse,
    dependencies=[Depends(require_admin)]
)
async def list_all_posts():
    """Every post including drafts."""
    try:
        posts = get_blog_service().get_all()
        return BlogPostListResponse(data=posts, total=len(posts))

    except Exception as e:
        return handle_error(e)


@router.post(
    "",
    response_model=BlogPostResponse,
    status_code=201,
    dependencies=[Depends(require_admin)]
)
async def create_post(
    title: str = Form(...),
    content: str = Form(...),
    slug: Optional[str] = Form(None),
    excerpt: Optional[str] = Form(None),
    featured: bool = Form(False),
    published: bool = Form(False),
    cover_image: Optional[UploadFile] = File(None)
):
    """
    Create a blog post. The cover is cropped 16:9.

    Raises:
        409: Slug already exists
        422: Validation error
    """
    try:
        data = BlogPostCreate(
            title=title,
            content=content,
            slug=slug,
            excerpt=excerpt,
            featured=featured,
            published=published
        )
        return get_blog_service().create(data, await read_upload(cover_image))

    except Exception as e:
        return handle_error(e)


@router.patch(
    "/{post_id}",
    response_model=BlogPostResponse,
    dependencies=[Depends(require_admin)]
)
async def update_post(
    post_id: str,
    title: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    slug: Optional[str] = Form(None),
    excerpt: Optional[str] = Form(None),
    featured: Optional[bool] = Form(None),
    published: Optional[bool] = Form(None),
    cover_image: Optional[UploadFile] = File(None)
):
    """
    Update a blog post. Only provided fields are updated.

    Raises:
        404: Post not found
        409: New slug already exists
    """
    try:
        data = BlogPostUpdate(
            title=title,
            content=content,
            slug=slug,
            excerpt=excerpt,
            featured=featured,
            published=published
        )
        return get_blog_service().update(post_id, data, await read_upload(cover_image))

    except Exception as e:
        return handle_error(e)


@router.post(
    "/{post_id}/toggle-published",
    response_model=BlogPostResponse,
    dependencies=[Depends(require_admin)]
)
async def toggle_published(post_id: str):
    try:
        return get_blog_service().toggle_published(post_id)

    except Exception as e:
        return handle_error(e)


@router.delete("/{post_id}", status_code=204, dependencies=[Depends(require_admin)])
async def delete_post(post_id: str):
    """
    Delete a post and its cover image.

    Raises:
        404: Post not found
    """
    try:
        get_blog_service().delete(post_id)
        return None  # 204 No Content

    except Exception as e:
        return handle_error(e)


# ===================
# SLUG LOOKUP
# ===================

@router.get("/{slug}", response_model=BlogPostDetail)
async def get_post(slug: str):
    """
    A published post with related posts to read next.

    Raises:
        404: Post not found or not published
    """
    try:
        service = get_blog_service()
        post = service.get_by_slug(slug)
        related = service.get_related(post, limit=settings.related_posts_limit)

        return BlogPostDetail(post=post, related=related)

    except Exception as e:
        return handle_error(e)
