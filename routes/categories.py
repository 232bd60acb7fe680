"""
Category API routes.

Reads are public; writes take multipart forms so an image can ride along.
"""

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from typing import Optional
import structlog

from models.base import PaginatedResponse
from models.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryListResponse,
)
from services.category_service import get_category_service
from exceptions import CategoryNotFoundError
from routes.dependencies import handle_error, read_upload, require_admin

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# ROUTES
# ===================

@router.get("", response_model=CategoryListResponse)
async def list_categories(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(12, ge=1, le=100, description="Items per page")
):
    """
    List categories alphabetically.

    Pages past the end return the last page.
    """
    try:
        categories = get_category_service().get_all()
        page_data = PaginatedResponse.paginate(categories, page, page_size)

        return CategoryListResponse(**page_data.model_dump())

    except Exception as e:
        return handle_error(e)


@router.get("/{slug}", response_model=CategoryResponse)
async def get_category(slug: str):
    """
    Get a single category by slug.

    Raises:
        404: Category not found
    """
    try:
        category = get_category_service().get_by_slug(slug)

        if not category:
            raise CategoryNotFoundError(slug)

        return category

    except Exception as e:
        return handle_error(e)


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=201,
    dependencies=[Depends(require_admin)]
)
async def create_category(
    name: str = Form(...),
    slug: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None)
):
    """
    Create a new category.

    Raises:
        409: Slug already exists
        422: Validation error or unreadable image
    """
    try:
        data = CategoryCreate(name=name, slug=slug, description=description)
        return get_category_service().create(data, await read_upload(image))

    except Exception as e:
        return handle_error(e)


@router.patch(
    "/{category_id}",
    response_model=CategoryResponse,
    dependencies=[Depends(require_admin)]
)
async def update_category(
    category_id: str,
    name: Optional[str] = Form(None),
    slug: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None)
):
    """
    Update an existing category.

    Only provided fields are updated. An empty slug is re-derived from
    the name.

    Raises:
        404: Category not found
        409: New slug already exists
    """
    try:
        data = CategoryUpdate(name=name, slug=slug, description=description)
        return get_category_service().update(category_id, data, await read_upload(image))

    except Exception as e:
        return handle_error(e)


@router.delete("/{category_id}", status_code=204, dependencies=[Depends(require_admin)])
async def delete_category(category_id: str):
    """
    Delete a category and its image.

    Raises:
        404: Category not found
    """
    try:
        get_category_service().delete(category_id)
        return None  # 204 No Content

    except Exception as e:
        return handle_error(e)
