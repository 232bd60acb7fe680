"""
Product API routes.

Reads are public; writes take multipart forms with image galleries.
"""

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from typing import Optional
import structlog

from models.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse,
)
from services.product_service import get_product_service
from routes.dependencies import handle_error, read_uploads, require_admin

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# ROUTES
# ===================

@router.get("", response_model=ProductListResponse)
async def list_products(
    category_id: Optional[str] = Query(None, description="Filter by category"),
    search: Optional[str] = Query(None, description="Case-insensitive name search")
):
    """
    List products, newest first, with optional filters.
    """
    try:
        products = get_product_service().get_all(category_id=category_id, search=search)

        return ProductListResponse(data=products, total=len(products))

    except Exception as e:
        return handle_error(e)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str):
    """
    Get a single product by ID.

    Raises:
        404: Product not found
    """
    try:
        return get_product_service().get_by_id(product_id)

    except Exception as e:
        return handle_error(e)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=201,
    dependencies=[Depends(require_admin)]
)
async def create_product(
    name: str = Form(...),
    description: Optional[str] = Form(None),
    category_id: Optional[str] = Form(None),
    images: list[UploadFile] = File(default=[])
):
    """
    Create a new product.

    Images are cropped square; ones that fail to upload are skipped.

    Raises:
        422: Validation error or unreadable image
    """
    try:
        data = ProductCreate(name=name, description=description, category_id=category_id or None)
        return get_product_service().create(data, await read_uploads(images))

    except Exception as e:
        return handle_error(e)


@router.patch(
    "/{product_id}",
    response_model=ProductResponse,
    dependencies=[Depends(require_admin)]
)
async def update_product(
    product_id: str,
    name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    category_id: Optional[str] = Form(None),
    images_to_remove: list[str] = Form(default=[]),
    images: list[UploadFile] = File(default=[])
):
    """
    Update an existing product.

    Only provided fields are updated. images_to_remove lists stored paths
    to drop from the gallery; new images are appended.

    Raises:
        404: Product not found
    """
    try:
        data = ProductUpdate(name=name, description=description, category_id=category_id)
        return get_product_service().update(
            product_id,
            data,
            new_images=await read_uploads(images),
            images_to_remove=images_to_remove
        )

    except Exception as e:
        return handle_error(e)


@router.delete("/{product_id}", status_code=204, dependencies=[Depends(require_admin)])
async def delete_product(product_id: str):
    """
    Delete a product and every image object it references.

    Raises:
        404: Product not found
    """
    try:
        get_product_service().delete(product_id)
        return None  # 204 No Content

    except Exception as e:
        return handle_error(e)
