"""
Contact inquiry API routes.

Submitting is public; everything else is admin only.
"""

from fastapi import APIRouter, Depends, Query
import structlog

from models.base import PaginatedResponse
from models.inquiry import (
    InquiryCreate,
    InquiryResponse,
    InquiryListResponse,
    InquiryStatus,
)
from services.inquiry_service import get_inquiry_service
from routes.dependencies import handle_error, require_admin

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# ROUTES
# ===================

@router.post("", response_model=InquiryResponse, status_code=201)
async def submit_inquiry(data: InquiryCreate):
    """
    Contact form submission.

    Raises:
        422: Missing name or message, malformed email
    """
    try:
        return get_inquiry_service().create(data)

    except Exception as e:
        return handle_error(e)


@router.get("", response_model=InquiryListResponse, dependencies=[Depends(require_admin)])
async def list_inquiries(
    status: InquiryStatus = Query(InquiryStatus.ALL, description="all, read or unread"),
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(20, ge=1, le=100, description="Items per page")
):
    """
    Inquiries newest first, paginated, with the unread badge count.
    """
    try:
        service = get_inquiry_service()
        inquiries = service.get_all(status=status)
        page_data = PaginatedResponse.paginate(inquiries, page, page_size)

        return InquiryListResponse(
            **page_data.model_dump(),
            unread_count=service.count_unread()
        )

    except Exception as e:
        return handle_error(e)


@router.post(
    "/{inquiry_id}/read",
    response_model=InquiryResponse,
    dependencies=[Depends(require_admin)]
)
async def mark_read(inquiry_id: str):
    try:
        return get_inquiry_service().mark_as_read(inquiry_id)

    except Exception as e:
        return handle_error(e)


@router.post(
    "/{inquiry_id}/unread",
    response_model=InquiryResponse,
    dependencies=[Depends(require_admin)]
)
async def mark_unread(inquiry_id: str):
    try:
        return get_inquiry_service().mark_as_unread(inquiry_id)

    except Exception as e:
        return handle_error(e)


@router.delete("/{inquiry_id}", status_code=204, dependencies=[Depends(require_admin)])
async def delete_inquiry(inquiry_id: str):
    """
    Raises:
        404: Inquiry not found
    """
    try:
        get_inquiry_service().delete(inquiry_id)
        return None  # 204 No Content

    except Exception as e:
        return handle_error(e)
