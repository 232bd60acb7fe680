"""
Trending product API routes.

Public feed for the homepage plus the admin curation board.
"""

from fastapi import APIRouter, Depends, Query
from typing import Optional
import structlog

from models.product import ProductResponse
from models.trending import TrendingSaveRequest, TrendingBoardResponse
from services.trending_service import TrendingCuration, get_trending_service
from routes.dependencies import handle_error, require_admin

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/trending", tags=["Trending"])
admin_router = APIRouter(
    prefix="/api/admin/trending",
    tags=["Trending"],
    dependencies=[Depends(require_admin)]
)


# ===================
# PUBLIC ROUTES
# ===================

@router.get("", response_model=list[ProductResponse])
async def list_trending():
    """
    Trending products in display order.

    Empty when nothing is flagged; the homepage hides the section then.
    """
    try:
        return get_trending_service().get_trending()

    except Exception as e:
        return handle_error(e)


# ===================
# ADMIN ROUTES
# ===================

@admin_router.get("", response_model=TrendingBoardResponse)
async def get_board(
    search: Optional[str] = Query(None, description="Filter available products by name or category")
):
    """
    Curation board: trending products in order and the rest.

    Only the available partition is filtered by search.
    """
    try:
        curation = TrendingCuration()
        curation.load()
        return curation.board(search)

    except Exception as e:
        return handle_error(e)


@admin_router.put("", response_model=TrendingBoardResponse)
async def save_trending(data: TrendingSaveRequest):
    """
    Replace the trending selection.

    product_ids is the complete ordered list; products left out stop
    being trending.

    Raises:
        422: Duplicate or unknown product ids
        500: Save failed partway (details.phase, details.completed)
    """
    try:
        curation = TrendingCuration()
        curation.load()
        curation.select(data.product_ids)
        curation.save()

        logger.info("trending_saved_via_api", count=len(data.product_ids))
        return curation.board()

    except Exception as e:
        return handle_error(e)
