"""
Dashboard API routes.
"""

from fastapi import APIRouter, Depends
import structlog

from models.dashboard import DashboardStats
from services.dashboard_service import get_dashboard_service
from routes.dependencies import handle_error, require_admin

logger = structlog.get_logger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=DashboardStats)
async def get_dashboard():
    """
    Counts for the dashboard cards and the latest inquiries.
    """
    try:
        return get_dashboard_service().get_stats()

    except Exception as e:
        return handle_error(e)
