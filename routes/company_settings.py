"""
Company settings API routes.

Settings are one record: site-wide contact details, social links, SEO
meta and branding images.
"""

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import Response
from typing import Optional
import structlog

from models.company_settings import CompanySettingsUpdate, CompanySettingsResponse
from services.company_settings_service import get_company_settings_service
from routes.dependencies import handle_error, read_upload, require_admin

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# PUBLIC ROUTES
# ===================

@router.get("", response_model=CompanySettingsResponse)
async def get_company_settings():
    """Current settings; defaults fill anything not yet saved."""
    try:
        return get_company_settings_service().get()

    except Exception as e:
        return handle_error(e)


@router.get("/favicon.png")
async def get_favicon():
    """
    Rounded 32x32 PNG favicon.

    Raises:
        404: No favicon configured
    """
    try:
        png = get_company_settings_service().get_favicon_png()
        return Response(
            content=png,
            media_type="image/png",
            headers={"Cache-Control": "public, max-age=3600"}
        )

    except Exception as e:
        return handle_error(e)


# ===================
# ADMIN ROUTES
# ===================

@router.put("", response_model=CompanySettingsResponse, dependencies=[Depends(require_admin)])
async def update_company_settings(
    data: str = Form("{}", description="JSON object of fields to change"),
    logo: Optional[UploadFile] = File(None),
    logo_dark: Optional[UploadFile] = File(None),
    favicon: Optional[UploadFile] = File(None)
):
    """
    Update settings and optionally replace branding images.

    Creates the settings record on first save. A replaced image's old
    object is deleted.

    Raises:
        422: Invalid field values or unreadable image
    """
    try:
        update = CompanySettingsUpdate.model_validate_json(data)

        branding = {}
        for field_name, upload in (("logo", logo), ("logo_dark", logo_dark), ("favicon", favicon)):
            image = await read_upload(upload)
            if image is not None:
                branding[field_name] = image

        return get_company_settings_service().update(update, branding)

    except Exception as e:
        return handle_error(e)


@router.delete("/logo", response_model=CompanySettingsResponse, dependencies=[Depends(require_admin)])
async def remove_logo():
    try:
        return get_company_settings_service().remove_logo()

    except Exception as e:
        return handle_error(e)


@router.delete("/logo-dark", response_model=CompanySettingsResponse, dependencies=[Depends(require_admin)])
async def remove_dark_logo():
    try:
        return get_company_settings_service().remove_dark_logo()

    except Exception as e:
        return handle_error(e)


@router.delete("/favicon", response_model=CompanySettingsResponse, dependencies=[Depends(require_admin)])
async def remove_favicon():
    try:
        return get_company_settings_service().remove_favicon()

    except Exception as e:
        return handle_error(e)
