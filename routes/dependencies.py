"""
Shared route helpers.

Error rendering, the admin guard and multipart upload reading.
"""

from typing import Optional
from fastapi import Depends, UploadFile
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError as PydanticValidationError
import structlog

from config import settings
from models.auth import AdminUser
from services.auth_service import get_auth_service
from services.storage_service import UploadFileData
from exceptions import AppError, ValidationError

logger = structlog.get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, PydanticValidationError):
        # Form fields are validated inside the handler, not by FastAPI
        e = ValidationError(
            "Invalid request data",
            details={"errors": e.errors(include_url=False, include_context=False)}
        )
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    # Unexpected error
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


# ===================
# AUTH
# ===================

async def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> AdminUser:
    """
    Resolve the signed-in admin from the bearer token.

    Raises:
        AuthenticationError: Missing or invalid token (rendered by the
            AppError handler in main.py)
    """
    token = credentials.credentials if credentials else None
    return get_auth_service().get_user(token)


# ===================
# UPLOADS
# ===================

async def read_upload(file: Optional[UploadFile]) -> Optional[UploadFileData]:
    """
    Read one multipart file into memory.

    Browsers send an empty part when no file was chosen; that reads as None.
    """
    if file is None or not file.filename:
        return None

    content = await file.read()
    if len(content) > settings.max_upload_bytes:
        raise ValidationError(
            f"File too large (max {settings.max_upload_mb} MB)",
            code="FILE_TOO_LARGE",
            details={"filename": file.filename, "size": len(content)}
        )
    return UploadFileData(filename=file.filename, content=content)


async def read_uploads(files: Optional[list[UploadFile]]) -> list[UploadFileData]:
    uploads = []
    for file in files or []:
        data = await read_upload(file)
        if data is not None:
            uploads.append(data)
    return uploads
