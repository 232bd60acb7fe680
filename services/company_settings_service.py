"""
Company settings service.

Company settings are a single row. Reads merge the row over
DEFAULT_COMPANY_SETTINGS; the first update inserts the row.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.company_settings import (
    BRANDING_FIELDS,
    DEFAULT_COMPANY_SETTINGS,
    CompanySettingsUpdate,
    CompanySettingsResponse,
)
from exceptions import (
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from services.image_service import prepare_upload, render_favicon
from services.storage_service import StorageService, UploadFileData

logger = structlog.get_logger(__name__)

IMAGE_FOLDER = "branding"


def merge_with_defaults(row: Optional[dict]) -> dict:
    """
    Stored values over defaults.

    NULL columns fall back to the default, so a half-filled row still
    yields a complete settings object.
    """
    merged = dict(DEFAULT_COMPANY_SETTINGS)
    for key, value in (row or {}).items():
        if value is not None or DEFAULT_COMPANY_SETTINGS.get(key) is None:
            merged[key] = value
    return merged


class CompanySettingsService:
    """
    Company settings business logic.

    Handles the settings row and the logo, dark logo and favicon objects.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.storage = StorageService()
        self.table = "company_settings"

    def _fetch_row(self) -> Optional[dict]:
        try:
            result = self.db.table(self.table).select("*").limit(1).execute()
        except Exception as e:
            logger.error("get_company_settings_failed", error=str(e))
            raise DatabaseError("select", str(e))
        return result.data[0] if result.data else None

    def _to_response(self, row: Optional[dict]) -> CompanySettingsResponse:
        merged = merge_with_defaults(row)
        response = CompanySettingsResponse(**merged)
        response.logo_url = self.storage.get_image_url(response.logo)
        response.logo_dark_url = self.storage.get_image_url(response.logo_dark)
        response.favicon_url = self.storage.get_image_url(response.favicon)
        return response

    # ===================
    # READ OPERATIONS
    # ===================

    def get(self) -> CompanySettingsResponse:
        """Current settings, defaults when no row exists yet."""
        row = self._fetch_row()
        if row is None:
            logger.info("company_settings_missing_using_defaults")
        return self._to_response(row)

    def get_favicon_png(self) -> bytes:
        """
        Rounded 32x32 favicon rendered from the stored favicon.

        Raises:
            NotFoundError: If no favicon is configured
        """
        current = self.get()
        if not current.favicon:
            raise NotFoundError("Favicon", "favicon", code="FAVICON_NOT_FOUND")
        return render_favicon(self.storage.download(current.favicon), current.favicon)

    # ===================
    # WRITE OPERATIONS
    # ===================

    def update(
        self,
        data: CompanySettingsUpdate,
        branding: Optional[dict[str, UploadFileData]] = None
    ) -> CompanySettingsResponse:
        """
        Update settings, inserting the row on first save.

        Args:
            data: Fields to change
            branding: New images keyed by "logo", "logo_dark" or "favicon";
                each replaces (and removes) the previous object
        """
        branding = branding or {}
        unknown = set(branding) - set(BRANDING_FIELDS)
        if unknown:
            raise ValidationError(
                "Unknown branding image field",
                details={"fields": sorted(unknown), "valid": list(BRANDING_FIELDS)}
            )

        logger.info("updating_company_settings", branding=sorted(branding))

        row = self._fetch_row()
        update_data = data.model_dump(exclude_none=True)

        for field_name, image in branding.items():
            old_path = (row or {}).get(field_name)
            if old_path:
                self.storage.delete_image(old_path)
            cropped = prepare_upload(image.content, image.filename, IMAGE_FOLDER)
            update_data[field_name] = self.storage.upload_image(
                cropped.content, cropped.filename, IMAGE_FOLDER
            )

        try:
            if row is not None:
                result = (
                    self.db.table(self.table)
                    .update(update_data)
                    .eq("id", row["id"])
                    .execute()
                )
            else:
                result = self.db.table(self.table).insert(update_data).execute()
        except Exception as e:
            logger.error("update_company_settings_failed", error=str(e))
            raise DatabaseError("update" if row else "insert", str(e))

        saved = result.data[0] if result.data else {**(row or {}), **update_data}

        logger.info("company_settings_updated", fields=list(update_data.keys()))
        return self._to_response(saved)

    def remove_branding(self, field_name: str) -> CompanySettingsResponse:
        """
        Remove the logo, dark logo or favicon.

        Deletes the stored object and clears the column.
        """
        if field_name not in BRANDING_FIELDS:
            raise ValidationError(
                "Unknown branding image field",
                details={"field": field_name, "valid": list(BRANDING_FIELDS)}
            )

        logger.info("removing_branding_image", field=field_name)

        row = self._fetch_row()
        if row is None:
            return self._to_response(None)

        if row.get(field_name):
            self.storage.delete_image(row[field_name])

        try:
            result = (
                self.db.table(self.table)
                .update({field_name: None})
                .eq("id", row["id"])
                .execute()
            )
        except Exception as e:
            logger.error("remove_branding_image_failed", field=field_name, error=str(e))
            raise DatabaseError("update", str(e))

        saved = result.data[0] if result.data else {**row, field_name: None}
        return self._to_response(saved)

    def remove_logo(self) -> CompanySettingsResponse:
        return self.remove_branding("logo")

    def remove_dark_logo(self) -> CompanySettingsResponse:
        return self.remove_branding("logo_dark")

    def remove_favicon(self) -> CompanySettingsResponse:
        return self.remove_branding("favicon")


# Singleton instance for convenience
_company_settings_service: Optional[CompanySettingsService] = None

def get_company_settings_service() -> CompanySettingsService:
    """Get or create CompanySettingsService instance."""
    global _company_settings_service
    if _company_settings_service is None:
        _company_settings_service = CompanySettingsService()
    return _company_settings_service
