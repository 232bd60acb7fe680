"""
Contact inquiry service.

Public visitors create inquiries through the contact form; admins list,
mark read/unread and delete them.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.inquiry import (
    InquiryCreate,
    InquiryResponse,
    InquiryStatus,
)
from exceptions import (
    InquiryNotFoundError,
    DatabaseError,
    TelegramError,
)
from integrations.telegram import notify_new_inquiry

logger = structlog.get_logger(__name__)


class InquiryService:
    """Inquiry business logic."""

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "contact_inquiries"

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(self, status: InquiryStatus = InquiryStatus.ALL) -> list[InquiryResponse]:
        """
        Get inquiries, newest first.

        Args:
            status: all, read or unread
        """
        logger.info("getting_inquiries", status=status.value)

        try:
            query = self.db.table(self.table).select("*")
            if status == InquiryStatus.UNREAD:
                query = query.eq("read", False)
            elif status == InquiryStatus.READ:
                query = query.eq("read", True)
            result = query.order("created_at", desc=True).execute()
        except Exception as e:
            logger.error("get_inquiries_failed", error=str(e))
            raise DatabaseError("select", str(e))

        inquiries = [InquiryResponse(**row) for row in result.data or []]
        logger.info("inquiries_retrieved", count=len(inquiries))
        return inquiries

    def get_by_id(self, inquiry_id: str) -> InquiryResponse:
        """
        Raises:
            InquiryNotFoundError: If inquiry doesn't exist
        """
        try:
            result = self.db.table(self.table).select("*").eq("id", inquiry_id).execute()
        except Exception as e:
            logger.error("get_inquiry_failed", inquiry_id=inquiry_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise InquiryNotFoundError(inquiry_id)

        return InquiryResponse(**result.data[0])

    def count_unread(self) -> int:
        """Unread inquiries in the database, for the admin badge."""
        try:
            result = (
                self.db.table(self.table)
                .select("id", count="exact")
                .eq("read", False)
                .execute()
            )
            return result.count or 0
        except Exception as e:
            logger.error("count_unread_inquiries_failed", error=str(e))
            raise DatabaseError("count", str(e))

    def get_recent(self, limit: int = 5) -> list[InquiryResponse]:
        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
        except Exception as e:
            logger.error("get_recent_inquiries_failed", error=str(e))
            raise DatabaseError("select", str(e))

        return [InquiryResponse(**row) for row in result.data or []]

    # ===================
    # WRITE OPERATIONS
    # ===================

    def create(self, data: InquiryCreate) -> InquiryResponse:
        """
        Store a contact form submission as unread.

        A Telegram notification is attempted afterwards; its failure is
        logged and does not affect the stored inquiry.
        """
        logger.info("creating_inquiry", product_interest=data.product_interest)

        insert_data = data.model_dump()
        insert_data["read"] = False

        try:
            result = self.db.table(self.table).insert(insert_data).execute()
        except Exception as e:
            logger.error("create_inquiry_failed", error=str(e))
            raise DatabaseError("insert", str(e))

        inquiry = InquiryResponse(**result.data[0])
        logger.info("inquiry_created", inquiry_id=inquiry.id)

        try:
            notify_new_inquiry(inquiry)
        except TelegramError as e:
            logger.warning("inquiry_notification_failed", inquiry_id=inquiry.id, error=e.message)

        return inquiry

    def mark_as_read(self, inquiry_id: str) -> InquiryResponse:
        return self._set_read(inquiry_id, True)

    def mark_as_unread(self, inquiry_id: str) -> InquiryResponse:
        return self._set_read(inquiry_id, False)

    def _set_read(self, inquiry_id: str, read: bool) -> InquiryResponse:
        logger.info("setting_inquiry_read", inquiry_id=inquiry_id, read=read)

        try:
            result = (
                self.db.table(self.table)
                .update({"read": read})
                .eq("id", inquiry_id)
                .execute()
            )
        except Exception as e:
            logger.error("update_inquiry_failed", inquiry_id=inquiry_id, error=str(e))
            raise DatabaseError("update", str(e))

        if not result.data:
            raise InquiryNotFoundError(inquiry_id)

        return InquiryResponse(**result.data[0])

    def delete(self, inquiry_id: str) -> bool:
        """
        Raises:
            InquiryNotFoundError: If inquiry doesn't exist
        """
        logger.info("deleting_inquiry", inquiry_id=inquiry_id)

        self.get_by_id(inquiry_id)

        try:
            self.db.table(self.table).delete().eq("id", inquiry_id).execute()
        except Exception as e:
            logger.error("delete_inquiry_failed", inquiry_id=inquiry_id, error=str(e))
            raise DatabaseError("delete", str(e))

        logger.info("inquiry_deleted", inquiry_id=inquiry_id)
        return True


# Singleton instance for convenience
_inquiry_service: Optional[InquiryService] = None

def get_inquiry_service() -> InquiryService:
    """Get or create InquiryService instance."""
    global _inquiry_service
    if _inquiry_service is None:
        _inquiry_service = InquiryService()
    return _inquiry_service
