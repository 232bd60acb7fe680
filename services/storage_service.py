"""
Storage service for image objects in the Supabase bucket.

Objects are named "{folder}/{epoch_ms}-{random}.{ext}" so uploads never
collide and are never overwritten (upsert disabled).
"""

import secrets
import string
import time
from dataclasses import dataclass, field
from typing import Optional
import requests
import structlog

from config import get_supabase_client, settings
from exceptions import StorageError

logger = structlog.get_logger(__name__)

_BASE36 = string.digits + string.ascii_lowercase

CONTENT_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "ico": "image/x-icon",
    "svg": "image/svg+xml",
}


@dataclass
class UploadFileData:
    """In-memory file ready for upload."""
    filename: str
    content: bytes


@dataclass
class BulkUploadResult:
    """Outcome of uploading several files. Partial success is allowed."""
    paths: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


def _random_suffix(length: int = 11) -> str:
    return "".join(secrets.choice(_BASE36) for _ in range(length))


def _extension(filename: Optional[str]) -> str:
    if filename and "." in filename:
        return filename.rsplit(".", 1)[-1].lower()
    return "jpg"


def build_object_path(filename: Optional[str], folder: str = "") -> str:
    """Unique object path for an upload."""
    name = f"{int(time.time() * 1000)}-{_random_suffix()}.{_extension(filename)}"
    return f"{folder}/{name}" if folder else name


class StorageService:
    """
    Object storage operations.

    Wraps upload, removal and public URL lookup for one bucket.
    """

    def __init__(self, bucket: Optional[str] = None):
        self.db = get_supabase_client()
        self.bucket = bucket or settings.storage_bucket

    def _bucket(self):
        return self.db.storage.from_(self.bucket)

    # ===================
    # WRITE OPERATIONS
    # ===================

    def upload_image(self, content: bytes, filename: Optional[str], folder: str = "") -> str:
        """
        Upload one image.

        Args:
            content: Raw file bytes
            filename: Original filename (extension is kept)
            folder: Folder inside the bucket (e.g. "products")

        Returns:
            Stored object path

        Raises:
            StorageError: If the upload is rejected
        """
        path = build_object_path(filename, folder)
        ext = _extension(filename)

        logger.info("uploading_image", bucket=self.bucket, path=path, size=len(content))

        try:
            self._bucket().upload(
                path,
                content,
                file_options={
                    "cache-control": settings.storage_cache_control,
                    "upsert": "false",
                    "content-type": CONTENT_TYPES.get(ext, "application/octet-stream"),
                },
            )
        except Exception as e:
            logger.error("upload_image_failed", bucket=self.bucket, path=path, error=str(e))
            raise StorageError("upload", path, str(e))

        logger.info("image_uploaded", path=path)
        return path

    def upload_multiple(self, files: list[UploadFileData], folder: str = "") -> BulkUploadResult:
        """
        Upload several images, continuing past individual failures.

        Returns:
            BulkUploadResult with stored paths and failed filenames
        """
        result = BulkUploadResult()

        for item in files:
            try:
                result.paths.append(self.upload_image(item.content, item.filename, folder))
            except StorageError:
                result.failed.append(item.filename)

        if result.failed:
            logger.warning(
                "some_uploads_failed",
                failed=len(result.failed),
                uploaded=len(result.paths)
            )

        return result

    def delete_image(self, path: str) -> None:
        """
        Remove one object.

        Absolute URLs are not bucket objects and are left alone.

        Raises:
            StorageError: If removal is rejected
        """
        if not path or path.startswith("http"):
            return

        logger.info("deleting_image", bucket=self.bucket, path=path)

        try:
            self._bucket().remove([path])
        except Exception as e:
            logger.error("delete_image_failed", bucket=self.bucket, path=path, error=str(e))
            raise StorageError("remove", path, str(e))

    # ===================
    # READ OPERATIONS
    # ===================

    def download(self, path: str) -> bytes:
        """
        Fetch object bytes. Absolute URLs are fetched over HTTP.

        Raises:
            StorageError: If the object cannot be read
        """
        logger.debug("downloading_image", bucket=self.bucket, path=path)

        try:
            if path.startswith("http"):
                response = requests.get(path, timeout=10)
                response.raise_for_status()
                return response.content
            return self._bucket().download(path)
        except Exception as e:
            logger.error("download_image_failed", bucket=self.bucket, path=path, error=str(e))
            raise StorageError("download", path, str(e))

    def get_image_url(self, path: Optional[str]) -> Optional[str]:
        """Public URL for a stored object; absolute URLs pass through."""
        if not path:
            return None
        if path.startswith("http"):
            return path
        return self._bucket().get_public_url(path) or None

    def get_image_urls(self, paths: list[str]) -> list[str]:
        urls = (self.get_image_url(p) for p in paths)
        return [u for u in urls if u]

