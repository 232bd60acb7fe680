"""
Category service for business logic operations.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
)
from exceptions import (
    CategoryNotFoundError,
    CategorySlugExistsError,
    DatabaseError,
    StorageError,
)
from services.image_service import prepare_upload
from services.storage_service import StorageService, UploadFileData
from utils.text_utils import slugify

logger = structlog.get_logger(__name__)

IMAGE_FOLDER = "categories"


class CategoryService:
    """
    Category business logic.

    Handles CRUD operations for categories and their cover image.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.storage = StorageService()
        self.table = "categories"

    def _to_response(self, row: dict) -> CategoryResponse:
        category = CategoryResponse(**row)
        category.image_url = self.storage.get_image_url(category.image)
        return category

    def _upload(self, image: UploadFileData) -> str:
        cropped = prepare_upload(image.content, image.filename, IMAGE_FOLDER)
        return self.storage.upload_image(cropped.content, cropped.filename, IMAGE_FOLDER)

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(self) -> list[CategoryResponse]:
        """Get all categories ordered by name."""
        logger.info("getting_categories")

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .order("name")
                .execute()
            )

            categories = [self._to_response(row) for row in result.data or []]
            logger.info("categories_retrieved", count=len(categories))
            return categories

        except Exception as e:
            logger.error("get_categories_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def get_by_id(self, category_id: str) -> CategoryResponse:
        """
        Get a single category by ID.

        Raises:
            CategoryNotFoundError: If category doesn't exist
        """
        logger.debug("getting_category", category_id=category_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", category_id)
                .execute()
            )
        except Exception as e:
            logger.error("get_category_failed", category_id=category_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise CategoryNotFoundError(category_id)

        return self._to_response(result.data[0])

    def get_by_slug(self, slug: str) -> Optional[CategoryResponse]:
        """
        Get a category by slug.

        Returns:
            CategoryResponse or None if not found
        """
        logger.debug("getting_category_by_slug", slug=slug)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("slug", slug)
                .execute()
            )
        except Exception as e:
            logger.error("get_category_by_slug_failed", slug=slug, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            return None

        return self._to_response(result.data[0])

    # ===================
    # WRITE OPERATIONS
    # ===================

    def create(self, data: CategoryCreate, image: Optional[UploadFileData] = None) -> CategoryResponse:
        """
        Create a new category.

        Args:
            data: Category fields; slug derived from name when blank
            image: Optional cover image, cropped square

        Raises:
            CategorySlugExistsError: If slug already exists
            StorageError: If the image upload fails
        """
        slug = data.slug or slugify(data.name)
        logger.info("creating_category", name=data.name, slug=slug)

        if self.get_by_slug(slug):
            raise CategorySlugExistsError(slug)

        image_path = self._upload(image) if image else None

        try:
            result = (
                self.db.table(self.table)
                .insert({
                    "name": data.name,
                    "slug": slug,
                    "description": data.description,
                    "image": image_path,
                })
                .execute()
            )
        except Exception as e:
            logger.error("create_category_failed", slug=slug, error=str(e))
            raise DatabaseError("insert", str(e))

        category = self._to_response(result.data[0])
        logger.info("category_created", category_id=category.id, slug=category.slug)
        return category

    def update(
        self,
        category_id: str,
        data: CategoryUpdate,
        image: Optional[UploadFileData] = None
    ) -> CategoryResponse:
        """
        Update an existing category.

        A new image replaces the old one; the old object is removed first.

        Raises:
            CategoryNotFoundError: If category doesn't exist
            CategorySlugExistsError: If the new slug is taken
        """
        logger.info("updating_category", category_id=category_id)

        existing = self.get_by_id(category_id)

        update_data = data.model_dump(exclude_none=True)
        if "slug" in update_data and not update_data["slug"]:
            update_data["slug"] = slugify(update_data.get("name") or existing.name)

        new_slug = update_data.get("slug")
        if new_slug and new_slug != existing.slug and self.get_by_slug(new_slug):
            raise CategorySlugExistsError(new_slug)

        if image:
            if existing.image:
                self.storage.delete_image(existing.image)
            update_data["image"] = self._upload(image)

        if not update_data:
            return existing

        try:
            result = (
                self.db.table(self.table)
                .update(update_data)
                .eq("id", category_id)
                .execute()
            )
        except Exception as e:
            logger.error("update_category_failed", category_id=category_id, error=str(e))
            raise DatabaseError("update", str(e))

        if not result.data:
            raise CategoryNotFoundError(category_id)

        category = self._to_response(result.data[0])
        logger.info("category_updated", category_id=category_id, fields=list(update_data.keys()))
        return category

    def delete(self, category_id: str) -> bool:
        """
        Delete a category and its image.

        Raises:
            CategoryNotFoundError: If category doesn't exist
        """
        logger.info("deleting_category", category_id=category_id)

        existing = self.get_by_id(category_id)

        if existing.image:
            try:
                self.storage.delete_image(existing.image)
            except StorageError as e:
                # Orphaned object; the row is still removed
                logger.warning("category_image_cleanup_failed", category_id=category_id, error=e.message)

        try:
            self.db.table(self.table).delete().eq("id", category_id).execute()
        except Exception as e:
            logger.error("delete_category_failed", category_id=category_id, error=str(e))
            raise DatabaseError("delete", str(e))

        logger.info("category_deleted", category_id=category_id)
        return True

    def count(self) -> int:
        """Count total categories."""
        try:
            result = self.db.table(self.table).select("id", count="exact").execute()
            return result.count or 0
        except Exception as e:
            logger.error("count_categories_failed", error=str(e))
            raise DatabaseError("count", str(e))


# Singleton instance for convenience
_category_service: Optional[CategoryService] = None

def get_category_service() -> CategoryService:
    """Get or create CategoryService instance."""
    global _category_service
    if _category_service is None:
        _category_service = CategoryService()
    return _category_service
