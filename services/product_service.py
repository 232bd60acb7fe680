"""
Product service for business logic operations.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
)
from exceptions import (
    ProductNotFoundError,
    DatabaseError,
    StorageError,
)
from services.image_service import prepare_upload
from services.storage_service import StorageService, UploadFileData

logger = structlog.get_logger(__name__)

IMAGE_FOLDER = "products"

# Product rows always come back with their category embedded
PRODUCT_SELECT = "*, category:categories(id, name, slug)"


class ProductService:
    """
    Product business logic.

    Handles CRUD operations for products and their image galleries.
    Trending flags are managed by TrendingService.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.storage = StorageService()
        self.table = "products"

    def _to_response(self, row: dict) -> ProductResponse:
        product = ProductResponse(**row)
        product.image_urls = self.storage.get_image_urls(product.images)
        return product

    def _upload_images(self, images: list[UploadFileData]) -> list[str]:
        prepared = [prepare_upload(i.content, i.filename, IMAGE_FOLDER) for i in images]
        result = self.storage.upload_multiple(prepared, IMAGE_FOLDER)
        if result.failed:
            logger.warning("product_images_partially_uploaded", failed=result.failed)
        return result.paths

    def _remove_image(self, path: str, product_id: str) -> None:
        try:
            self.storage.delete_image(path)
        except StorageError as e:
            # Orphaned object; the product no longer references it
            logger.warning("product_image_cleanup_failed", product_id=product_id, path=path, error=e.message)

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(
        self,
        category_id: Optional[str] = None,
        search: Optional[str] = None
    ) -> list[ProductResponse]:
        """
        Get products, newest first.

        Args:
            category_id: Filter by category
            search: Case-insensitive substring match on name

        Returns:
            List of products
        """
        logger.info("getting_products", category_id=category_id, search=search)

        try:
            query = self.db.table(self.table).select(PRODUCT_SELECT)

            if category_id:
                query = query.eq("category_id", category_id)
            if search:
                query = query.ilike("name", f"%{search}%")

            result = query.order("created_at", desc=True).execute()

            products = [self._to_response(row) for row in result.data or []]
            logger.info("products_retrieved", count=len(products))
            return products

        except Exception as e:
            logger.error("get_products_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def get_by_id(self, product_id: str) -> ProductResponse:
        """
        Get a single product by ID.

        Raises:
            ProductNotFoundError: If product doesn't exist
        """
        logger.debug("getting_product", product_id=product_id)

        try:
            result = (
                self.db.table(self.table)
                .select(PRODUCT_SELECT)
                .eq("id", product_id)
                .execute()
            )
        except Exception as e:
            logger.error("get_product_failed", product_id=product_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise ProductNotFoundError(product_id)

        return self._to_response(result.data[0])

    # ===================
    # WRITE OPERATIONS
    # ===================

    def create(
        self,
        data: ProductCreate,
        images: Optional[list[UploadFileData]] = None
    ) -> ProductResponse:
        """
        Create a new product.

        Images that fail to upload are skipped and logged; the product
        is still created with the ones that made it.
        """
        logger.info("creating_product", name=data.name)

        image_paths = self._upload_images(images) if images else []

        try:
            result = (
                self.db.table(self.table)
                .insert({
                    "name": data.name,
                    "description": data.description,
                    "category_id": data.category_id,
                    "images": image_paths,
                    "is_trending": False,
                    "trending_order": 0,
                })
                .execute()
            )
        except Exception as e:
            logger.error("create_product_failed", name=data.name, error=str(e))
            raise DatabaseError("insert", str(e))

        product = self.get_by_id(result.data[0]["id"])
        logger.info("product_created", product_id=product.id, images=len(image_paths))
        return product

    def update(
        self,
        product_id: str,
        data: ProductUpdate,
        new_images: Optional[list[UploadFileData]] = None,
        images_to_remove: Optional[list[str]] = None
    ) -> ProductResponse:
        """
        Update an existing product.

        Listed images leave the gallery and new uploads are appended.
        Removed objects are deleted from storage only after the row update
        succeeds.

        Raises:
            ProductNotFoundError: If product doesn't exist
        """
        logger.info("updating_product", product_id=product_id)

        existing = self.get_by_id(product_id)
        removed = [path for path in dict.fromkeys(existing.images) if path in (images_to_remove or [])]
        images = [img for img in existing.images if img not in removed]

        if new_images:
            images.extend(self._upload_images(new_images))

        update_data = data.model_dump(exclude_none=True)
        update_data["images"] = images

        try:
            result = (
                self.db.table(self.table)
                .update(update_data)
                .eq("id", product_id)
                .execute()
            )
        except Exception as e:
            logger.error("update_product_failed", product_id=product_id, error=str(e))
            raise DatabaseError("update", str(e))

        if not result.data:
            raise ProductNotFoundError(product_id)

        for path in removed:
            self._remove_image(path, product_id)

        product = self.get_by_id(product_id)
        logger.info("product_updated", product_id=product_id, fields=list(update_data.keys()))
        return product

    def delete(self, product_id: str) -> bool:
        """
        Delete a product and every image object it references.

        Raises:
            ProductNotFoundError: If product doesn't exist
        """
        logger.info("deleting_product", product_id=product_id)

        existing = self.get_by_id(product_id)

        for path in existing.images:
            self._remove_image(path, product_id)

        try:
            self.db.table(self.table).delete().eq("id", product_id).execute()
        except Exception as e:
            logger.error("delete_product_failed", product_id=product_id, error=str(e))
            raise DatabaseError("delete", str(e))

        logger.info("product_deleted", product_id=product_id)
        return True

    # ===================
    # UTILITY METHODS
    # ===================

    def count(self, trending_only: bool = False) -> int:
        """Count products."""
        try:
            query = self.db.table(self.table).select("id", count="exact")
            if trending_only:
                query = query.eq("is_trending", True)
            result = query.execute()
            return result.count or 0
        except Exception as e:
            logger.error("count_products_failed", error=str(e))
            raise DatabaseError("count", str(e))


# Singleton instance for convenience
_product_service: Optional[ProductService] = None

def get_product_service() -> ProductService:
    """Get or create ProductService instance."""
    global _product_service
    if _product_service is None:
        _product_service = ProductService()
    return _product_service
