"""
Trending products curation.

An operator picks an ordered subset of all products to feature on the
homepage. The selection lives in memory (TrendingSelection) until saved;
saving is a two-phase write against the products table:

    1. clear:  is_trending=false, trending_order=0 where is_trending=true
    2. set:    is_trending=true,  trending_order=i  where id=selection[i]

Phase 2 issues one update per product, strictly in order, each finished
before the next starts. Nothing wraps the two phases: if an update in
phase 2 fails, the first `i` products stay flagged with orders 0..i-1 and
the rest stay cleared. The failure is raised as TrendingSaveError and the
product list is re-fetched so the caller sees what was actually persisted.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.product import ProductResponse
from models.trending import CurationStatus, TrendingBoardResponse
from exceptions import (
    AppError,
    DatabaseError,
    TrendingSaveError,
    TrendingSelectionError,
)
from services.product_service import PRODUCT_SELECT
from services.storage_service import StorageService
from utils.text_utils import matches_search

logger = structlog.get_logger(__name__)


class TrendingSelection:
    """
    Ordered, duplicate-free list of products to feature.

    Position in the list is the trending_order that will be persisted.
    Removing an item does not renumber anything until save.
    """

    def __init__(self, products: Optional[list[ProductResponse]] = None):
        self._products: list[ProductResponse] = []
        for product in products or []:
            self.add(product)

    @classmethod
    def from_products(cls, products: list[ProductResponse]) -> "TrendingSelection":
        """
        Rebuild the selection from persisted flags.

        Sorted by stored order; the sort is stable so ties keep the
        incoming (name) order.
        """
        flagged = [p for p in products if p.is_trending]
        flagged.sort(key=lambda p: p.trending_order or 0)
        return cls(flagged)

    @property
    def products(self) -> list[ProductResponse]:
        return list(self._products)

    @property
    def ids(self) -> list[str]:
        return [p.id for p in self._products]

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, product_id: str) -> bool:
        return any(p.id == product_id for p in self._products)

    def add(self, product: ProductResponse) -> bool:
        """Append to the end. Returns False if already selected."""
        if product.id in self:
            return False
        self._products.append(product)
        return True

    def remove(self, product_id: str) -> bool:
        """Drop by id, keeping the others' relative order."""
        before = len(self._products)
        self._products = [p for p in self._products if p.id != product_id]
        return len(self._products) != before

    def toggle(self, product: ProductResponse) -> bool:
        """
        Move a product between available and trending.

        Returns:
            True if the product is trending afterwards
        """
        if self.remove(product.id):
            return False
        self.add(product)
        return True

    def move_up(self, index: int) -> bool:
        """Swap with the previous item. First item (or bad index) is a no-op."""
        if index <= 0 or index >= len(self._products):
            return False
        self._swap(index - 1, index)
        return True

    def move_down(self, index: int) -> bool:
        """Swap with the next item. Last item (or bad index) is a no-op."""
        if index < 0 or index >= len(self._products) - 1:
            return False
        self._swap(index, index + 1)
        return True

    def _swap(self, i: int, j: int) -> None:
        self._products[i], self._products[j] = self._products[j], self._products[i]

    def positions(self) -> list[tuple[str, int]]:
        """(product_id, trending_order) pairs to persist."""
        return [(p.id, i) for i, p in enumerate(self._products)]


class TrendingService:
    """
    Trending persistence.

    Reads the product list for curation and the homepage feed, and
    writes the two-phase trending order.
    """

    def __init__(self, client=None):
        # Scripts may pass the service-role client to bypass row level security
        self.db = client or get_supabase_client()
        self.storage = StorageService()
        self.table = "products"

    def _to_response(self, row: dict) -> ProductResponse:
        product = ProductResponse(**row)
        product.image_urls = self.storage.get_image_urls(product.images)
        return product

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all_products(self) -> list[ProductResponse]:
        """All products ordered by name, for the curation screen."""
        logger.info("getting_products_for_curation")

        try:
            result = (
                self.db.table(self.table)
                .select(PRODUCT_SELECT)
                .order("name")
                .execute()
            )
        except Exception as e:
            logger.error("get_curation_products_failed", error=str(e))
            raise DatabaseError("select", str(e))

        products = [self._to_response(row) for row in result.data or []]
        logger.info("curation_products_retrieved", count=len(products))
        return products

    def get_trending(self) -> list[ProductResponse]:
        """Homepage feed: trending products in display order."""
        logger.debug("getting_trending_products")

        try:
            result = (
                self.db.table(self.table)
                .select(PRODUCT_SELECT)
                .eq("is_trending", True)
                .order("trending_order")
                .execute()
            )
        except Exception as e:
            logger.error("get_trending_failed", error=str(e))
            raise DatabaseError("select", str(e))

        return [self._to_response(row) for row in result.data or []]

    # ===================
    # WRITE OPERATIONS
    # ===================

    def save_order(self, product_ids: list[str]) -> None:
        """
        Persist the trending order with the two-phase write.

        Args:
            product_ids: Products to feature, index 0 displays first

        Raises:
            TrendingSaveError: On the first rejected call. details.phase is
                "clear" or "set"; details.completed counts phase-2 updates
                that succeeded before the failure.
        """
        logger.info("saving_trending_order", count=len(product_ids))

        try:
            (
                self.db.table(self.table)
                .update({"is_trending": False, "trending_order": 0})
                .eq("is_trending", True)
                .execute()
            )
        except Exception as e:
            logger.error("trending_clear_failed", error=str(e))
            raise TrendingSaveError("clear", str(e))

        for index, product_id in enumerate(product_ids):
            try:
                result = (
                    self.db.table(self.table)
                    .update({"is_trending": True, "trending_order": index})
                    .eq("id", product_id)
                    .execute()
                )
                error = None if result.data else "product not found"
            except Exception as e:
                error = str(e)

            if error is not None:
                logger.error(
                    "trending_set_failed",
                    product_id=product_id,
                    position=index,
                    completed=index,
                    remaining=len(product_ids) - index,
                    error=error
                )
                raise TrendingSaveError("set", error, completed=index, failed_product_id=product_id)

        logger.info("trending_order_saved", count=len(product_ids))


class TrendingCuration:
    """
    One curation session over the full product list.

    Holds the loaded products, the in-memory selection and the
    idle/loading/saving/error status of the last fetch or save.
    """

    def __init__(self, service: Optional[TrendingService] = None):
        self.service = service or get_trending_service()
        self.products: list[ProductResponse] = []
        self.selection = TrendingSelection()
        self.status = CurationStatus.IDLE
        self.error: Optional[str] = None

    # ===================
    # LOAD
    # ===================

    def load(self) -> None:
        """
        Fetch every product and rebuild the selection from persisted flags.

        Raises:
            AppError: If the fetch fails (status becomes ERROR)
        """
        self.status = CurationStatus.LOADING
        try:
            products = self.service.get_all_products()
        except AppError as e:
            self.status = CurationStatus.ERROR
            self.error = e.message
            raise

        self.products = products
        self.selection = TrendingSelection.from_products(products)
        self.status = CurationStatus.IDLE
        self.error = None

    # ===================
    # VIEWS
    # ===================

    @property
    def trending(self) -> list[ProductResponse]:
        return self.selection.products

    def available(self, search: Optional[str] = None) -> list[ProductResponse]:
        """Products not selected, optionally filtered by name or category name."""
        return [
            p for p in self.products
            if p.id not in self.selection
            and matches_search(search, p.name, p.category.name if p.category else None)
        ]

    def board(self, search: Optional[str] = None) -> TrendingBoardResponse:
        return TrendingBoardResponse(
            status=self.status,
            trending=self.trending,
            available=self.available(search),
            total_products=len(self.products),
            error=self.error,
        )

    def _product(self, product_id: str) -> ProductResponse:
        for product in self.products:
            if product.id == product_id:
                return product
        raise TrendingSelectionError("Unknown product", [product_id])

    # ===================
    # EDIT (in memory only)
    # ===================

    def toggle(self, product_id: str) -> bool:
        """Returns True if the product is trending afterwards."""
        return self.selection.toggle(self._product(product_id))

    def index_of(self, product_id: str) -> int:
        ids = self.selection.ids
        if product_id not in ids:
            raise TrendingSelectionError("Product is not in the trending list", [product_id])
        return ids.index(product_id)

    def move_up(self, index: int) -> bool:
        return self.selection.move_up(index)

    def move_down(self, index: int) -> bool:
        return self.selection.move_down(index)

    def select(self, product_ids: list[str]) -> None:
        """
        Replace the whole selection with the given order.

        Raises:
            TrendingSelectionError: If any id is unknown or repeated
        """
        duplicates = sorted({pid for pid in product_ids if product_ids.count(pid) > 1})
        if duplicates:
            raise TrendingSelectionError("Duplicate products in selection", duplicates)

        known = {p.id for p in self.products}
        unknown = [pid for pid in product_ids if pid not in known]
        if unknown:
            raise TrendingSelectionError("Unknown products in selection", unknown)

        self.selection = TrendingSelection([self._product(pid) for pid in product_ids])

    # ===================
    # SAVE
    # ===================

    def save(self) -> list[ProductResponse]:
        """
        Persist the selection, then re-fetch persisted truth.

        The re-fetch runs whether or not the write succeeded, so after a
        partial failure `trending` shows the half-written state.

        Returns:
            Trending products as persisted

        Raises:
            TrendingSaveError: If the write failed (status becomes ERROR)
        """
        self.status = CurationStatus.SAVING
        self.error = None
        product_ids = self.selection.ids

        save_error: Optional[TrendingSaveError] = None
        try:
            self.service.save_order(product_ids)
        except TrendingSaveError as e:
            save_error = e

        try:
            self.load()
        except AppError as e:
            if save_error is None:
                raise
            logger.error("trending_resync_failed", error=e.message)

        if save_error is not None:
            self.status = CurationStatus.ERROR
            self.error = save_error.message
            raise save_error

        return self.trending


# Singleton instance for convenience
_trending_service: Optional[TrendingService] = None

def get_trending_service() -> TrendingService:
    """Get or create TrendingService instance."""
    global _trending_service
    if _trending_service is None:
        _trending_service = TrendingService()
    return _trending_service
