"""
Unit tests for ProductService.

Run: pytest tests/unit/test_product_service.py -v
Run with coverage: pytest tests/unit/test_product_service.py --cov=services/product_service
"""

import pytest

# Import what we're testing
from services.product_service import ProductService
from services.storage_service import UploadFileData
from models.product import ProductCreate, ProductUpdate
from exceptions import ProductNotFoundError, DatabaseError, InvalidImageError

# Import test utilities
from tests.factories import CategoryFactory, ProductFactory, ImageFactory


class TestProductServiceGetAll:
    """Tests for ProductService.get_all()"""

    def test_get_all_newest_first(self, mock_db, mock_supabase):
        """Should return products ordered by created_at descending."""
        # Arrange
        mock_supabase.set_table_data("products", [
            ProductFactory.create(id="old", created_at="2025-01-01T00:00:00Z"),
            ProductFactory.create(id="new", created_at="2025-03-01T00:00:00Z"),
            ProductFactory.create(id="mid", created_at="2025-02-01T00:00:00Z"),
        ])
        service = ProductService()

        # Act
        products = service.get_all()

        # Assert
        assert [p.id for p in products] == ["new", "mid", "old"]

    def test_get_all_embeds_category(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("categories", [
            CategoryFactory.create(id="cat-1", name="Hoodies", slug="hoodies")
        ])
        mock_supabase.set_table_data("products", [
            ProductFactory.create(category_id="cat-1")
        ])

        product = ProductService().get_all()[0]

        assert product.category.slug == "hoodies"

    def test_get_all_filters_by_category(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("products", [
            ProductFactory.create(id="a", category_id="cat-1"),
            ProductFactory.create(id="b", category_id="cat-2"),
        ])

        products = ProductService().get_all(category_id="cat-2")

        assert [p.id for p in products] == ["b"]

    def test_get_all_search_is_case_insensitive_substring(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("products", [
            ProductFactory.create(id="a", name="Classic Pullover Hoodie"),
            ProductFactory.create(id="b", name="Snapback Cap"),
        ])

        products = ProductService().get_all(search="HOOD")

        assert [p.id for p in products] == ["a"]

    def test_null_trending_columns_read_as_defaults(self, mock_db, mock_supabase):
        row = ProductFactory.create(id="a")
        row.update({"is_trending": None, "trending_order": None, "images": None})
        mock_supabase.set_table_data("products", [row])

        product = ProductService().get_by_id("a")

        assert product.is_trending is False
        assert product.trending_order == 0
        assert product.images == []

    def test_get_all_failure_raises_database_error(self, mock_db, mock_supabase):
        mock_supabase.fail_when("products", "select")
        with pytest.raises(DatabaseError):
            ProductService().get_all()


class TestProductServiceCreate:

    def test_create_not_trending(self, mock_db, mock_supabase):
        product = ProductService().create(ProductCreate(name="Crew Tee"))

        assert product.is_trending is False
        assert product.trending_order == 0
        assert mock_supabase.row("products", product.id)["name"] == "Crew Tee"

    def test_create_uploads_cropped_images(self, mock_db, mock_supabase):
        images = [
            UploadFileData("front.png", ImageFactory.create(50, 30)),
            UploadFileData("back.png", ImageFactory.create(30, 50)),
        ]

        product = ProductService().create(ProductCreate(name="Crew Tee"), images)

        assert len(product.images) == 2
        assert all(p.startswith("products/") and p.endswith(".jpg") for p in product.images)
        assert len(product.image_urls) == 2

    def test_create_tolerates_failed_uploads(self, mock_db, mock_supabase):
        mock_supabase.storage.failing.add("upload")

        product = ProductService().create(
            ProductCreate(name="Crew Tee"),
            [UploadFileData("front.png", ImageFactory.create())]
        )

        assert product.images == []

    def test_create_rejects_unreadable_image(self, mock_db, mock_supabase):
        with pytest.raises(InvalidImageError):
            ProductService().create(
                ProductCreate(name="Crew Tee"),
                [UploadFileData("front.png", b"garbage")]
            )
        assert mock_supabase.rows("products") == []


class TestProductServiceUpdate:

    def test_update_removes_listed_and_appends_new(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("products", [
            ProductFactory.create(id="p1", images=["products/a.jpg", "products/b.jpg"])
        ])

        updated = ProductService().update(
            "p1",
            ProductUpdate(name="Renamed"),
            new_images=[UploadFileData("c.png", ImageFactory.create())],
            images_to_remove=["products/a.jpg"]
        )

        assert updated.name == "Renamed"
        assert updated.images[0] == "products/b.jpg"
        assert len(updated.images) == 2
        assert mock_supabase.storage.removed == ["products/a.jpg"]

    def test_failed_update_keeps_removed_images_in_storage(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("products", [
            ProductFactory.create(id="p1", images=["products/a.jpg", "products/b.jpg"])
        ])
        mock_supabase.fail_when("products", "update", id="p1")

        with pytest.raises(DatabaseError):
            ProductService().update("p1", ProductUpdate(), images_to_remove=["products/a.jpg"])

        assert mock_supabase.storage.removed == []
        assert mock_supabase.row("products", "p1")["images"] == ["products/a.jpg", "products/b.jpg"]

    def test_update_does_not_touch_trending_flags(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("products", [
            ProductFactory.create_trending(3, id="p1")
        ])

        updated = ProductService().update("p1", ProductUpdate(description="New copy"))

        assert updated.is_trending is True
        assert updated.trending_order == 3

    def test_update_missing_raises(self, mock_db, mock_supabase):
        with pytest.raises(ProductNotFoundError):
            ProductService().update("nope", ProductUpdate(name="X"))


class TestProductServiceDelete:

    def test_delete_removes_images_and_row(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("products", [
            ProductFactory.create(id="p1", images=["products/a.jpg", "https://cdn.example.com/b.jpg"])
        ])

        ProductService().delete("p1")

        assert mock_supabase.rows("products") == []
        assert mock_supabase.storage.removed == ["products/a.jpg"]

    def test_delete_missing_raises(self, mock_db, mock_supabase):
        with pytest.raises(ProductNotFoundError):
            ProductService().delete("nope")


class TestProductServiceCount:

    def test_count_trending_only(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("products", [
            ProductFactory.create_trending(0),
            ProductFactory.create(),
            ProductFactory.create_trending(1),
        ])
        service = ProductService()

        assert service.count() == 3
        assert service.count(trending_only=True) == 2
