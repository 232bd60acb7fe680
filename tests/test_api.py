"""
API tests through the FastAPI app with the mocked database.

Run: pytest tests/test_api.py -v
"""

import json
import pytest

from tests.factories import (
    CategoryFactory,
    ImageFactory,
    InquiryFactory,
    ProductFactory,
)


@pytest.fixture
def client(test_client_with_mock_db):
    return test_client_with_mock_db


@pytest.fixture
def catalog(mock_supabase):
    mock_supabase.set_table_data("categories", [
        CategoryFactory.create(id="cat-h", name="Hoodies", slug="hoodies"),
        CategoryFactory.create(id="cat-t", name="T-Shirts", slug="t-shirts"),
    ])
    mock_supabase.set_table_data("products", [
        ProductFactory.create_trending(1, id="A", name="Alpha Tee", category_id="cat-t"),
        ProductFactory.create(id="B", name="Bravo Hoodie", category_id="cat-h"),
        ProductFactory.create_trending(0, id="C", name="Charlie Tee", category_id="cat-t"),
    ])


# ===================
# BASICS
# ===================

class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["database"]["status"] == "healthy"

    def test_root_lists_endpoints(self, client):
        assert "trending" in client.get("/").json()["endpoints"]


class TestAuth:

    def test_login_and_me(self, client, mock_supabase):
        mock_supabase.auth.add_user("admin@inkfinity.test", "secret")

        login = client.post("/api/auth/login", json={"email": "admin@inkfinity.test", "password": "secret"})
        assert login.status_code == 200
        token = login.json()["access_token"]

        me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.json()["email"] == "admin@inkfinity.test"

    def test_login_does_not_change_shared_client(self, client, mock_supabase):
        mock_supabase.auth.add_user("admin@inkfinity.test", "secret")

        client.post("/api/auth/login", json={"email": "admin@inkfinity.test", "password": "secret"})

        assert mock_supabase.auth.session is None

    def test_logout_revokes_callers_token(self, client, admin_headers):
        response = client.post("/api/auth/logout", headers=admin_headers)
        assert response.status_code == 204

        assert client.get("/api/auth/me", headers=admin_headers).status_code == 401

    def test_bad_login(self, client):
        response = client.post("/api/auth/login", json={"email": "x@y.z", "password": "nope"})
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTHENTICATION_FAILED"

    def test_admin_route_without_token(self, client):
        response = client.get("/api/dashboard")
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTHENTICATION_FAILED"


# ===================
# TRENDING
# ===================

class TestTrendingApi:

    def test_public_feed_in_order(self, client, catalog):
        response = client.get("/api/trending")
        assert [p["id"] for p in response.json()] == ["C", "A"]

    def test_board_requires_admin(self, client, catalog):
        assert client.get("/api/admin/trending").status_code == 401

    def test_board_partitions(self, client, catalog, admin_headers):
        response = client.get("/api/admin/trending", params={"search": "hood"}, headers=admin_headers)

        body = response.json()
        assert response.status_code == 200
        assert [p["id"] for p in body["trending"]] == ["C", "A"]
        assert [p["id"] for p in body["available"]] == ["B"]
        assert body["status"] == "idle"

    def test_save_order(self, client, catalog, admin_headers, mock_supabase):
        response = client.put(
            "/api/admin/trending",
            json={"product_ids": ["B", "A"]},
            headers=admin_headers
        )

        assert response.status_code == 200
        assert [p["id"] for p in response.json()["trending"]] == ["B", "A"]
        assert mock_supabase.row("products", "C")["is_trending"] is False
        assert mock_supabase.row("products", "A")["trending_order"] == 1

    def test_save_duplicate_ids_rejected(self, client, catalog, admin_headers):
        response = client.put(
            "/api/admin/trending",
            json={"product_ids": ["A", "A"]},
            headers=admin_headers
        )

        error = response.json()["error"]
        assert response.status_code == 422
        assert error["code"] == "VALIDATION_ERROR"
        assert error["details"]["errors"][0]["loc"] == ["body", "product_ids"]
        assert "timestamp" in error

    def test_save_unknown_id_rejected(self, client, catalog, admin_headers, mock_supabase):
        response = client.put(
            "/api/admin/trending",
            json={"product_ids": ["A", "Z"]},
            headers=admin_headers
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "TRENDING_INVALID_SELECTION"
        assert mock_supabase.writes("products") == []

    def test_partial_failure_reported(self, client, catalog, admin_headers, mock_supabase):
        mock_supabase.fail_when("products", "update", id="A")

        response = client.put(
            "/api/admin/trending",
            json={"product_ids": ["B", "A", "C"]},
            headers=admin_headers
        )

        error = response.json()["error"]
        assert response.status_code == 500
        assert error["code"] == "TRENDING_SAVE_FAILED"
        assert error["details"] == {"phase": "set", "completed": 1, "failed_product_id": "A"}

        feed = client.get("/api/trending").json()
        assert [p["id"] for p in feed] == ["B"]


# ===================
# CATALOG
# ===================

class TestCategoriesApi:

    def test_list_paginated_and_clamped(self, client, catalog):
        response = client.get("/api/categories", params={"page": 9, "page_size": 1})

        body = response.json()
        assert body["page"] == 2
        assert body["total_pages"] == 2
        assert [c["slug"] for c in body["data"]] == ["t-shirts"]

    def test_get_by_slug_missing(self, client):
        response = client.get("/api/categories/nope")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "CATEGORY_NOT_FOUND"

    def test_create_with_image(self, client, admin_headers, mock_supabase):
        response = client.post(
            "/api/categories",
            data={"name": "Caps"},
            files={"image": ("caps.png", ImageFactory.create(), "image/png")},
            headers=admin_headers
        )

        assert response.status_code == 201
        assert response.json()["slug"] == "caps"
        assert response.json()["image"].startswith("categories/")

    def test_create_duplicate(self, client, catalog, admin_headers):
        response = client.post("/api/categories", data={"name": "Hoodies"}, headers=admin_headers)
        assert response.status_code == 409


class TestProductsApi:

    def test_list_filters(self, client, catalog):
        response = client.get("/api/products", params={"category_id": "cat-t"})
        assert response.json()["total"] == 2

    def test_create_product_with_images(self, client, admin_headers, mock_supabase):
        response = client.post(
            "/api/products",
            data={"name": "Zip Hoodie", "category_id": ""},
            files=[
                ("images", ("a.png", ImageFactory.create(), "image/png")),
                ("images", ("b.png", ImageFactory.create(), "image/png")),
            ],
            headers=admin_headers
        )

        body = response.json()
        assert response.status_code == 201
        assert len(body["images"]) == 2
        assert body["is_trending"] is False
        assert body["category_id"] is None

    def test_create_product_blank_name(self, client, admin_headers):
        response = client.post("/api/products", data={"name": "  "}, headers=admin_headers)
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_delete_missing(self, client, admin_headers):
        response = client.delete("/api/products/nope", headers=admin_headers)
        assert response.status_code == 404


# ===================
# INQUIRIES & SETTINGS
# ===================

class TestInquiriesApi:

    def test_public_submit(self, client, mock_supabase):
        response = client.post("/api/inquiries", json={
            "name": "Sam",
            "email": "sam@shop.co",
            "message": "Need 50 jerseys"
        })

        assert response.status_code == 201
        assert response.json()["read"] is False

    def test_submit_bad_email(self, client):
        response = client.post("/api/inquiries", json={
            "name": "Sam",
            "email": "not-an-email",
            "message": "Hi"
        })

        body = response.json()
        assert response.status_code == 422
        assert "detail" not in body
        assert body["error"]["code"] == "VALIDATION_ERROR"
        assert body["error"]["details"]["errors"][0]["loc"] == ["body", "email"]

    def test_admin_list_with_unread_badge(self, client, admin_headers, mock_supabase):
        mock_supabase.set_table_data("contact_inquiries", [
            InquiryFactory.create(read=True),
            InquiryFactory.create(),
            InquiryFactory.create(),
        ])

        response = client.get("/api/inquiries", params={"status": "read"}, headers=admin_headers)

        body = response.json()
        assert body["total"] == 1
        assert body["unread_count"] == 2

    def test_mark_read(self, client, admin_headers, mock_supabase):
        mock_supabase.set_table_data("contact_inquiries", [InquiryFactory.create(id="i1")])

        response = client.post("/api/inquiries/i1/read", headers=admin_headers)

        assert response.json()["read"] is True


class TestCompanySettingsApi:

    def test_defaults(self, client):
        assert client.get("/api/company-settings").json()["company_name"] == "Inkfinity Creation"

    def test_favicon_missing(self, client):
        assert client.get("/api/company-settings/favicon.png").status_code == 404

    def test_update_with_favicon(self, client, admin_headers):
        response = client.put(
            "/api/company-settings",
            data={"data": json.dumps({"phone": "+1 555 0100"})},
            files={"favicon": ("f.png", ImageFactory.create(64, 64), "image/png")},
            headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["phone"] == "+1 555 0100"
        assert response.json()["favicon"].startswith("branding/")

        favicon = client.get("/api/company-settings/favicon.png")
        assert favicon.status_code == 200
        assert favicon.headers["content-type"] == "image/png"

    def test_update_invalid_json(self, client, admin_headers):
        response = client.put("/api/company-settings", data={"data": "{oops"}, headers=admin_headers)
        assert response.status_code == 422


class TestDashboardApi:

    def test_dashboard(self, client, catalog, admin_headers):
        response = client.get("/api/dashboard", headers=admin_headers)

        body = response.json()
        assert body["total_products"] == 3
        assert body["trending_products"] == 2
        assert body["recent_inquiries"] == []
