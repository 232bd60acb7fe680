"""
Shared test fixtures.

The Supabase client is replaced by an in-memory fake that keeps table
rows, applies filters, orders and limits, and records every executed
call so tests can assert on write order.
"""

import os
import re
import sys
from pathlib import Path

# Settings are read at import time
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ["TELEGRAM_BOT_TOKEN"] = ""
os.environ["TELEGRAM_CHAT_ID"] = ""

# Add project directory to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import pytest
from unittest.mock import patch
from contextlib import ExitStack
from datetime import datetime
from types import SimpleNamespace
from typing import Generator, Optional
from uuid import uuid4


# ===================
# MOCK SUPABASE CLIENT
# ===================

class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data: list = None, count: int = None):
        self.data = data or []
        self.count = count if count is not None else len(self.data)


def _like(pattern: str, value) -> bool:
    regex = ".*".join(re.escape(part) for part in pattern.split("%"))
    return value is not None and re.fullmatch(regex, str(value), re.IGNORECASE) is not None


class MockSupabaseQuery:
    """Chainable query that runs against the owning table on execute()."""

    def __init__(self, table: "MockSupabaseTable", action: str, payload=None, columns: str = "*", count=None):
        self._table = table
        self.action = action
        self.payload = payload
        self.columns = columns
        self.count_mode = count
        self.filters: list[tuple] = []
        self._order: list[tuple[str, bool]] = []
        self._limit = None

    def eq(self, column, value):
        self.filters.append(("eq", column, value))
        return self

    def neq(self, column, value):
        self.filters.append(("neq", column, value))
        return self

    def ilike(self, column, pattern):
        self.filters.append(("ilike", column, pattern))
        return self

    def order(self, column, desc: bool = False, **kwargs):
        self._order.append((column, desc))
        return self

    def limit(self, count):
        self._limit = count
        return self

    def _matches(self, row: dict) -> bool:
        for op, column, value in self.filters:
            if op == "eq" and row.get(column) != value:
                return False
            if op == "neq" and row.get(column) == value:
                return False
            if op == "ilike" and not _like(value, row.get(column)):
                return False
        return True

    def eq_filters(self) -> dict:
        return {column: value for op, column, value in self.filters if op == "eq"}

    def execute(self) -> MockSupabaseResponse:
        client = self._table.client
        client.calls.append(SimpleNamespace(
            table=self._table.name,
            action=self.action,
            payload=self.payload,
            filters=self.eq_filters()
        ))
        client.check_failure(self._table.name, self.action, self.eq_filters())

        rows = self._table.rows
        matched = [row for row in rows if self._matches(row)]

        if self.action == "select":
            for column, desc in reversed(self._order):
                matched.sort(key=lambda r: (r.get(column) is None, r.get(column)), reverse=desc)
            total = len(matched)
            if self._limit is not None:
                matched = matched[:self._limit]
            data = [self._table.project(dict(row), self.columns) for row in matched]
            return MockSupabaseResponse(data=data, count=total)

        if self.action == "insert":
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            inserted = []
            for item in items:
                now = datetime.utcnow().isoformat() + "Z"
                row = {"id": str(uuid4()), "created_at": now, "updated_at": now, **item}
                rows.append(row)
                inserted.append(dict(row))
            return MockSupabaseResponse(data=inserted)

        if self.action == "update":
            updated = []
            for row in matched:
                row.update(self.payload)
                row["updated_at"] = datetime.utcnow().isoformat() + "Z"
                updated.append(dict(row))
            return MockSupabaseResponse(data=updated)

        if self.action == "delete":
            self._table.rows[:] = [row for row in rows if row not in matched]
            return MockSupabaseResponse(data=[dict(row) for row in matched])

        raise ValueError(f"Unknown action {self.action}")


class MockSupabaseTable:
    """Mock Supabase table backed by the client's row store."""

    def __init__(self, client: "MockSupabaseClient", name: str):
        self.client = client
        self.name = name

    @property
    def rows(self) -> list:
        return self.client.tables.setdefault(self.name, [])

    def project(self, row: dict, columns: str) -> dict:
        # Embedded "category:categories(...)" join
        if "category:categories" in columns:
            category_id = row.get("category_id")
            category = next(
                (c for c in self.client.tables.get("categories", []) if c["id"] == category_id),
                None
            )
            row["category"] = (
                {"id": category["id"], "name": category["name"], "slug": category["slug"]}
                if category else None
            )
        return row

    def select(self, columns: str = "*", count=None):
        return MockSupabaseQuery(self, "select", columns=columns, count=count)

    def insert(self, data):
        return MockSupabaseQuery(self, "insert", payload=data)

    def update(self, data):
        return MockSupabaseQuery(self, "update", payload=data)

    def delete(self):
        return MockSupabaseQuery(self, "delete")


class MockStorageBucket:
    """Mock storage bucket keeping objects in memory."""

    def __init__(self, storage: "MockStorage", name: str):
        self.storage = storage
        self.name = name

    def upload(self, path, file, file_options=None):
        if "upload" in self.storage.failing:
            raise Exception("upload rejected")
        self.storage.objects[path] = file
        self.storage.uploads.append(SimpleNamespace(path=path, options=file_options))
        return SimpleNamespace(path=path)

    def remove(self, paths):
        if "remove" in self.storage.failing:
            raise Exception("remove rejected")
        for path in paths:
            self.storage.objects.pop(path, None)
            self.storage.removed.append(path)
        return []

    def download(self, path):
        if path not in self.storage.objects:
            raise Exception("Object not found")
        return self.storage.objects[path]

    def get_public_url(self, path):
        return f"https://test.supabase.co/storage/v1/object/public/{self.name}/{path}"


class MockStorage:
    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.uploads: list = []
        self.removed: list[str] = []
        self.failing: set[str] = set()

    def from_(self, bucket: str) -> MockStorageBucket:
        return MockStorageBucket(self, bucket)


class MockAuthAdmin:
    """Mock of client.auth.admin."""

    def __init__(self, auth: "MockAuth"):
        self._auth = auth

    def sign_out(self, jwt: str, scope: str = "global"):
        if self._auth.tokens.pop(jwt, None) is None:
            raise Exception("invalid JWT")


class MockAuth:
    """
    Mock Supabase Auth with registered users and issued tokens.

    Like the real client, sign_in_with_password stores the session on the
    client it was called on (`session`).
    """

    def __init__(self, users: dict = None, tokens: dict = None):
        self.users: dict[str, dict] = users if users is not None else {}
        self.tokens: dict[str, dict] = tokens if tokens is not None else {}
        self.session: Optional[str] = None
        self.admin = MockAuthAdmin(self)

    def add_user(self, email: str, password: str) -> str:
        user = {"id": str(uuid4()), "email": email, "password": password}
        self.users[email] = user
        token = f"token-{user['id']}"
        self.tokens[token] = user
        return token

    def sign_in_with_password(self, credentials: dict):
        user = self.users.get(credentials["email"])
        if user is None or user["password"] != credentials["password"]:
            raise Exception("Invalid login credentials")
        token = f"token-{user['id']}"
        self.tokens[token] = user
        self.session = token
        return SimpleNamespace(
            session=SimpleNamespace(access_token=token, refresh_token="refresh", expires_in=3600),
            user=SimpleNamespace(id=user["id"], email=user["email"])
        )

    def get_user(self, token: str):
        user = self.tokens.get(token)
        if user is None:
            raise Exception("invalid JWT")
        return SimpleNamespace(user=SimpleNamespace(id=user["id"], email=user["email"]))


class MockSupabaseClient:
    """Mock Supabase client."""

    def __init__(self):
        self.tables: dict[str, list] = {}
        self.calls: list = []
        self.failures: list[tuple] = []
        self.storage = MockStorage()
        self.auth = MockAuth()
        self.session_clients: list = []

    def session_client(self) -> SimpleNamespace:
        """A separate client on the same project, as create_session_client returns."""
        client = SimpleNamespace(auth=MockAuth(self.auth.users, self.auth.tokens))
        self.session_clients.append(client)
        return client

    def set_table_data(self, table_name: str, data: list):
        """Configure rows for a table (copied, so tests keep their originals)."""
        self.tables[table_name] = [dict(row) for row in data]

    def rows(self, table_name: str) -> list:
        return self.tables.get(table_name, [])

    def row(self, table_name: str, row_id: str) -> dict:
        return next(r for r in self.rows(table_name) if r["id"] == row_id)

    def fail_when(self, table_name: str, action: str, **eq_filters):
        """Make matching calls raise, e.g. fail_when("products", "update", id="p2")."""
        self.failures.append((table_name, action, eq_filters))

    def check_failure(self, table_name: str, action: str, eq_filters: dict):
        for f_table, f_action, f_filters in self.failures:
            if f_table != table_name or f_action != action:
                continue
            if all(eq_filters.get(k) == v for k, v in f_filters.items()):
                raise Exception(f"{action} on {table_name} rejected")

    def writes(self, table_name: str) -> list:
        return [c for c in self.calls if c.table == table_name and c.action != "select"]

    def table(self, name: str) -> MockSupabaseTable:
        return MockSupabaseTable(self, name)


# ===================
# FIXTURES
# ===================

PATCHED_MODULES = [
    "config.database",
    "services.storage_service",
    "services.category_service",
    "services.product_service",
    "services.trending_service",
    "services.blog_service",
    "services.inquiry_service",
    "services.company_settings_service",
    "services.auth_service",
]

SINGLETONS = [
    ("services.category_service", "_category_service"),
    ("services.product_service", "_product_service"),
    ("services.trending_service", "_trending_service"),
    ("services.blog_service", "_blog_service"),
    ("services.inquiry_service", "_inquiry_service"),
    ("services.company_settings_service", "_company_settings_service"),
    ("services.auth_service", "_auth_service"),
    ("services.dashboard_service", "_dashboard_service"),
]


@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("products", [
                {"id": "1", "name": "Hoodie", ...}
            ])
    """
    return MockSupabaseClient()


@pytest.fixture
def mock_db(mock_supabase) -> Generator:
    """
    Patch the database client with mock and reset service singletons.

    Usage:
        def test_something(mock_db, mock_supabase):
            mock_supabase.set_table_data("products", [...])
            # Now any code using get_supabase_client() gets the mock
    """
    import importlib

    with ExitStack() as stack:
        for module in PATCHED_MODULES:
            stack.enter_context(
                patch(f"{module}.get_supabase_client", return_value=mock_supabase)
            )
        stack.enter_context(
            patch("services.auth_service.create_session_client", side_effect=mock_supabase.session_client)
        )
        for module, attr in SINGLETONS:
            stack.enter_context(patch.object(importlib.import_module(module), attr, None))
        yield mock_supabase


@pytest.fixture
def test_client_with_mock_db(mock_db):
    """
    Create FastAPI test client with mocked database.

    Usage:
        def test_endpoint(test_client_with_mock_db, mock_supabase):
            mock_supabase.set_table_data("products", [...])
            response = test_client_with_mock_db.get("/api/products")
    """
    from fastapi.testclient import TestClient
    from main import app

    yield TestClient(app)


@pytest.fixture
def admin_headers(mock_supabase) -> dict:
    """Bearer header for a signed-in admin."""
    token = mock_supabase.auth.add_user("admin@inkfinity.test", "secret")
    return {"Authorization": f"Bearer {token}"}
