from __future__ import annotations

import itertools
import json
from datetime import datetime, timezone

import pytest

from adapters.django_api.wiring import build_dependencies, reset_dependencies
from core.admin.directory import StoreDirectory
from core.bootstrap import preload_accounts
from core.http_api.auth import InMemorySessionProvider
from core.http_api.dependencies import HttpApiDependencies
from core.security.credentials import PasswordHasher
from core.time.clock import FixedClock
from engines.inventory.items import (
    CategoryRegistry,
    get_category_registry,
    set_category_registry,
)


FIXED_NOW = datetime(2025, 6, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def wired():
    directory = StoreDirectory(clock=FixedClock(FIXED_NOW), hasher=PasswordHasher(1000))
    preload_accounts(directory)
    counter = itertools.count(1)
    deps = HttpApiDependencies(
        directory=directory,
        session_provider=InMemorySessionProvider(token_factory=lambda: f"tok-{next(counter)}"),
    )
    reset_dependencies(deps)
    yield deps
    reset_dependencies(None)


@pytest.fixture(autouse=True)
def fresh_categories():
    saved = get_category_registry()
    set_category_registry(CategoryRegistry())
    yield
    set_category_registry(saved)


def _post(client, url, body, token=None):
    extra = {"HTTP_X_SESSION_TOKEN": token} if token else {}
    return client.post(url, data=json.dumps(body), content_type="application/json", **extra)


def _get(client, url, token=None, **query):
    extra = {"HTTP_X_SESSION_TOKEN": token} if token else {}
    return client.get(url, query, **extra)


def _token(client, username="admin", password="admin123"):
    response = _post(client, "/v1/auth/login", {"username": username, "password": password})
    assert response.status_code == 200, response.json()
    return response.json()["data"]["token"]


def test_wiring_uses_injected_dependencies(wired):
    assert build_dependencies() is wired


def test_login_and_status_codes(client):
    assert _post(client, "/v1/auth/login", {"username": "admin", "password": "x"}).status_code == 401
    expired = _post(client, "/v1/auth/login", {"username": "store3", "password": "password123"})
    assert expired.status_code == 403
    assert expired.json()["error"]["code"] == "SUBSCRIPTION_EXPIRED"


def test_missing_login_field_is_invalid_request(client):
    response = _post(client, "/v1/auth/login", {"username": "admin"})
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "password is required."


def test_malformed_json(client):
    response = client.post("/v1/auth/login", data="{nope", content_type="application/json")
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_REQUEST"


def test_method_not_allowed(client):
    assert client.get("/v1/auth/login").status_code == 405


def test_session_required(client):
    response = _get(client, "/v1/inventory")
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "SESSION_REQUIRED"


def test_inventory_search(client):
    token = _token(client)
    response = _get(client, "/v1/inventory", token, q="bigas")
    assert response.status_code == 200
    assert [row["product_id"] for row in response.json()["data"]["items"]] == ["P1"]


def test_add_item_and_move_stock(client):
    token = _token(client, "store1", "password123")
    created = _post(client, "/v1/inventory/items", {
        "product_name": "Pandesal", "stock": 30, "purchase_price": "2", "price": "3",
        "low_stock_threshold": 10, "purchase_date": "2025-05-30", "category": "FOOD",
    }, token)
    assert created.status_code == 200
    assert created.json()["data"]["product_id"] == "P1"

    refused = _post(client, "/v1/inventory/stock", {"product_id": "P1", "quantity": -31}, token)
    assert refused.status_code == 409
    missing = _post(client, "/v1/inventory/delete", {"product_id": "P9"}, token)
    assert missing.status_code == 404


def test_categories(client):
    token = _token(client)
    added = _post(client, "/v1/inventory/categories", {"name": "school supplies"}, token)
    assert added.json()["data"]["category"] == "SCHOOL_SUPPLIES"
    listed = _get(client, "/v1/inventory/categories", token)
    assert "SCHOOL_SUPPLIES" in listed.json()["data"]["categories"]


def test_categories_start_from_built_ins(client):
    listed = _get(client, "/v1/inventory/categories", _token(client))
    assert "SCHOOL_SUPPLIES" not in listed.json()["data"]["categories"]


def test_record_sale_and_list(client):
    token = _token(client)
    created = _post(client, "/v1/transactions", {
        "customer_name": "",
        "lines": [{"product_id": "P2", "quantity": 1}],
        "transaction_date": "2025-05-31",
    }, token)
    assert created.status_code == 200
    assert created.json()["data"]["customer_name"] == "Walk-in Customer"

    listed = _get(client, "/v1/transactions", token, q="walk-in")
    assert [row["transaction_id"] for row in listed.json()["data"]["items"]] == ["T4"]


def test_reports(client):
    token = _token(client)
    sales = _get(client, "/v1/reports/sales", token, start="2023-01-01", end="2023-12-31")
    assert sales.status_code == 200
    assert "Total Transactions: 3\n" in sales.json()["data"]["report"]

    missing = _get(client, "/v1/reports/expenses", token, start="2023-01-01")
    assert missing.status_code == 400
    assert missing.json()["error"]["message"] == "end is required."


def test_dashboard(client):
    token = _token(client, "store2", "password123")
    response = _get(client, "/v1/dashboard", token)
    assert response.json()["data"]["subscription_status"] == "trial"


def test_admin_routes(client, wired):
    store_token = _token(client, "store1", "password123")
    assert _get(client, "/v1/admin/accounts", store_token).status_code == 403

    token = _token(client)
    listed = _get(client, "/v1/admin/accounts", token)
    assert listed.json()["data"]["count"] == 4

    created = _post(client, "/v1/admin/accounts/create", {
        "username": "store4", "password": "pw", "store_name": "Ana's Store",
    }, token)
    assert created.status_code == 200

    protected = _post(client, "/v1/admin/accounts/delete", {"username": "admin"}, token)
    assert protected.status_code == 403

    reset = _post(client, "/v1/admin/accounts/reset-password",
                  {"username": "store4", "new_password": "fresh"}, token)
    assert reset.status_code == 200
    assert wired.directory.login("store4", "fresh") is None

    updated = _post(client, "/v1/admin/accounts/update", {
        "original_username": "store4", "username": "store1", "store_name": "Clash",
        "subscription_status": "active",
    }, token)
    assert updated.status_code == 409
