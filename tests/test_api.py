"""
HTTP-level tests: routing, auth gates, the error envelope and one full
shopping flow through the public API.
"""
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from shopzone.services.notification_service import ORDER_PLACED
from shopzone.services.product_service import ProductService

from tests.conftest import login_headers, register


@pytest.fixture
def admin_headers(client, api_admin):
    return login_headers(client, "root@example.com")


@pytest.fixture
def product_id(app):
    with app.state.db.session() as session:
        product = ProductService(session).create_product(
            {"name": "Desk Lamp", "price": "10.00", "category": "home", "stock": 5}
        )
    return product.id


def _error(resp):
    return resp.json()["error"]


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_catalog_is_public(client, product_id):
    listing = client.get("/products", params={"category": "home", "search": "lamp"})
    assert listing.status_code == 200
    assert [p["id"] for p in listing.json()] == [product_id]

    detail = client.get(f"/products/{product_id}")
    assert detail.status_code == 200
    assert Decimal(detail.json()["price"]) == Decimal("10.00")

    assert client.get("/products/categories").json() == ["home"]


def test_unknown_product_is_404(client):
    resp = client.get("/products/missing")
    assert resp.status_code == 404
    assert _error(resp)["kind"] == "NotFound"


def test_protected_route_without_token(client):
    resp = client.get("/cart")
    assert resp.status_code == 401
    assert _error(resp)["kind"] == "NotAuthenticated"


def test_protected_route_with_bad_token(client):
    resp = client.get("/auth/me", headers={"Authorization": "Bearer nope"})
    assert resp.status_code == 401
    assert _error(resp)["kind"] == "NotAuthenticated"


def test_admin_routes_reject_customers(client):
    _, headers = register(client, "ann@example.com")

    create = client.post(
        "/products",
        json={"name": "X", "price": "1.00", "category": "misc"},
        headers=headers,
    )
    assert create.status_code == 403
    assert _error(create) == {"kind": "NotAuthorized", "message": "Admin access required", "details": {}}

    assert client.get("/users", headers=headers).status_code == 403
    assert client.get("/orders/all", headers=headers).status_code == 403


def test_register_validation_error_envelope(client):
    resp = client.post("/auth/register", json={"email": "ann@example.com"})
    assert resp.status_code == 422
    assert _error(resp)["kind"] == "ValidationError"
    assert _error(resp)["details"]["errors"]


def test_business_validation_is_400(client):
    resp = client.post(
        "/auth/register",
        json={"email": "ann@example.com", "password": "123", "first_name": "Ann", "last_name": "B"},
    )
    assert resp.status_code == 400
    assert _error(resp)["kind"] == "ValidationError"


def test_duplicate_registration_is_409(client):
    register(client, "ann@example.com")
    resp = client.post(
        "/auth/register",
        json={"email": "ANN@example.com", "password": "secret123", "first_name": "A", "last_name": "B"},
    )
    assert resp.status_code == 409
    assert _error(resp)["kind"] == "DuplicateEmail"


def test_bad_login_is_401(client):
    register(client, "ann@example.com")
    resp = client.post("/auth/login", json={"email": "ann@example.com", "password": "wrong-one"})
    assert resp.status_code == 401
    assert _error(resp) == {"kind": "InvalidCredentials", "message": "Invalid email or password", "details": {}}


def test_business_error_envelope_carries_details(client, product_id):
    _, headers = register(client, "ann@example.com")

    resp = client.post("/cart/items", json={"product_id": product_id, "quantity": 9}, headers=headers)

    assert resp.status_code == 409
    assert _error(resp) == {
        "kind": "InsufficientStock",
        "message": "Not enough stock for 'Desk Lamp': available 5, requested 9",
        "details": {"product_id": product_id, "product_name": "Desk Lamp", "available": 5, "requested": 9},
    }


def test_unexpected_errors_are_opaque(app):
    @app.get("/boom")
    def boom():
        raise RuntimeError("database password is hunter2")

    resp = TestClient(app, raise_server_exceptions=False).get("/boom")

    assert resp.status_code == 500
    assert _error(resp) == {"kind": "InternalError", "message": "Internal server error", "details": {}}
    assert "hunter2" not in resp.text


def test_profile_and_logout(client):
    body, headers = register(client, "ann@example.com", first_name="Ann")
    assert "password_hash" not in body["user"]

    me = client.patch("/auth/me", json={"first_name": "Annie"}, headers=headers)
    assert me.status_code == 200
    assert me.json()["first_name"] == "Annie"

    assert client.post("/auth/logout", headers=headers).json() == {"logged_out": True}
    assert client.get("/auth/me", headers=headers).status_code == 401


def test_change_password_keeps_current_session(client):
    _, headers = register(client, "ann@example.com")
    other = login_headers(client, "ann@example.com")

    resp = client.post(
        "/auth/change-password",
        json={"current_password": "secret123", "new_password": "another-pw"},
        headers=headers,
    )
    assert resp.status_code == 200

    assert client.get("/auth/me", headers=headers).status_code == 200
    assert client.get("/auth/me", headers=other).status_code == 401
    login_headers(client, "ann@example.com", "another-pw")


def test_user_lookup(client, admin_headers):
    body, headers = register(client, "ann@example.com")
    user_id = body["user"]["id"]
    _, stranger = register(client, "bob@example.com")

    assert client.get(f"/users/{user_id}", headers=headers).status_code == 200
    assert client.get(f"/users/{user_id}", headers=stranger).status_code == 403
    assert client.get(f"/users/{user_id}", headers=admin_headers).status_code == 200
    assert len(client.get("/users", headers=admin_headers).json()) == 3


def test_admin_manages_catalog(client, admin_headers):
    created = client.post(
        "/products",
        json={"name": "Chair", "price": "49.90", "category": "home", "stock": 2},
        headers=admin_headers,
    )
    assert created.status_code == 201
    product_id = created.json()["id"]

    updated = client.patch(f"/products/{product_id}", json={"stock": 7}, headers=admin_headers)
    assert updated.json()["stock"] == 7

    bad = client.patch(f"/products/{product_id}", json={"price": "-1"}, headers=admin_headers)
    assert bad.status_code == 400

    huge = client.post(
        "/products",
        json={"name": "Gold", "price": "1e30", "category": "home"},
        headers=admin_headers,
    )
    assert huge.status_code == 400
    assert _error(huge)["details"] == {"field": "price"}

    assert client.delete(f"/products/{product_id}", headers=admin_headers).json() == {"deleted": True}
    assert client.get(f"/products/{product_id}").status_code == 404


def test_cart_routes(client, product_id):
    _, headers = register(client, "ann@example.com")

    added = client.post("/cart/items", json={"product_id": product_id, "quantity": 2}, headers=headers)
    assert added.status_code == 200
    assert added.json()["quantity"] == 2

    cart = client.get("/cart", headers=headers).json()
    assert cart["item_count"] == 2
    assert Decimal(cart["subtotal"]) == Decimal("20.00")
    assert cart["items"][0]["product"]["name"] == "Desk Lamp"

    too_many = client.post("/cart/items", json={"product_id": product_id, "quantity": 9}, headers=headers)
    assert too_many.status_code == 409
    assert _error(too_many)["details"]["available"] == 5

    assert client.patch(f"/cart/items/{product_id}", json={"quantity": 3}, headers=headers).json()["quantity"] == 3
    assert client.patch(f"/cart/items/{product_id}", json={"quantity": 0}, headers=headers).json() is None
    assert client.get("/cart", headers=headers).json()["items"] == []

    client.post("/cart/items", json={"product_id": product_id}, headers=headers)
    assert client.delete(f"/cart/items/{product_id}", headers=headers).json() == {"removed": True}
    assert client.delete("/cart", headers=headers).json() == {"cleared": True}


def test_checkout_flow(client, product_id, admin_headers, notifier):
    _, headers = register(client, "ann@example.com")
    _, stranger = register(client, "bob@example.com")

    empty = client.post("/orders", json={"shipping_address": "1 Main St", "payment_method": "card"}, headers=headers)
    assert empty.status_code == 400
    assert _error(empty)["kind"] == "EmptyCart"

    client.post("/cart/items", json={"product_id": product_id, "quantity": 2}, headers=headers)
    resp = client.post(
        "/orders",
        json={"shipping_address": {"street": "1 Main St", "city": "Springfield"}, "payment_method": "card"},
        headers=headers,
    )
    assert resp.status_code == 201
    order = resp.json()
    assert order["status"] == "pending"
    assert Decimal(order["total"]) == Decimal("27.69")
    assert order["items"][0]["quantity"] == 2
    assert order["shipping_address"]["city"] == "Springfield"
    assert notifier.sent[-1]["event"] == ORDER_PLACED

    assert client.get(f"/products/{product_id}").json()["stock"] == 3
    assert client.get("/cart", headers=headers).json()["items"] == []
    assert [o["id"] for o in client.get("/orders", headers=headers).json()] == [order["id"]]

    assert client.get(f"/orders/{order['id']}", headers=stranger).status_code == 403
    assert client.get(f"/orders/{order['id']}", headers=admin_headers).status_code == 200

    shipped = client.patch(f"/orders/{order['id']}/status", json={"status": "shipped"}, headers=headers)
    assert shipped.status_code == 403

    cancelled = client.patch(f"/orders/{order['id']}/status", json={"status": "cancelled"}, headers=headers)
    assert cancelled.status_code == 200
    assert cancelled.json()["status"] == "cancelled"
    assert client.get(f"/products/{product_id}").json()["stock"] == 5

    again = client.patch(f"/orders/{order['id']}/status", json={"status": "processing"}, headers=admin_headers)
    assert again.status_code == 400
    assert _error(again)["kind"] == "InvalidStatusTransition"

    by_status = client.get("/orders/all", params={"status": "cancelled"}, headers=admin_headers).json()
    assert [o["id"] for o in by_status] == [order["id"]]


def test_checkout_requires_payment_method(client, product_id):
    _, headers = register(client, "ann@example.com")
    client.post("/cart/items", json={"product_id": product_id}, headers=headers)

    resp = client.post("/orders", json={"shipping_address": "1 Main St", "payment_method": ""}, headers=headers)

    assert resp.status_code == 422


def test_address_routes(client):
    _, headers = register(client, "ann@example.com")
    payload = {
        "label": "Home",
        "first_name": "Ann",
        "last_name": "Buyer",
        "street": "1 Main St",
        "city": "Springfield",
        "state": "IL",
        "zip_code": "62701",
        "country": "US",
    }

    home = client.post("/addresses", json=payload, headers=headers)
    assert home.status_code == 201
    assert home.json()["is_default"] is True

    work = client.post("/addresses", json={**payload, "label": "Work"}, headers=headers).json()
    made_default = client.post(f"/addresses/{work['id']}/default", headers=headers)
    assert made_default.json()["is_default"] is True

    listing = client.get("/addresses", headers=headers).json()
    assert [a["label"] for a in listing] == ["Work", "Home"]

    patched = client.patch(f"/addresses/{home.json()['id']}", json={"city": "Chicago"}, headers=headers)
    assert patched.json()["city"] == "Chicago"

    assert client.delete(f"/addresses/{work['id']}", headers=headers).json() == {"deleted": True}
    _, stranger = register(client, "bob@example.com")
    assert client.delete(f"/addresses/{home.json()['id']}", headers=stranger).status_code == 404
