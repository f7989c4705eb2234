"""
Pytest fixtures for ShopZone tests.

Every test gets its own file-backed SQLite database (so threads really use
separate connections), an in-memory checkout lock instead of Redis and a
notifier that records instead of enqueueing Celery tasks.
"""

import os

os.environ["APP_ENV"] = "test"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"

import threading
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from shopzone.data.database import Database
from shopzone.data.models.product import ProductModel
from shopzone.data.models.user import ROLE_ADMIN, ROLE_CUSTOMER
from shopzone.main import create_app
from shopzone.services.lock_service import LockService
from shopzone.services.notification_service import NotificationService
from shopzone.services.user_service import UserService

DEFAULT_PASSWORD = "secret123"


class FakeLockService(LockService):
    """Process-local stand-in for the Redis checkout lock."""

    def __init__(self):
        self._guard = threading.Lock()
        self.held: dict[str, str] = {}
        self.acquired = 0

    def acquire_checkout_lock(self, user_id, owner, ttl):
        key = self.checkout_key(user_id)
        with self._guard:
            if key in self.held:
                return False
            self.held[key] = owner
            self.acquired += 1
            return True

    def release_checkout_lock(self, user_id, owner):
        key = self.checkout_key(user_id)
        with self._guard:
            if self.held.get(key) != owner:
                return False
            del self.held[key]
            return True


class RecordingNotifier(NotificationService):
    def __init__(self):
        self.sent = []

    def send_order_notification(self, user_id, order_id, event, **extra):
        self.sent.append({"user_id": user_id, "order_id": order_id, "event": event, **extra})


@pytest.fixture
def database(tmp_path):
    database = Database(f"sqlite:///{tmp_path / 'shopzone.sqlite3'}")
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    """Session for service-level tests."""
    with database.session() as session:
        yield session


@pytest.fixture
def lock_service():
    return FakeLockService()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(email=None, password=DEFAULT_PASSWORD, role=ROLE_CUSTOMER, **fields):
        counter["n"] += 1
        user = UserService(db).create_user(
            email or f"user{counter['n']}@example.com",
            password,
            first_name=fields.get("first_name", "Test"),
            last_name=fields.get("last_name", f"User{counter['n']}"),
            phone=fields.get("phone"),
            role=role,
        )
        db.commit()
        return user

    return _make


@pytest.fixture
def customer(make_user):
    return make_user(email="customer@example.com")


@pytest.fixture
def other_customer(make_user):
    return make_user(email="other@example.com")


@pytest.fixture
def admin(make_user):
    return make_user(email="admin@example.com", role=ROLE_ADMIN)


@pytest.fixture
def make_product(db):
    counter = {"n": 0}

    def _make(name=None, price="10.00", stock=10, category="general", description=None):
        counter["n"] += 1
        product = ProductModel(
            name=name or f"Product {counter['n']}",
            description=description,
            price=Decimal(price),
            category=category,
            stock=stock,
        )
        db.add(product)
        db.commit()
        return product

    return _make


# ---------------------------------------------------------------- API


@pytest.fixture
def app(tmp_path, lock_service, notifier):
    app = create_app(
        database_url=f"sqlite:///{tmp_path / 'api.sqlite3'}",
        lock_service=lock_service,
        notification_service=notifier,
    )
    yield app
    app.state.db.dispose()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def api_admin(app):
    """Admin account created directly in the app's database (no public route makes admins)."""
    with app.state.db.session() as session:
        user = UserService(session).create_user(
            "root@example.com", DEFAULT_PASSWORD, "Root", "Admin", role=ROLE_ADMIN
        )
        session.commit()
    return user


def login_headers(client, email, password=DEFAULT_PASSWORD):
    resp = client.post("/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


def register(client, email, password=DEFAULT_PASSWORD, **fields):
    payload = {
        "email": email,
        "password": password,
        "first_name": fields.get("first_name", "Ann"),
        "last_name": fields.get("last_name", "Buyer"),
    }
    resp = client.post("/auth/register", json=payload)
    assert resp.status_code == 201, resp.text
    body = resp.json()
    return body, {"Authorization": f"Bearer {body['token']}"}
