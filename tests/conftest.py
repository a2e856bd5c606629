import itertools
import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Activate the config environment before the domain is loaded, then bind
    the shared database to the configured (in-memory) engine.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from shared.config import get_config
    from shared.database import db
    from shared.domain import init_domain
    from shared.logging import configure_logging

    init_domain()
    configure_logging(get_config())
    db.init()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db(request):
    from shared.database import db, drop_db, setup_db

    setup_db(db)

    yield

    drop_db(db)


@pytest.fixture(autouse=True)
def domain_ctx():
    """Push the domain context for a test."""
    from shared.domain import yapee

    ctx = yapee.domain_context()
    ctx.push()

    yield yapee

    ctx.pop()


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from identity.sessions import session_store
    from shared.database import db, reset_db

    # Clear all tables and aggregates
    reset_db(db)

    # Drop logged-in sessions
    session_store.clear()


# ---------------------------------------------------------------------------
# Database access
# ---------------------------------------------------------------------------
@pytest.fixture
def session():
    """A unit of work committed when the test finishes."""
    from shared.database import db

    with db.session_scope() as session:
        yield session


@pytest.fixture
def persisted():
    """Run ``fn(session, ...)`` in its own committed unit of work.

    API tests use it to prepare rows that the application must see.
    """
    from shared.database import db

    def _run(fn, *args, **kwargs):
        with db.session_scope() as session:
            return fn(session, *args, **kwargs)

    return _run


# ---------------------------------------------------------------------------
# Factories, each taking the session as first argument
# ---------------------------------------------------------------------------
@pytest.fixture
def make_user():
    from identity.user.registration import register_user

    counter = itertools.count(1)

    def _make(session, username=None, password="secret-pass", role="user", **fields):
        return register_user(session, username or f"user{next(counter)}", password, role=role, **fields)

    return _make


@pytest.fixture
def make_category():
    from catalogue.category.management import create_category

    counter = itertools.count(1)

    def _make(session, **overrides):
        data = {"name": f"Category {next(counter)}"}
        data.update(overrides)
        return create_category(session, **data)

    return _make


@pytest.fixture
def make_brand():
    from catalogue.brand.management import create_brand

    counter = itertools.count(1)

    def _make(session, **overrides):
        data = {"name": f"Brand {next(counter)}"}
        data.update(overrides)
        return create_brand(session, **data)

    return _make


@pytest.fixture
def make_product():
    from catalogue.product.management import create_product

    counter = itertools.count(1)

    def _make(session, **overrides):
        data = {"name": f"Product {next(counter)}", "price": 100.0, "stock": 10}
        data.update(overrides)
        return create_product(session, **data)

    return _make


@pytest.fixture
def make_order():
    """Insert an order directly, without touching stock or carts."""
    from ordering.order.order import Order
    from ordering.order.repository import OrderRepository

    def _make(session, items, user=None, status="pending", created_at=None):
        order = Order.place(
            shipping_name="Nguyen Van A",
            shipping_phone="0901234567",
            shipping_address="12 Le Loi, District 1",
            shipping_city="Ho Chi Minh City",
            user_id=user.id if user else None,
        )
        for product, quantity in items:
            order.add_item(product_id=product.id, quantity=quantity, price=product.price)
        order.status = status
        if created_at is not None:
            order.created_at = created_at
        return OrderRepository(session).add(order)

    return _make


# ---------------------------------------------------------------------------
# HTTP clients
# ---------------------------------------------------------------------------
@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from app import app

    return TestClient(app)


@pytest.fixture
def login():
    """Return a new TestClient signed in with the given credentials."""
    from fastapi.testclient import TestClient

    from app import app

    def _login(username, password="secret-pass"):
        client = TestClient(app)
        response = client.post("/api/auth/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return client

    return _login


@pytest.fixture
def admin_client(persisted, make_user, login):
    persisted(make_user, username="admin", password="admin-pass", role="admin", full_name="Administrator")
    return login("admin", "admin-pass")


@pytest.fixture
def customer(persisted, make_user):
    return persisted(make_user, username="lan", full_name="Nguyen Thi Lan", email="lan@example.com")


@pytest.fixture
def customer_client(customer, login):
    return login(customer.username)
