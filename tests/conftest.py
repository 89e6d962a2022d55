"""Pytest fixtures for the back-office service."""

import os

# Settings are read once at import time; point them at SQLite before the app loads
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RUN_MIGRATIONS", "false")

from decimal import Decimal
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cafex_admin.domain.models import Base
from cafex_admin.domain.repositories import IOrderStore, IProductCatalog
from cafex_admin.infrastructure.db import get_db
from cafex_admin.main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def create_product(client):
    """Create a product through the API and return its JSON body."""

    def _create(name="Latte", price=4.50, category="Coffee", **extra):
        payload = {"name": name, "price": price, "category": category, **extra}
        resp = client.post("/products/", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create


class FakeCatalog(IProductCatalog):
    """In-memory catalog that records every lookup."""

    def __init__(self, products=None):
        self.products = dict(products or {})
        self.lookups = []

    def add(self, product_id, name, price):
        self.products[product_id] = SimpleNamespace(id=product_id, name=name, price=Decimal(str(price)))

    def lookup(self, product_id):
        self.lookups.append(product_id)
        return self.products.get(product_id)


class FakeStore(IOrderStore):
    """In-memory order store that assigns sequential ids."""

    def __init__(self):
        self.orders = {}
        self.create_calls = 0
        self.status_updates = []

    def create(self, order):
        self.create_calls += 1
        order.id = len(self.orders) + 1
        self.orders[order.id] = order
        return order

    def get(self, order_id):
        return self.orders.get(order_id)

    def update_status(self, order_id, status):
        order = self.orders.get(order_id)
        if order is None:
            return None
        self.status_updates.append((order_id, status))
        order.status = status
        return order


@pytest.fixture
def catalog():
    catalog = FakeCatalog()
    catalog.add(1, "Latte", "4.50")
    catalog.add(2, "Croissant", "3.25")
    catalog.add(3, "Green Tea", "2.80")
    return catalog


@pytest.fixture
def store():
    return FakeStore()
