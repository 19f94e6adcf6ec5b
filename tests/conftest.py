from datetime import datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from core.db import Base, get_db, enable_sqlite_foreign_keys
from models.order import Order, OrderStatus
from models.order_product import OrderProduct
from models.product import Product
from models.user import User


@pytest.fixture()
def db_session_override():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()

    def _get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = _get_db
    try:
        yield db
    finally:
        db.close()
        app.dependency_overrides.clear()
        engine.dispose()


@pytest.fixture()
def db(db_session_override):
    return db_session_override


@pytest.fixture()
def client(db_session_override):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def test_user(db):
    """Create a test user."""
    user = User(username="johndoe", email="john.doe@example.com", first_name="John", last_name="Doe")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def other_user(db):
    user = User(username="janedoe", email="jane.doe@example.com", first_name="Jane", last_name="Doe")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def test_products(db):
    """Laptop, Mouse and Desk Chair."""
    products = [
        Product(name="Laptop", description="High-performance laptop", price=Decimal("999.99"),
                stock_quantity=50, category="Electronics"),
        Product(name="Mouse", description="Wireless mouse", price=Decimal("29.99"),
                stock_quantity=200, category="Electronics"),
        Product(name="Desk Chair", description="Ergonomic office chair", price=Decimal("249.99"),
                stock_quantity=30, category="Furniture"),
    ]
    db.add_all(products)
    db.commit()
    for product in products:
        db.refresh(product)
    return products


@pytest.fixture
def make_order(db, test_products):
    """Insert an order directly, bypassing the service (fixed timestamps, arbitrary totals)."""

    def _make(user, amount="10.00", status=OrderStatus.PENDING, created_at=None, products=None):
        order = Order(
            user_id=user.id,
            total_amount=Decimal(amount),
            status=status,
            created_at=created_at or datetime(2025, 1, 1),
        )
        order.product_links = [OrderProduct(product_id=p.id) for p in (products or test_products[:1])]
        db.add(order)
        db.commit()
        db.refresh(order)
        return order

    return _make
