"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides test database, client, storage and authentication fixtures.

The application reads its settings once, so the database and media
locations are pointed at a temporary directory before it is imported.

==============================================================================
"""

import os
import tempfile
from datetime import datetime, timedelta
from pathlib import Path

_TEST_ROOT = Path(tempfile.mkdtemp(prefix="dashboard-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{(_TEST_ROOT / 'test.db').as_posix()}"
os.environ["MEDIA_DIRECTORY"] = str(_TEST_ROOT / "media")
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-the-dashboard"
os.environ["ALLOW_REGISTRATION"] = "true"

import pytest
from typing import Callable, Dict, Generator
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from dashboard.main import app
from dashboard.db.database import get_database_manager, get_db
from dashboard.db.models import Operator, Order, OrderItem, Product, ProductCategory
from dashboard.core.context import OperatorContext
from dashboard.core.security import get_security_manager
from dashboard.catalog.feed import CatalogFeed
from dashboard.storage.images import ImageStorage, UploadedImage


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


# ============================================================================
# DATABASE FIXTURES
# ============================================================================

@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database for each test."""
    manager = get_database_manager()
    manager.create_tables()

    session = manager.get_session()
    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        manager.drop_tables()


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create test client with database override."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ============================================================================
# CATALOG FIXTURES
# ============================================================================

@pytest.fixture
def feed() -> CatalogFeed:
    """A feed with no subscribers."""
    return CatalogFeed()


@pytest.fixture
def storage(tmp_path: Path) -> ImageStorage:
    """Image storage rooted in a per-test directory."""
    return ImageStorage(root=tmp_path / "media", url_prefix="/media")


@pytest.fixture
def png_image() -> UploadedImage:
    return UploadedImage(data=PNG_BYTES, filename="photo.png", content_type="image/png")


@pytest.fixture
def make_product(db: Session) -> Callable[..., Product]:
    """Insert products directly, oldest first."""
    base = datetime(2024, 1, 1, 9, 0, 0)
    created = []

    def _make(name: str, **fields) -> Product:
        stamp = base + timedelta(minutes=len(created))
        product = Product(
            name=name,
            description=fields.pop("description", f"{name} description"),
            category=fields.pop("category", ProductCategory.LIGHTING_GROUP),
            price=fields.pop("price", 10.0),
            stock_quantity=fields.pop("stock_quantity", 5),
            image=fields.pop("image", f"/media/products/{name.replace(' ', '_')}_1.jpg"),
            show=fields.pop("show", True),
            created_on=stamp,
            updated_on=stamp,
            **fields
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        created.append(product)
        return product

    return _make


@pytest.fixture
def make_order(db: Session) -> Callable[..., Order]:
    """Insert an order with a single line item."""
    counter = {"n": 0}

    def _make(**fields) -> Order:
        counter["n"] += 1
        amount = fields.pop("amount", 1000.0)
        order = Order(
            order_ref=fields.pop("order_ref", f"WA-{counter['n']:04d}"),
            customer=fields.pop("customer", "Customer"),
            phone=fields.pop("phone", "+250700000000"),
            amount=amount,
            currency=fields.pop("currency", "RWF"),
            **fields
        )
        order.items.append(OrderItem(
            product_ref="p-1",
            product_name="Blue Widget",
            price=amount,
            currency=order.currency,
            quantity=1,
        ))
        db.add(order)
        db.commit()
        db.refresh(order)
        return order

    return _make


# ============================================================================
# OPERATOR FIXTURES
# ============================================================================

@pytest.fixture
def operator(db: Session) -> Operator:
    """Create an operator in the test database."""
    security = get_security_manager()
    operator = Operator(
        email="owner@example.com",
        display_name="Shop Owner",
        password_hash=security.hash_password("owner123"),
        is_active=True
    )
    db.add(operator)
    db.commit()
    db.refresh(operator)
    return operator


@pytest.fixture
def actor(operator: Operator) -> OperatorContext:
    return OperatorContext.from_operator(operator)


# ============================================================================
# TOKEN FIXTURES
# ============================================================================

@pytest.fixture
def operator_token(operator: Operator) -> str:
    """Create access token for the operator."""
    security = get_security_manager()
    return security.create_access_token({
        "sub": operator.id,
        "email": operator.email
    })


# ============================================================================
# HEADER FIXTURES
# ============================================================================

@pytest.fixture
def operator_headers(operator_token: str) -> Dict[str, str]:
    """Authorization headers for the operator."""
    return {"Authorization": f"Bearer {operator_token}"}
