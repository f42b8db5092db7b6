"""
==============================================================================
SQLAlchemy ORM Models Module
==============================================================================

ORM models for the storefront dashboard.

This module defines:
- ProductCategory: Fixed set of catalog categories
- OrderTab: Order list views (processing / completed / rejected / all)
- Operator: Dashboard operator account with display preferences
- Product: Catalog entry
- Order / OrderItem: Incoming customer orders and their lines
- Suggestion: Operator feedback from the help page
- Advertisement: Advertisement campaigns

Database Schema:
---------------

    ┌─────────────────────────────────────────────────────────────────┐
    │                          operators                               │
    ├─────────────────────────────────────────────────────────────────┤
    │ id (UUID, PK)          email (UNIQUE)      password_hash        │
    │ display_name           is_active           preferences columns  │
    │ created_at             updated_at                               │
    └─────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────┐
    │                          products                                │
    ├─────────────────────────────────────────────────────────────────┤
    │ id (UUID, PK)   name   description   category   price           │
    │ stock_quantity  image  show          created_on updated_on      │
    └─────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────┐
    │                           orders                                 │
    ├─────────────────────────────────────────────────────────────────┤
    │ id (UUID, PK)  order_ref  customer  phone  amount  currency     │
    │ ordered_at     accepted   paid      rejected       served       │
    └─────────────────────────────────────────────────────────────────┘
                                    │
                                    │ 1:N (CASCADE DELETE)
                                    ▼
    ┌─────────────────────────────────────────────────────────────────┐
    │                         order_items                              │
    ├─────────────────────────────────────────────────────────────────┤
    │ id (INTEGER, PK)  order_id (FK)  product_ref  product_name      │
    │ product_image     price          currency     quantity          │
    └─────────────────────────────────────────────────────────────────┘

Order Tabs:
----------
    processing  →  rejected = false AND paid = false
    completed   →  rejected = false AND paid = true
    rejected    →  rejected = true
    all         →  no filter

=============================================================================
"""

from __future__ import annotations

import enum
import uuid
from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, relationship

from dashboard.db.database import Base


def utcnow() -> datetime:
    """Naive UTC timestamp, the form SQLite round-trips."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _new_id() -> str:
    return str(uuid.uuid4())


def _enum_values(enum_cls) -> List[str]:
    return [member.value for member in enum_cls]


# =============================================================================
# ENUMS
# =============================================================================

class ProductCategory(str, enum.Enum):
    """
    Catalog category enumeration.

    The enum inherits from str to enable JSON serialization.
    """

    ELITRA_PLUS_SERIES = "elitra-plus-series"
    WEATHER_PROOF_OF = "weather-proof-of"
    GROUP_SOCKETS = "group-sockets"
    ACCESSORY = "accessory"
    AUTOMATION_GROUP = "automation-group"
    MECHANICAL_GROUP = "mechanical-group"
    CABLE_TRUNKING = "cable-trunking"
    LIGHTING_GROUP = "lighting-group"

    def __str__(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        """Title-cased label, e.g. 'Lighting Group'."""
        return " ".join(word.capitalize() for word in self.value.split("-"))

    @classmethod
    def default(cls) -> "ProductCategory":
        return cls.LIGHTING_GROUP


class OrderTab(str, enum.Enum):
    """Order list views shown as tabs in the dashboard."""

    PROCESSING = "processing"
    COMPLETED = "completed"
    REJECTED = "rejected"
    ALL = "all"

    def __str__(self) -> str:
        return self.value


class OrderFlag(str, enum.Enum):
    """Boolean order fields an operator may flip."""

    ACCEPTED = "accepted"
    PAID = "paid"
    REJECTED = "rejected"
    SERVED = "served"

    def __str__(self) -> str:
        return self.value


# =============================================================================
# OPERATOR MODEL
# =============================================================================

class Operator(Base):
    """
    Dashboard operator account.

    Display preferences (notifications, dark mode, language, currency) are
    stored alongside the account.
    """

    __tablename__ = "operators"

    id: str = Column(String(36), primary_key=True, default=_new_id)

    email: str = Column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        doc="Login email (lowercase)"
    )

    display_name: Optional[str] = Column(String(100), nullable=True)

    password_hash: str = Column(String(255), nullable=False)

    is_active: bool = Column(Boolean, default=True, nullable=False)

    # Preferences
    notifications: bool = Column(Boolean, default=True, nullable=False)
    dark_mode: bool = Column(Boolean, default=False, nullable=False)
    language: str = Column(String(5), default="en", nullable=False)
    currency: str = Column(String(5), default="RWF", nullable=False)

    created_at: datetime = Column(DateTime, default=utcnow, nullable=False)
    updated_at: datetime = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self) -> str:
        return (
            f"Operator(id={self.id!r}, "
            f"email={self.email!r}, "
            f"is_active={self.is_active})"
        )


# =============================================================================
# PRODUCT MODEL
# =============================================================================

class Product(Base):
    """
    Catalog product.

    Timestamps are assigned by the store on write; every other field is
    supplied by the operator.
    """

    __tablename__ = "products"

    id: str = Column(String(36), primary_key=True, default=_new_id)

    name: str = Column(String(200), nullable=False, index=True)

    description: str = Column(Text, nullable=False, default="")

    category: ProductCategory = Column(
        Enum(
            ProductCategory,
            values_callable=_enum_values,
            native_enum=False,
            length=40,
        ),
        default=ProductCategory.LIGHTING_GROUP,
        nullable=False,
    )

    price: float = Column(Float, default=0.0, nullable=False)

    stock_quantity: int = Column(Integer, default=0, nullable=False)

    image: str = Column(String(500), nullable=False)

    show: bool = Column(Boolean, default=True, nullable=False, doc="Visible in the storefront")

    created_on: datetime = Column(DateTime, default=utcnow, nullable=False, index=True)

    updated_on: datetime = Column(DateTime, default=utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"Product(id={self.id!r}, name={self.name!r}, category={self.category.value!r})"


# =============================================================================
# ORDER MODELS
# =============================================================================

class Order(Base):
    """Customer order received through the shop's ordering channel."""

    __tablename__ = "orders"

    id: str = Column(String(36), primary_key=True, default=_new_id)

    order_ref: str = Column(String(64), nullable=False, index=True)
    customer: str = Column(String(100), nullable=False, default="")
    phone: str = Column(String(32), nullable=False, default="")
    tin: Optional[str] = Column(String(32), nullable=True)
    country_code: Optional[str] = Column(String(8), nullable=True)
    vendor: Optional[str] = Column(String(100), nullable=True)

    amount: float = Column(Float, default=0.0, nullable=False)
    currency: str = Column(String(5), default="RWF", nullable=False)

    ordered_at: Optional[datetime] = Column(DateTime, nullable=True, index=True)

    delivery_latitude: Optional[float] = Column(Float, nullable=True)
    delivery_longitude: Optional[float] = Column(Float, nullable=True)

    accepted: bool = Column(Boolean, default=False, nullable=False)
    paid: bool = Column(Boolean, default=False, nullable=False)
    rejected: bool = Column(Boolean, default=False, nullable=False)
    served: bool = Column(Boolean, default=False, nullable=False)

    items: Mapped[List["OrderItem"]] = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )

    @property
    def tab(self) -> OrderTab:
        """The dashboard tab this order currently appears under."""
        if self.rejected:
            return OrderTab.REJECTED
        if self.paid:
            return OrderTab.COMPLETED
        return OrderTab.PROCESSING

    def __repr__(self) -> str:
        return f"Order(id={self.id!r}, order_ref={self.order_ref!r}, tab={self.tab.value!r})"


class OrderItem(Base):
    """Single product line inside an order."""

    __tablename__ = "order_items"

    id: int = Column(Integer, primary_key=True, autoincrement=True)

    order_id: str = Column(
        String(36),
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    product_ref: Optional[str] = Column(String(64), nullable=True)
    product_name: str = Column(String(200), nullable=False)
    product_image: Optional[str] = Column(String(500), nullable=True)
    price: float = Column(Float, default=0.0, nullable=False)
    currency: str = Column(String(5), default="RWF", nullable=False)
    quantity: int = Column(Integer, default=1, nullable=False)

    order: Mapped["Order"] = relationship("Order", back_populates="items")

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


# =============================================================================
# FEEDBACK MODELS
# =============================================================================

class Suggestion(Base):
    """Free-text feedback left by an operator."""

    __tablename__ = "suggestions"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    text: str = Column(Text, nullable=False)
    submitted_by: Optional[str] = Column(String(255), nullable=True)
    created_at: datetime = Column(DateTime, default=utcnow, nullable=False)


class Advertisement(Base):
    """Advertisement campaign."""

    __tablename__ = "advertisements"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    title: str = Column(String(200), nullable=False)
    description: str = Column(Text, nullable=False, default="")
    image_url: Optional[str] = Column(String(500), nullable=True)
    target_audience: Optional[str] = Column(String(200), nullable=True)
    start_date: Optional[date] = Column(Date, nullable=True)
    end_date: Optional[date] = Column(Date, nullable=True)
    budget: float = Column(Float, default=0.0, nullable=False)
    created_by: Optional[str] = Column(String(255), nullable=True)
    created_at: datetime = Column(DateTime, default=utcnow, nullable=False)
