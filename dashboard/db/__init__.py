"""
==============================================================================
Database Package
==============================================================================

SQLAlchemy database infrastructure and ORM models.

Architecture:
------------
├── database.py   - DatabaseManager class, session factory
├── models.py     - SQLAlchemy ORM model classes
└── init_db.py    - DatabaseInitializer for setup

==============================================================================
"""

from .database import DatabaseManager, Base, get_db, get_database_manager
from .models import (
    Operator,
    Product,
    ProductCategory,
    Order,
    OrderItem,
    OrderTab,
    OrderFlag,
    Suggestion,
    Advertisement,
)
from .init_db import DatabaseInitializer, init_db

__all__ = [
    # Database management
    "DatabaseManager",
    "Base",
    "get_db",
    "get_database_manager",
    # Models
    "Operator",
    "Product",
    "ProductCategory",
    "Order",
    "OrderItem",
    "OrderTab",
    "OrderFlag",
    "Suggestion",
    "Advertisement",
    # Initialization
    "DatabaseInitializer",
    "init_db",
]
