"""
==============================================================================
Services Package - Business Logic Layer
==============================================================================

Service classes implementing the dashboard's business logic.

This package provides:
- AuthService: Operator registration, login and tokens
- ProductService / ProductEditor: Catalog management and search
- OrderService: Order tabs and status flags
- OverviewService: Sales and category chart series
- FeedbackService: Suggestions and advertisements
- PreferencesService: Operator display settings

    ┌─────────────────┐
    │   API Router    │
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │    Service      │  ← Business Logic
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │   SQLAlchemy    │
    └─────────────────┘

Usage:
------
    from dashboard.services import ProductService

    service = ProductService(db_session, feed, storage)
    matches = service.search("widget")

==============================================================================
"""

from .auth_service import AuthService
from .product_service import EditMode, ProductEditor, ProductService
from .order_service import OrderService
from .overview_service import OverviewService
from .feedback_service import FeedbackService
from .preferences_service import PreferencesService

__all__ = [
    "AuthService",
    "EditMode",
    "ProductEditor",
    "ProductService",
    "OrderService",
    "OverviewService",
    "FeedbackService",
    "PreferencesService",
]
