"""
==============================================================================
Schemas Package - Pydantic Models
==============================================================================

Request and response schemas using Pydantic for validation.

==============================================================================
"""

from .common import MessageResponse
from .auth import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    RefreshRequest,
    ChangePasswordRequest,
    OperatorInfo,
    CurrentOperatorInfo,
    CurrentOperatorResponse,
)
from .product import (
    ProductDraft,
    ProductDetail,
    ProductResponse,
    ProductListResponse,
    ProductSearchResponse,
    CategoryInfo,
    CategoryListResponse,
)
from .order import (
    OrderDetail,
    OrderItemDetail,
    OrderStatusUpdate,
    OrderResponse,
    OrderListResponse,
)
from .overview import Timeframe, SalesSeries, CategorySeries, OverviewSummary
from .feedback import (
    SuggestionCreate,
    SuggestionDetail,
    SuggestionResponse,
    AdvertisementCreate,
    AdvertisementDetail,
    AdvertisementResponse,
    AdvertisementListResponse,
)
from .preferences import PreferencesDetail, PreferencesUpdate, PreferencesResponse

__all__ = [
    # Common
    "MessageResponse",
    # Auth
    "LoginRequest",
    "RegisterRequest",
    "TokenResponse",
    "RefreshRequest",
    "ChangePasswordRequest",
    "OperatorInfo",
    "CurrentOperatorInfo",
    "CurrentOperatorResponse",
    # Products
    "ProductDraft",
    "ProductDetail",
    "ProductResponse",
    "ProductListResponse",
    "ProductSearchResponse",
    "CategoryInfo",
    "CategoryListResponse",
    # Orders
    "OrderDetail",
    "OrderItemDetail",
    "OrderStatusUpdate",
    "OrderResponse",
    "OrderListResponse",
    # Overview
    "Timeframe",
    "SalesSeries",
    "CategorySeries",
    "OverviewSummary",
    # Feedback
    "SuggestionCreate",
    "SuggestionDetail",
    "SuggestionResponse",
    "AdvertisementCreate",
    "AdvertisementDetail",
    "AdvertisementResponse",
    "AdvertisementListResponse",
    # Preferences
    "PreferencesDetail",
    "PreferencesUpdate",
    "PreferencesResponse",
]
