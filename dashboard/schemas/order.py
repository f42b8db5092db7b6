"""
==============================================================================
Order Schemas Module
==============================================================================

Request and response schemas for order endpoints.

==============================================================================
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from dashboard.db.models import OrderTab


class OrderItemDetail(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_ref: Optional[str] = None
    product_name: str
    product_image: Optional[str] = None
    price: float
    currency: str
    quantity: int


class OrderDetail(BaseModel):
    """Order as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    order_ref: str
    customer: str
    phone: str
    tin: Optional[str] = None
    country_code: Optional[str] = None
    vendor: Optional[str] = None
    amount: float
    currency: str
    ordered_at: Optional[datetime] = None
    delivery_latitude: Optional[float] = None
    delivery_longitude: Optional[float] = None
    accepted: bool
    paid: bool
    rejected: bool
    served: bool
    tab: OrderTab
    items: List[OrderItemDetail] = Field(default_factory=list)


class OrderStatusUpdate(BaseModel):
    """Partial update of order flags."""
    accepted: Optional[bool] = None
    paid: Optional[bool] = None
    rejected: Optional[bool] = None
    served: Optional[bool] = None


class OrderResponse(BaseModel):
    success: bool = Field(default=True)
    order: OrderDetail


class OrderListResponse(BaseModel):
    success: bool = Field(default=True)
    tab: OrderTab
    total: int
    orders: List[OrderDetail]
