"""
==============================================================================
Overview Schemas Module
==============================================================================

Chart-ready series for the dashboard overview page.

==============================================================================
"""

import enum
from typing import Dict, List

from pydantic import BaseModel, Field


class Timeframe(str, enum.Enum):
    """Sales grouping period."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    def __str__(self) -> str:
        return self.value


class SalesSeries(BaseModel):
    success: bool = Field(default=True)
    timeframe: Timeframe
    currency: str
    label: str = Field(default="Completed Sales")
    labels: List[str]
    data: List[float]


class CategorySeries(BaseModel):
    success: bool = Field(default=True)
    label: str = Field(default="Products by Category")
    labels: List[str]
    data: List[int]
    background_colors: List[str]


class OverviewSummary(BaseModel):
    success: bool = Field(default=True)
    products_total: int
    products_visible: int
    products_out_of_stock: int
    revenue: float
    currency: str
    orders: Dict[str, int]
