"""
==============================================================================
Product Schemas Module
==============================================================================

Request and response schemas for the product catalog endpoints.

ProductDraft is shared by the create and edit forms; which fields are
mandatory depends on the editing mode, not on the schema.

==============================================================================
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from dashboard.db.models import ProductCategory


class ProductDraft(BaseModel):
    """Operator-supplied product fields; only set fields are applied."""
    name: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = Field(default=None)
    category: Optional[ProductCategory] = Field(default=None)
    price: Optional[float] = Field(default=None, ge=0)
    stock_quantity: Optional[int] = Field(default=None, ge=0)
    show: Optional[bool] = Field(default=None)


class ProductDetail(BaseModel):
    """Product as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    category: ProductCategory
    price: float
    stock_quantity: int
    image: str
    show: bool
    created_on: Optional[datetime] = None
    updated_on: Optional[datetime] = None


class ProductResponse(BaseModel):
    """Single product response."""
    success: bool = Field(default=True)
    product: ProductDetail


class ProductListResponse(BaseModel):
    """Catalog listing, optionally filtered by category."""
    success: bool = Field(default=True)
    category: Optional[ProductCategory] = None
    total: int
    products: List[ProductDetail]


class ProductSearchResponse(BaseModel):
    """Fuzzy search results in catalog order."""
    success: bool = Field(default=True)
    query: str
    total: int
    products: List[ProductDetail]


class CategoryInfo(BaseModel):
    value: ProductCategory
    label: str


class CategoryListResponse(BaseModel):
    success: bool = Field(default=True)
    default: ProductCategory
    categories: List[CategoryInfo]
