"""
==============================================================================
Catalog Snapshot Models Module
==============================================================================

Read-only Pydantic models describing the catalog as the dashboard sees it
at one point in time.

==============================================================================
"""

from datetime import datetime
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from dashboard.db.models import ProductCategory


class ProductRecord(BaseModel):
    """
    Immutable copy of a catalog product.

    Attributes:
        id: Store-assigned identifier
        name: Product display name
        description: Free-text description
        category: One of ProductCategory
        price: Unit price (non-negative)
        stock_quantity: Units in stock (non-negative)
        image: Public URL of the product image
        show: Visibility flag
        created_on: Store-assigned creation timestamp
        updated_on: Store-assigned last-update timestamp
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    name: str = ""
    description: str = ""
    category: ProductCategory = ProductCategory.LIGHTING_GROUP
    price: float = Field(default=0.0, ge=0)
    stock_quantity: int = Field(default=0, ge=0)
    image: str = ""
    show: bool = True
    created_on: Optional[datetime] = None
    updated_on: Optional[datetime] = None


class CatalogSnapshot(BaseModel):
    """Point-in-time ordered copy of the catalog."""

    model_config = ConfigDict(frozen=True)

    version: int = Field(default=0, ge=0)
    products: Tuple[ProductRecord, ...] = ()
    taken_at: datetime

    def __len__(self) -> int:
        return len(self.products)
