"""
==============================================================================
Catalog Package - Snapshots & Live Feed
==============================================================================

Read-only catalog snapshots and the push feed that distributes them.

Classes:
--------
- ProductRecord: Immutable product copy
- CatalogSnapshot: Ordered, versioned catalog copy
- CatalogFeed: Publisher with scoped subscriptions

==============================================================================
"""

from .models import ProductRecord, CatalogSnapshot
from .feed import CatalogFeed, Subscription

__all__ = [
    "ProductRecord",
    "CatalogSnapshot",
    "CatalogFeed",
    "Subscription",
]
