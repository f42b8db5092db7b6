"""
==============================================================================
API v1 Endpoints
==============================================================================

Version 1 of the REST API.

Routers:
--------
- health: Health check endpoints
- auth: Operator authentication
- products: Product catalog and fuzzy search
- orders: Order tabs and status flags
- overview: Dashboard chart data
- feedback: Suggestions and advertisements
- preferences: Operator settings

==============================================================================
"""

from . import health, auth, products, orders, overview, feedback, preferences

__all__ = ["health", "auth", "products", "orders", "overview", "feedback", "preferences"]
