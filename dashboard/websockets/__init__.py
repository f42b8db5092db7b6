"""
==============================================================================
WebSocket Package
==============================================================================

Real-time WebSocket handlers.

Handlers:
---------
- search: Live fuzzy product search that follows catalog changes

==============================================================================
"""

from .search import router as search_router

__all__ = ["search_router"]
