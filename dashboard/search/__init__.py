"""
==============================================================================
Search Package
==============================================================================

Approximate product-name matching.

==============================================================================
"""

from .matcher import (
    DEFAULT_SIMILARITY_THRESHOLD,
    ProductMatcher,
    edit_distance,
    match,
    similarity,
)

__all__ = [
    "DEFAULT_SIMILARITY_THRESHOLD",
    "ProductMatcher",
    "edit_distance",
    "match",
    "similarity",
]
