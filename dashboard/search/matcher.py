"""
==============================================================================
Approximate Product Matcher
==============================================================================

Fuzzy product-name search over a catalog snapshot.

A product matches a non-empty query when, compared case-insensitively,
either the query is a substring of the product name, or the normalized
Levenshtein similarity of name and query reaches the threshold:

    similarity = 1 - edit_distance(name, query) / max(len(name), len(query))

Results keep the snapshot order. Nothing is cached or indexed; every call
rescans the whole catalog, which is only meant for small catalogs.

==============================================================================
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, List, Sequence, TypeVar


T = TypeVar("T")

DEFAULT_SIMILARITY_THRESHOLD = 0.2


def edit_distance(source: str, target: str) -> int:
    """
    Levenshtein distance between two strings.

    Rows of the table walk `target`, columns walk `source`.

    Example:
        >>> edit_distance("kitten", "sitting")
        3
    """
    rows = len(target) + 1
    cols = len(source) + 1
    table = [[0] * cols for _ in range(rows)]

    for i in range(cols):
        table[0][i] = i
    for j in range(rows):
        table[j][0] = j

    for j in range(1, rows):
        for i in range(1, cols):
            cost = 0 if source[i - 1] == target[j - 1] else 1
            table[j][i] = min(
                table[j][i - 1] + 1,
                table[j - 1][i] + 1,
                table[j - 1][i - 1] + cost,
            )

    return table[rows - 1][cols - 1]


def similarity(first: str, second: str) -> float:
    """
    Case-insensitive normalized similarity in [0, 1].

    Two empty strings are identical and score 1.0.
    """
    first = first.lower()
    second = second.lower()
    longest = max(len(first), len(second))
    if longest == 0:
        return 1.0
    return 1 - edit_distance(first, second) / longest


def _name_of(product: Any) -> str:
    if isinstance(product, Mapping):
        name = product.get("name")
    else:
        name = getattr(product, "name", None)
    return name if isinstance(name, str) else ""


class ProductMatcher:
    """
    Substring-or-similarity product matcher.

    Attributes:
        threshold: Minimum similarity for a non-substring match

    Example:
        >>> matcher = ProductMatcher()
        >>> catalog = [{"name": "Blue Widget"}, {"name": "Red Gadget"}]
        >>> [p["name"] for p in matcher.match("blue", catalog)]
        ['Blue Widget']
    """

    def __init__(self, threshold: float = DEFAULT_SIMILARITY_THRESHOLD) -> None:
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"threshold must be within [0, 1], got {threshold}")
        self.threshold = threshold

    def matches(self, query: str, product: Any) -> bool:
        """Check a single product against a non-empty query."""
        name = _name_of(product).lower()
        query = query.lower()

        if query in name:
            return True

        return similarity(name, query) >= self.threshold

    def match(self, query: str, catalog: Sequence[T]) -> List[T]:
        """
        Filter `catalog` down to the products matching `query`.

        Args:
            query: Free-text query; blank queries match nothing
            catalog: Products in display order (models, ORM rows or mappings)

        Returns:
            Matching products in catalog order
        """
        if not query or not query.strip():
            return []

        return [product for product in catalog if self.matches(query, product)]

    def __repr__(self) -> str:
        return f"ProductMatcher(threshold={self.threshold})"


_default_matcher = ProductMatcher()


def match(query: str, catalog: Sequence[T]) -> List[T]:
    """Match with the default 0.2 similarity threshold."""
    return _default_matcher.match(query, catalog)
