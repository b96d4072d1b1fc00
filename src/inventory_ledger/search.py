"""
Free-text search over line items.
"""
from typing import Sequence

from .models import InventoryItem


def matches(item: InventoryItem, query: str) -> bool:
    """True if the query occurs in the item's name, stock, price or total."""
    needle = query.lower()
    return any(needle in field for field in item.search_fields())


def filter_items(items: Sequence[InventoryItem], query: str) -> Sequence[InventoryItem]:
    """
    Filter items by a case-insensitive substring query.

    An empty query returns the input sequence itself; otherwise a new list
    in source order.
    """
    if not query:
        return items
    return [item for item in items if matches(item, query)]
