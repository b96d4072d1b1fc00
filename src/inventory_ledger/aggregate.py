"""
Summary statistics over a view of the ledger.
"""
from typing import List, NamedTuple, Sequence, Tuple

from .models import InventoryItem


DEFAULT_TOP_ITEMS = 3


class Summary(NamedTuple):
    item_count: int
    total_value: float
    average_price: float
    distribution: List[Tuple[InventoryItem, float]]


def total_value(items: Sequence[InventoryItem]) -> float:
    return sum((item.total for item in items), 0.0)


def total_stock(items: Sequence[InventoryItem]) -> float:
    return sum((item.stock for item in items), 0.0)


def average_price(items: Sequence[InventoryItem]) -> float:
    """Value-weighted unit price (total value / total stock); 0.0 when there is no stock."""
    stock = total_stock(items)
    if stock == 0:
        return 0.0
    return total_value(items) / stock


def top_share(items: Sequence[InventoryItem], n: int = DEFAULT_TOP_ITEMS) -> List[Tuple[InventoryItem, float]]:
    """
    The first n items in store order with their percentage of the total value.

    Items are not sorted by value. Shares are 0.0 when the total is zero.
    """
    value = total_value(items)
    shares = []
    for item in list(items)[:max(n, 0)]:
        share = item.total / value * 100 if value else 0.0
        shares.append((item, share))
    return shares


def summarize(items: Sequence[InventoryItem], n: int = DEFAULT_TOP_ITEMS) -> Summary:
    return Summary(
        item_count=len(items),
        total_value=total_value(items),
        average_price=average_price(items),
        distribution=top_share(items, n),
    )
