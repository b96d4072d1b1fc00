"""
Fixed-size pages over a (possibly filtered) item view.
"""
import math
from typing import List, NamedTuple, Sequence

from .models import InventoryItem


DEFAULT_PAGE_SIZE = 10


class Page(NamedTuple):
    items: List[InventoryItem]
    page_number: int
    page_size: int
    total_pages: int
    total_count: int

    @property
    def first_index(self) -> int:
        """1-based position of the first item on the page, 0 if empty."""
        if not self.items:
            return 0
        return (self.page_number - 1) * self.page_size + 1

    @property
    def last_index(self) -> int:
        if not self.items:
            return 0
        return self.first_index + len(self.items) - 1


def count_pages(total_count: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """Number of pages for a view; an empty view still has one page."""
    if page_size < 1:
        raise ValueError(f"page_size must be at least 1, got {page_size}")
    return max(1, math.ceil(total_count / page_size))


def clamp_page(page_number: int, total_pages: int) -> int:
    """Bring a requested page number into [1, total_pages]."""
    return min(max(page_number, 1), max(total_pages, 1))


def paginate(
    items: Sequence[InventoryItem],
    page_size: int = DEFAULT_PAGE_SIZE,
    page_number: int = 1,
) -> Page:
    """
    Slice one page out of a view.

    The page number is not clamped here; callers use clamp_page first.

    Raises:
        ValueError: if page_size < 1 or page_number is out of range
    """
    total_pages = count_pages(len(items), page_size)
    if not 1 <= page_number <= total_pages:
        raise ValueError(f"page {page_number} out of range 1-{total_pages}")

    start = (page_number - 1) * page_size
    return Page(
        items=list(items[start:start + page_size]),
        page_number=page_number,
        page_size=page_size,
        total_pages=total_pages,
        total_count=len(items),
    )
