"""
The item store: the ordered collection of line items and its counter.

Every successful mutation is written through to the persistence adapter
before the call returns.
"""
import time
from typing import Any, Iterable, Iterator, List, Optional, Protocol

from .models import InventoryItem, Snapshot
from .validation import ValidationError, parse_entry


class Persistence(Protocol):
    def load(self) -> Snapshot: ...

    def save(self, items: List[InventoryItem], counter: int) -> bool: ...


class ItemStore:
    """Owns the line items of one ledger, in insertion order."""

    def __init__(
        self,
        items: Iterable[InventoryItem] = (),
        counter: int = 1,
        persistence: Optional[Persistence] = None,
    ):
        self._items: List[InventoryItem] = list(items)
        self._counter = counter
        self._last_id = max((item.id for item in self._items), default=0)
        self.persistence = persistence
        self.error: Optional[str] = None

    @classmethod
    def from_snapshot(cls, snapshot: Snapshot, persistence: Optional[Persistence] = None) -> "ItemStore":
        return cls(snapshot.items, snapshot.counter, persistence)

    @classmethod
    def open(cls, persistence: Persistence) -> "ItemStore":
        """Hydrate a store from its persistence adapter."""
        return cls.from_snapshot(persistence.load(), persistence)

    @property
    def counter(self) -> int:
        """Number the next added item will get."""
        return self._counter

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[InventoryItem]:
        return iter(list(self._items))

    def snapshot(self) -> Snapshot:
        return Snapshot(items=list(self._items), counter=self._counter)

    def list_items(self) -> List[InventoryItem]:
        """All items in insertion order (a copy)."""
        return list(self._items)

    def get(self, item_id: int) -> Optional[InventoryItem]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def total_value(self) -> float:
        return sum((item.total for item in self._items), 0.0)

    def _next_id(self) -> int:
        # Millisecond timestamp, bumped past the last id so fast adds never
        # collide. Stays below 2**53 so JSON clients read it back exactly.
        candidate = time.time_ns() // 1_000_000
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return candidate

    def add(self, raw_stock: Any, raw_price: Any) -> InventoryItem:
        """
        Validate and append a new line item.

        On failure the message is kept in ``self.error`` and the collection
        is left untouched.

        Raises:
            MissingField: if stock or price is empty
            InvalidRange: if stock or price is non-numeric or not positive
        """
        try:
            stock, price = parse_entry(raw_stock, raw_price)
        except ValidationError as e:
            self.error = e.message
            raise

        item = InventoryItem.create(self._next_id(), self._counter, stock, price)
        self._items.append(item)
        self._counter += 1
        self._persist()
        self.error = None
        return item

    def remove(self, item_id: int) -> bool:
        """
        Remove the item with the given id.

        Returns:
            True if an item was removed, False if no item had that id
        """
        remaining = [item for item in self._items if item.id != item_id]
        removed = len(remaining) != len(self._items)
        self._items = remaining
        self._persist()
        return removed

    def _persist(self) -> None:
        if self.persistence is not None:
            self.persistence.save(list(self._items), self._counter)
