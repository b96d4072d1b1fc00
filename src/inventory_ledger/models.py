"""
Data model for ledger line items.
"""
import math
from decimal import Decimal
from typing import List, NamedTuple

from pydantic import BaseModel, ConfigDict, Field


def format_number(value: float) -> str:
    """
    Shortest display form of a number, as a browser would print it.

    5 rather than 5.0, 2.5 as is, 0.00001 in plain notation, and exponent
    form without zero padding below 1e-6 or from 1e21 up (1e-7, 1e+21).
    """
    value = float(value)
    if not math.isfinite(value):
        if math.isnan(value):
            return "NaN"
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))

    text = repr(value)
    if value != 0 and not 1e-6 <= abs(value) < 1e21:
        mantissa, exponent = text.split("e")
        return f"{mantissa}e{exponent[0]}{exponent[1:].lstrip('0')}"
    return format(Decimal(text), "f")


def format_money(value: float) -> str:
    """Two-decimal form used for prices and totals."""
    return f"{value:.2f}"


class InventoryItem(BaseModel):
    """One line item. Immutable; correcting a mistake means remove and re-add."""
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    stock: float = Field(gt=0)
    price: float = Field(gt=0)
    total: float

    @classmethod
    def create(cls, item_id: int, number: int, stock: float, price: float) -> "InventoryItem":
        """Build a new item, deriving name and total."""
        return cls(
            id=item_id,
            name=f"Item {number}",
            stock=stock,
            price=price,
            total=stock * price,
        )

    def search_fields(self) -> List[str]:
        """Lower-cased strings a search query is matched against."""
        fields = [
            self.name,
            format_number(self.stock),
            format_number(self.price),
            format_number(self.total),
        ]
        return [field.lower() for field in fields]


class Snapshot(NamedTuple):
    """Persistable state of a store: ordered items and the next item number."""
    items: List[InventoryItem]
    counter: int


def empty_snapshot() -> Snapshot:
    return Snapshot(items=[], counter=1)
