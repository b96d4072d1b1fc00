"""
Input validation for new line items.

Stock and price arrive as raw text from a form field or the command line.
"""
import math
import re
from typing import Any, Tuple


MISSING_FIELD_MESSAGE = "Please fill both stock and price fields"
INVALID_RANGE_MESSAGE = "Stock and price must be positive numbers"

# Plain decimal with optional exponent; no underscores, hex or inf/nan words.
_DECIMAL = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


class ValidationError(ValueError):
    """Raised when a stock/price pair cannot become a line item."""
    kind = "ValidationError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingField(ValidationError):
    kind = "MissingField"

    def __init__(self, message: str = MISSING_FIELD_MESSAGE):
        super().__init__(message)


class InvalidRange(ValidationError):
    kind = "InvalidRange"

    def __init__(self, message: str = INVALID_RANGE_MESSAGE):
        super().__init__(message)


def is_blank(raw: Any) -> bool:
    """True for None and empty or whitespace-only strings."""
    if raw is None:
        return True
    return isinstance(raw, str) and not raw.strip()


def parse_positive(raw: Any) -> float:
    """Convert a raw value to a finite float greater than zero."""
    if isinstance(raw, bool):
        raise InvalidRange()
    if isinstance(raw, str):
        raw = raw.strip()
        if not _DECIMAL.match(raw):
            raise InvalidRange()
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise InvalidRange()

    if not math.isfinite(value) or value <= 0:
        raise InvalidRange()
    return value


def parse_entry(raw_stock: Any, raw_price: Any) -> Tuple[float, float]:
    """
    Validate a stock/price pair.

    Emptiness is checked for both fields before either is parsed, so a blank
    field always reports MissingField even when the other one is garbage.

    Returns:
        Tuple of (stock, price) as floats

    Raises:
        MissingField: if either field is empty
        InvalidRange: if either field is non-numeric, non-finite or <= 0
    """
    if is_blank(raw_stock) or is_blank(raw_price):
        raise MissingField()
    return parse_positive(raw_stock), parse_positive(raw_price)
