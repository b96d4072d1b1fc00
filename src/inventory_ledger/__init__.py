"""
Inventory Ledger - A single-user stock and value ledger

Features:
- Validated line items (stock x unit price = total value)
- Write-through JSON persistence that survives restarts
- Search, pagination and summary views
- CSV export and standalone HTML reports
- CLI and a local API server
"""

__version__ = "0.1.0"

from .models import InventoryItem, Snapshot
from .validation import ValidationError, MissingField, InvalidRange, parse_entry
from .store import ItemStore
from .persistence import JsonFilePersistence, MemoryPersistence
from .search import filter_items
from .pagination import Page, paginate, clamp_page
from .aggregate import total_value, average_price, top_share, summarize
from .export import to_csv, to_html_report, csv_filename, report_filename

__all__ = [
    "InventoryItem",
    "Snapshot",
    "ValidationError",
    "MissingField",
    "InvalidRange",
    "parse_entry",
    "ItemStore",
    "JsonFilePersistence",
    "MemoryPersistence",
    "filter_items",
    "Page",
    "paginate",
    "clamp_page",
    "total_value",
    "average_price",
    "top_share",
    "summarize",
    "to_csv",
    "to_html_report",
    "csv_filename",
    "report_filename",
]
