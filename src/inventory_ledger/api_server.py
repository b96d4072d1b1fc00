#!/usr/bin/env python3
"""
FastAPI server for the inventory ledger.

Local, single-user JSON API for a browser front end: add and remove line
items, browse a searchable paginated view, read the summary and download
exports.
"""
from datetime import datetime
from pathlib import Path
from typing import List, Optional
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Form, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel

from .aggregate import summarize
from .export import csv_filename, report_filename, to_csv, to_html_report
from .models import InventoryItem
from .pagination import DEFAULT_PAGE_SIZE, clamp_page, count_pages, paginate
from .persistence import JsonFilePersistence, default_ledger_path
from .search import filter_items
from .store import ItemStore
from .validation import ValidationError


# Ledger owned by this server process
store: Optional[ItemStore] = None
ledger_path: Optional[Path] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the ledger on startup."""
    global store, ledger_path

    ledger_path = default_ledger_path()
    if not ledger_path.exists():
        print(f"ℹ️  {ledger_path} not found, starting with an empty ledger")
    store = ItemStore.open(JsonFilePersistence(ledger_path))
    print(f"✅ Loaded ledger: {len(store)} items, next is Item {store.counter}")

    yield

    store = None


app = FastAPI(title="Inventory Ledger Server", lifespan=lifespan)

# Enable CORS for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ItemsPage(BaseModel):
    """One page of the (optionally filtered) item list."""
    items: List[InventoryItem]
    query: str
    page: int
    page_size: int
    total_pages: int
    matching: int
    total_items: int
    first_index: int
    last_index: int


class Share(BaseModel):
    id: int
    name: str
    total: float
    percent: float


class SummaryResponse(BaseModel):
    item_count: int
    total_value: float
    average_price: float
    distribution: List[Share]


def require_store() -> ItemStore:
    if store is None:
        raise HTTPException(status_code=500, detail="Ledger not loaded")
    return store


def build_page(ledger: ItemStore, query: str = "", page: int = 1,
               page_size: int = DEFAULT_PAGE_SIZE) -> ItemsPage:
    """Search, then clamp the page number and slice."""
    view = filter_items(ledger.list_items(), query)
    page_number = clamp_page(page, count_pages(len(view), page_size))
    result = paginate(view, page_size, page_number)
    return ItemsPage(
        items=result.items,
        query=query,
        page=result.page_number,
        page_size=result.page_size,
        total_pages=result.total_pages,
        matching=result.total_count,
        total_items=len(ledger),
        first_index=result.first_index,
        last_index=result.last_index,
    )


def build_summary(ledger: ItemStore) -> SummaryResponse:
    summary = summarize(ledger.list_items())
    return SummaryResponse(
        item_count=summary.item_count,
        total_value=summary.total_value,
        average_price=summary.average_price,
        distribution=[
            Share(id=item.id, name=item.name, total=item.total, percent=percent)
            for item, percent in summary.distribution
        ],
    )


@app.get("/api/items", response_model=ItemsPage)
async def list_items_api(
    q: str = "",
    page: int = 1,
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=100),
) -> ItemsPage:
    """List items, filtered by q and paginated. Out-of-range pages are clamped."""
    return build_page(require_store(), q, page, page_size)


@app.post("/api/items", response_model=InventoryItem)
async def add_item_api(stock: str = Form(""), price: str = Form("")) -> InventoryItem:
    """Add a line item from the stock and price form fields."""
    ledger = require_store()
    try:
        return ledger.add(stock, price)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)


@app.delete("/api/items/{item_id}")
async def remove_item_api(item_id: int) -> dict:
    """Remove a line item. Removing an unknown id is not an error."""
    removed = require_store().remove(item_id)
    return {
        "success": True,
        "removed": removed,
        "id": item_id,
    }


@app.get("/api/summary", response_model=SummaryResponse)
async def summary_api() -> SummaryResponse:
    return build_summary(require_store())


@app.get("/api/export/csv")
async def export_csv_api() -> Response:
    """Download the full ledger as CSV."""
    content = to_csv(require_store().list_items())
    filename = csv_filename(datetime.now().date())
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@app.get("/api/export/report")
async def export_report_api() -> Response:
    """Download the full ledger as a standalone HTML report."""
    now = datetime.now()
    content = to_html_report(require_store().list_items(), now)
    return Response(
        content=content,
        media_type="text/html; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename={report_filename(now.date())}"},
    )


@app.get("/health")
async def health() -> dict:
    """Health check endpoint."""
    return {
        "status": "ok",
        "ledger_loaded": store is not None,
        "ledger_path": str(ledger_path) if ledger_path else None,
        "item_count": len(store) if store is not None else 0,
    }


if __name__ == "__main__":
    import uvicorn

    print("📒 Starting Inventory Ledger Server...")
    print("📍 Server will run at: http://localhost:8765")
    print("❤️  Health check: http://localhost:8765/health")
    print()

    uvicorn.run(app, host="127.0.0.1", port=8765)
