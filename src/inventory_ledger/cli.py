#!/usr/bin/env python3
"""
Command-line interface for Inventory Ledger
"""
import os
import sys
import argparse
from datetime import datetime
from pathlib import Path

from .aggregate import summarize
from .export import csv_filename, report_filename, to_csv, to_html_report
from .models import InventoryItem, format_money, format_number
from .pagination import DEFAULT_PAGE_SIZE, clamp_page, count_pages, paginate
from .persistence import JsonFilePersistence, LEDGER_ENV_VAR, default_ledger_path
from .search import filter_items
from .store import ItemStore
from .validation import ValidationError


def open_store(ledger: Path = None) -> ItemStore:
    """Load the ledger from the given file or the default location."""
    if ledger is None:
        ledger = default_ledger_path()
    return ItemStore.open(JsonFilePersistence(Path(ledger)))


def format_row(item: InventoryItem) -> str:
    return (f"   {item.id:<20} {item.name:<12} {format_number(item.stock):>10} "
            f"{'$' + format_money(item.price):>12} {'$' + format_money(item.total):>14}")


def add_command(store: ItemStore, stock: str, price: str) -> int:
    """Add a line item."""
    try:
        item = store.add(stock, price)
    except ValidationError as e:
        print(f"❌ {e.message}")
        return 1

    print(f"✅ Added {item.name}: {format_number(item.stock)} x ${format_money(item.price)} "
          f"= ${format_money(item.total)}")
    print(f"   id: {item.id}")
    return 0


def remove_command(store: ItemStore, item_id: int) -> int:
    """Remove a line item by id."""
    item = store.get(item_id)
    if store.remove(item_id):
        print(f"🗑️  Removed {item.name} (id {item_id})")
    else:
        print(f"ℹ️  No item with id {item_id}, nothing removed")
    return 0


def list_command(store: ItemStore, query: str = "", page: int = 1,
                 page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """Print one page of the (optionally filtered) ledger."""
    if page_size < 1:
        print(f"❌ Page size must be at least 1")
        return 1

    if len(store) == 0:
        print("📭 No items added yet.")
        print("   Start by entering stock and price values: inventory-ledger add STOCK PRICE")
        return 0

    view = filter_items(store.list_items(), query)
    page_number = clamp_page(page, count_pages(len(view), page_size))
    result = paginate(view, page_size, page_number)

    if query:
        print(f"🔍 {len(view)} of {len(store)} items match '{query}'")

    if not result.items:
        print("   No matching items.")
        return 0

    print(f"   {'ID':<20} {'Name':<12} {'Quantity':>10} {'Price':>12} {'Total Value':>14}")
    for item in result.items:
        print(format_row(item))
    print(f"\n   {result.first_index} - {result.last_index} of {result.total_count} items"
          f" (page {result.page_number}/{result.total_pages})")
    return 0


def summary_command(store: ItemStore) -> int:
    """Print the inventory summary and value distribution."""
    summary = summarize(store.list_items())

    print("📊 Inventory Summary")
    print(f"   Total Items    {summary.item_count}")
    print(f"   Total Value    ${format_money(summary.total_value)}")
    print(f"   Average Price  ${format_money(summary.average_price)}")

    if summary.distribution:
        print("\n   Value Distribution")
        for item, percent in summary.distribution:
            print(f"   {item.name:<12} ${format_money(item.total):>12}  {percent:5.1f}%")
        if summary.item_count > len(summary.distribution):
            print(f"   ... and {summary.item_count - len(summary.distribution)} more")
    return 0


def export_command(store: ItemStore, output: Path = None) -> int:
    """Write the full ledger as CSV."""
    if output is None:
        output = Path.cwd() / csv_filename(datetime.now().date())

    try:
        with open(output, 'w', encoding='utf-8', newline='') as f:
            f.write(to_csv(store.list_items()))
    except OSError as e:
        print(f"❌ Failed to write {output}: {e}")
        return 1

    print(f"✅ Exported {len(store)} items to {output}")
    return 0


def report_command(store: ItemStore, output: Path = None) -> int:
    """Write the full ledger as a standalone HTML report."""
    now = datetime.now()
    if output is None:
        output = Path.cwd() / report_filename(now.date())

    try:
        with open(output, 'w', encoding='utf-8') as f:
            f.write(to_html_report(store.list_items(), now))
    except OSError as e:
        print(f"❌ Failed to write {output}: {e}")
        return 1

    print(f"✅ Saved report to {output}")
    print(f"\n📱 To view the report, open it in your browser:")
    print(f"   xdg-open {output}")
    return 0


def api_command(ledger: Path = None, port: int = 8765) -> int:
    """Start the ledger API server."""
    if ledger is not None:
        # The server reads its ledger location from the environment
        os.environ[LEDGER_ENV_VAR] = str(Path(ledger).resolve())

    print(f"🚀 Starting Inventory Ledger API Server...")
    print(f"📂 Using ledger: {default_ledger_path()}")
    print(f"🌐 Server will run at: http://localhost:{port}")
    print(f"➕ Add/remove items: http://localhost:{port}/api/items")
    print(f"📊 Summary: http://localhost:{port}/api/summary")
    print(f"📤 Exports: http://localhost:{port}/api/export/csv, /api/export/report")
    print(f"❤️  Health check: http://localhost:{port}/health")
    print(f"Press Ctrl+C to stop\n")

    import uvicorn
    from .api_server import app

    try:
        uvicorn.run(app, host="127.0.0.1", port=port, log_level="info")
    except KeyboardInterrupt:
        print("\n\n👋 API server stopped")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser_cli = argparse.ArgumentParser(
        description="Inventory Ledger - Track stock, prices and inventory value",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  # Add 5 units at $2.00 each
  inventory-ledger add 5 2.00

  # Show the second page of items matching "item 1"
  inventory-ledger list --search "item 1" --page 2

  # Summary and exports
  inventory-ledger summary
  inventory-ledger export
  inventory-ledger report

  # Start the API server for a browser front end
  inventory-ledger api --port 8765

The ledger file defaults to ${LEDGER_ENV_VAR} or ./ledger.json.
        """
    )
    parser_cli.add_argument('--ledger', '-l', type=Path, help='Ledger JSON file (default: ./ledger.json)')

    subparsers = parser_cli.add_subparsers(dest='command', help='Command to run')

    add_parser = subparsers.add_parser('add', help='Add a line item')
    add_parser.add_argument('stock', help='Stock quantity')
    add_parser.add_argument('price', help='Unit price')

    remove_parser = subparsers.add_parser('remove', help='Remove a line item by id')
    remove_parser.add_argument('id', type=int, help='Item id (see "list")')

    list_parser = subparsers.add_parser('list', help='List line items')
    list_parser.add_argument('--search', '-s', default='', help='Filter by name, quantity, price or total')
    list_parser.add_argument('--page', '-p', type=int, default=1, help='Page number (default: 1)')
    list_parser.add_argument('--page-size', type=int, default=DEFAULT_PAGE_SIZE,
                             help=f'Items per page (default: {DEFAULT_PAGE_SIZE})')

    subparsers.add_parser('summary', help='Show total value, average price and distribution')

    export_parser = subparsers.add_parser('export', help='Export the ledger as CSV')
    export_parser.add_argument('--output', '-o', type=Path, help='Output file (default: inventory_data_<date>.csv)')

    report_parser = subparsers.add_parser('report', help='Save an HTML report')
    report_parser.add_argument('--output', '-o', type=Path, help='Output file (default: inventory_report_<date>.html)')

    api_parser = subparsers.add_parser('api', help='Start the API server')
    api_parser.add_argument('--port', '-p', type=int, default=8765, help='Port number (default: 8765)')

    return parser_cli


def main(argv=None) -> int:
    """Main entry point for the CLI."""
    parser_cli = build_parser()
    args = parser_cli.parse_args(argv)

    if args.command is None:
        parser_cli.print_help()
        return 1
    if args.command == 'api':
        return api_command(args.ledger, args.port)

    store = open_store(args.ledger)

    if args.command == 'add':
        return add_command(store, args.stock, args.price)
    elif args.command == 'remove':
        return remove_command(store, args.id)
    elif args.command == 'list':
        return list_command(store, args.search, args.page, args.page_size)
    elif args.command == 'summary':
        return summary_command(store)
    elif args.command == 'export':
        return export_command(store, args.output)
    elif args.command == 'report':
        return report_command(store, args.output)
    else:
        parser_cli.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
