"""
CSV and HTML exports of the ledger.

Both exporters return text; writing it to a file or handing it to a
download is up to the caller.
"""
import csv
import io
from datetime import date, datetime
from html import escape
from typing import Sequence

from .aggregate import total_value
from .models import InventoryItem, format_money, format_number


CSV_HEADER = ["Name", "Quantity", "Price", "Total Value"]


def csv_filename(day: date) -> str:
    return f"inventory_data_{day.isoformat()}.csv"


def report_filename(day: date) -> str:
    return f"inventory_report_{day.isoformat()}.html"


def to_csv(items: Sequence[InventoryItem]) -> str:
    """Header row plus one row per item, in store order."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for item in items:
        writer.writerow([
            item.name,
            format_number(item.stock),
            format_money(item.price),
            format_money(item.total),
        ])
    return buf.getvalue()


REPORT_STYLE = """
    body { font-family: -apple-system, 'Segoe UI', Helvetica, Arial, sans-serif; background: #f5f2ea; color: #1f2937; margin: 0; padding: 24px; }
    .report { max-width: 960px; margin: 0 auto; background: #fff; border-radius: 12px; padding: 24px; }
    h1 { font-size: 24px; margin: 0 0 4px 0; }
    .meta { color: #6b7280; font-size: 14px; margin-bottom: 24px; }
    table { width: 100%; border-collapse: collapse; }
    th, td { padding: 10px 16px; border-bottom: 1px solid #f3f4f6; font-size: 14px; }
    th { text-align: left; color: #6b7280; font-weight: 500; }
    .num { text-align: right; }
    tfoot td { background: #f9fafb; font-weight: bold; }
"""


def to_html_report(items: Sequence[InventoryItem], generated_at: datetime) -> str:
    """
    Render a standalone HTML report.

    The output depends only on the items and the timestamp passed in.
    """
    rows = []
    for item in items:
        rows.append(
            "        <tr>"
            f"<td>{escape(item.name)}</td>"
            f"<td class=\"num\">{format_number(item.stock)}</td>"
            f"<td class=\"num\">${format_money(item.price)}</td>"
            f"<td class=\"num\">${format_money(item.total)}</td>"
            "</tr>"
        )
    body_rows = "\n".join(rows)
    value = format_money(total_value(items))
    stamp = generated_at.strftime("%Y-%m-%d %H:%M")

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>Inventory Report {generated_at.date().isoformat()}</title>
  <style>{REPORT_STYLE}  </style>
</head>
<body>
  <div class="report">
    <h1>Inventory Report</h1>
    <div class="meta">Generated {stamp} &middot; {len(items)} items &middot; Total value ${value}</div>
    <table>
      <thead>
        <tr><th>Name</th><th class="num">Quantity</th><th class="num">Price</th><th class="num">Total Value</th></tr>
      </thead>
      <tbody>
{body_rows}
      </tbody>
      <tfoot>
        <tr><td colspan="3" class="num">Total Inventory Value:</td><td class="num">${value}</td></tr>
      </tfoot>
    </table>
  </div>
</body>
</html>
"""
