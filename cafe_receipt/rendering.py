"""HTML rendering of receipt copies and the two-copy print document."""

from __future__ import annotations

from dataclasses import dataclass
from html import escape
from typing import Any

from cafe_receipt.config import (
    DEFAULT_CAFE_NAME,
    DEFAULT_CURRENCY,
    DEFAULT_RECEIPT_FOOTER,
    DEFAULT_TAX_PERCENTAGE,
    RECEIPT_COPIES,
)
from cafe_receipt.formatting import format_datetime, format_number, format_price
from cafe_receipt.models import Order, Settings
from cafe_receipt.normalize import normalize_item

CUT_MARKER_TEXT = "- - - - - - - - - CUT HERE - - - - - - - - -"


@dataclass(frozen=True)
class MerchantDisplay:
    """Merchant fields with defaults applied."""

    cafe_name: str
    cafe_address: str
    cafe_phone: str
    tax_percentage: Any
    footer: str


def resolve_merchant(settings: Settings | None) -> MerchantDisplay:
    """Apply defaults to every blank (falsy) merchant setting."""
    return MerchantDisplay(
        cafe_name=str(getattr(settings, "cafe_name", None) or DEFAULT_CAFE_NAME),
        cafe_address=str(getattr(settings, "cafe_address", None) or ""),
        cafe_phone=str(getattr(settings, "cafe_phone", None) or ""),
        tax_percentage=getattr(settings, "tax_percentage", None) or DEFAULT_TAX_PERCENTAGE,
        footer=str(getattr(settings, "receipt_footer", None) or DEFAULT_RECEIPT_FOOTER),
    )


def resolve_currency(settings: Settings | None) -> str:
    return str(getattr(settings, "currency", None) or DEFAULT_CURRENCY)


def _is_positive(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def _capitalize_first(value: Any) -> str:
    text = str(value or "")
    return text[:1].upper() + text[1:]


def _payment_method_label(method: Any) -> str:
    return str(method or "cash").upper().replace("_", " ")


def _row(label: str, value: str) -> str:
    return f'<div class="row"><span>{label}</span><span>{value}</span></div>'


def _items_html(order: Order, currency: str) -> str:
    rows: list[str] = []
    for raw_item in order.items or ():
        item = normalize_item(raw_item)
        variant = f" ({escape(item.variant)})" if item.variant else ""
        rows.append(
            "<tr>"
            f'<td class="qty">{format_number(item.quantity)}x</td>'
            f'<td class="name">{escape(item.name)}{variant}</td>'
            f'<td class="price">{escape(format_price(item.line_total, currency))}</td>'
            "</tr>"
        )
        if item.notes:
            rows.append(f'<tr><td></td><td colspan="2" class="note">Note: {escape(item.notes)}</td></tr>')
    return "\n".join(rows)


def _payments_html(order: Order, currency: str) -> str:
    payments = order.payments or ()
    if not payments:
        return ""
    rows: list[str] = []
    for payment in payments:
        method = escape(_payment_method_label(getattr(payment, "method", None)))
        amount = format_price(getattr(payment, "amount", None) or 0, currency)
        tip = getattr(payment, "tip", None)
        tip_text = f" (+{format_price(tip, currency)} tip)" if _is_positive(tip) else ""
        rows.append(_row(method, escape(f"{amount}{tip_text}")))
    return (
        '<div class="section-title">Payment</div>\n'
        + "\n".join(rows)
        + '\n<div class="dashed-line"></div>'
    )


def render_receipt_copy(order: Order, settings: Settings | None, currency: str, copy_number: int) -> str:
    """Render one self-contained receipt copy as an HTML fragment."""
    merchant = resolve_merchant(settings)

    header = [f'<div class="cafe-name">{escape(merchant.cafe_name)}</div>']
    if merchant.cafe_address:
        header.append(f'<div class="cafe-info">{escape(merchant.cafe_address)}</div>')
    if merchant.cafe_phone:
        header.append(f'<div class="cafe-info">Tel: {escape(merchant.cafe_phone)}</div>')

    info = [
        _row("Order #:", escape(str(order.order_number or ""))),
        _row("Date:", escape(format_datetime(order.created_at))),
    ]
    if order.table_name:
        info.append(_row("Table:", escape(str(order.table_name))))
    info.append(_row("Type:", escape(_capitalize_first(order.type))))
    if order.cashier_name:
        info.append(_row("Cashier:", escape(str(order.cashier_name))))

    tax_label = f"Tax ({escape(format_number(merchant.tax_percentage))}%):"
    subtotal = escape(format_price(order.subtotal or 0, currency))
    tax_amount = escape(format_price(order.tax_amount or 0, currency))
    total = escape(format_price(order.total or 0, currency))
    header_html = "\n".join(header)
    info_html = "\n".join(info)

    return f"""
<div class="receipt-copy">
<div class="copy-label">Copy {copy_number} of 2</div>
<div class="header">
{header_html}
</div>
<div class="dashed-line"></div>
<div class="order-info">
{info_html}
</div>
<div class="dashed-line"></div>
<div class="section-title">Items</div>
<table class="items-table">
<tbody>
{_items_html(order, currency)}
</tbody>
</table>
<div class="dashed-line"></div>
<div class="totals">
{_row("Subtotal:", subtotal)}
{_row(tax_label, tax_amount)}
</div>
<div class="dashed-line"></div>
<div class="grand-total">
{_row("TOTAL:", total)}
</div>
<div class="dashed-line"></div>
{_payments_html(order, currency)}
<div class="footer">
<div>{escape(merchant.footer)}</div>
</div>
</div>
"""


RECEIPT_STYLES = """
* { margin: 0; padding: 0; box-sizing: border-box; }
@page { size: 80mm auto; margin: 0; }
body {
  font-family: 'Courier New', 'Consolas', monospace;
  font-size: 12px;
  line-height: 1.3;
  color: #000;
  background: #fff;
  width: 80mm;
  margin: 0 auto;
  padding: 0;
  -webkit-print-color-adjust: exact;
  print-color-adjust: exact;
}
.receipt-copy { padding: 8px 5px; }
.copy-label {
  text-align: center;
  font-size: 10px;
  font-weight: bold;
  margin-bottom: 8px;
  padding: 2px;
  background: #f0f0f0;
  border: 1px solid #ccc;
}
.header { text-align: center; margin-bottom: 8px; }
.cafe-name { font-size: 16px; font-weight: bold; margin-bottom: 4px; }
.cafe-info { font-size: 11px; color: #333; }
.dashed-line { border: none; border-top: 1px dashed #000; margin: 6px 0; }
.order-info { margin: 6px 0; }
.row { display: flex; justify-content: space-between; margin: 2px 0; }
.section-title { font-weight: bold; margin: 6px 0 4px 0; font-size: 12px; }
.items-table { width: 100%; border-collapse: collapse; }
.items-table td { padding: 2px 0; vertical-align: top; }
.items-table .qty { width: 25px; text-align: left; }
.items-table .name { text-align: left; }
.items-table .price { text-align: right; white-space: nowrap; }
.items-table .note { font-size: 10px; font-style: italic; color: #555; padding-left: 10px; }
.totals { margin: 6px 0; }
.grand-total { font-size: 14px; font-weight: bold; }
.footer { text-align: center; margin-top: 8px; font-size: 11px; }
.cut-line { margin: 15px 0; text-align: center; }
.cut-line-dashes { border: none; border-top: 2px dashed #000; margin: 10px 0; }
.scissors-icon { display: inline-block; font-size: 16px; margin: 0 5px; }
.cut-text {
  font-size: 10px;
  color: #666;
  display: flex;
  align-items: center;
  justify-content: center;
  gap: 5px;
}
@media print {
  body { width: 80mm; padding: 0; margin: 0; }
  .copy-label { background: #eee !important; }
}
"""

CUT_LINE_HTML = f"""
<div class="cut-line">
<div class="cut-text">
<span class="scissors-icon">&#9986;</span>
<span>{CUT_MARKER_TEXT}</span>
<span class="scissors-icon">&#9986;</span>
</div>
<div class="cut-line-dashes"></div>
</div>
"""


def build_receipt_document(order: Order, settings: Settings | None) -> str:
    """Assemble the printable two-copy document, separated by a cut marker."""
    currency = resolve_currency(settings)
    copies = [render_receipt_copy(order, settings, currency, index) for index in range(1, RECEIPT_COPIES + 1)]
    title = escape(str(order.order_number or ""))
    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="UTF-8">
<title>Receipt #{title}</title>
<style>{RECEIPT_STYLES}</style>
</head>
<body>
{CUT_LINE_HTML.join(copies)}
</body>
</html>
"""
