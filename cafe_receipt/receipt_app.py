"""Main Textual app class."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.widgets import Header, Static

from cafe_receipt.formatting import format_price
from cafe_receipt.intake import load_order, load_settings
from cafe_receipt.models import Order, Settings
from cafe_receipt.normalize import normalize_item
from cafe_receipt.print_pipeline import PrintSurface, print_receipt
from cafe_receipt.printer import EscposSurface, check_printer_dependencies
from cafe_receipt.receipt_text import document_lines, to_rich_text
from cafe_receipt.rendering import build_receipt_document, resolve_currency

logger = logging.getLogger(__name__)


class ReceiptPrintApp(App):
    """A Textual app that previews an order's receipt and sends it to the printer."""

    TITLE = "Receipt Print"
    SUB_TITLE = "Preview / Print"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #preview-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
        overflow-y: auto;
    }

    #order-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #status-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 3;
    }

    #order-summary {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+s", "print_receipt", "Print", priority=True),
        ("r", "reload", "Reload files"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        order_path: str | Path,
        settings_path: str | Path | None = None,
        surface_factory: Callable[[], PrintSurface] = EscposSurface,
    ) -> None:
        super().__init__()
        self.order_path = Path(order_path)
        self.settings_path = Path(settings_path) if settings_path is not None else None
        self.surface_factory = surface_factory
        self.order: Order | None = None
        self.settings: Settings | None = None
        self.system_status = ""

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="preview-pane"):
                yield Static("Receipt Preview", classes="pane-title")
                yield Static("(no order loaded)", id="preview")
            with Vertical(id="order-pane"):
                yield Static(id="status-bar")
                yield Static(id="order-summary")

    def on_mount(self) -> None:
        _, msg = check_printer_dependencies()
        self.system_status = msg
        logger.debug("on_mount printer_status=%r", msg)
        self.action_reload()

    def action_reload(self) -> None:
        try:
            self.order = load_order(self.order_path)
            self.settings = load_settings(self.settings_path)
        except (OSError, ValueError) as exc:
            self.order = None
            self.system_status = f"Load failed: {exc}"
            logger.warning("reload_failed order_path=%s error=%r", self.order_path, exc)
            self._refresh_all()
            return
        logger.debug("reload order_number=%r items=%d", self.order.order_number, len(self.order.items))
        self._refresh_all()

    def action_print_receipt(self) -> None:
        if self.order is None:
            self.system_status = "Nothing to print"
            self._refresh_status()
            return
        print_receipt(
            self.order,
            self.settings,
            surface_factory=self.surface_factory,
            call_later=self.set_timer,
        )
        self.system_status = f"Sent order {self.order.order_number} to printer"
        self._refresh_status()
        logger.debug("print_requested order_number=%r", self.order.order_number)

    def _refresh_all(self) -> None:
        self._refresh_preview()
        self._refresh_summary()
        self._refresh_status()

    def _refresh_preview(self) -> None:
        try:
            preview = self.query_one("#preview", Static)
        except NoMatches:
            return
        if self.order is None:
            preview.update("(no order loaded)")
            return
        preview.update(to_rich_text(document_lines(build_receipt_document(self.order, self.settings))))

    def _refresh_summary(self) -> None:
        try:
            summary = self.query_one("#order-summary", Static)
        except NoMatches:
            return
        if self.order is None:
            summary.update("")
            return

        currency = resolve_currency(self.settings)
        lines = Text()
        lines.append(f"Order #{self.order.order_number}", style="bold")
        for raw_item in self.order.items:
            item = normalize_item(raw_item)
            lines.append(f"\n  {item.name}")
            lines.append(f"  x{item.quantity}", style="dim")
        lines.append("\n\nTotal ", style="bold")
        lines.append(format_price(self.order.total or 0, currency))
        summary.update(lines)

    def _refresh_status(self) -> None:
        try:
            bar = self.query_one("#status-bar", Static)
        except NoMatches:
            return
        status = self.system_status or "Ready"
        bar.update(Text(f"Ctrl+S print (2 copies). R reload.\n{status}"))
