"""Print lifecycle for receipt documents.

``print_receipt`` stages the document on an isolated rendering surface, fires
the print once the surface reports ready (or a fallback timer expires) and
tears the surface down shortly after. Timers are fire-and-forget; the caller
gets control back as soon as the document is written.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable

from cafe_receipt.config import PRINT_READY_FALLBACK_SECONDS, PRINT_TEARDOWN_SECONDS
from cafe_receipt.models import Order, Settings
from cafe_receipt.rendering import build_receipt_document

logger = logging.getLogger(__name__)

Callback = Callable[[], None]
CallLater = Callable[[float, Callback], Any]


class SurfaceUnavailable(RuntimeError):
    """The rendering surface could not be acquired."""


class PrintSurface(ABC):
    """An off-screen document context that can be printed once."""

    @abstractmethod
    def open(self) -> None:
        """Acquire the surface's document; raise ``SurfaceUnavailable`` on failure."""

    @abstractmethod
    def write(self, document: str) -> None:
        """Load the full document into the surface."""

    def on_ready(self, callback: Callback) -> bool:
        """Register a ready callback; return False when no ready signal exists."""
        return False

    def focus(self) -> None:
        return None

    @abstractmethod
    def print(self) -> None:
        """Invoke the platform print primitive."""

    @abstractmethod
    def close(self) -> None:
        """Release the surface."""


class _PrintJob:
    """State for one ``print_receipt`` call: its surface and two timers."""

    def __init__(self, surface: PrintSurface, call_later: CallLater) -> None:
        self.surface = surface
        self.call_later = call_later
        self.triggered = False
        self.torn_down = False

    def trigger_print(self) -> None:
        if self.triggered:
            return
        self.triggered = True
        try:
            self.surface.focus()
            self.surface.print()
        except Exception:
            logger.exception("Print error")
        self.call_later(PRINT_TEARDOWN_SECONDS, self.teardown)

    def teardown(self) -> None:
        if self.torn_down:
            return
        self.torn_down = True
        try:
            self.surface.close()
        except Exception:
            logger.exception("Failed to release print surface")


def print_receipt(
    order: Order,
    settings: Settings | None,
    copies: int = 2,
    *,
    surface_factory: Callable[[], PrintSurface],
    call_later: CallLater,
) -> None:
    """Print an order's receipt: always two copies, whatever ``copies`` says."""
    if copies != 2:
        logger.debug("copies=%r requested; receipts always print two copies", copies)

    surface = surface_factory()
    try:
        surface.open()
    except SurfaceUnavailable as exc:
        try:
            surface.close()
        except Exception:
            logger.exception("Failed to release print surface")
        logger.error("Could not open print dialog: %s", exc)
        return

    surface.write(build_receipt_document(order, settings))

    job = _PrintJob(surface, call_later)
    if surface.on_ready(job.trigger_print):
        call_later(PRINT_READY_FALLBACK_SECONDS, job.trigger_print)
    else:
        job.trigger_print()
