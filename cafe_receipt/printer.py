"""USB thermal printer surface for receipt documents."""

from __future__ import annotations

import os
from pathlib import Path

from cafe_receipt.config import (
    PRINTER_FONT_PATH,
    PRINTER_FONT_SIZE,
    PRINTER_LEFT_INDENT_PX,
    PRINTER_LINE_CHARS,
    PRINTER_USB_PRODUCT_ID,
    PRINTER_USB_VENDOR_ID,
    PRINTER_WIDTH_PX,
)
from cafe_receipt.print_pipeline import PrintSurface, SurfaceUnavailable
from cafe_receipt.receipt_text import ReceiptLine, document_lines, line_to_plain

_LINE_EXTRA_PX = 8
_SEPARATOR_HEIGHT_PX = 12
_DASH_PX = 8
_GAP_PX = 6
_CUT_RULE_THICKNESS_PX = 3
_FONT_OVERRIDE_ENV = "RECEIPT_PRINTER_FONT_PATH"
_LINUX_FONT_FALLBACKS = (
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/liberation/LiberationMono-Regular.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
)


def resolve_printer_font_path() -> str:
    """
    Resolve a monospaced printer font.

    Resolution order:
    1. RECEIPT_PRINTER_FONT_PATH (if set)
    2. PRINTER_FONT_PATH
    3. Known Linux fallbacks
    """
    env_override = os.environ.get(_FONT_OVERRIDE_ENV, "").strip()
    candidates: list[str] = []
    if env_override:
        candidates.append(env_override)
    candidates.append(PRINTER_FONT_PATH)
    candidates.extend(_LINUX_FONT_FALLBACKS)

    seen: set[str] = set()
    for candidate in candidates:
        if not candidate or candidate in seen:
            continue
        seen.add(candidate)
        if Path(candidate).is_file():
            return candidate

    raise RuntimeError(
        f"No usable printer font found. Set {_FONT_OVERRIDE_ENV} to a valid .ttf/.otf file. "
        f"Tried: {', '.join(seen)}"
    )


def check_printer_dependencies() -> tuple[bool, str]:
    """Check whether printer dependencies are importable."""
    try:
        from escpos.printer import Usb  # noqa: F401
        from PIL import ImageFont

        ImageFont.truetype(resolve_printer_font_path(), PRINTER_FONT_SIZE)
    except Exception as exc:
        return (False, f"Printer deps unavailable: {exc}")
    return (True, "Printer ready")


def _render_text_line(text: str, font: object, bold: bool = False) -> object:
    from PIL import Image, ImageDraw

    canvas_height = PRINTER_FONT_SIZE + _LINE_EXTRA_PX
    img = Image.new("1", (PRINTER_WIDTH_PX, canvas_height), color=1)
    draw = ImageDraw.Draw(img)
    bbox = draw.textbbox((0, 0), "Hg", font=font)
    text_height = bbox[3] - bbox[1]
    y = (canvas_height - text_height) // 2 - bbox[1]
    draw.text((PRINTER_LEFT_INDENT_PX, y), text, font=font, fill=0)
    if bold:
        # Overstrike one pixel to the right.
        draw.text((PRINTER_LEFT_INDENT_PX + 1, y), text, font=font, fill=0)
    return img


def _render_dashed_rule(height_px: int, thickness_px: int) -> object:
    from PIL import Image, ImageDraw

    img = Image.new("1", (PRINTER_WIDTH_PX, height_px), color=1)
    draw = ImageDraw.Draw(img)
    top = max(0, (height_px - thickness_px) // 2)
    bottom = min(height_px - 1, top + thickness_px - 1)
    x = PRINTER_LEFT_INDENT_PX
    right_edge = PRINTER_WIDTH_PX - PRINTER_LEFT_INDENT_PX
    while x < right_edge:
        draw.rectangle((x, top, min(x + _DASH_PX, right_edge) - 1, bottom), fill=0)
        x += _DASH_PX + _GAP_PX
    return img


def render_receipt_images(lines: list[ReceiptLine], font: object) -> list[object]:
    """Render receipt lines into 1-bit strips ready for ``printer.image``."""
    images: list[object] = []
    for line in lines:
        if line.kind == "separator":
            images.append(_render_dashed_rule(_SEPARATOR_HEIGHT_PX, 1))
        elif line.kind == "cut":
            # Printer fonts rarely carry the scissors glyph.
            label = " CUT HERE ".center(PRINTER_LINE_CHARS, "-")
            images.append(_render_text_line(label, font))
            images.append(_render_dashed_rule(_SEPARATOR_HEIGHT_PX * 2, _CUT_RULE_THICKNESS_PX))
        else:
            images.append(_render_text_line(line_to_plain(line, PRINTER_LINE_CHARS), font, bold=line.bold))
    return images


class EscposSurface(PrintSurface):
    """Stages a receipt document as images and prints it on a USB ESC/POS printer."""

    def __init__(
        self,
        vendor_id: int = PRINTER_USB_VENDOR_ID,
        product_id: int = PRINTER_USB_PRODUCT_ID,
    ) -> None:
        self.vendor_id = vendor_id
        self.product_id = product_id
        self._printer = None
        self._font = None
        self._images: list[object] = []

    def open(self) -> None:
        try:
            from escpos.printer import Usb
            from PIL import ImageFont
        except Exception as exc:
            raise SurfaceUnavailable(f"Printer dependencies unavailable: {exc}") from exc

        try:
            self._font = ImageFont.truetype(resolve_printer_font_path(), PRINTER_FONT_SIZE)
            self._printer = Usb(self.vendor_id, self.product_id)
        except Exception as exc:
            raise SurfaceUnavailable(f"Printer unavailable: {exc}") from exc

    def write(self, document: str) -> None:
        self._images = render_receipt_images(document_lines(document), self._font)

    def print(self) -> None:
        if self._printer is None:
            raise RuntimeError("Printer surface is not open")
        for img in self._images:
            self._printer.image(img)
        self._printer.cut()

    def close(self) -> None:
        printer, self._printer = self._printer, None
        self._images = []
        if printer is not None:
            printer.close()
