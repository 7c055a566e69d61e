"""Read a rendered receipt document back into printable lines."""

from __future__ import annotations

from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag
from rich.text import Text

from cafe_receipt.config import PRINTER_LINE_CHARS

CUT_LABEL = "✂ CUT HERE ✂"


@dataclass(frozen=True)
class ReceiptLine:
    """One output line: ``center``, ``row``, ``text``, ``note``, ``separator`` or ``cut``."""

    kind: str
    left: str = ""
    right: str = ""
    bold: bool = False


def _classes(tag: Tag) -> list[str]:
    return list(tag.get("class") or [])


def _text(tag: Tag) -> str:
    return tag.get_text(" ", strip=True)


def _copy_lines(copy: Tag) -> list[ReceiptLine]:
    lines: list[ReceiptLine] = []
    for tag in copy.find_all(True):
        classes = _classes(tag)
        if "copy-label" in classes or "cafe-name" in classes:
            lines.append(ReceiptLine("center", _text(tag), bold=True))
        elif "cafe-info" in classes or "footer" in classes:
            lines.append(ReceiptLine("center", _text(tag)))
        elif "dashed-line" in classes:
            lines.append(ReceiptLine("separator"))
        elif "section-title" in classes:
            lines.append(ReceiptLine("text", _text(tag), bold=True))
        elif "row" in classes:
            spans = tag.find_all("span", recursive=False)
            left = _text(spans[0]) if spans else _text(tag)
            right = _text(spans[1]) if len(spans) > 1 else ""
            bold = tag.find_parent(class_="grand-total") is not None
            lines.append(ReceiptLine("row", left, right, bold=bold))
        elif tag.name == "tr":
            note = tag.find(class_="note")
            if note is not None:
                lines.append(ReceiptLine("note", _text(note)))
                continue
            qty = tag.find(class_="qty")
            name = tag.find(class_="name")
            price = tag.find(class_="price")
            left = " ".join(_text(cell) for cell in (qty, name) if cell is not None)
            lines.append(ReceiptLine("row", left, _text(price) if price is not None else ""))
    return lines


def document_lines(document: str) -> list[ReceiptLine]:
    """Flatten the HTML document into receipt lines, copies in order."""
    soup = BeautifulSoup(document, "html.parser")
    lines: list[ReceiptLine] = []
    for block in soup.select(".receipt-copy, .cut-line"):
        if "cut-line" in _classes(block):
            lines.append(ReceiptLine("cut", CUT_LABEL))
        else:
            lines.extend(_copy_lines(block))
    return lines


def fit_row(left: str, right: str, width: int) -> str:
    """Left/right justify a row, trimming the left side when space runs out."""
    if not right:
        return left[:width]
    room = width - len(right) - 1
    if room <= 0:
        return right[-width:]
    if len(left) > room:
        left = left[: max(0, room - 3)] + "..." if room > 3 else left[:room]
    return f"{left}{' ' * (width - len(left) - len(right))}{right}"


def line_to_plain(line: ReceiptLine, width: int = PRINTER_LINE_CHARS) -> str:
    if line.kind == "separator":
        return "-" * width
    if line.kind in ("center", "cut"):
        label = line.left if line.kind == "center" else f" {line.left} "
        fill = " " if line.kind == "center" else "-"
        return label.center(width, fill)[:width]
    if line.kind == "note":
        return f"    {line.left}"[:width]
    return fit_row(line.left, line.right, width)


def to_plain_text(lines: list[ReceiptLine], width: int = PRINTER_LINE_CHARS) -> str:
    return "\n".join(line_to_plain(line, width) for line in lines)


def to_rich_text(lines: list[ReceiptLine], width: int = PRINTER_LINE_CHARS) -> Text:
    """Render receipt lines for the terminal preview."""
    text = Text()
    for idx, line in enumerate(lines):
        if idx > 0:
            text.append("\n")
        plain = line_to_plain(line, width)
        if line.kind == "separator":
            text.append(plain, style="dim")
        elif line.kind == "cut":
            text.append(plain, style="bold #b23a48")
        elif line.kind == "note":
            text.append(plain, style="italic #aaaaaa")
        else:
            text.append(plain, style="bold" if line.bold else "")
    return text
