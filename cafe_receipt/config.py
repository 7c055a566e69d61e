"""Runtime configuration defaults for receipts and printing."""

from __future__ import annotations

import os

# Merchant defaults used when settings are missing or blank.
DEFAULT_CAFE_NAME = "Desi Beats Cafe"
DEFAULT_TAX_PERCENTAGE = 16
DEFAULT_RECEIPT_FOOTER = "Thank you for your visit!"
DEFAULT_CURRENCY = "Rs."
RECEIPT_COPIES = 2

# Print lifecycle timings, in seconds.
PRINT_READY_FALLBACK_SECONDS = 0.5
PRINT_TEARDOWN_SECONDS = 1.0

# Thermal printer (80mm paper, 203dpi head).
PRINTER_USB_VENDOR_ID = 0x28E9
PRINTER_USB_PRODUCT_ID = 0x0289
PRINTER_WIDTH_PX = 576
PRINTER_FONT_SIZE = 22
PRINTER_FONT_PATH = "/System/Library/Fonts/Menlo.ttc"
PRINTER_LEFT_INDENT_PX = 8
PRINTER_LINE_CHARS = 42

# Signed image endpoint.
API_BASE_URL = os.environ.get("RECEIPT_API_BASE_URL", "http://localhost:5000")
SIGNED_URL_PATH = "/api/imagekit/signed-url"
SIGNED_URL_TIMEOUT_SECONDS = 10.0

DEBUG_LOG_PATH = "/tmp/receipt-debug.log"
