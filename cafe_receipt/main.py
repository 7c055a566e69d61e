"""Entry point for the receipt print Textual app."""

from __future__ import annotations

import argparse
import logging

from cafe_receipt.config import DEBUG_LOG_PATH
from cafe_receipt.receipt_app import ReceiptPrintApp


def _configure_logging(path: str) -> None:
    # The terminal belongs to Textual, so diagnostics go to a file.
    logging.basicConfig(
        filename=path,
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def main(argv: list[str] | None = None) -> None:
    """Run the Textual application."""
    parser = argparse.ArgumentParser(description="Preview and print a cafe order receipt.")
    parser.add_argument("order", help="path to the order JSON file")
    parser.add_argument("--settings", help="path to the merchant settings JSON file")
    parser.add_argument("--log-file", default=DEBUG_LOG_PATH, help="debug log destination")
    args = parser.parse_args(argv)

    _configure_logging(args.log_file)
    ReceiptPrintApp(args.order, args.settings).run()


if __name__ == "__main__":
    main()
