"""Receipt formatting and printing."""

import sys
from typing import Optional, TextIO

import structlog

from .models import SaleSnapshot

logger = structlog.get_logger()

RULE = "-" * 18
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_receipt(snapshot: SaleSnapshot, currency: str = "SEK") -> str:
    """Format a human-readable receipt."""
    lines = []

    lines.append(f"{RULE} Begin receipt {RULE}")
    if snapshot.completed_at is not None:
        lines.append(f"Time of Sale: {snapshot.completed_at.strftime(TIME_FORMAT)}")
    else:
        lines.append("Time of Sale: N/A")
    lines.append("")

    for line in snapshot.lines:
        lines.append(
            f"{line.item.description:<9}{line.quantity:>5} x {line.item.unit_price_incl_vat:>5.2f}    "
            f"{line.line_total:>8.2f} {currency} (incl. VAT)"
        )

    lines.append("")
    lines.append(f"{'Discount:':<28}-{snapshot.discount:>5.2f} {currency}")
    lines.append(f"{'Total VAT:':<29}{snapshot.total_vat:>5.2f} {currency}")
    lines.append("")

    payment = snapshot.payment
    if payment is not None:
        lines.append(f"{'Total:':<29}{payment.total_price:>8.2f} {currency}")
        lines.append(f"{'Cash:':<29}{payment.amount_paid:>8.2f} {currency}")
        lines.append(f"{'Change:':<29}{payment.change:>8.2f} {currency}")
    else:
        lines.append(f"{'Total:':<29}{snapshot.total_price:>8.2f} {currency}")

    lines.append(f"{RULE} End receipt {RULE}")

    return "\n".join(lines)


class ReceiptPrinter:
    """Stand-in for the receipt printer; writes receipts to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None, currency: str = "SEK") -> None:
        self.stream = stream
        self.currency = currency
        self.log = logger.bind(component="printer")

    def print_receipt(self, snapshot: SaleSnapshot) -> str:
        text = format_receipt(snapshot, self.currency)
        print(text, file=self.stream or sys.stdout)
        self.log.info("receipt_printed", lines=len(snapshot.lines), total=str(snapshot.total_price))
        return text
