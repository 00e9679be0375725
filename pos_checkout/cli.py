"""Command-line checkout demo.

Runs scripted checkout flows against a fresh catalog and prints each
receipt.
"""

import argparse
import sys
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, TextIO, Tuple

import structlog

from .accounting import AccountingLedger, CashRegister
from .config import LOG_LEVELS, Settings, configure_logging, load_settings
from .discounts import DiscountCatalog
from .errors import CheckoutError, InventoryUnavailableError, ItemNotFoundError
from .inventory import ItemCatalog
from .receipt import ReceiptPrinter
from .revenue import RevenueFileOutput, RevenueLogView
from .session import SaleSession

logger = structlog.get_logger()

Scan = Tuple[int, int]


@dataclass
class Flow:
    """A scripted checkout: scans, an optional discount request, a payment."""
    name: str
    scans: List[Scan]
    amount_paid: int
    customer_id: Optional[int] = None


FLOWS: Dict[str, Flow] = {
    "basic": Flow("basic", [(1, 1), (2, 1)], 100),
    "missing-item": Flow("missing-item", [(99, 1), (69, 1), (2, 1)], 100),
    "repeat-item": Flow("repeat-item", [(1, 1), (2, 1), (1, 1)], 100),
    "bulk": Flow("bulk", [(1, 4), (2, 5)], 200),
    "discount": Flow("discount", [(1, 4), (2, 5)], 120, customer_id=1),
}


def build_session(settings: Settings, out: TextIO) -> SaleSession:
    """Wire a session with fresh collaborators and the configured observers."""
    session = SaleSession(
        catalog=ItemCatalog.default(offline_item_ids=settings.offline_item_ids),
        discounts=DiscountCatalog.default(),
        accounting=AccountingLedger(),
        printer=ReceiptPrinter(stream=out, currency=settings.currency),
        register=CashRegister(),
    )
    session.add_revenue_observer(RevenueLogView())
    if settings.revenue_log:
        session.add_revenue_observer(RevenueFileOutput(settings.revenue_log, currency=settings.currency))
    return session


def scan(session: SaleSession, item_id: int, quantity: int, out: TextIO, currency: str) -> None:
    """Scan one item, reporting failures on ``out`` without ending the flow."""
    log = logger.bind(component="cli", item_id=item_id)
    try:
        result = session.scan_item(item_id, quantity)
    except ItemNotFoundError:
        print(f"No item found with ID: {item_id}. Please try another item.", file=out)
        return
    except InventoryUnavailableError as e:
        print("Could not connect to the inventory database. Please try again later.", file=out)
        log.error("scan_failed", error=str(e))
        return
    except CheckoutError as e:
        print(f"An unexpected error occurred: {e}", file=out)
        log.error("scan_failed", error=str(e))
        return

    item = result.item
    print(
        f"Item ID: {item.id}\n"
        f"Item description: {item.description}\n"
        f"Item price: {item.unit_price_incl_vat:.2f} {currency}\n"
        f"VAT: {item.vat_percent}%\n",
        file=out,
    )
    print(f"Total cost (incl VAT): {result.running_total:.2f} {currency}", file=out)
    print(f"Total VAT: {result.total_vat:.2f} {currency}\n", file=out)


def run_flow(session: SaleSession, flow: Flow, out: TextIO, currency: str = "SEK") -> None:
    print(f"[{flow.name}]\n", file=out)
    session.start_sale()
    print("New sale started.\n", file=out)

    for item_id, quantity in flow.scans:
        print("-" * 30, file=out)
        print(f"Add {quantity} items with item id {item_id}", file=out)
        scan(session, item_id, quantity, out, currency)
    print("-" * 30, file=out)
    print("All items scanned.\n", file=out)

    total = session.end_sale()
    print(f"Sale ended. Total price: {total:.2f} {currency}\n", file=out)

    if flow.customer_id is not None:
        session.request_discount(flow.customer_id)
        print("Discounts requested and applied.", file=out)
        print(f"New total price: {session.end_sale():.2f} {currency}\n", file=out)

    change = session.pay(flow.amount_paid)
    print(f"Change to give the customer: {change:.2f} {currency}\n", file=out)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run scripted point-of-sale checkout flows")
    parser.add_argument(
        "flows",
        nargs="*",
        metavar="FLOW",
        help=f"Flows to run: {', '.join(FLOWS)} (default: all)",
    )
    parser.add_argument(
        "--revenue-log",
        help="File for running revenue totals (overrides POS_REVENUE_LOG)",
    )
    parser.add_argument(
        "--no-revenue-log",
        action="store_true",
        help="Do not write running revenue totals to a file",
    )
    parser.add_argument(
        "--log-level",
        choices=list(LOG_LEVELS),
        help="Log level (overrides POS_LOG_LEVEL)",
    )
    args = parser.parse_args(argv)
    unknown = [name for name in args.flows if name not in FLOWS]
    if unknown:
        parser.error(f"unknown flow: {', '.join(unknown)}")
    return args


def main(argv: Optional[Sequence[str]] = None, out: Optional[TextIO] = None) -> int:
    args = parse_args(argv)
    out = out or sys.stdout

    settings = load_settings()
    overrides = {}
    if args.log_level:
        overrides["log_level"] = args.log_level
    if args.revenue_log:
        overrides["revenue_log"] = args.revenue_log
    if args.no_revenue_log:
        overrides["revenue_log"] = None
    if overrides:
        settings = replace(settings, **overrides)

    configure_logging(settings.log_level, settings.log_file)

    session = build_session(settings, out)
    for name in args.flows or list(FLOWS):
        run_flow(session, FLOWS[name], out, settings.currency)
    return 0


if __name__ == "__main__":
    sys.exit(main())
