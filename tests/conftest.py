"""Shared pytest fixtures for checkout tests."""

import io
from datetime import datetime, timezone

import pytest
import structlog

from pos_checkout import (
    AccountingLedger,
    CashRegister,
    DiscountCatalog,
    ItemCatalog,
    ItemCatalogEntry,
    ReceiptPrinter,
    Sale,
    SaleSession,
)
from pos_checkout.config import close_log_file

SALE_TIME = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return SALE_TIME


@pytest.fixture
def sale_time() -> datetime:
    return SALE_TIME


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog.configure() a test performed."""
    yield
    structlog.reset_defaults()
    close_log_file()


@pytest.fixture
def item_a() -> ItemCatalogEntry:
    """10.00 at 12% VAT."""
    return ItemCatalogEntry(1, "Item A", "10.0", 12)


@pytest.fixture
def item_b() -> ItemCatalogEntry:
    """20.00 at 6% VAT."""
    return ItemCatalogEntry(2, "Item B", "20.0", 6)


@pytest.fixture
def hundred() -> ItemCatalogEntry:
    """100.00 with no VAT, for round-number discount checks."""
    return ItemCatalogEntry(3, "Hundred", "100.00", 0)


@pytest.fixture
def sale() -> Sale:
    return Sale(clock=fixed_clock)


@pytest.fixture
def sale_43_60(sale, item_a, item_b) -> Sale:
    """Two of item A and one of item B: 22.40 + 21.20."""
    sale.add_item(item_a, 2)
    sale.add_item(item_b, 1)
    return sale


@pytest.fixture
def receipt_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def catalog() -> ItemCatalog:
    return ItemCatalog.default(offline_item_ids=(69,))


@pytest.fixture
def accounting() -> AccountingLedger:
    return AccountingLedger()


@pytest.fixture
def register() -> CashRegister:
    return CashRegister()


@pytest.fixture
def session(catalog, accounting, register, receipt_stream) -> SaleSession:
    return SaleSession(
        catalog=catalog,
        discounts=DiscountCatalog.default(),
        accounting=accounting,
        printer=ReceiptPrinter(stream=receipt_stream),
        register=register,
    )
