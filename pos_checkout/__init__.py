"""Point-of-sale checkout core: sale totaling, discounts and payment."""

from .accounting import AccountingLedger, CashRegister
from .config import Settings, configure_logging, load_settings
from .discounts import (
    Discount,
    DiscountCatalog,
    DiscountRule,
    FixedDiscount,
    PercentageDiscount,
)
from .errors import (
    CheckoutError,
    InvalidDiscountError,
    InvalidItemError,
    InvalidPaymentError,
    InvalidQuantityError,
    InventoryUnavailableError,
    ItemNotFoundError,
    NegativeAmountError,
    NoSaleInProgressError,
    SaleClosedError,
    errmsg,
)
from .inventory import ItemCatalog, StockEntry
from .models import (
    ItemCatalogEntry,
    Payment,
    SaleLine,
    SaleSnapshot,
    ScanResult,
    SnapshotLine,
)
from .money import round2, to_money
from .receipt import ReceiptPrinter, format_receipt
from .revenue import RevenueFileOutput, RevenueLogView, RevenueObserver
from .sale import Sale
from .session import SaleSession

__all__ = [
    "AccountingLedger",
    "CashRegister",
    "Settings",
    "configure_logging",
    "load_settings",
    "Discount",
    "DiscountCatalog",
    "DiscountRule",
    "FixedDiscount",
    "PercentageDiscount",
    "CheckoutError",
    "InvalidDiscountError",
    "InvalidItemError",
    "InvalidPaymentError",
    "InvalidQuantityError",
    "InventoryUnavailableError",
    "ItemNotFoundError",
    "NegativeAmountError",
    "NoSaleInProgressError",
    "SaleClosedError",
    "errmsg",
    "ItemCatalog",
    "StockEntry",
    "ItemCatalogEntry",
    "Payment",
    "SaleLine",
    "SaleSnapshot",
    "ScanResult",
    "SnapshotLine",
    "round2",
    "to_money",
    "ReceiptPrinter",
    "format_receipt",
    "RevenueFileOutput",
    "RevenueLogView",
    "RevenueObserver",
    "Sale",
    "SaleSession",
]
