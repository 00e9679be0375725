"""Data models for the checkout core."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple

from .errors import (
    InvalidItemError,
    InvalidPaymentError,
    InvalidQuantityError,
    errmsg,
)
from .money import HUNDRED, ZERO, round2, to_money, vat_inclusive
from .validation import (
    require_equal,
    require_in_range,
    require_non_negative,
    require_not_blank,
    require_positive,
)


@dataclass(frozen=True)
class ItemCatalogEntry:
    """An item as listed in the catalog."""
    id: int
    description: str
    unit_price: Decimal
    vat_percent: int

    def __post_init__(self):
        object.__setattr__(self, "unit_price", to_money(self.unit_price))
        require_non_negative(self.id, InvalidItemError, errmsg.ITEM_ID_NEGATIVE)
        require_not_blank(self.description, InvalidItemError, errmsg.ITEM_DESCRIPTION_REQUIRED)
        require_non_negative(self.unit_price, InvalidItemError, errmsg.ITEM_PRICE_NEGATIVE)
        require_in_range(self.vat_percent, 0, 100, InvalidItemError, errmsg.VAT_RANGE)

    @property
    def unit_price_incl_vat(self) -> Decimal:
        return round2(vat_inclusive(self.unit_price, 1, self.vat_percent))


@dataclass
class SaleLine:
    """One catalog item and its accumulated quantity within a sale."""
    item: ItemCatalogEntry
    quantity: int

    def __post_init__(self):
        require_positive(self.quantity, InvalidQuantityError, errmsg.QUANTITY_POSITIVE)

    def increase_quantity(self, quantity: int) -> None:
        require_positive(quantity, InvalidQuantityError, errmsg.QUANTITY_POSITIVE)
        self.quantity += quantity

    def gross_total(self) -> Decimal:
        """VAT-inclusive line total, unrounded."""
        return vat_inclusive(self.item.unit_price, self.quantity, self.item.vat_percent)

    def line_total(self) -> Decimal:
        return round2(self.gross_total())

    def vat(self) -> Decimal:
        """VAT portion of the line, unrounded."""
        return self.item.unit_price * self.item.vat_percent * self.quantity / HUNDRED


@dataclass(frozen=True)
class Payment:
    """Settled payment for a sale.

    Construction enforces ``amount_paid >= total_price`` and
    ``change == amount_paid - total_price`` with every amount non-negative.
    """
    total_price: Decimal
    amount_paid: Decimal
    change: Decimal

    def __post_init__(self):
        for name in ("total_price", "amount_paid", "change"):
            object.__setattr__(self, name, to_money(getattr(self, name)))

        require_non_negative(self.total_price, InvalidPaymentError, errmsg.PAYMENT_NEGATIVE)
        require_non_negative(self.amount_paid, InvalidPaymentError, errmsg.PAYMENT_NEGATIVE)
        if self.amount_paid < self.total_price:
            raise InvalidPaymentError(errmsg.PAYMENT_INSUFFICIENT)
        require_non_negative(self.change, InvalidPaymentError, errmsg.PAYMENT_NEGATIVE)
        require_equal(
            self.change,
            self.amount_paid - self.total_price,
            InvalidPaymentError,
            errmsg.PAYMENT_CHANGE_MISMATCH,
        )

    @classmethod
    def settle(cls, total_price, amount_paid) -> "Payment":
        """Build a payment with change derived from the two amounts."""
        total_price = to_money(total_price)
        amount_paid = to_money(amount_paid)
        return cls(total_price, amount_paid, amount_paid - total_price)


@dataclass(frozen=True)
class SnapshotLine:
    item: ItemCatalogEntry
    quantity: int
    line_total: Decimal


@dataclass(frozen=True)
class SaleSnapshot:
    """Read-only view of a sale, handed to receipt, accounting and inventory."""
    lines: Tuple[SnapshotLine, ...] = ()
    discount: Decimal = ZERO
    total_vat: Decimal = ZERO
    total_price: Decimal = ZERO
    payment: Optional[Payment] = None
    completed_at: Optional[datetime] = None

    @property
    def is_paid(self) -> bool:
        return self.payment is not None

    def quantity_of(self, item_id: int) -> int:
        return sum(line.quantity for line in self.lines if line.item.id == item_id)


@dataclass(frozen=True)
class ScanResult:
    """What the session reports back after a successful scan."""
    item: ItemCatalogEntry
    quantity: int
    running_total: Decimal
    total_vat: Decimal
