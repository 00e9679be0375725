"""Sale aggregate: lines, discounts, totals and payment."""

from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, List, Optional, Tuple

from .discounts import Discount, FixedDiscount, PercentageDiscount
from .errors import NegativeAmountError, SaleClosedError, errmsg
from .models import ItemCatalogEntry, Payment, SaleLine, SaleSnapshot, SnapshotLine
from .money import ZERO, round2, to_money
from .validation import require_non_negative


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Sale:
    """A single sale, open until payment is recorded.

    ``total_price()`` is the VAT-inclusive gross minus the accumulated
    discount, rounded half-up to cents and never below zero. Discounts are
    always computed against the current total, so a percentage applied
    after another discount takes its share of the already reduced price.
    The accumulated discount never exceeds the unrounded gross.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._lines: List[SaleLine] = []
        self._discount: Decimal = ZERO
        self._total_vat: Decimal = ZERO
        self._payment: Optional[Payment] = None
        self._completed_at: Optional[datetime] = None
        self._clock = clock

    @property
    def lines(self) -> Tuple[SaleLine, ...]:
        """Detached copies of the lines; changing them leaves the sale alone."""
        return tuple(replace(line) for line in self._lines)

    @property
    def discount(self) -> Decimal:
        return self._discount

    @property
    def total_vat(self) -> Decimal:
        return round2(self._total_vat)

    @property
    def payment(self) -> Optional[Payment]:
        return self._payment

    @property
    def completed_at(self) -> Optional[datetime]:
        return self._completed_at

    @property
    def is_paid(self) -> bool:
        return self._payment is not None

    def add_item(self, item: ItemCatalogEntry, quantity: int) -> SaleLine:
        """Add ``quantity`` of ``item``, merging into an existing line for the same id."""
        self._require_open()
        line = self._find_line(item.id)
        if line is not None:
            line.increase_quantity(quantity)
        else:
            line = SaleLine(item, quantity)
            self._lines.append(line)
        self._update_total_vat()
        return replace(line)

    def apply_fixed_discount(self, amount) -> Decimal:
        """Discount a fixed amount, capped at the current total. Returns the amount taken."""
        amount = to_money(amount)
        require_non_negative(amount, NegativeAmountError, errmsg.AMOUNT_NEGATIVE)
        return self.apply_discount(FixedDiscount(amount))

    def apply_percentage_discount(self, percent) -> Decimal:
        """Discount ``percent`` of the current total. Returns the amount taken."""
        return self.apply_discount(PercentageDiscount(percent))

    def apply_discount(self, discount: Discount) -> Decimal:
        self._require_open()
        taken = min(discount.apply(self.total_price()), self._gross() - self._discount)
        self._discount += taken
        return taken

    def gross_total(self) -> Decimal:
        """VAT-inclusive total before discounts."""
        return round2(self._gross())

    def total_price(self) -> Decimal:
        return max(ZERO, round2(self._gross() - self._discount))

    def record_payment(self, amount_paid) -> Decimal:
        """Settle the sale and return the change.

        Only the first call settles; later calls leave the payment as it was
        and return its change.
        """
        amount_paid = to_money(amount_paid)
        require_non_negative(amount_paid, NegativeAmountError, errmsg.AMOUNT_PAID_NEGATIVE)
        if self._payment is None:
            self._payment = Payment.settle(self.total_price(), amount_paid)
            self._completed_at = self._clock()
        return self._payment.change

    def snapshot(self) -> SaleSnapshot:
        return SaleSnapshot(
            lines=tuple(
                SnapshotLine(item=line.item, quantity=line.quantity, line_total=line.line_total())
                for line in self._lines
            ),
            discount=round2(self._discount),
            total_vat=self.total_vat,
            total_price=self.total_price(),
            payment=self._payment,
            completed_at=self._completed_at,
        )

    def _gross(self) -> Decimal:
        return sum((line.gross_total() for line in self._lines), ZERO)

    def _update_total_vat(self) -> None:
        self._total_vat = sum((line.vat() for line in self._lines), ZERO)

    def _find_line(self, item_id: int) -> Optional[SaleLine]:
        for line in self._lines:
            if line.item.id == item_id:
                return line
        return None

    def _require_open(self) -> None:
        if self._payment is not None:
            raise SaleClosedError()
