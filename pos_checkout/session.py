"""Sale session: drives one sale at a time through its collaborators."""

from decimal import Decimal
from typing import Iterable, List, Optional

import structlog

from .accounting import AccountingLedger, CashRegister
from .discounts import DiscountCatalog
from .errors import (
    InvalidQuantityError,
    NegativeAmountError,
    NoSaleInProgressError,
    errmsg,
)
from .inventory import ItemCatalog
from .models import SaleSnapshot, ScanResult
from .money import to_money
from .receipt import ReceiptPrinter
from .revenue import RevenueCallback
from .sale import Sale
from .validation import require_non_negative, require_positive

logger = structlog.get_logger()


class SaleSession:
    """Coordinates scanning, discounts and payment for the current sale.

    All collaborators are passed in; nothing is looked up globally. Once a
    sale is paid, the receipt is printed, accounting and inventory are
    updated, cash goes into the register, and the revenue observers are
    called with the sale total, in that order.
    """

    def __init__(
        self,
        catalog: ItemCatalog,
        discounts: DiscountCatalog,
        accounting: AccountingLedger,
        printer: ReceiptPrinter,
        register: Optional[CashRegister] = None,
        log: Optional[structlog.BoundLogger] = None,
    ) -> None:
        self.catalog = catalog
        self.discounts = discounts
        self.accounting = accounting
        self.printer = printer
        self.register = register or CashRegister()
        self.log = log or logger.bind(component="session")
        self._observers: List[RevenueCallback] = []
        self._sale: Optional[Sale] = None

    @property
    def sale(self) -> Optional[Sale]:
        return self._sale

    def add_revenue_observer(self, observer: RevenueCallback) -> None:
        self._observers.append(observer)

    def add_revenue_observers(self, observers: Iterable[RevenueCallback]) -> None:
        self._observers.extend(observers)

    def start_sale(self) -> Sale:
        self._sale = Sale()
        self.log.info("sale_started")
        return self._sale

    def scan_item(self, item_id: int, quantity: int = 1) -> ScanResult:
        sale = self._current_sale()
        item = self.catalog.lookup_item(item_id)
        require_positive(quantity, InvalidQuantityError, errmsg.QUANTITY_POSITIVE)

        sale.add_item(item, quantity)
        result = ScanResult(
            item=item,
            quantity=quantity,
            running_total=sale.total_price(),
            total_vat=sale.total_vat,
        )
        self.log.info(
            "item_scanned",
            item_id=item.id,
            quantity=quantity,
            running_total=str(result.running_total),
            total_vat=str(result.total_vat),
        )
        return result

    def end_sale(self) -> Decimal:
        """Return the total price of the current sale."""
        return self._current_sale().total_price()

    def request_discount(self, customer_id: int) -> SaleSnapshot:
        """Apply item, customer and total-threshold discounts to the sale.

        All three are looked up against the sale as it stands before any is
        applied. They are then applied in order: item discounts as a fixed
        amount, then the customer percentage, then the threshold
        percentage, each against the total left by the previous step.
        """
        sale = self._current_sale()

        customer_percent = self.discounts.discounts_for_customer(customer_id)
        item_amount = self.discounts.discounts_for_items(sale.lines)
        total_percent = self.discounts.discounts_for_total(sale.total_price())

        taken_items = sale.apply_fixed_discount(item_amount)
        taken_customer = sale.apply_percentage_discount(customer_percent)
        taken_total = sale.apply_percentage_discount(total_percent)

        self.log.info(
            "discount_applied",
            customer_id=customer_id,
            item_discount=str(taken_items),
            customer_percent=str(customer_percent),
            customer_discount=str(taken_customer),
            total_percent=str(total_percent),
            total_discount=str(taken_total),
            new_total=str(sale.total_price()),
        )
        return sale.snapshot()

    def pay(self, amount_paid) -> Decimal:
        """Record payment and return the change.

        The first payment completes the sale. Paying again returns the
        original change and does not repeat the completion.
        """
        sale = self._current_sale()
        amount_paid = to_money(amount_paid)
        require_non_negative(amount_paid, NegativeAmountError, errmsg.AMOUNT_PAID_NEGATIVE)

        if sale.is_paid:
            self.log.warning("payment_ignored", amount_paid=str(amount_paid))
            return sale.payment.change

        change = sale.record_payment(amount_paid)
        self.log.info(
            "payment_recorded",
            total=str(sale.payment.total_price),
            amount_paid=str(amount_paid),
            change=str(change),
        )
        self._complete_sale(sale)
        return change

    def _complete_sale(self, sale: Sale) -> None:
        snapshot = sale.snapshot()
        self.printer.print_receipt(snapshot)
        self.accounting.record_sale(snapshot)
        self.catalog.update_inventory(snapshot)
        self.register.deposit(snapshot.total_price)

        for observer in self._observers:
            observer(snapshot.total_price)

        self.log.info("sale_completed", total=str(snapshot.total_price), lines=len(snapshot.lines))

    def _current_sale(self) -> Sale:
        if self._sale is None:
            raise NoSaleInProgressError()
        return self._sale
