"""Accounting ledger and cash register stand-ins."""

from decimal import Decimal
from typing import List

import structlog

from .errors import NegativeAmountError, errmsg
from .models import SaleSnapshot
from .money import ZERO, to_money
from .validation import require_non_negative

logger = structlog.get_logger()


class AccountingLedger:
    """Records every completed sale."""

    def __init__(self) -> None:
        self._sales: List[SaleSnapshot] = []
        self.log = logger.bind(component="accounting")

    @property
    def sales(self) -> List[SaleSnapshot]:
        return list(self._sales)

    @property
    def total_revenue(self) -> Decimal:
        return sum((sale.total_price for sale in self._sales), ZERO)

    def record_sale(self, snapshot: SaleSnapshot) -> None:
        self._sales.append(snapshot)
        self.log.info("sale_recorded", total=str(snapshot.total_price), sales=len(self._sales))


class CashRegister:
    """Cash in the drawer."""

    def __init__(self, balance=ZERO) -> None:
        self._balance = to_money(balance)

    @property
    def balance(self) -> Decimal:
        return self._balance

    def deposit(self, amount) -> None:
        amount = to_money(amount)
        require_non_negative(amount, NegativeAmountError, errmsg.AMOUNT_NEGATIVE)
        self._balance += amount
