"""Tests for the accounting ledger and cash register."""

from decimal import Decimal

import pytest

from pos_checkout import AccountingLedger, CashRegister, NegativeAmountError


class TestAccountingLedger:
    def test_records_sales(self, sale_43_60) -> None:
        ledger = AccountingLedger()
        sale_43_60.record_payment(100)
        ledger.record_sale(sale_43_60.snapshot())

        assert len(ledger.sales) == 1
        assert ledger.sales[0].payment.change == Decimal("56.40")
        assert ledger.total_revenue == Decimal("43.60")

    def test_empty_ledger(self) -> None:
        assert AccountingLedger().total_revenue == Decimal("0.00")


class TestCashRegister:
    def test_deposit(self) -> None:
        register = CashRegister()
        register.deposit("43.60")
        register.deposit(10)
        assert register.balance == Decimal("53.60")

    def test_opening_balance(self) -> None:
        assert CashRegister(500).balance == Decimal("500")

    def test_negative_deposit(self) -> None:
        register = CashRegister()
        with pytest.raises(NegativeAmountError):
            register.deposit(-5)
        assert register.balance == Decimal("0.00")
