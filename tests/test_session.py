"""Tests for SaleSession orchestration."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from pos_checkout import (
    InvalidPaymentError,
    InvalidQuantityError,
    InventoryUnavailableError,
    ItemNotFoundError,
    NegativeAmountError,
    NoSaleInProgressError,
)


class TestScanItem:
    def test_requires_sale(self, session) -> None:
        with pytest.raises(NoSaleInProgressError):
            session.scan_item(1)

    def test_running_totals(self, session) -> None:
        session.start_sale()
        first = session.scan_item(1)
        second = session.scan_item(2)

        assert first.item.description == "Apple"
        assert first.running_total == Decimal("12.50")
        assert second.running_total == Decimal("37.50")
        assert second.total_vat == Decimal("7.50")

    def test_repeat_scan_merges_lines(self, session) -> None:
        session.start_sale()
        session.scan_item(1)
        session.scan_item(2)
        session.scan_item(1)

        lines = session.sale.lines
        assert [(line.item.id, line.quantity) for line in lines] == [(1, 2), (2, 1)]
        assert session.end_sale() == Decimal("50.00")

    def test_unknown_item(self, session) -> None:
        """A failed lookup leaves the sale untouched."""
        session.start_sale()
        with pytest.raises(ItemNotFoundError):
            session.scan_item(99)
        assert session.sale.lines == ()

    def test_inventory_outage(self, session) -> None:
        session.start_sale()
        with pytest.raises(InventoryUnavailableError):
            session.scan_item(69)

    def test_non_positive_quantity(self, session) -> None:
        session.start_sale()
        with pytest.raises(InvalidQuantityError):
            session.scan_item(1, 0)

    def test_start_sale_replaces_current(self, session) -> None:
        session.start_sale()
        session.scan_item(1)
        session.start_sale()
        assert session.end_sale() == Decimal("0.00")


class TestRequestDiscount:
    def test_all_axes(self, session) -> None:
        """Items, customer 1 and both thresholds apply to a 175.00 sale."""
        session.start_sale()
        session.scan_item(1, 4)
        session.scan_item(2, 5)
        assert session.end_sale() == Decimal("175.00")

        snapshot = session.request_discount(1)

        assert snapshot.total_price == Decimal("114.82")
        assert snapshot.discount == Decimal("60.18")
        assert session.end_sale() == Decimal("114.82")

    def test_unknown_customer(self, session) -> None:
        session.start_sale()
        session.scan_item(1, 4)
        session.scan_item(2, 5)
        snapshot = session.request_discount(7)
        assert snapshot.total_price == Decimal("127.58")

    def test_small_sale(self, session) -> None:
        """Below every threshold only item discounts apply."""
        session.start_sale()
        session.scan_item(5)
        session.scan_item(3)
        snapshot = session.request_discount(7)
        assert snapshot.discount == Decimal("1.00")
        assert snapshot.total_price == Decimal("25.80")

    def test_requires_sale(self, session) -> None:
        with pytest.raises(NoSaleInProgressError):
            session.request_discount(1)


class TestPay:
    def test_completes_sale(self, session, accounting, register, catalog, receipt_stream) -> None:
        """Payment prints, records, updates stock and deposits cash."""
        observer = MagicMock()
        session.add_revenue_observer(observer)
        session.start_sale()
        session.scan_item(1)
        session.scan_item(2)

        change = session.pay(100)

        assert change == Decimal("62.50")
        assert "Begin receipt" in receipt_stream.getvalue()
        assert accounting.total_revenue == Decimal("37.50")
        assert catalog.stock_of(1) == 33
        assert catalog.stock_of(2) == 56
        assert register.balance == Decimal("37.50")
        observer.assert_called_once_with(Decimal("37.50"))

    def test_second_payment_is_ignored(self, session, accounting, register) -> None:
        observers = [MagicMock(), MagicMock()]
        session.add_revenue_observers(observers)
        session.start_sale()
        session.scan_item(1)

        assert session.pay(20) == Decimal("7.50")
        assert session.pay(50) == Decimal("7.50")

        assert len(accounting.sales) == 1
        assert register.balance == Decimal("12.50")
        for observer in observers:
            assert observer.call_count == 1

    def test_insufficient_payment(self, session, accounting) -> None:
        session.start_sale()
        session.scan_item(2)
        with pytest.raises(InvalidPaymentError):
            session.pay(10)
        assert not session.sale.is_paid
        assert accounting.sales == []

    def test_negative_payment(self, session) -> None:
        session.start_sale()
        with pytest.raises(NegativeAmountError):
            session.pay(-1)

    def test_requires_sale(self, session) -> None:
        with pytest.raises(NoSaleInProgressError):
            session.pay(10)

    def test_observers_run_in_order(self, session) -> None:
        calls = []
        session.add_revenue_observer(lambda total: calls.append(("first", total)))
        session.add_revenue_observer(lambda total: calls.append(("second", total)))
        session.start_sale()
        session.scan_item(3)
        session.pay(10)
        assert calls == [("first", Decimal("10.00")), ("second", Decimal("10.00"))]
