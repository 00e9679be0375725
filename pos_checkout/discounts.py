"""Discount variants, rules and the discount catalog.

Business Rules:
1. A fixed discount never takes more than the total it is applied to
2. A percentage discount takes ``percent`` of the total it is applied to
3. Within one axis (item, customer, total threshold) percentages stack
   multiplicatively, so an axis can never exceed 100%
4. Across axes the resulting discounts add up on the sale
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional, Tuple, Union

from .errors import InvalidDiscountError, errmsg
from .models import SaleLine
from .money import ZERO, percent_of, round2, round_percent, to_money
from .validation import require_in_range, require_non_negative


@dataclass(frozen=True)
class FixedDiscount:
    amount: Decimal

    def __post_init__(self):
        object.__setattr__(self, "amount", to_money(self.amount))
        require_non_negative(self.amount, InvalidDiscountError, errmsg.FIXED_DISCOUNT_NEGATIVE)

    def apply(self, total: Decimal) -> Decimal:
        return min(self.amount, total)


@dataclass(frozen=True)
class PercentageDiscount:
    percent: Decimal

    def __post_init__(self):
        object.__setattr__(self, "percent", to_money(self.percent))
        require_in_range(self.percent, 0, 100, InvalidDiscountError, errmsg.PERCENTAGE_RANGE)

    def apply(self, total: Decimal) -> Decimal:
        return percent_of(total, self.percent)


Discount = Union[FixedDiscount, PercentageDiscount]


@dataclass(frozen=True)
class DiscountRule:
    """A stored discount and what it matches on.

    A rule matches on whichever of ``item_id``, ``customer_id`` or
    ``total_threshold`` is set.
    """
    id: int
    item_id: Optional[int] = None
    customer_id: Optional[int] = None
    total_threshold: Optional[Decimal] = None
    fixed_amount: Decimal = ZERO
    percent: int = 0
    active: bool = True

    def __post_init__(self):
        object.__setattr__(self, "fixed_amount", to_money(self.fixed_amount))
        if self.total_threshold is not None:
            object.__setattr__(self, "total_threshold", to_money(self.total_threshold))
        require_non_negative(self.id, InvalidDiscountError, errmsg.DISCOUNT_ID_NEGATIVE)
        require_non_negative(self.fixed_amount, InvalidDiscountError, errmsg.FIXED_DISCOUNT_NEGATIVE)
        require_in_range(self.percent, 0, 100, InvalidDiscountError, errmsg.PERCENTAGE_RANGE)

    def is_fixed(self) -> bool:
        return self.fixed_amount > 0

    def is_percentage(self) -> bool:
        return self.percent > 0

    def discount(self) -> Discount:
        if self.is_fixed():
            return FixedDiscount(self.fixed_amount)
        return PercentageDiscount(self.percent)

    def matches_item(self, item_id: int) -> bool:
        return self.active and self.item_id is not None and self.item_id == item_id

    def matches_customer(self, customer_id: int) -> bool:
        return self.active and self.customer_id is not None and self.customer_id == customer_id

    def matches_total(self, total: Decimal) -> bool:
        return (
            self.active
            and self.total_threshold is not None
            and self.total_threshold > 0
            and total >= self.total_threshold
        )


def compound_percent(rules: Iterable[DiscountRule]) -> Decimal:
    """Stack percentages as ``1 - prod(1 - p)`` and return a whole percent."""
    remaining = Decimal(1)
    for rule in rules:
        remaining *= 1 - Decimal(rule.percent) / 100
    return round_percent(1 - remaining)


class DiscountCatalog:
    """Fixed set of discount rules, loaded once and never mutated."""

    def __init__(self, rules: Iterable[DiscountRule]):
        self._rules: Tuple[DiscountRule, ...] = tuple(rules)

    @property
    def rules(self) -> Tuple[DiscountRule, ...]:
        return self._rules

    def discounts_for_items(self, lines: Iterable[SaleLine]) -> Decimal:
        """Fixed amount equivalent of all item discounts for the given lines."""
        total = ZERO
        for line in lines:
            line_total = line.gross_total()
            for rule in self._rules:
                if rule.matches_item(line.item.id):
                    total += rule.discount().apply(line_total)
        return round2(total)

    def discounts_for_customer(self, customer_id: int) -> Decimal:
        """Equivalent single percentage of all discounts for the customer."""
        return compound_percent(
            rule for rule in self._rules
            if rule.matches_customer(customer_id) and rule.is_percentage()
        )

    def discounts_for_total(self, total) -> Decimal:
        """Equivalent single percentage of all threshold discounts reached by ``total``."""
        total = to_money(total)
        return compound_percent(
            rule for rule in self._rules
            if rule.matches_total(total) and rule.is_percentage()
        )

    @classmethod
    def default(cls) -> "DiscountCatalog":
        """The store's standing discounts."""
        return cls([
            DiscountRule(id=1, item_id=1, percent=10),
            DiscountRule(id=2, item_id=2, percent=10),
            DiscountRule(id=3, item_id=3, percent=10),
            DiscountRule(id=4, item_id=4, percent=10),
            DiscountRule(id=5, customer_id=1, percent=10),
            DiscountRule(id=6, customer_id=2, percent=10),
            DiscountRule(id=7, total_threshold=Decimal(100), percent=10),
            DiscountRule(id=8, total_threshold=Decimal(50), percent=10),
        ])
