"""Validation helpers for precondition checks.

Each helper raises the given error type with the given message when the
check fails, so callers keep a single line per rule.
"""

from decimal import Decimal
from typing import Type

from .errors import CheckoutError


def require_positive(value: int, error: Type[CheckoutError], error_msg: str) -> None:
    """Require that a value is greater than zero."""
    if value <= 0:
        raise error(error_msg)


def require_non_negative(value, error: Type[CheckoutError], error_msg: str) -> None:
    """Require that a value is zero or greater."""
    if value < 0:
        raise error(error_msg)


def require_in_range(value, low, high, error: Type[CheckoutError], error_msg: str) -> None:
    """Require that low <= value <= high."""
    if value < low or value > high:
        raise error(error_msg)


def require_not_blank(text: str, error: Type[CheckoutError], error_msg: str) -> None:
    """Require that a string has non-whitespace content."""
    if not text or not text.strip():
        raise error(error_msg)


def require_equal(actual: Decimal, expected: Decimal, error: Type[CheckoutError], error_msg: str) -> None:
    """Require that two amounts are exactly equal."""
    if actual != expected:
        raise error(error_msg)
