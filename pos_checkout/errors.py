"""Error types for the checkout core."""

from typing import Optional


class errmsg:
    """Error message constants for the checkout domain."""

    NO_SALE_IN_PROGRESS = "No sale in progress"
    SALE_CLOSED = "Sale is already paid"
    QUANTITY_POSITIVE = "Quantity must be greater than zero"
    AMOUNT_NEGATIVE = "Amount cannot be negative"
    AMOUNT_PAID_NEGATIVE = "Amount paid cannot be negative"
    PAYMENT_NEGATIVE = "Total price, amount paid, and change must be non-negative"
    PAYMENT_INSUFFICIENT = "Amount paid must be greater than or equal to the total price"
    PAYMENT_CHANGE_MISMATCH = "Change must be equal to amount paid minus total price"
    ITEM_ID_NEGATIVE = "Item ID cannot be negative"
    ITEM_PRICE_NEGATIVE = "Item price cannot be negative"
    ITEM_DESCRIPTION_REQUIRED = "Description cannot be empty"
    VAT_RANGE = "VAT must be between 0 and 100"
    DISCOUNT_ID_NEGATIVE = "Discount ID cannot be negative"
    FIXED_DISCOUNT_NEGATIVE = "Fixed discount cannot be negative"
    PERCENTAGE_RANGE = "Percentage discount must be between 0 and 100"


class CheckoutError(Exception):
    """Base class for checkout errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message


class ItemNotFoundError(CheckoutError):
    """No catalog entry exists for the scanned item id."""

    def __init__(self, item_id: int):
        super().__init__(f"item not found: {item_id}")
        self.item_id = item_id


class InventoryUnavailableError(CheckoutError):
    """The inventory system could not be reached."""

    def __init__(self, item_id: int, cause: Optional[Exception] = None):
        super().__init__(f"inventory unavailable while looking up item {item_id}", cause)
        self.item_id = item_id


class InvalidQuantityError(CheckoutError):
    """Quantity was zero or negative."""


class NoSaleInProgressError(CheckoutError):
    """Operation requires a started sale."""

    def __init__(self, message: str = errmsg.NO_SALE_IN_PROGRESS):
        super().__init__(message)


class NegativeAmountError(CheckoutError):
    """A monetary amount was negative."""


class InvalidPaymentError(CheckoutError):
    """Payment record invariants were violated."""


class InvalidItemError(CheckoutError):
    """Catalog entry fields were out of range."""


class InvalidDiscountError(CheckoutError):
    """Discount rule or discount value was out of range."""


class SaleClosedError(CheckoutError):
    """The sale was mutated after payment was recorded."""

    def __init__(self, message: str = errmsg.SALE_CLOSED):
        super().__init__(message)
