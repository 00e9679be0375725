"""Revenue observers, called with each sale's total after payment."""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Callable, Optional, Union

import structlog

from .money import ZERO, to_money

logger = structlog.get_logger()

RevenueCallback = Callable[[Decimal], None]


class RevenueObserver(ABC):
    """Keeps a running revenue total and shows it after every sale.

    Subclasses implement ``show`` and ``handle_error``. Anything ``show`` raises goes to
    ``handle_error`` instead of back into the checkout.
    """

    def __init__(self) -> None:
        self.total_revenue: Decimal = ZERO

    def __call__(self, sale_total) -> None:
        self.total_revenue += to_money(sale_total)
        try:
            self.show()
        except Exception as e:
            self.handle_error(e)

    @abstractmethod
    def show(self) -> None:
        """Present the current ``total_revenue``."""

    @abstractmethod
    def handle_error(self, error: Exception) -> None:
        """Report a failure raised by ``show``."""


class RevenueLogView(RevenueObserver):
    """Reports the running total through the structured log."""

    def __init__(self, log: Optional[structlog.BoundLogger] = None) -> None:
        super().__init__()
        self.log = log or logger.bind(component="revenue_view")

    def show(self) -> None:
        self.log.info("total_revenue", total_revenue=str(self.total_revenue))

    def handle_error(self, error: Exception) -> None:
        self.log.error("revenue_view_failed", error=str(error))


class RevenueFileOutput(RevenueObserver):
    """Appends the running total to a text file."""

    def __init__(
        self,
        path: Union[str, Path],
        currency: str = "SEK",
        log: Optional[structlog.BoundLogger] = None,
    ) -> None:
        super().__init__()
        self.path = Path(path)
        self.currency = currency
        self.log = log or logger.bind(component="revenue_file")

    def show(self) -> None:
        stamp = datetime.now().strftime("[%Y-%m-%d %H:%M:%S]")
        with self.path.open("a", encoding="utf-8") as f:
            f.write(f"{stamp}\nTotal Revenue: {self.total_revenue} {self.currency}\n")

    def handle_error(self, error: Exception) -> None:
        self.log.error("revenue_file_write_failed", path=str(self.path), error=str(error))
