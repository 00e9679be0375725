"""Item catalog and stock levels."""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional

import structlog

from .errors import InventoryUnavailableError, ItemNotFoundError
from .models import ItemCatalogEntry, SaleSnapshot

logger = structlog.get_logger()


@dataclass
class StockEntry:
    item: ItemCatalogEntry
    on_hand: int


class ItemCatalog:
    """In-memory stand-in for the external inventory system.

    Ids listed in ``offline_item_ids`` behave as if the inventory database
    could not be reached when they are looked up.
    """

    def __init__(
        self,
        stock: Iterable[StockEntry],
        offline_item_ids: Iterable[int] = (),
        log: Optional[structlog.BoundLogger] = None,
    ) -> None:
        self._stock: Dict[int, StockEntry] = {entry.item.id: entry for entry in stock}
        self._offline = frozenset(offline_item_ids)
        self.log = log or logger.bind(component="inventory")

    def lookup_item(self, item_id: int) -> ItemCatalogEntry:
        if item_id in self._offline:
            self.log.error("inventory_unreachable", item_id=item_id)
            raise InventoryUnavailableError(item_id)
        entry = self._stock.get(item_id)
        if entry is None:
            raise ItemNotFoundError(item_id)
        return entry.item

    def stock_of(self, item_id: int) -> int:
        entry = self._stock.get(item_id)
        if entry is None:
            raise ItemNotFoundError(item_id)
        return entry.on_hand

    def items(self) -> list[ItemCatalogEntry]:
        return [entry.item for entry in self._stock.values()]

    def update_inventory(self, snapshot: SaleSnapshot) -> None:
        """Take sold quantities off the shelf."""
        for line in snapshot.lines:
            entry = self._stock.get(line.item.id)
            if entry is None:
                continue
            entry.on_hand -= line.quantity
            self.log.info(
                "stock_updated",
                item_id=line.item.id,
                sold=line.quantity,
                on_hand=entry.on_hand,
            )

    @classmethod
    def default(cls, offline_item_ids: Iterable[int] = ()) -> "ItemCatalog":
        return cls(
            [
                StockEntry(ItemCatalogEntry(1, "Apple", "10.00", 25), 34),
                StockEntry(ItemCatalogEntry(2, "Banana", "20.00", 25), 57),
                StockEntry(ItemCatalogEntry(3, "Orange", "8.00", 25), 21),
                StockEntry(ItemCatalogEntry(4, "Milk", "20.00", 6), 88),
                StockEntry(ItemCatalogEntry(5, "Bread", "15.00", 12), 49),
            ],
            offline_item_ids=offline_item_ids,
        )
