"""CatalogService: add, reprice, soft-delete and query catalog items.

Prices arrive as whole USD units and are stored at canonical precision.
Mutations run inside the store's unit of work so they serialize with
purchases; deletion leaves a tombstone that stays queryable.
"""

import logging

from src.cl_catalog.domain.models import CatalogItem
from src.cl_common.datetime_utils import utc_now
from src.cl_common.enums import ItemStatus
from src.cl_common.errors import InvalidItemPriceError
from src.cl_common.fixed_point import to_canonical
from src.cl_settlement.domain.events import ItemAdded, ItemDeleted, PriceUpdated
from src.cl_settlement.domain.store import LedgerStore
from src.cl_settlement.infrastructure.journal import EventJournal

logger = logging.getLogger(__name__)


def _validate_price(price_usd: int) -> int:
    if price_usd <= 0:
        raise InvalidItemPriceError(price_usd)
    return to_canonical(price_usd)


class CatalogService:
    def __init__(self, store: LedgerStore, journal: EventJournal) -> None:
        self._store = store
        self._journal = journal

    async def add_item(self, name: str, price_usd: int) -> CatalogItem:
        reference_price = _validate_price(price_usd)
        async with self._store.unit_of_work() as store:
            now = utc_now()
            item = CatalogItem(
                id=store.allocate_item_id(),
                name=name,
                reference_price=reference_price,
                status=ItemStatus.ACTIVE,
                created_at=now,
                updated_at=now,
            )
            store.items[item.id] = item
            self._journal.emit(
                ItemAdded(item_id=item.id, name=name, reference_price=reference_price)
            )
        logger.info("Item added: id=%d price=%d", item.id, reference_price)
        return item

    async def update_price(self, item_id: int, price_usd: int) -> CatalogItem:
        new_price = _validate_price(price_usd)
        async with self._store.unit_of_work() as store:
            item = store.get_available_item(item_id)
            old_price = item.reference_price
            item.reference_price = new_price
            item.updated_at = utc_now()
            self._journal.emit(
                PriceUpdated(item_id=item_id, old_price=old_price, new_price=new_price)
            )
        return item

    async def delete_item(self, item_id: int) -> CatalogItem:
        async with self._store.unit_of_work() as store:
            item = store.get_available_item(item_id)
            item.status = ItemStatus.DELETED
            item.updated_at = utc_now()
            self._journal.emit(ItemDeleted(item_id=item_id))
        logger.info("Item deleted: id=%d", item_id)
        return item

    def get_item(self, item_id: int) -> CatalogItem:
        return self._store.get_item(item_id)

    def list_items(self, include_deleted: bool = False) -> list[CatalogItem]:
        items = sorted(self._store.items.values(), key=lambda i: i.id)
        if include_deleted:
            return items
        return [i for i in items if i.available]
