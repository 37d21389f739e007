"""LedgerStore: the engine instance's catalog arena and custodied account.

Nothing here is module-level: every engine owns its own store, so tests can
run any number of independent ledgers side by side.

Mutations happen only inside `unit_of_work()`, which serializes them on one
asyncio.Lock. A mutating call issued from inside another unit of work on the
same store (e.g. from an external transfer callback) is rejected instead of
deadlocking on the lock.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from contextvars import ContextVar

from src.cl_catalog.domain.models import CatalogItem
from src.cl_common.errors import ItemUnavailableError, ReentrantCallError
from src.cl_settlement.domain.models import LedgerAccount

_active_stores: ContextVar[frozenset[int]] = ContextVar(
    "cl_active_ledger_stores", default=frozenset()
)


class LedgerStore:
    def __init__(self) -> None:
        self.items: dict[int, CatalogItem] = {}
        self.account = LedgerAccount()
        self._next_item_id = 1
        self._lock = asyncio.Lock()

    def allocate_item_id(self) -> int:
        item_id = self._next_item_id
        self._next_item_id += 1
        return item_id

    def get_item(self, item_id: int) -> CatalogItem:
        """Any status; tombstoned items stay queryable."""
        item = self.items.get(item_id)
        if item is None:
            raise ItemUnavailableError(item_id)
        return item

    def get_available_item(self, item_id: int) -> CatalogItem:
        item = self.get_item(item_id)
        if not item.available:
            raise ItemUnavailableError(item_id)
        return item

    @property
    def in_unit_of_work(self) -> bool:
        return id(self) in _active_stores.get()

    @asynccontextmanager
    async def unit_of_work(self) -> AsyncIterator["LedgerStore"]:
        if self.in_unit_of_work:
            raise ReentrantCallError()
        async with self._lock:
            token = _active_stores.set(_active_stores.get() | {id(self)})
            try:
                yield self
            finally:
                _active_stores.reset(token)
