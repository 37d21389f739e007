"""Domain events: one per committed catalog or ledger mutation.

Each event carries enough identifiers and amounts for an external observer to
rebuild ledger history without reading engine state.
"""

from dataclasses import asdict, dataclass
from typing import ClassVar

from src.cl_common.enums import EventType


@dataclass(frozen=True)
class LedgerEvent:
    event_type: ClassVar[EventType]

    def to_payload(self) -> dict[str, object]:
        return asdict(self)


@dataclass(frozen=True)
class ItemAdded(LedgerEvent):
    event_type: ClassVar[EventType] = EventType.ITEM_ADDED
    item_id: int
    name: str
    reference_price: int


@dataclass(frozen=True)
class PriceUpdated(LedgerEvent):
    event_type: ClassVar[EventType] = EventType.PRICE_UPDATED
    item_id: int
    old_price: int
    new_price: int


@dataclass(frozen=True)
class ItemDeleted(LedgerEvent):
    event_type: ClassVar[EventType] = EventType.ITEM_DELETED
    item_id: int


@dataclass(frozen=True)
class PurchaseMade(LedgerEvent):
    event_type: ClassVar[EventType] = EventType.PURCHASE_MADE
    item_id: int
    payer: str
    paid_amount: int
    amount_owed: int
    refund: int


@dataclass(frozen=True)
class BalanceWithdrawn(LedgerEvent):
    event_type: ClassVar[EventType] = EventType.BALANCE_WITHDRAWN
    recipient: str
    amount: int
    balance_after: int


@dataclass(frozen=True)
class BalanceTransferred(LedgerEvent):
    event_type: ClassVar[EventType] = EventType.BALANCE_TRANSFERRED
    recipient: str
    amount: int
    balance_after: int
