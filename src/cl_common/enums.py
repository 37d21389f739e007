"""Global enums shared by catalog, settlement and the event journal."""

from enum import Enum


class ItemStatus(str, Enum):
    """Catalog item lifecycle: ACTIVE → DELETED is terminal (tombstone)."""
    ACTIVE = "ACTIVE"
    DELETED = "DELETED"


class EventType(str, Enum):
    ITEM_ADDED = "ITEM_ADDED"
    PRICE_UPDATED = "PRICE_UPDATED"
    ITEM_DELETED = "ITEM_DELETED"
    PURCHASE_MADE = "PURCHASE_MADE"
    BALANCE_WITHDRAWN = "BALANCE_WITHDRAWN"
    BALANCE_TRANSFERRED = "BALANCE_TRANSFERRED"
