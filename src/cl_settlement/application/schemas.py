"""Pydantic schemas and cursor utilities for cl_settlement API."""

import base64
import json

from pydantic import BaseModel, Field

from src.cl_common.fixed_point import format_fixed
from src.cl_settlement.domain.models import PurchaseRecord
from src.cl_settlement.infrastructure.journal import JournalEntry

# ---------------------------------------------------------------------------
# Cursor-based pagination utilities
# ---------------------------------------------------------------------------


def cursor_encode(last_seq: int) -> str:
    """Encode a journal sequence number into an opaque Base64 cursor string."""
    payload = json.dumps({"seq": last_seq})
    return base64.b64encode(payload.encode()).decode()


def cursor_decode(cursor: str | None) -> int | None:
    """Decode a cursor string back to the last seen seq. Returns None on error."""
    if cursor is None:
        return None
    try:
        payload = json.loads(base64.b64decode(cursor.encode()).decode())
        seq = int(payload["seq"])
    except (ValueError, KeyError, TypeError):
        return None
    return seq if seq >= 0 else None


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class PurchaseRequest(BaseModel):
    item_id: int = Field(..., ge=1)
    paid_amount: int = Field(..., ge=0, description="Smallest settlement units sent with the call")


class WithdrawRequest(BaseModel):
    amount: int = Field(..., gt=0, description="Smallest settlement units")


class TransferRequest(BaseModel):
    recipient: str = Field(..., description="Recipient address; the null address is rejected")
    amount: int = Field(..., gt=0, description="Smallest settlement units")


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class AmountOwedResponse(BaseModel):
    item_id: int
    amount_owed: int
    amount_owed_display: str


class PurchaseResponse(BaseModel):
    item_id: int
    payer: str
    paid_amount: int
    amount_owed: int
    amount_owed_display: str
    refund: int
    rate: int
    custodied_balance: int

    @classmethod
    def from_record(cls, record: PurchaseRecord, balance: int) -> "PurchaseResponse":
        return cls(
            item_id=record.item_id,
            payer=record.payer,
            paid_amount=record.paid_amount,
            amount_owed=record.amount_owed,
            amount_owed_display=format_fixed(record.amount_owed),
            refund=record.refund,
            rate=record.rate,
            custodied_balance=balance,
        )


class BalanceResponse(BaseModel):
    custodied_balance: int
    custodied_balance_display: str

    @classmethod
    def from_units(cls, balance: int) -> "BalanceResponse":
        return cls(custodied_balance=balance, custodied_balance_display=format_fixed(balance))


class PayoutResponse(BaseModel):
    recipient: str
    amount: int
    custodied_balance: int


class EventItem(BaseModel):
    seq: int
    event_type: str
    payload: dict[str, object]
    created_at: str  # ISO8601 string

    @classmethod
    def from_entry(cls, entry: JournalEntry) -> "EventItem":
        return cls(
            seq=entry.seq,
            event_type=entry.event.event_type.value,
            payload=entry.event.to_payload(),
            created_at=entry.created_at.isoformat(),
        )


class EventListResponse(BaseModel):
    items: list[EventItem]
    next_cursor: str | None
    has_more: bool
