"""Append-only event journal.

Entries get a monotonically increasing sequence number starting at 1; the
sequence doubles as the pagination cursor for observers.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from src.cl_common.datetime_utils import utc_now
from src.cl_settlement.domain.events import LedgerEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JournalEntry:
    seq: int
    event: LedgerEvent
    created_at: datetime


class EventJournal:
    def __init__(self) -> None:
        self._entries: list[JournalEntry] = []
        self._subscribers: list[Callable[[JournalEntry], None]] = []

    def __len__(self) -> int:
        return len(self._entries)

    def subscribe(self, callback: Callable[[JournalEntry], None]) -> None:
        self._subscribers.append(callback)

    def emit(self, event: LedgerEvent) -> JournalEntry:
        entry = JournalEntry(seq=len(self._entries) + 1, event=event, created_at=utc_now())
        self._entries.append(entry)
        logger.info("event #%d %s %s", entry.seq, event.event_type.value, event.to_payload())
        for callback in self._subscribers:
            # Emitted after commit: observer failures are logged, never raised
            try:
                callback(entry)
            except Exception:
                logger.exception("Subscriber %r failed on event #%d", callback, entry.seq)
        return entry

    def list_after(self, after_seq: int | None, limit: int) -> list[JournalEntry]:
        """Entries with seq > after_seq (all when None), oldest first."""
        start = after_seq or 0
        return self._entries[start:start + limit]
