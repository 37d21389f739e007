"""SettlementApplicationService: thin composition layer over SettlementLedger.

purchase() accepts the inbound payment before settling and bounces it in full
if settlement raises, so a failed purchase leaves holdings untouched.
"""

import logging

from src.cl_common.fixed_point import format_fixed
from src.cl_settlement.application.schemas import (
    AmountOwedResponse,
    BalanceResponse,
    EventItem,
    EventListResponse,
    PayoutResponse,
    PurchaseResponse,
    cursor_decode,
    cursor_encode,
)
from src.cl_settlement.domain.transfer import InboundPaymentProtocol
from src.cl_settlement.engine.ledger import SettlementLedger
from src.cl_settlement.infrastructure.journal import EventJournal

logger = logging.getLogger(__name__)


class SettlementApplicationService:
    def __init__(
        self,
        ledger: SettlementLedger,
        intake: InboundPaymentProtocol,
        journal: EventJournal,
    ) -> None:
        self._ledger = ledger
        self._intake = intake
        self._journal = journal

    async def amount_owed(self, item_id: int) -> AmountOwedResponse:
        owed = await self._ledger.amount_owed(item_id)
        return AmountOwedResponse(
            item_id=item_id, amount_owed=owed, amount_owed_display=format_fixed(owed)
        )

    async def purchase(self, item_id: int, paid_amount: int, payer: str) -> PurchaseResponse:
        self._intake.receive(payer, paid_amount)
        try:
            record = await self._ledger.purchase(item_id, paid_amount, payer)
        except Exception:
            self._intake.bounce(payer, paid_amount)
            logger.warning("Purchase of item %d by %s failed; payment bounced", item_id, payer)
            raise
        return PurchaseResponse.from_record(record, self._ledger.custodied_balance)

    def get_balance(self) -> BalanceResponse:
        return BalanceResponse.from_units(self._ledger.custodied_balance)

    async def withdraw(self, amount: int, caller: str) -> PayoutResponse:
        balance = await self._ledger.withdraw(amount, caller)
        return PayoutResponse(recipient=caller, amount=amount, custodied_balance=balance)

    async def transfer_to(self, recipient: str, amount: int) -> PayoutResponse:
        balance = await self._ledger.transfer_to(recipient, amount)
        return PayoutResponse(recipient=recipient, amount=amount, custodied_balance=balance)

    def list_events(self, cursor: str | None, limit: int) -> EventListResponse:
        after_seq = cursor_decode(cursor)
        # Fetch limit+1 to detect has_more
        entries = self._journal.list_after(after_seq, limit + 1)
        has_more = len(entries) > limit
        page = entries[:limit]
        next_cursor = cursor_encode(page[-1].seq) if has_more and page else None
        return EventListResponse(
            items=[EventItem.from_entry(e) for e in page],
            next_cursor=next_cursor,
            has_more=has_more,
        )
