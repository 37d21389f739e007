"""Unit tests for SettlementApplicationService: payment intake and event paging."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.cl_common.errors import InsufficientPaymentError, ItemUnavailableError
from src.cl_settlement.application.schemas import (
    BalanceResponse,
    PurchaseResponse,
    cursor_decode,
    cursor_encode,
)
from src.cl_settlement.application.service import SettlementApplicationService
from src.cl_settlement.infrastructure.journal import EventJournal
from tests.harness import LedgerHarness

OWED_1USD = 500000000000000


def _service(harness: LedgerHarness) -> SettlementApplicationService:
    return SettlementApplicationService(harness.ledger, harness.account, harness.journal)


class TestPurchase:
    async def test_returns_purchase_response(self, harness: LedgerHarness) -> None:
        item = await harness.catalog.add_item("widget", 1)
        result = await _service(harness).purchase(item.id, OWED_1USD + 1, "alice")

        assert isinstance(result, PurchaseResponse)
        assert result.amount_owed == OWED_1USD
        assert result.amount_owed_display == "0.0005"
        assert result.refund == 1
        assert result.custodied_balance == OWED_1USD + 1

    async def test_holdings_reflect_net_payment(self, harness: LedgerHarness) -> None:
        item = await harness.catalog.add_item("widget", 1)
        await _service(harness).purchase(item.id, 2 * OWED_1USD, "alice")
        assert harness.account.holdings == OWED_1USD

    async def test_failed_purchase_bounces_payment(self, harness: LedgerHarness) -> None:
        item = await harness.catalog.add_item("widget", 1)
        with pytest.raises(InsufficientPaymentError):
            await _service(harness).purchase(item.id, OWED_1USD - 1, "alice")
        assert harness.account.holdings == 0
        assert harness.ledger.custodied_balance == 0

    async def test_unknown_item_bounces_payment(self, harness: LedgerHarness) -> None:
        with pytest.raises(ItemUnavailableError):
            await _service(harness).purchase(42, OWED_1USD, "alice")
        assert harness.account.holdings == 0

    async def test_intake_bounce_called_with_full_amount(self) -> None:
        ledger = MagicMock()
        ledger.purchase = AsyncMock(side_effect=ItemUnavailableError(1))
        intake = MagicMock()
        svc = SettlementApplicationService(ledger, intake, EventJournal())

        with pytest.raises(ItemUnavailableError):
            await svc.purchase(1, 777, "alice")

        intake.receive.assert_called_once_with("alice", 777)
        intake.bounce.assert_called_once_with("alice", 777)

    async def test_crashing_subscriber_does_not_undo_committed_purchase(
        self, harness: LedgerHarness
    ) -> None:
        def explode(entry: object) -> None:
            raise RuntimeError("observer crashed")

        harness.journal.subscribe(explode)
        item = await harness.catalog.add_item("widget", 1)
        result = await _service(harness).purchase(item.id, OWED_1USD + 10, "alice")

        assert result.refund == 10
        assert harness.ledger.custodied_balance == OWED_1USD + 10
        assert harness.account.holdings == OWED_1USD
        assert harness.account.paid_out["alice"] == 10


class TestQueries:
    async def test_amount_owed(self, harness: LedgerHarness) -> None:
        item = await harness.catalog.add_item("widget", 5)
        result = await _service(harness).amount_owed(item.id)
        assert result.amount_owed == 2500000000000000
        assert result.amount_owed_display == "0.0025"

    async def test_balance(self, harness: LedgerHarness) -> None:
        item = await harness.catalog.add_item("widget", 1)
        await harness.pay(item.id, OWED_1USD)
        result = _service(harness).get_balance()
        assert isinstance(result, BalanceResponse)
        assert result.custodied_balance == OWED_1USD
        assert result.custodied_balance_display == "0.0005"


class TestPayouts:
    async def test_withdraw_and_transfer(self, harness: LedgerHarness) -> None:
        item = await harness.catalog.add_item("widget", 1)
        await harness.pay(item.id, OWED_1USD)
        svc = _service(harness)

        w = await svc.withdraw(100, "owner")
        t = await svc.transfer_to("0xabc", 200)

        assert (w.recipient, w.amount, w.custodied_balance) == ("owner", 100, OWED_1USD - 100)
        assert (t.recipient, t.amount, t.custodied_balance) == ("0xabc", 200, OWED_1USD - 300)


class TestListEvents:
    async def test_pages_with_cursor(self, harness: LedgerHarness) -> None:
        for i in range(5):
            await harness.catalog.add_item(f"item-{i}", i + 1)
        svc = _service(harness)

        first = svc.list_events(None, 2)
        assert [e.seq for e in first.items] == [1, 2]
        assert first.has_more is True
        assert first.items[0].event_type == "ITEM_ADDED"

        second = svc.list_events(first.next_cursor, 2)
        assert [e.seq for e in second.items] == [3, 4]

        last = svc.list_events(second.next_cursor, 2)
        assert [e.seq for e in last.items] == [5]
        assert last.has_more is False
        assert last.next_cursor is None

    async def test_empty_journal(self, harness: LedgerHarness) -> None:
        result = _service(harness).list_events(None, 10)
        assert result.items == []
        assert result.has_more is False


class TestCursor:
    def test_round_trip(self) -> None:
        assert cursor_decode(cursor_encode(17)) == 17

    def test_none(self) -> None:
        assert cursor_decode(None) is None

    @pytest.mark.parametrize("bad", ["not-base64!!", "e30=", "W10="])
    def test_garbage_returns_none(self, bad: str) -> None:
        # "e30=" is {} and "W10=" is []
        assert cursor_decode(bad) is None
