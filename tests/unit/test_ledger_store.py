"""Unit tests for LedgerStore and LedgerAccount: arena lookups and unit of work."""

import asyncio

import pytest

from src.cl_common.errors import InsufficientBalanceError, ItemUnavailableError, ReentrantCallError
from src.cl_settlement.domain.models import LedgerAccount, is_null_recipient
from src.cl_settlement.domain.store import LedgerStore
from tests.harness import LedgerHarness


class TestLedgerAccount:
    def test_credit_and_debit(self) -> None:
        acct = LedgerAccount()
        assert acct.credit(100) == 100
        assert acct.debit(40) == 60

    def test_debit_past_balance_raises(self) -> None:
        acct = LedgerAccount(custodied_balance=10)
        with pytest.raises(InsufficientBalanceError) as exc_info:
            acct.debit(11)
        assert "11" in exc_info.value.message
        assert acct.custodied_balance == 10

    def test_negative_amounts_rejected(self) -> None:
        acct = LedgerAccount(custodied_balance=10)
        with pytest.raises(ValueError):
            acct.credit(-1)
        with pytest.raises(ValueError):
            acct.debit(-1)


class TestNullRecipient:
    @pytest.mark.parametrize("recipient", [None, "", " ", "0x0000000000000000000000000000000000000000"])
    def test_null(self, recipient: str | None) -> None:
        assert is_null_recipient(recipient) is True

    def test_real_address(self) -> None:
        assert is_null_recipient("0x1111111111111111111111111111111111111111") is False


class TestLookups:
    async def test_get_item_unknown(self) -> None:
        with pytest.raises(ItemUnavailableError):
            LedgerStore().get_item(1)

    async def test_get_available_item_hides_tombstone(self, harness: LedgerHarness) -> None:
        item = await harness.catalog.add_item("widget", 1)
        await harness.catalog.delete_item(item.id)
        assert harness.store.get_item(item.id) is item
        with pytest.raises(ItemUnavailableError):
            harness.store.get_available_item(item.id)


class TestUnitOfWork:
    async def test_nested_unit_rejected(self) -> None:
        store = LedgerStore()
        async with store.unit_of_work():
            assert store.in_unit_of_work is True
            with pytest.raises(ReentrantCallError):
                async with store.unit_of_work():
                    pass
        assert store.in_unit_of_work is False

    async def test_independent_stores_nest(self) -> None:
        a, b = LedgerStore(), LedgerStore()
        async with a.unit_of_work():
            async with b.unit_of_work():
                assert a.in_unit_of_work and b.in_unit_of_work

    async def test_other_tasks_wait_instead_of_failing(self) -> None:
        store = LedgerStore()
        order: list[str] = []

        async def worker(name: str, hold: float) -> None:
            async with store.unit_of_work():
                order.append(f"{name}-in")
                await asyncio.sleep(hold)
                order.append(f"{name}-out")

        await asyncio.gather(worker("a", 0.01), worker("b", 0))
        assert order == ["a-in", "a-out", "b-in", "b-out"]
