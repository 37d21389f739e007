"""SettlementLedger: purchase, withdraw and transfer against the custodied balance.

Every operation is one serialized unit of work with the same ordering:
  1. validate (item state, oracle rate, payment, balance, recipient)
  2. apply the ledger mutation
  3. issue the external currency transfer, last
  4. on transfer failure restore the pre-operation balance → TransactionFailedError
Events are emitted only once the unit of work has committed.

A purchase fetches the oracle rate exactly once; the same quote drives the
sufficiency check, the refund and the credited amount.
"""

import logging

from src.cl_common.datetime_utils import utc_now
from src.cl_common.errors import (
    AppError,
    InsufficientPaymentError,
    InvalidRecipientError,
    TransactionFailedError,
)
from src.cl_pricing.engine import PricingEngine
from src.cl_settlement.domain.events import BalanceTransferred, BalanceWithdrawn, PurchaseMade
from src.cl_settlement.domain.models import PurchaseRecord, is_null_recipient
from src.cl_settlement.domain.store import LedgerStore
from src.cl_settlement.domain.transfer import SettlementAccountProtocol
from src.cl_settlement.infrastructure.journal import EventJournal

logger = logging.getLogger(__name__)


class SettlementLedger:
    def __init__(
        self,
        store: LedgerStore,
        pricing: PricingEngine,
        account: SettlementAccountProtocol,
        journal: EventJournal,
        credit_full_payment: bool = True,
    ) -> None:
        self._store = store
        self._pricing = pricing
        self._account = account
        self._journal = journal
        self._credit_full_payment = credit_full_payment

    @property
    def custodied_balance(self) -> int:
        return self._store.account.custodied_balance

    async def amount_owed(self, item_id: int) -> int:
        item = self._store.get_available_item(item_id)
        return await self._pricing.amount_owed(item)

    async def purchase(self, item_id: int, paid_amount: int, payer: str) -> PurchaseRecord:
        if paid_amount < 0:
            raise ValueError(f"paid_amount must be non-negative, got {paid_amount}")

        async with self._store.unit_of_work() as store:
            item = store.get_available_item(item_id)
            quote = await self._pricing.quote(item)
            if paid_amount < quote.amount_owed:
                raise InsufficientPaymentError(quote.amount_owed, paid_amount)

            refund = paid_amount - quote.amount_owed
            credited = paid_amount if self._credit_full_payment else quote.amount_owed

            balance_before = store.account.custodied_balance
            try:
                store.account.credit(credited)
                if refund > 0:
                    await self._pay_out(payer, refund, "refund")
            except Exception:
                store.account.custodied_balance = balance_before
                raise

            record = PurchaseRecord(
                item_id=item.id,
                payer=payer,
                paid_amount=paid_amount,
                amount_owed=quote.amount_owed,
                refund=refund,
                credited=credited,
                rate=quote.rate,
                created_at=utc_now(),
            )
            logger.info(
                "Purchase committed: item=%d payer=%s paid=%d owed=%d refund=%d balance=%d",
                item.id, payer, paid_amount, quote.amount_owed, refund,
                store.account.custodied_balance,
            )
            self._journal.emit(PurchaseMade(
                item_id=item.id,
                payer=payer,
                paid_amount=paid_amount,
                amount_owed=quote.amount_owed,
                refund=refund,
            ))
            return record

    async def withdraw(self, amount: int, caller: str) -> int:
        """Pay `amount` of the custodied balance out to the privileged caller."""
        async with self._store.unit_of_work():
            balance_after = await self._debit_and_pay(caller, amount, "withdraw")
            self._journal.emit(
                BalanceWithdrawn(recipient=caller, amount=amount, balance_after=balance_after)
            )
            return balance_after

    async def transfer_to(self, recipient: str, amount: int) -> int:
        if is_null_recipient(recipient):
            raise InvalidRecipientError()
        async with self._store.unit_of_work():
            balance_after = await self._debit_and_pay(recipient, amount, "transfer")
            self._journal.emit(
                BalanceTransferred(recipient=recipient, amount=amount, balance_after=balance_after)
            )
            return balance_after

    async def _debit_and_pay(self, recipient: str, amount: int, purpose: str) -> int:
        account = self._store.account
        balance_before = account.custodied_balance
        balance_after = account.debit(amount)
        try:
            await self._pay_out(recipient, amount, purpose)
        except Exception:
            account.custodied_balance = balance_before
            raise
        logger.info("%s committed: %d to %s, balance=%d", purpose, amount, recipient, balance_after)
        return balance_after

    async def _pay_out(self, recipient: str, amount: int, purpose: str) -> None:
        try:
            ok = await self._account.transfer(recipient, amount)
        except AppError as exc:
            logger.warning("%s of %d to %s raised %s; rolling back", purpose, amount, recipient, exc.message)
            raise TransactionFailedError(f"{purpose} to {recipient} raised {exc.message}") from exc
        except Exception as exc:
            logger.warning(
                "%s of %d to %s raised %s; rolling back", purpose, amount, recipient, type(exc).__name__
            )
            raise TransactionFailedError(f"{purpose} to {recipient} raised {type(exc).__name__}") from exc
        if not ok:
            logger.warning("%s of %d to %s failed; rolling back", purpose, amount, recipient)
            raise TransactionFailedError(f"{purpose} of {amount} to {recipient}")
