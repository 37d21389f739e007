"""In-memory settlement account: the engine's actual currency holdings.

Stands in for the execution environment's native-currency account during local
runs and tests. `holdings` is everything the account holds, including incidental
inflows; the ledger's custodied balance is tracked separately.
"""

import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class InMemorySettlementAccount:
    def __init__(self, holdings: int = 0) -> None:
        self.holdings = holdings
        self.paid_out: dict[str, int] = defaultdict(int)
        self.blocked: set[str] = set()
        # Called before the currency moves; lets tests simulate a recipient
        # that calls back into the ledger while being paid.
        self.on_transfer: Callable[[str, int], Awaitable[None]] | None = None

    def receive(self, payer: str, amount: int) -> None:
        """Inbound payment attached to a purchase call."""
        if amount < 0:
            raise ValueError(f"amount must be non-negative, got {amount}")
        self.holdings += amount
        logger.debug("received %d from %s (holdings=%d)", amount, payer, self.holdings)

    def bounce(self, payer: str, amount: int) -> None:
        """Return an inbound payment that was never accepted."""
        self.holdings -= amount
        logger.debug("bounced %d back to %s (holdings=%d)", amount, payer, self.holdings)

    async def transfer(self, recipient: str, amount: int) -> bool:
        if self.on_transfer is not None:
            await self.on_transfer(recipient, amount)
        if recipient in self.blocked or amount > self.holdings:
            return False
        self.holdings -= amount
        self.paid_out[recipient] += amount
        return True
