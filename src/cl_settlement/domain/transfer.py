"""Currency transfer Protocol: dependency inversion for the execution environment.

transfer() returns False (or raises) when the currency did not move; the
ledger treats both the same way and rolls the operation back.
"""

from typing import Protocol


class SettlementAccountProtocol(Protocol):
    async def transfer(self, recipient: str, amount: int) -> bool: ...


class InboundPaymentProtocol(Protocol):
    """Currency attached to a purchase call: accepted up front, bounced on failure."""

    def receive(self, payer: str, amount: int) -> None: ...

    def bounce(self, payer: str, amount: int) -> None: ...
