"""Domain models for cl_settlement: pure dataclasses, no framework dependency."""

from dataclasses import dataclass
from datetime import datetime

from src.cl_common.errors import InsufficientBalanceError

# Null-address sentinel; "" and None are treated the same way
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def is_null_recipient(recipient: str | None) -> bool:
    return recipient is None or not recipient.strip() or recipient.lower() == ZERO_ADDRESS


@dataclass
class LedgerAccount:
    """Custodied balance, in smallest settlement-currency units.

    Tracks only what validated purchases brought in; incidental inflows to the
    underlying holdings are never counted.
    """

    custodied_balance: int = 0

    def credit(self, amount: int) -> int:
        if amount < 0:
            raise ValueError(f"Credit amount must be non-negative, got {amount}")
        self.custodied_balance += amount
        return self.custodied_balance

    def debit(self, amount: int) -> int:
        if amount < 0:
            raise ValueError(f"Debit amount must be non-negative, got {amount}")
        if amount > self.custodied_balance:
            raise InsufficientBalanceError(amount, self.custodied_balance)
        self.custodied_balance -= amount
        return self.custodied_balance


@dataclass
class PurchaseRecord:
    item_id: int
    payer: str
    paid_amount: int     # settlement units received
    amount_owed: int     # settlement units at `rate`
    refund: int          # paid_amount - amount_owed, returned to payer
    credited: int        # added to custodied balance
    rate: int            # canonical USD per settlement unit used for this purchase
    created_at: datetime
