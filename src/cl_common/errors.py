"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth
  2xxx: Oracle
  3xxx: Catalog
  4xxx: Settlement
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth ---

class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Invalid or expired token", 401)


class PrivilegedCallerRequiredError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "Privileged caller required", 403)


# --- 2xxx: Oracle ---

class InvalidOracleAddressError(AppError):
    def __init__(self) -> None:
        super().__init__(2001, "Oracle feed is not configured", 500)


class StalePriceError(AppError):
    def __init__(self, age_seconds: int, heartbeat_seconds: int) -> None:
        super().__init__(
            2002,
            f"Stale price: reading is {age_seconds}s old, heartbeat is {heartbeat_seconds}s",
            503,
        )


class InvalidPriceError(AppError):
    """Non-positive price, either from the oracle or supplied to the catalog."""


class InvalidOraclePriceError(InvalidPriceError):
    def __init__(self, raw_value: int) -> None:
        super().__init__(2003, f"Invalid oracle price: {raw_value}", 503)


class StaleRoundError(AppError):
    def __init__(self, sequence_id: int, answered_in_sequence: int) -> None:
        super().__init__(
            2004,
            f"Stale round: answered in {answered_in_sequence}, current round {sequence_id}",
            503,
        )


class OracleUnavailableError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(2005, f"Oracle unavailable: {detail}", 503)


# --- 3xxx: Catalog ---

class ItemUnavailableError(AppError):
    def __init__(self, item_id: int) -> None:
        super().__init__(3001, f"Item unavailable: {item_id}", 404)


class InvalidItemPriceError(InvalidPriceError):
    def __init__(self, price: int) -> None:
        super().__init__(3002, f"Invalid item price: {price}", 422)


# --- 4xxx: Settlement ---

class InsufficientPaymentError(AppError):
    def __init__(self, required: int, paid: int) -> None:
        super().__init__(
            4001,
            f"Insufficient payment: required {required}, paid {paid}",
            422,
        )


class InsufficientBalanceError(AppError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            4002,
            f"Insufficient balance: required {required}, available {available}",
            422,
        )


class InvalidRecipientError(AppError):
    def __init__(self) -> None:
        super().__init__(4003, "Invalid recipient", 422)


class TransactionFailedError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(4004, f"Transaction failed: {detail}", 502)


class ReentrantCallError(AppError):
    def __init__(self) -> None:
        super().__init__(4005, "Re-entrant ledger call rejected", 409)


# --- 9xxx: System ---

class ArithmeticOverflowError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(9001, f"Arithmetic overflow: {detail}", 500)


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
