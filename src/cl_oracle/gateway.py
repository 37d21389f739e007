"""OracleGateway: read one oracle reading, validate it, normalize it.

Checks run in a fixed order and fail fast:
  1. staleness:  now - observed_at > heartbeat        → StalePriceError
  2. validity:   raw_value <= 0                        → InvalidOraclePriceError
  3. round:      answered_in_sequence < sequence_id    → StaleRoundError

A reading whose precision falls outside 0..MAX_PRECISION is malformed feed
data and surfaces as OracleUnavailableError.

A reading exactly `heartbeat` seconds old is still fresh.
"""

import logging
from collections.abc import Callable

from src.cl_common.datetime_utils import unix_now
from src.cl_common.errors import (
    InvalidOracleAddressError,
    InvalidOraclePriceError,
    OracleUnavailableError,
    StalePriceError,
    StaleRoundError,
)
from src.cl_common.fixed_point import MAX_PRECISION, normalize
from src.cl_oracle.domain.feed import PriceFeedProtocol

logger = logging.getLogger(__name__)

DEFAULT_HEARTBEAT_SECONDS: int = 3600


class OracleGateway:
    def __init__(
        self,
        feed: PriceFeedProtocol | None,
        heartbeat_seconds: int = DEFAULT_HEARTBEAT_SECONDS,
        clock: Callable[[], int] | None = None,
    ) -> None:
        if feed is None:
            raise InvalidOracleAddressError()
        if heartbeat_seconds <= 0:
            raise ValueError(f"heartbeat_seconds must be positive, got {heartbeat_seconds}")
        self._feed = feed
        self._heartbeat = heartbeat_seconds
        self._clock = clock or unix_now

    @property
    def heartbeat_seconds(self) -> int:
        return self._heartbeat

    async def precision(self) -> int:
        return await self._feed.precision()

    async def fetch_validated_rate(self) -> int:
        """Return the current rate at canonical precision.

        Call once per pricing decision and reuse the result; a second call
        may observe a different round.
        """
        reading = await self._feed.latest_reading()

        age = self._clock() - reading.observed_at
        if age > self._heartbeat:
            logger.warning(
                "Oracle reading rejected: stale (age=%ds, heartbeat=%ds, round=%d)",
                age, self._heartbeat, reading.sequence_id,
            )
            raise StalePriceError(age, self._heartbeat)

        if reading.raw_value <= 0:
            logger.warning(
                "Oracle reading rejected: non-positive answer %d (round=%d)",
                reading.raw_value, reading.sequence_id,
            )
            raise InvalidOraclePriceError(reading.raw_value)

        if reading.answered_in_sequence < reading.sequence_id:
            logger.warning(
                "Oracle reading rejected: answered in round %d < current round %d",
                reading.answered_in_sequence, reading.sequence_id,
            )
            raise StaleRoundError(reading.sequence_id, reading.answered_in_sequence)

        if not 0 <= reading.precision <= MAX_PRECISION:
            logger.warning(
                "Oracle reading rejected: precision %d outside 0..%d (round=%d)",
                reading.precision, MAX_PRECISION, reading.sequence_id,
            )
            raise OracleUnavailableError(f"unsupported feed precision {reading.precision}")

        rate = normalize(reading.raw_value, reading.precision)
        if rate == 0:
            # Positive answer floored away by a precision above canonical
            raise InvalidOraclePriceError(reading.raw_value)
        logger.debug(
            "Oracle rate accepted: round=%d raw=%d precision=%d canonical=%d",
            reading.sequence_id, reading.raw_value, reading.precision, rate,
        )
        return rate
