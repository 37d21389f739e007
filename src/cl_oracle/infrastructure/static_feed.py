"""In-process price feed for local runs and tests.

Each set_price() opens a new round answered in that same round; the
override keyword arguments let callers reproduce feed malfunctions.
"""

from src.cl_common.datetime_utils import unix_now
from src.cl_oracle.domain.models import OracleReading


class StaticPriceFeed:
    def __init__(self, raw_value: int, precision: int = 8, observed_at: int | None = None) -> None:
        self._precision = precision
        self._reading = OracleReading(
            sequence_id=1,
            raw_value=raw_value,
            precision=precision,
            observed_at=unix_now() if observed_at is None else observed_at,
            answered_in_sequence=1,
        )
        self.reads = 0

    async def latest_reading(self) -> OracleReading:
        self.reads += 1
        return self._reading

    async def precision(self) -> int:
        return self._precision

    def set_price(
        self,
        raw_value: int,
        observed_at: int | None = None,
        answered_in_sequence: int | None = None,
    ) -> OracleReading:
        sequence_id = self._reading.sequence_id + 1
        self._reading = OracleReading(
            sequence_id=sequence_id,
            raw_value=raw_value,
            precision=self._precision,
            observed_at=unix_now() if observed_at is None else observed_at,
            answered_in_sequence=(
                sequence_id if answered_in_sequence is None else answered_in_sequence
            ),
        )
        return self._reading
