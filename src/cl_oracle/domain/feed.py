"""Price feed Protocol: the oracle read capability consumed by OracleGateway.

Unit tests inject a StaticPriceFeed or an AsyncMock conforming to this Protocol.
Infrastructure layer provides the HTTP implementation.
"""

from typing import Protocol

from src.cl_oracle.domain.models import OracleReading


class PriceFeedProtocol(Protocol):
    async def latest_reading(self) -> OracleReading: ...

    async def precision(self) -> int: ...
