"""HTTP price feed: reads the latest round from a price-oracle service.

Wire format (GET {base_url}/latest):
    {"round_id": 42, "answer": 200000000000, "decimals": 8,
     "updated_at": 1760000000, "answered_in_round": 42}

GET {base_url}/decimals returns {"decimals": 8}.

Transport errors, non-2xx responses and malformed payloads all surface as
OracleUnavailableError. No retries: the caller decides when to try again.
"""

import logging

import httpx
from pydantic import BaseModel, Field, ValidationError

from src.cl_common.errors import InvalidOracleAddressError, OracleUnavailableError
from src.cl_common.fixed_point import MAX_PRECISION
from src.cl_oracle.domain.models import OracleReading

logger = logging.getLogger(__name__)


class RoundPayload(BaseModel):
    round_id: int
    answer: int
    decimals: int = Field(ge=0, le=MAX_PRECISION)
    updated_at: int
    answered_in_round: int

    def to_domain(self) -> OracleReading:
        return OracleReading(
            sequence_id=self.round_id,
            raw_value=self.answer,
            precision=self.decimals,
            observed_at=self.updated_at,
            answered_in_sequence=self.answered_in_round,
        )


class DecimalsPayload(BaseModel):
    decimals: int = Field(ge=0, le=MAX_PRECISION)


class HttpPriceFeed:
    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not base_url or not base_url.strip():
            raise InvalidOracleAddressError()
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def latest_reading(self) -> OracleReading:
        data = await self._get_json("/latest")
        try:
            return RoundPayload.model_validate(data).to_domain()
        except ValidationError as exc:
            raise OracleUnavailableError("malformed round payload") from exc

    async def precision(self) -> int:
        data = await self._get_json("/decimals")
        try:
            return DecimalsPayload.model_validate(data).decimals
        except ValidationError as exc:
            raise OracleUnavailableError("malformed decimals payload") from exc

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get_json(self, path: str) -> object:
        url = f"{self._base_url}{path}"
        try:
            resp = await self._client.get(url)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as exc:
            logger.warning("Oracle %s returned HTTP %d", url, exc.response.status_code)
            raise OracleUnavailableError(f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            logger.warning("Oracle %s unreachable: %s", url, exc)
            raise OracleUnavailableError(type(exc).__name__) from exc
        except ValueError as exc:
            raise OracleUnavailableError("response is not JSON") from exc
