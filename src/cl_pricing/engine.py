"""PricingEngine: USD reference price → settlement-currency amount owed.

    amount_owed = reference_price * 10**18 // rate

reference_price and rate are both at canonical precision, so the result is in
smallest settlement units. Division floors: the result can be one unit below
the exact amount, never above. Payers who must be accepted on the first try
add one unit of tolerance.
"""

import logging
from dataclasses import dataclass

from src.cl_catalog.domain.models import CatalogItem
from src.cl_common.errors import ItemUnavailableError
from src.cl_common.fixed_point import CANONICAL_UNIT, checked_mul
from src.cl_oracle.gateway import OracleGateway

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PriceQuote:
    item_id: int
    rate: int            # canonical USD per whole settlement unit
    amount_owed: int     # smallest settlement units


def convert(reference_price: int, rate: int) -> int:
    """Pure conversion at a known rate; rate must be positive."""
    if rate <= 0:
        raise ValueError(f"rate must be positive, got {rate}")
    return checked_mul(reference_price, CANONICAL_UNIT) // rate


class PricingEngine:
    def __init__(self, gateway: OracleGateway) -> None:
        self._gateway = gateway

    async def quote(self, item: CatalogItem) -> PriceQuote:
        """Fetch one validated rate and price the item at it."""
        if not item.available:
            raise ItemUnavailableError(item.id)
        rate = await self._gateway.fetch_validated_rate()
        owed = convert(item.reference_price, rate)
        logger.debug("Quote item=%d price=%d rate=%d owed=%d", item.id, item.reference_price, rate, owed)
        return PriceQuote(item_id=item.id, rate=rate, amount_owed=owed)

    async def amount_owed(self, item: CatalogItem) -> int:
        return (await self.quote(item)).amount_owed
