"""Pydantic schemas for cl_catalog API."""

from pydantic import BaseModel, Field

from src.cl_catalog.domain.models import CatalogItem
from src.cl_common.fixed_point import usd_display

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class AddItemRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    price_usd: int = Field(..., description="Whole USD units; zero is rejected with code 3002")


class UpdatePriceRequest(BaseModel):
    price_usd: int = Field(..., description="Whole USD units; zero is rejected with code 3002")


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class ItemDetail(BaseModel):
    id: int
    name: str
    reference_price: int  # USD at canonical precision
    reference_price_display: str
    status: str
    available: bool
    created_at: str
    updated_at: str

    @classmethod
    def from_domain(cls, item: CatalogItem) -> "ItemDetail":
        return cls(
            id=item.id,
            name=item.name,
            reference_price=item.reference_price,
            reference_price_display=usd_display(item.reference_price),
            status=item.status.value,
            available=item.available,
            created_at=item.created_at.isoformat(),
            updated_at=item.updated_at.isoformat(),
        )


class ItemListResponse(BaseModel):
    items: list[ItemDetail]
