"""Domain models for cl_catalog: pure dataclasses, no framework dependency."""

from dataclasses import dataclass
from datetime import datetime

from src.cl_common.enums import ItemStatus


@dataclass
class CatalogItem:
    id: int                      # monotonic, never reused
    name: str
    reference_price: int         # USD at canonical precision (10**18 == $1)
    status: ItemStatus
    created_at: datetime
    updated_at: datetime

    @property
    def available(self) -> bool:
        return self.status == ItemStatus.ACTIVE
