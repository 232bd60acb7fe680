"""
Trending curation schemas.
"""

from pydantic import Field, field_validator
from typing import Optional
from enum import Enum

from models.base import BaseSchema
from models.product import ProductResponse


class CurationStatus(str, Enum):
    """
    Curation lifecycle.

    idle -> loading -> {idle, error}
    idle -> saving -> {idle, error}
    """
    IDLE = "idle"
    LOADING = "loading"
    SAVING = "saving"
    ERROR = "error"


class TrendingSaveRequest(BaseSchema):
    """Full ordered list of products to feature. Index 0 displays first."""

    product_ids: list[str] = Field(
        ...,
        description="Product UUIDs in display order",
        examples=[["uuid-a", "uuid-c"]]
    )

    @field_validator("product_ids")
    @classmethod
    def no_duplicates(cls, v: list[str]) -> list[str]:
        seen = set()
        duplicates = set()
        for pid in v:
            if pid in seen:
                duplicates.add(pid)
            seen.add(pid)
        if duplicates:
            raise ValueError(f"Duplicate product ids: {sorted(duplicates)}")
        return v


class TrendingBoardResponse(BaseSchema):
    """Both partitions of the curation screen."""

    status: CurationStatus
    trending: list[ProductResponse]
    available: list[ProductResponse]
    total_products: int
    error: Optional[str] = None
