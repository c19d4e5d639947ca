from enum import Enum
from typing import Optional, Tuple
from pydantic import BaseModel, Field


class SortOrder(str, Enum):
    HIGH_PRICE = "HIGH_PRICE"
    LOW_PRICE = "LOW_PRICE"
    OLDEST = "OLDEST"
    NEWEST = "NEWEST"


class GameFilter(BaseModel):
    """Typed filter criteria for one catalog listing."""
    price_min: float = 0.0
    price_max: float = 100.0
    rating_min: float = 0.0
    search_term: str = ""

    genres: Tuple[str, ...] = Field(default_factory=tuple)
    platform: Optional[str] = None
    adult_only: Optional[bool] = None

    class Config:
        frozen = True           # one instance per request, never mutated
        extra = "forbid"
