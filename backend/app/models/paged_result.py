import math

from pydantic import BaseModel, Field
from typing import Tuple, Optional
from .game_record import GameRecord

class PagedResult(BaseModel):
    """One page of catalog rows plus the total match count."""
    items: Tuple[GameRecord, ...] = Field(default_factory=tuple)
    total: int = 0
    page: Optional[int] = None
    per_page: Optional[int] = None
    total_pages: Optional[int] = None

    @classmethod
    def create(
            cls, items: Tuple[GameRecord, ...], total: int, per_page: int, page: int
    ):
        total_pages = math.ceil(total / per_page) if per_page and per_page > 0 else 1
        return cls(
            items=items,
            total=total,
            per_page=per_page,
            page=page,
            total_pages=total_pages,
        )

    class Config:
        frozen = True           # Immutable → prevents accidental mutation
        extra = "forbid"


class GamesResponse(BaseModel):
    """Wire envelope for GET /games."""
    games: Tuple[GameRecord, ...] = Field(default_factory=tuple)
    length: int = 0

    @classmethod
    def from_page(cls, page: PagedResult):
        return cls(games=page.items, length=page.total)

    class Config:
        frozen = True
