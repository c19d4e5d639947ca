from typing import List, Mapping, Optional
from pydantic import BaseModel, Field, ValidationError, ValidationInfo, field_validator

from .game_filter import GameFilter, SortOrder
from ..core.errors import InvalidQueryError
from ..utils.query_helpers import Allowlist, apply_allowlist, normalise_scalar, split_multi_value

MAX_PER_PAGE = 100

GENRES = frozenset({"Action", "Shooter", "Horror", "RPG", "Adventure"})
PLATFORMS = frozenset({"PC", "Xbox", "PlayStation", "Nintendo"})

# Enumerated query fields: allowed values and how the raw text is normalised first.
ALLOWLISTS = {
    "sort": Allowlist(frozenset(s.value for s in SortOrder) | {""}, normalise_scalar),
    "genres": Allowlist(GENRES, split_multi_value),
    "platform": Allowlist(PLATFORMS | {""}, normalise_scalar),
    "is_adult_only": Allowlist(frozenset({"true", "false", ""}), normalise_scalar),
}

NUMERIC_FIELDS = ("page", "per_page", "rating", "min_price", "max_price")


class GameQuery(BaseModel):
    """Query string of GET /games, validated before anything touches the store."""
    page: int = Field(1, ge=1)
    per_page: int = Field(30, ge=1, le=MAX_PER_PAGE, alias="perPage")
    sort: str = ""
    search_term: str = Field("", alias="searchTerm")
    genres: List[str] = Field(default_factory=list)
    platform: str = ""
    rating: float = Field(0.0, allow_inf_nan=False)
    min_price: float = Field(0.0, alias="minPrice", allow_inf_nan=False)
    max_price: float = Field(100.0, alias="maxPrice", allow_inf_nan=False)
    is_adult_only: str = Field("", alias="isAdultOnly")

    @field_validator(*ALLOWLISTS, mode="before")
    @classmethod
    def check_allowlist(cls, value, info: ValidationInfo):
        field = cls.model_fields[info.field_name]
        return apply_allowlist(field.alias or info.field_name, value, ALLOWLISTS[info.field_name])

    @field_validator(*NUMERIC_FIELDS, mode="before")
    @classmethod
    def blank_means_default(cls, value, info: ValidationInfo):
        if isinstance(value, str) and not value.strip():
            return cls.model_fields[info.field_name].default
        return value

    @field_validator("search_term", mode="before")
    @classmethod
    def strip_search_term(cls, value):
        return normalise_scalar(value) if isinstance(value, str) else value

    @classmethod
    def from_query_params(cls, params: Mapping[str, str]) -> "GameQuery":
        """Validate raw query parameters, reporting the first failing one."""
        try:
            return cls.model_validate(dict(params))
        except ValidationError as e:
            first = e.errors()[0]
            name = ".".join(str(part) for part in first["loc"]) or "query"
            message = first["msg"].removeprefix("Value error, ")
            raise InvalidQueryError(f"invalid parameter '{name}': {message}") from e

    @property
    def sort_order(self) -> SortOrder:
        return SortOrder(self.sort) if self.sort else SortOrder.NEWEST

    @property
    def adult_only(self) -> Optional[bool]:
        if not self.is_adult_only:
            return None
        return self.is_adult_only == "true"

    def to_filter(self) -> GameFilter:
        return GameFilter(
            price_min=self.min_price,
            price_max=self.max_price,
            rating_min=self.rating,
            search_term=self.search_term,
            genres=tuple(self.genres),
            platform=self.platform or None,
            adult_only=self.adult_only,
        )

    class Config:
        populate_by_name = True
        extra = "ignore"
