from datetime import date, datetime, time
from enum import Enum
from typing import Tuple
from uuid import UUID
from pydantic import BaseModel, Field, field_validator


class AgeRating(str, Enum):
    E = "E"              # Everyone
    E10PLUS = "E10Plus"  # Everyone 10+
    T = "T"              # Teen
    M = "M"              # Mature 17+
    AO = "AO"            # Adults Only 18+


ADULT_AGE_RATINGS = (AgeRating.M, AgeRating.AO)


class GameRecord(BaseModel):
    id: str
    title: str
    image: str
    price: float
    rating: float
    age_rating: AgeRating
    release_date: datetime
    developer: str
    publisher: str
    genres: Tuple[str, ...] = Field(default_factory=tuple)
    platforms: Tuple[str, ...] = Field(default_factory=tuple)

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, value):
        # uuid / integer primary keys are exposed as strings
        if isinstance(value, (int, UUID)):
            return str(value)
        return value

    @field_validator("release_date", mode="before")
    @classmethod
    def widen_date(cls, value):
        if isinstance(value, date) and not isinstance(value, datetime):
            return datetime.combine(value, time.min)
        return value

    class Config:
        use_enum_values = True
        frozen = True
        extra = "forbid"
