from datetime import datetime, timezone
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """JSON body returned for every failed request."""
    message: str
    status: int
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        frozen = True
