from abc import ABC, abstractmethod
from typing import Any, Mapping


class GameStore(ABC):
    """Read-only, query-capable handle on the game table."""

    @classmethod
    @abstractmethod
    async def create(cls, *args, **kwargs):
        """Async factory constructor for the store."""
        raise NotImplementedError("Async factory not implemented")

    @abstractmethod
    async def fetch_all(self, sql: str, params: Mapping[str, Any]) -> list[dict[str, Any]]:
        """Run a query and return every row as a column → value dict"""
        pass

    @abstractmethod
    async def fetch_scalar(self, sql: str, params: Mapping[str, Any]) -> Any:
        """Run a query expected to yield a single value"""
        pass

    @abstractmethod
    async def check_health(self) -> bool:
        """Check if the store is reachable"""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release pooled connections"""
        pass
