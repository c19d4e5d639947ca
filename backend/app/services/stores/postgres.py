import logging
from typing import Any, Mapping

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from ...core.errors import StoreError
from .base import GameStore

logger = logging.getLogger(__name__)


class PostgresGameStore(GameStore):
    """PostgreSQL store on a pooled SQLAlchemy async engine (asyncpg driver)."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    @classmethod
    async def create(cls, database_url: str, pool_size: int = 5, **engine_kwargs):
        """Factory building the async engine. No connection is opened until first use."""
        engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            pool_pre_ping=True,
            **engine_kwargs,
        )
        logger.debug("Created async engine for %s", engine.url.render_as_string(hide_password=True))
        return cls(engine)

    async def fetch_all(self, sql: str, params: Mapping[str, Any]) -> list[dict[str, Any]]:
        # Each call checks out its own connection so page and count can run side by side
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(text(sql), dict(params))
                return [dict(row) for row in result.mappings().all()]
        except (SQLAlchemyError, OSError) as e:
            raise StoreError(f"query failed: {e}") from e

    async def fetch_scalar(self, sql: str, params: Mapping[str, Any]) -> Any:
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(text(sql), dict(params))
                return result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as e:
            raise StoreError(f"query failed: {e}") from e

    async def check_health(self) -> bool:
        try:
            await self.fetch_scalar("SELECT 1", {})
            return True
        except StoreError as e:
            logger.warning("Store health check failed: %s", e)
            return False

    async def close(self) -> None:
        await self.engine.dispose()
        logger.info("Database engine disposed")
