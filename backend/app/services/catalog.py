from typing import Any, Optional
from pydantic import ValidationError
from ..core.errors import (
    CatalogDecodeError,
    CatalogQueryError,
    CatalogTimeoutError,
    InvalidQueryError,
    StoreError,
)
from ..models.game_filter import GameFilter, SortOrder
from ..models.game_query import MAX_PER_PAGE
from ..models.game_record import GameRecord
from ..models.paged_result import PagedResult
from .filter_compiler import CompiledFilter, compile_filter
from .stores.base import GameStore
from ..utils.query_helpers import placeholder
import asyncio, logging

logger = logging.getLogger(__name__)

GAME_TABLE = "game"
GAME_COLUMNS = (
    "id", "title", "image", "price", "rating", "age_rating", "release_date",
    "developer", "publisher", "genres", "platforms",
)

ORDER_BY = {
    SortOrder.HIGH_PRICE: "price DESC",
    SortOrder.LOW_PRICE: "price ASC",
    SortOrder.OLDEST: "release_date ASC",
    SortOrder.NEWEST: "release_date DESC",
}


def order_by_clause(sort: Optional[SortOrder]) -> str:
    return ORDER_BY.get(sort, ORDER_BY[SortOrder.NEWEST])


def build_fetch_query(compiled: CompiledFilter, sort: Optional[SortOrder], page: int, per_page: int) -> tuple[str, dict[str, Any]]:
    """Page query: predicate + ORDER BY, with LIMIT/OFFSET bound after the filter parameters."""
    offset = (page - 1) * per_page
    limit_at = compiled.next_position
    sql = (
        f"SELECT {', '.join(GAME_COLUMNS)} FROM {GAME_TABLE}"
        f" WHERE {compiled.predicate}"
        f" ORDER BY {order_by_clause(sort)}"
        f" LIMIT {placeholder(limit_at)} OFFSET {placeholder(limit_at + 1)}"
    )
    return sql, compiled.bind(per_page, offset)


def build_count_query(compiled: CompiledFilter) -> tuple[str, dict[str, Any]]:
    """Count query: the same predicate and parameters, nothing else."""
    sql = f"SELECT COUNT(*) FROM {GAME_TABLE} WHERE {compiled.predicate}"
    return sql, compiled.bind()


def decode_rows(rows: list[dict[str, Any]]) -> tuple[GameRecord, ...]:
    try:
        return tuple(GameRecord.model_validate(row) for row in rows)
    except ValidationError as e:
        raise CatalogDecodeError(f"malformed game row: {e}") from e


def decode_count(value: Any) -> int:
    if value is None:
        raise CatalogDecodeError("count query returned no value")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise CatalogDecodeError(f"malformed count value: {value!r}") from e


class GameCatalog:
    """Runs filtered, sorted, paginated listings of the game table."""

    def __init__(self, store: GameStore, timeout: Optional[float] = 10.0):
        self.store = store
        self.timeout = timeout

    async def list_games(
            self,
            game_filter: GameFilter,
            sort: Optional[SortOrder] = None,
            page: int = 1,
            per_page: int = 30) -> PagedResult:
        """
        Fetch one page of games and the total match count.
        Both queries share one compiled predicate and run concurrently
        under a single deadline; either failing fails the whole call.
        """
        if page < 1:
            raise InvalidQueryError("page must be >= 1")
        if not 1 <= per_page <= MAX_PER_PAGE:
            raise InvalidQueryError(f"perPage must be between 1 and {MAX_PER_PAGE}")

        compiled = compile_filter(game_filter)
        fetch_sql, fetch_params = build_fetch_query(compiled, sort, page, per_page)
        count_sql, count_params = build_count_query(compiled)
        logger.debug("Fetch query: %s | params: %s", fetch_sql, fetch_params)

        rows_task = asyncio.ensure_future(self.store.fetch_all(fetch_sql, fetch_params))
        count_task = asyncio.ensure_future(self.store.fetch_scalar(count_sql, count_params))
        try:
            rows, total = await asyncio.wait_for(asyncio.gather(rows_task, count_task), self.timeout)
        except asyncio.TimeoutError as e:
            raise CatalogTimeoutError(f"listing exceeded {self.timeout}s deadline") from e
        except StoreError as e:
            raise CatalogQueryError(str(e)) from e
        finally:
            # a failed or cancelled sibling must not keep its connection
            for task in (rows_task, count_task):
                if not task.done():
                    task.cancel()

        items = decode_rows(rows)
        total = decode_count(total)
        if total < len(items):
            logger.warning("Count %d is below page size %d; data changed between queries", total, len(items))

        logger.debug("Returning %d of %d games (page %d)", len(items), total, page)
        return PagedResult.create(items=items, total=total, per_page=per_page, page=page)
