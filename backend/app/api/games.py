from fastapi import APIRouter, Depends, Request

from ..core.errors import StoreUnavailableError
from ..models.game_query import GameQuery
from ..models.paged_result import GamesResponse
from ..services.catalog import GameCatalog
import logging

router = APIRouter()
logger = logging.getLogger(__name__)

MULTI_VALUE_PARAMS = ("genres",)


def parse_game_query(request: Request) -> GameQuery:
    """Validate the query string; repeated multi-value params are joined."""
    params = dict(request.query_params)
    for name in MULTI_VALUE_PARAMS:
        values = request.query_params.getlist(name)
        if len(values) > 1:
            params[name] = ",".join(values)
    return GameQuery.from_query_params(params)


def get_catalog(request: Request) -> GameCatalog:
    catalog = getattr(request.app.state, "catalog", None)
    if catalog is None:
        raise StoreUnavailableError("catalog not initialised yet")
    return catalog


@router.get("/games", response_model=GamesResponse, summary="List games with filters, sorting and pagination")
async def list_games(
        query: GameQuery = Depends(parse_game_query),
        catalog: GameCatalog = Depends(get_catalog)):
    """
    Filtered listing of the game catalog.

    Filters: `minPrice`, `maxPrice`, `rating`, `searchTerm`, `genres`,
    `platform`, `isAdultOnly`. Sorting: `sort`. Pagination: `page`, `perPage`.

    `length` is the total number of matching games across all pages.
    """
    logger.info("Listing games: %s", query.model_dump(by_alias=True))
    page = await catalog.list_games(
        query.to_filter(),
        sort=query.sort_order,
        page=query.page,
        per_page=query.per_page,
    )
    return GamesResponse.from_page(page)
