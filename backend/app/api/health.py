from fastapi import APIRouter, Depends

from ..core.errors import StoreUnavailableError
from ..services.catalog import GameCatalog
from .games import get_catalog

router = APIRouter()


@router.get("/health", summary="Check that the store answers queries")
async def health(catalog: GameCatalog = Depends(get_catalog)):
    if not await catalog.store.check_health():
        raise StoreUnavailableError()
    return {"status": "ok"}
