import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .api.games import router as games_router
from .api.health import router as health_router
from .core.config import Settings, settings as default_settings
from .core.errors import register_exception_handlers
from .services.catalog import GameCatalog
from .services.stores.base import GameStore
from .services.stores.postgres import PostgresGameStore

logger = logging.getLogger(__name__)
logging.basicConfig(level=default_settings.LOG_LEVEL)


def create_app(settings: Optional[Settings] = None, store: Optional[GameStore] = None) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # --- Startup logic ---
        owned_store = None
        if getattr(app.state, "catalog", None) is None:
            owned_store = await PostgresGameStore.create(settings.DATABASE_URL, pool_size=settings.DB_POOL_SIZE)
            app.state.catalog = GameCatalog(owned_store, timeout=settings.QUERY_TIMEOUT_SECONDS)
            logger.info("Catalog store initialised")

        yield  # main app runs here

        # --- Cleanup on shutdown ---
        if owned_store is not None:
            await owned_store.close()
            app.state.catalog = None

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    if store is not None:
        app.state.catalog = GameCatalog(store, timeout=settings.QUERY_TIMEOUT_SECONDS)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # Routers
    app.include_router(games_router, tags=["games"])
    app.include_router(health_router, tags=["health"])

    if settings.STATIC_DIR:
        app.mount("/static", StaticFiles(directory=settings.STATIC_DIR), name="static")

    return app


def run() -> None:
    uvicorn.run("backend.app.main:app", host=default_settings.HOST, port=default_settings.PORT)


app = create_app()

if __name__ == "__main__":
    run()
