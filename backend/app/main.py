"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.application.services import QuotesStore, SSEManager
from app.infrastructure.dependencies import AppStores, build_stores
from app.infrastructure.logging.log_config import setup_logging
from app.presentation.api.v1.router import router as v1_router

logger = logging.getLogger(__name__)


def _bind_quotes_events(quotes_store: QuotesStore, sse: SSEManager) -> None:
    """Broadcast a 'quotes_state' SSE event every time the quotes store changes."""

    def on_change(field: str) -> None:
        sse.broadcast(
            "quotes_state",
            {
                "changed": field,
                "count": len(quotes_store.quotes),
                "is_loading": quotes_store.is_loading,
                "error": quotes_store.error,
                "bin_id": quotes_store.bin_id,
            },
        )

    quotes_store.subscribe(on_change)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — load quotes from the remote bin, close HTTP on shutdown."""
    settings = get_settings()
    setup_logging()
    stores: AppStores = app.state.stores

    if not settings.jsonbin_access_key:
        logger.warning(
            "JSONBIN_ACCESS_KEY is not configured; quotes will not be loaded or saved."
        )

    # Remote is authoritative at session start
    await stores.quotes_store.load_quotes()
    if stores.quotes_store.error:
        logger.warning("Starting with an empty quote list: %s", stores.quotes_store.error)
    else:
        logger.info("Loaded %d quote(s) at startup", len(stores.quotes_store.quotes))

    yield

    # Shutdown
    await stores.sse_manager.shutdown()
    await stores.http_client.aclose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # One set of stores per application, shared by every request
    stores = build_stores(settings)
    _bind_quotes_events(stores.quotes_store, stores.sse_manager)
    app.state.stores = stores

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(v1_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
