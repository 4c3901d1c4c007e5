"""Health check endpoint — reports version and whether remote sync is configured."""

from fastapi import APIRouter, Depends

from app.application.services import QuotesStore
from app.config import get_settings
from app.infrastructure.dependencies import get_quotes_store

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(quotes_store: QuotesStore = Depends(get_quotes_store)) -> dict:
    """Returns the current application health status."""
    settings = get_settings()
    remote_sync = bool(settings.jsonbin_access_key)
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "remote_sync": "enabled" if remote_sync else "disabled",
        "bin_configured": quotes_store.bin_id is not None,
    }
