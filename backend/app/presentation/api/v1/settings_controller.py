"""Settings API controller — manage display preferences (font, size, theme)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.application.schemas import (
    DisplaySettingsResponse,
    DisplaySettingsUpdate,
    FontOptionResponse,
)
from app.application.services import SettingsStore
from app.domain.exceptions import InvalidSettingError
from app.infrastructure.dependencies import get_settings_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])


def _to_response(store: SettingsStore) -> DisplaySettingsResponse:
    return DisplaySettingsResponse(
        font_family=store.font_family,
        font_size=store.font_size,
        dark_mode=store.dark_mode,
        css_variables=store.css_variables(),
        theme_class=store.theme_class(),
    )


# ── Endpoints ────────────────────────────────────────────────────────

@router.get("/display", response_model=DisplaySettingsResponse)
async def get_display_settings(store: SettingsStore = Depends(get_settings_store)):
    """Return the current display preferences."""
    return _to_response(store)


@router.put("/display", response_model=DisplaySettingsResponse)
async def put_display_settings(
    body: DisplaySettingsUpdate,
    store: SettingsStore = Depends(get_settings_store),
):
    """Update display preferences. Omitted fields are left unchanged."""
    try:
        store.update(
            font_family=body.font_family,
            font_size=body.font_size,
            dark_mode=body.dark_mode,
        )
    except InvalidSettingError as exc:
        logger.warning("Rejected display settings update: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        )
    return _to_response(store)


@router.post("/display/reset", response_model=DisplaySettingsResponse)
async def reset_display_settings(store: SettingsStore = Depends(get_settings_store)):
    """Restore the default font, size and theme."""
    store.reset_settings()
    return _to_response(store)


@router.get("/fonts", response_model=list[FontOptionResponse])
async def get_available_fonts(store: SettingsStore = Depends(get_settings_store)):
    """List the decorative fonts a quote can be displayed in."""
    return [FontOptionResponse.model_validate(f, from_attributes=True) for f in store.available_fonts]
