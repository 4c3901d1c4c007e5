"""Display settings state — font family, font size and dark mode.

Values are read from key-value storage once at construction and written
back explicitly through ``save()`` after every mutation.
"""

import logging

from app.application.interfaces.key_value_storage import KeyValueStorage
from app.application.services.observable import ObservableStore
from app.domain.entities import (
    AVAILABLE_FONTS,
    DEFAULT_DISPLAY_SETTINGS,
    DisplaySettings,
    FontOption,
)
from app.domain.exceptions import InvalidSettingError

logger = logging.getLogger(__name__)

FONT_FAMILY_KEY = "fontFamily"
FONT_SIZE_KEY = "fontSize"
DARK_MODE_KEY = "darkMode"

DARK_MODE_CLASS = "dark-mode"


def _parse_font_size(raw: str | None) -> int:
    """Stored size as a positive int, falling back to the default."""
    if raw is None:
        return DEFAULT_DISPLAY_SETTINGS.font_size
    try:
        size = int(raw)
    except ValueError:
        logger.warning("Ignoring stored font size %r", raw)
        return DEFAULT_DISPLAY_SETTINGS.font_size
    return size if size > 0 else DEFAULT_DISPLAY_SETTINGS.font_size


def _parse_dark_mode(raw: str | None) -> bool:
    if raw is None:
        return DEFAULT_DISPLAY_SETTINGS.dark_mode
    return raw == "true"


class SettingsStore(ObservableStore):
    """Holds the user's display preferences and persists them on request."""

    def __init__(
        self,
        storage: KeyValueStorage,
        fonts: tuple[FontOption, ...] = AVAILABLE_FONTS,
    ):
        super().__init__()
        self._storage = storage
        self._fonts = fonts
        self.font_family: str = self._parse_font_family(storage.get(FONT_FAMILY_KEY))
        self.font_size: int = _parse_font_size(storage.get(FONT_SIZE_KEY))
        self.dark_mode: bool = _parse_dark_mode(storage.get(DARK_MODE_KEY))

    @property
    def available_fonts(self) -> tuple[FontOption, ...]:
        return self._fonts

    def snapshot(self) -> DisplaySettings:
        """Current values as an immutable-by-convention value object."""
        return DisplaySettings(
            font_family=self.font_family,
            font_size=self.font_size,
            dark_mode=self.dark_mode,
        )

    def css_variables(self) -> dict[str, str]:
        """CSS custom properties a front end applies to the quote container."""
        return {
            "--font-family": self.font_family,
            "--font-size": f"{self.font_size}px",
        }

    def theme_class(self) -> str:
        """Document class for the current theme ("" when dark mode is off)."""
        return DARK_MODE_CLASS if self.dark_mode else ""

    # ── Mutations (each one persists) ───────────────────────────────

    def set_font_family(self, value: str) -> None:
        self.font_family = self._resolve_font(value)
        self.save()
        self._notify("font_family")

    def set_font_size(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise InvalidSettingError("font_size", value, "must be a positive integer")
        self.font_size = value
        self.save()
        self._notify("font_size")

    def set_dark_mode(self, value: bool) -> None:
        self.dark_mode = bool(value)
        self.save()
        self._notify("dark_mode")

    def update(
        self,
        *,
        font_family: str | None = None,
        font_size: int | None = None,
        dark_mode: bool | None = None,
    ) -> DisplaySettings:
        """Apply several changes at once; nothing is changed if any value is invalid."""
        family = self._resolve_font(font_family) if font_family is not None else self.font_family
        if font_size is not None and (isinstance(font_size, bool) or font_size <= 0):
            raise InvalidSettingError("font_size", font_size, "must be a positive integer")

        self.font_family = family
        if font_size is not None:
            self.font_size = font_size
        if dark_mode is not None:
            self.dark_mode = dark_mode
        self.save()
        self._notify("settings")
        return self.snapshot()

    def reset_settings(self) -> DisplaySettings:
        """Restore every field to its default and persist."""
        self.font_family = DEFAULT_DISPLAY_SETTINGS.font_family
        self.font_size = DEFAULT_DISPLAY_SETTINGS.font_size
        self.dark_mode = DEFAULT_DISPLAY_SETTINGS.dark_mode
        self.save()
        logger.info("Display settings reset to defaults")
        self._notify("settings")
        return self.snapshot()

    def save(self) -> None:
        """Write all three fields to storage. Write failures propagate."""
        self._storage.set(FONT_FAMILY_KEY, self.font_family)
        self._storage.set(FONT_SIZE_KEY, str(self.font_size))
        self._storage.set(DARK_MODE_KEY, "true" if self.dark_mode else "false")

    def _parse_font_family(self, raw: str | None) -> str:
        """Stored family resolved against the catalog, falling back to the default."""
        if not raw:
            return DEFAULT_DISPLAY_SETTINGS.font_family
        try:
            return self._resolve_font(raw)
        except InvalidSettingError:
            logger.warning("Ignoring stored font family %r", raw)
            return DEFAULT_DISPLAY_SETTINGS.font_family

    def _resolve_font(self, value: str) -> str:
        """Accept a CSS family or a display name and return the CSS family."""
        for font in self._fonts:
            if value in (font.family, font.name):
                return font.family
        raise InvalidSettingError("font_family", value, "not in the font catalog")
