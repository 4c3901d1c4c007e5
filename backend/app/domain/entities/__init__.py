from .quote import Quote, BinMetadata, slugify, SLUG_MAX_LENGTH
from .display_settings import (
    AVAILABLE_FONTS,
    DEFAULT_DISPLAY_SETTINGS,
    DisplaySettings,
    FontOption,
)

__all__ = [
    "Quote",
    "BinMetadata",
    "slugify",
    "SLUG_MAX_LENGTH",
    "AVAILABLE_FONTS",
    "DEFAULT_DISPLAY_SETTINGS",
    "DisplaySettings",
    "FontOption",
]
