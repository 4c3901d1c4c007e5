from .quote import QuoteCreate, QuoteResponse, QuotesStateResponse, SaveResultResponse
from .display_settings import (
    DisplaySettingsResponse,
    DisplaySettingsUpdate,
    FontOptionResponse,
)

__all__ = [
    "QuoteCreate",
    "QuoteResponse",
    "QuotesStateResponse",
    "SaveResultResponse",
    "DisplaySettingsResponse",
    "DisplaySettingsUpdate",
    "FontOptionResponse",
]
