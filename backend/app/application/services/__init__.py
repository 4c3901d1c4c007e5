from .observable import ObservableStore
from .settings_store import SettingsStore
from .quotes_store import QuotesStore
from .sse_manager import SSEManager

__all__ = [
    "ObservableStore",
    "SettingsStore",
    "QuotesStore",
    "SSEManager",
]
