from .key_value_storage import KeyValueStorage
from .remote_quote_store import RemoteQuoteStore

__all__ = [
    "KeyValueStorage",
    "RemoteQuoteStore",
]
