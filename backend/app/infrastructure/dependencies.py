"""FastAPI dependency injection — wires infrastructure to application layer.

The stores are built once per application in ``build_stores`` and kept on
``app.state``; request handlers reach them through the providers below.
"""

from dataclasses import dataclass

import httpx
from fastapi import Request

from app.config import Settings
from app.application.services import QuotesStore, SettingsStore, SSEManager
from app.infrastructure.jsonbin import JsonBinClient
from app.infrastructure.storage.json_file_storage import JsonFileStorage


@dataclass
class AppStores:
    """Everything that lives for the whole application session."""

    http_client: httpx.AsyncClient
    settings_store: SettingsStore
    quotes_store: QuotesStore
    sse_manager: SSEManager


def build_stores(settings: Settings) -> AppStores:
    """Construct the shared HTTP client, storage and both state stores."""
    http_client = httpx.AsyncClient(timeout=settings.jsonbin_timeout)
    storage = JsonFileStorage(settings.local_storage_file)
    remote = JsonBinClient(
        access_key=settings.jsonbin_access_key,
        base_url=settings.jsonbin_base_url,
        access_key_header=settings.jsonbin_access_key_header,
        bin_name=settings.jsonbin_bin_name,
        timeout=settings.jsonbin_timeout,
        http_client=http_client,
    )
    settings_store = SettingsStore(storage)
    quotes_store = QuotesStore(
        remote=remote,
        storage=storage,
        settings_store=settings_store,
        bin_id=settings.jsonbin_bin_id or None,
    )
    return AppStores(
        http_client=http_client,
        settings_store=settings_store,
        quotes_store=quotes_store,
        sse_manager=SSEManager(),
    )


def get_quotes_store(request: Request) -> QuotesStore:
    """Provides the application's QuotesStore."""
    return request.app.state.stores.quotes_store


def get_settings_store(request: Request) -> SettingsStore:
    """Provides the application's SettingsStore."""
    return request.app.state.stores.settings_store


def get_sse_manager(request: Request) -> SSEManager:
    """Provides the application's SSE broadcaster."""
    return request.app.state.stores.sse_manager
