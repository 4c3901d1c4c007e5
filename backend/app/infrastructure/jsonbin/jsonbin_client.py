"""JSONBin API client — implements the RemoteQuoteStore interface.

Communicates with a JSONBin v3 style bin service
(https://api.jsonbin.io/v3/b) using httpx. Every bin holds a single
JSON document of the shape ``{"quotes": [...]}``.
"""

import logging
from typing import Any

import httpx

from app.application.interfaces.remote_quote_store import RemoteQuoteStore
from app.domain.entities import BinMetadata, Quote
from app.domain.exceptions import BinNotFoundError, RemoteStoreError

logger = logging.getLogger(__name__)


class JsonBinClient(RemoteQuoteStore):
    """Infrastructure adapter — connects to the JSONBin bins API.

    Holds no state besides its configuration. An injected httpx.AsyncClient
    is reused (and never closed here); otherwise a client is created and
    closed around each request.
    """

    def __init__(
        self,
        access_key: str,
        base_url: str = "https://api.jsonbin.io/v3/b",
        access_key_header: str = "X-Access-Key",
        bin_name: str | None = None,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._access_key = access_key
        self._base_url = base_url.rstrip("/")
        self._access_key_header = access_key_header
        self._bin_name = bin_name
        self._timeout = timeout
        self._http_client = http_client

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def has_credentials(self) -> bool:
        return bool(self._access_key)

    def _get_headers(self, *, creating: bool = False) -> dict[str, str]:
        """Standard headers for JSONBin requests."""
        headers = {
            "Content-Type": "application/json",
            self._access_key_header: self._access_key,
        }
        if creating and self._bin_name:
            headers["X-Bin-Name"] = self._bin_name
        return headers

    @staticmethod
    def _build_payload(quotes: list[Quote]) -> dict[str, Any]:
        return {"quotes": [q.to_dict() for q in quotes]}

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def _request(
        self,
        operation: str,
        method: str,
        url: str,
        *,
        json: dict[str, Any] | None = None,
        creating: bool = False,
    ) -> httpx.Response:
        """Send one request, wrapping transport failures in RemoteStoreError."""
        client = await self._get_client()
        should_close = self._http_client is None

        try:
            return await client.request(
                method, url, headers=self._get_headers(creating=creating), json=json
            )
        except httpx.HTTPError as exc:
            logger.warning("JSONBin %s %s failed: %s", method, url, exc)
            raise RemoteStoreError(
                operation=operation,
                status_code=None,
                message=str(exc) or type(exc).__name__,
            ) from exc
        finally:
            if should_close:
                await client.aclose()

    async def fetch_latest(self, bin_id: str) -> list[Quote]:
        """GET the latest version of a bin and return its quotes.

        A 404 raises BinNotFoundError so callers can treat it as "nothing
        saved yet"; a missing ``record.quotes`` field yields an empty list.
        """
        url = f"{self._base_url}/{bin_id}/latest"
        response = await self._request("fetch", "GET", url)

        if response.status_code == 404:
            raise BinNotFoundError(bin_id, message=self._error_message(response))
        if not response.is_success:
            self._raise_store_error("fetch", response)

        data = self._parse_json("fetch", response)
        record = data.get("record") or {}
        raw_quotes = record.get("quotes") if isinstance(record, dict) else None
        if raw_quotes is None:
            return []
        if not isinstance(raw_quotes, list):
            logger.warning("Bin %s holds a non-list 'quotes' field, ignoring it", bin_id)
            return []

        quotes = [Quote.from_dict(item) for item in raw_quotes if isinstance(item, dict)]
        logger.debug("Fetched %d quote(s) from bin %s", len(quotes), bin_id)
        return quotes

    async def replace(self, bin_id: str, quotes: list[Quote]) -> BinMetadata:
        """PUT the full quotes collection into an existing bin."""
        url = f"{self._base_url}/{bin_id}"
        response = await self._request(
            "replace", "PUT", url, json=self._build_payload(quotes)
        )

        if not response.is_success:
            self._raise_store_error("replace", response)

        data = self._parse_json("replace", response)
        metadata = BinMetadata.from_dict(data.get("metadata"))
        if metadata.bin_id is None:
            metadata.bin_id = bin_id
        return metadata

    async def create(self, quotes: list[Quote]) -> BinMetadata:
        """POST a new bin holding the quotes collection; returns its metadata."""
        response = await self._request(
            "create", "POST", self._base_url, json=self._build_payload(quotes), creating=True
        )

        if not response.is_success:
            self._raise_store_error("create", response)

        data = self._parse_json("create", response)
        metadata = BinMetadata.from_dict(data.get("metadata"))
        if not metadata.bin_id:
            raise RemoteStoreError(
                operation="create",
                status_code=response.status_code,
                message="Response did not include a bin id",
            )
        logger.info("Created bin %s with %d quote(s)", metadata.bin_id, len(quotes))
        return metadata

    @staticmethod
    def _parse_json(operation: str, response: httpx.Response) -> dict[str, Any]:
        """Decode a JSON object body; anything else is a store error."""
        try:
            data = response.json()
        except ValueError as exc:
            raise RemoteStoreError(
                operation=operation,
                status_code=response.status_code,
                message=f"Invalid JSON in response: {exc}",
            ) from exc
        if not isinstance(data, dict):
            raise RemoteStoreError(
                operation=operation,
                status_code=response.status_code,
                message="Expected a JSON object in response",
            )
        return data

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Best-effort error text: JSON ``message`` field, then body, then reason phrase."""
        try:
            data = response.json()
            if isinstance(data, dict) and data.get("message"):
                return str(data["message"])
        except ValueError:
            pass
        return response.text or response.reason_phrase

    def _raise_store_error(self, operation: str, response: httpx.Response) -> None:
        """Raise RemoteStoreError from a non-2xx httpx Response."""
        raise RemoteStoreError(
            operation=operation,
            status_code=response.status_code,
            message=self._error_message(response),
        )
