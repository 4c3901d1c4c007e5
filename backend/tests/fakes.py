"""Shared test doubles: an in-memory JSONBin service and key-value storage."""

import json

import httpx

from app.application.interfaces import KeyValueStorage
from app.infrastructure.jsonbin import JsonBinClient

BASE_URL = "https://api.jsonbin.io/v3/b"
ACCESS_KEY = "test-api-key"
BIN_ID = "test-bin-id"

MOCK_QUOTES = [
    {"id": "1", "text": "Test quote 1", "author": "Author 1", "slug": "test-quote-1"},
    {"id": "2", "text": "Test quote 2", "author": "Author 2", "slug": "test-quote-2"},
]


class FakeJsonBin:
    """In-memory JSONBin: GET /{id}/latest, PUT /{id}, POST / over httpx.MockTransport."""

    def __init__(self) -> None:
        self.bins: dict[str, list[dict]] = {BIN_ID: [dict(q) for q in MOCK_QUOTES]}
        self.requests: list[httpx.Request] = []
        self.fail_with: dict[str, int] = {}  # HTTP method -> forced status code
        self._created = 0

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.method in self.fail_with:
            return httpx.Response(
                self.fail_with[request.method],
                json={"message": "Internal server error"},
            )

        rest = request.url.path.removeprefix("/v3/b").strip("/")

        if request.method == "GET" and rest.endswith("/latest"):
            bin_id = rest.removesuffix("/latest")
            if bin_id not in self.bins:
                return httpx.Response(404, json={"message": "Bin not found"})
            return httpx.Response(
                200,
                json={"record": {"quotes": self.bins[bin_id]}, "metadata": {"id": bin_id}},
            )

        if request.method == "PUT" and rest:
            if rest not in self.bins:
                return httpx.Response(404, json={"message": "Bin not found"})
            quotes = json.loads(request.content)["quotes"]
            self.bins[rest] = quotes
            return httpx.Response(
                200,
                json={"record": {"quotes": quotes}, "metadata": {"parentId": rest, "private": True}},
            )

        if request.method == "POST" and not rest:
            quotes = json.loads(request.content)["quotes"]
            self._created += 1
            new_id = f"bin-{self._created}"
            self.bins[new_id] = quotes
            return httpx.Response(
                201,
                json={
                    "record": {"quotes": quotes},
                    "metadata": {"id": new_id, "createdAt": "2026-01-01T00:00:00.000Z", "private": True},
                },
            )

        return httpx.Response(405, json={"message": "Method not allowed"})

    def client(self, access_key: str = ACCESS_KEY) -> JsonBinClient:
        """A JsonBinClient wired to this fake through a mock transport."""
        return JsonBinClient(
            access_key=access_key,
            base_url=BASE_URL,
            bin_name="Test Quotes",
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(self.handler)),
        )

    def requests_by_method(self, method: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method]


class InMemoryStorage(KeyValueStorage):
    """Dict-backed key-value storage; can be told to fail writes."""

    def __init__(self, initial: dict[str, str] | None = None, fail_writes: bool = False):
        self.data: dict[str, str] = dict(initial or {})
        self.fail_writes = fail_writes

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise OSError("storage is read-only")
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)
