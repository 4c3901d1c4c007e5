"""Unit tests for the JsonBinClient."""

import json

import httpx
import pytest

from app.domain.entities import Quote
from app.domain.exceptions import BinNotFoundError, RemoteStoreError
from app.infrastructure.jsonbin import JsonBinClient
from tests.fakes import ACCESS_KEY, BASE_URL, BIN_ID, FakeJsonBin


# ── Helpers ──


def _make_mock_transport(
    response_data: dict | None = None,
    status_code: int = 200,
) -> httpx.MockTransport:
    """Create a mock transport that returns a fixed response."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=response_data or {})

    return httpx.MockTransport(handler)


def _client_for(transport: httpx.MockTransport) -> JsonBinClient:
    return JsonBinClient(
        access_key=ACCESS_KEY,
        base_url=BASE_URL,
        http_client=httpx.AsyncClient(transport=transport),
    )


# ── Tests ──


@pytest.mark.asyncio
async def test_fetch_latest_returns_quotes_in_order():
    fake = FakeJsonBin()
    quotes = await fake.client().fetch_latest(BIN_ID)

    assert [q.id for q in quotes] == ["1", "2"]
    assert quotes[0].text == "Test quote 1"
    assert quotes[0].slug == "test-quote-1"

    request = fake.requests[0]
    assert request.method == "GET"
    assert str(request.url) == f"{BASE_URL}/{BIN_ID}/latest"


@pytest.mark.asyncio
async def test_every_request_sends_access_key_and_json_content_type():
    fake = FakeJsonBin()
    client = fake.client()

    await client.fetch_latest(BIN_ID)
    await client.replace(BIN_ID, [])
    await client.create([])

    for request in fake.requests:
        assert request.headers["X-Access-Key"] == ACCESS_KEY
        assert request.headers["Content-Type"] == "application/json"


@pytest.mark.asyncio
async def test_access_key_header_name_is_configurable():
    fake = FakeJsonBin()
    client = JsonBinClient(
        access_key="master",
        base_url=BASE_URL,
        access_key_header="X-Master-Key",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(fake.handler)),
    )

    await client.fetch_latest(BIN_ID)

    assert fake.requests[0].headers["X-Master-Key"] == "master"
    assert "X-Access-Key" not in fake.requests[0].headers


@pytest.mark.asyncio
async def test_fetch_latest_missing_bin_raises_not_found():
    fake = FakeJsonBin()

    with pytest.raises(BinNotFoundError) as exc_info:
        await fake.client().fetch_latest("non-existent-bin")

    assert exc_info.value.bin_id == "non-existent-bin"
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_fetch_latest_server_error_raises_store_error():
    transport = _make_mock_transport({"message": "Internal server error"}, status_code=500)

    with pytest.raises(RemoteStoreError) as exc_info:
        await _client_for(transport).fetch_latest(BIN_ID)

    assert not isinstance(exc_info.value, BinNotFoundError)
    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "Internal server error"


@pytest.mark.asyncio
async def test_fetch_latest_without_quotes_field_returns_empty():
    transport = _make_mock_transport({"record": {}, "metadata": {"id": BIN_ID}})

    assert await _client_for(transport).fetch_latest(BIN_ID) == []


@pytest.mark.asyncio
async def test_fetch_latest_ignores_non_list_quotes_field():
    transport = _make_mock_transport({"record": {"quotes": "oops"}})

    assert await _client_for(transport).fetch_latest(BIN_ID) == []


@pytest.mark.asyncio
async def test_replace_sends_full_collection():
    fake = FakeJsonBin()
    quote = Quote.create("Hello, World!", "Jane Doe", font='"Ballet"', size=40)

    metadata = await fake.client().replace(BIN_ID, [quote])

    request = fake.requests_by_method("PUT")[0]
    assert str(request.url) == f"{BASE_URL}/{BIN_ID}"
    body = json.loads(request.content)
    assert body == {"quotes": [quote.to_dict()]}
    assert metadata.bin_id == BIN_ID
    assert metadata.private is True


@pytest.mark.asyncio
async def test_replace_error_raises_store_error():
    fake = FakeJsonBin()
    fake.fail_with["PUT"] = 500

    with pytest.raises(RemoteStoreError) as exc_info:
        await fake.client().replace(BIN_ID, [])

    assert exc_info.value.operation == "replace"
    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_create_returns_new_bin_id_and_sends_bin_name():
    fake = FakeJsonBin()

    metadata = await fake.client().create([])

    assert metadata.bin_id == "bin-1"
    assert metadata.created_at == "2026-01-01T00:00:00.000Z"
    request = fake.requests_by_method("POST")[0]
    assert str(request.url) == BASE_URL
    assert request.headers["X-Bin-Name"] == "Test Quotes"
    assert fake.bins["bin-1"] == []


@pytest.mark.asyncio
async def test_create_without_bin_id_in_response_is_an_error():
    transport = _make_mock_transport({"record": {"quotes": []}, "metadata": {}}, status_code=201)

    with pytest.raises(RemoteStoreError, match="bin id"):
        await _client_for(transport).create([])


@pytest.mark.asyncio
async def test_create_server_error_raises_store_error():
    fake = FakeJsonBin()
    fake.fail_with["POST"] = 500

    with pytest.raises(RemoteStoreError) as exc_info:
        await fake.client().create([])

    assert exc_info.value.operation == "create"
    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "Internal server error"
    assert list(fake.bins) == [BIN_ID]


@pytest.mark.asyncio
async def test_transport_failure_is_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(RemoteStoreError) as exc_info:
        await _client_for(httpx.MockTransport(handler)).fetch_latest(BIN_ID)

    assert exc_info.value.status_code is None
    assert "connection refused" in exc_info.value.message


@pytest.mark.asyncio
async def test_non_json_error_body_uses_text():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="Service Unavailable")

    with pytest.raises(RemoteStoreError) as exc_info:
        await _client_for(httpx.MockTransport(handler)).fetch_latest(BIN_ID)

    assert exc_info.value.message == "Service Unavailable"


def test_has_credentials_reflects_access_key():
    assert JsonBinClient(access_key="k").has_credentials is True
    assert JsonBinClient(access_key="").has_credentials is False
