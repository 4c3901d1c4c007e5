"""Quote endpoints — capture, sync with the remote bin, lookup and navigation."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from app.application.schemas import (
    QuoteCreate,
    QuoteResponse,
    QuotesStateResponse,
    SaveResultResponse,
)
from app.application.services import QuotesStore, SSEManager
from app.domain.entities import Quote
from app.domain.exceptions import EntityNotFoundError, QuoteSaveError
from app.infrastructure.dependencies import get_quotes_store, get_sse_manager

router = APIRouter(prefix="/quotes", tags=["Quotes"])


def _to_response(quote: Quote) -> QuoteResponse:
    return QuoteResponse.model_validate(quote, from_attributes=True)


def _state_response(store: QuotesStore) -> QuotesStateResponse:
    return QuotesStateResponse(
        quotes=[_to_response(q) for q in store.quotes],
        is_loading=store.is_loading,
        error=store.error,
        bin_id=store.bin_id,
    )


def _require(quote: Quote | None, detail: str) -> QuoteResponse:
    if quote is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    return _to_response(quote)


@router.get("", response_model=QuotesStateResponse)
async def list_quotes(
    store: QuotesStore = Depends(get_quotes_store),
) -> QuotesStateResponse:
    """Return the in-memory collection (newest first) and its sync status."""
    return _state_response(store)


@router.post("/load", response_model=QuotesStateResponse)
async def load_quotes(
    store: QuotesStore = Depends(get_quotes_store),
) -> QuotesStateResponse:
    """Reload the collection from the remote bin. Failures are reported in ``error``."""
    await store.load_quotes()
    return _state_response(store)


@router.post("/save", response_model=SaveResultResponse)
async def save_quotes(
    store: QuotesStore = Depends(get_quotes_store),
) -> SaveResultResponse:
    """Write the collection to the remote bin, creating it if none exists yet."""
    saved = await store.save_quotes()
    return SaveResultResponse(saved=saved, error=store.error, bin_id=store.bin_id)


@router.post("", response_model=QuoteResponse, status_code=status.HTTP_201_CREATED)
async def add_quote(
    data: QuoteCreate,
    store: QuotesStore = Depends(get_quotes_store),
) -> QuoteResponse:
    """Capture a new quote; it is kept only if the remote save succeeds."""
    try:
        quote = await store.add_quote(data.text, data.author, font=data.font, size=data.size)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except QuoteSaveError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
    return _to_response(quote)


@router.get("/events")
async def quotes_event_stream(
    sse: SSEManager = Depends(get_sse_manager),
) -> StreamingResponse:
    """SSE endpoint emitting a 'quotes_state' event whenever the store changes."""
    return StreamingResponse(
        sse.subscribe(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


@router.get("/slug/{slug}", response_model=QuoteResponse)
async def get_quote_by_slug(
    slug: str,
    store: QuotesStore = Depends(get_quotes_store),
) -> QuoteResponse:
    """Retrieve the first quote with the given slug."""
    return _require(store.get_quote_by_slug(slug), f"Quote with slug '{slug}' not found")


@router.get("/{quote_id}", response_model=QuoteResponse)
async def get_quote(
    quote_id: str,
    store: QuotesStore = Depends(get_quotes_store),
) -> QuoteResponse:
    """Retrieve a single quote by ID."""
    return _require(store.get_quote_by_id(quote_id), f"Quote with id '{quote_id}' not found")


@router.get("/{quote_id}/next", response_model=QuoteResponse)
async def get_next_quote(
    quote_id: str,
    store: QuotesStore = Depends(get_quotes_store),
) -> QuoteResponse:
    """The quote after the given one, wrapping around at the end."""
    return _require(store.get_next_quote(quote_id), f"Quote with id '{quote_id}' not found")


@router.get("/{quote_id}/previous", response_model=QuoteResponse)
async def get_previous_quote(
    quote_id: str,
    store: QuotesStore = Depends(get_quotes_store),
) -> QuoteResponse:
    """The quote before the given one, wrapping around at the start."""
    return _require(store.get_previous_quote(quote_id), f"Quote with id '{quote_id}' not found")


@router.delete("/{quote_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_quote(
    quote_id: str,
    store: QuotesStore = Depends(get_quotes_store),
) -> None:
    """Delete a quote; it is restored if the remote save fails."""
    try:
        await store.delete_quote(quote_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except QuoteSaveError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
