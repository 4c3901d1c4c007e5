"""Quotes state — the in-memory quote collection and its sync with the remote bin.

The in-memory list is authoritative during a session; the remote bin is
authoritative at session start. Additions and deletions are two-phase:
the change is staged locally, the full collection is written to the bin,
and the staged change is rolled back if that write fails.
"""

import json
import logging

from app.application.interfaces.key_value_storage import KeyValueStorage
from app.application.interfaces.remote_quote_store import RemoteQuoteStore
from app.application.services.observable import ObservableStore
from app.application.services.settings_store import SettingsStore
from app.domain.entities import Quote
from app.domain.exceptions import (
    BinNotFoundError,
    ConfigurationMissingError,
    EntityNotFoundError,
    QuoteSaveError,
    RemoteStoreError,
)
from app.infrastructure.logging.colored_logger import SyncLogger, SyncStage

logger = logging.getLogger(__name__)

QUOTES_CACHE_KEY = "quotes"
BIN_ID_KEY = "binId"

LOAD_ERROR_PREFIX = "Failed to load quotes"
SAVE_ERROR_PREFIX = "Failed to save quotes"


class QuotesStore(ObservableStore):
    """Owns the ordered (newest-first) quote collection.

    Exposes ``quotes``, ``is_loading``, ``error`` and ``bin_id`` as read-only
    state. Listeners registered with ``subscribe`` are told which of those
    fields changed.
    """

    def __init__(
        self,
        remote: RemoteQuoteStore,
        storage: KeyValueStorage,
        settings_store: SettingsStore,
        bin_id: str | None = None,
    ):
        super().__init__()
        self._remote = remote
        self._storage = storage
        self._settings = settings_store
        self._log = SyncLogger("QuotesStore")

        # A configured bin id wins; otherwise reuse one created in an earlier session
        self._bin_id: str | None = bin_id or storage.get(BIN_ID_KEY) or None
        self._quotes: list[Quote] = self._read_cache()
        self._error: str | None = None
        self._in_flight = 0
        self._load_generation = 0

    # ── State ───────────────────────────────────────────────────────

    @property
    def quotes(self) -> tuple[Quote, ...]:
        return tuple(self._quotes)

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def bin_id(self) -> str | None:
        return self._bin_id

    # ── Remote sync ─────────────────────────────────────────────────

    async def load_quotes(self) -> list[Quote]:
        """Replace the collection with the bin's latest quotes.

        Never raises: missing configuration and remote failures are reported
        through ``error`` and yield an empty list. A missing bin is the normal
        "nothing saved yet" state and is not an error.
        """
        try:
            bin_id = self._require_load_config()
        except ConfigurationMissingError as exc:
            self._log.step_warning(SyncStage.LOAD, str(exc))
            self._set_error(str(exc))
            self._set_quotes([])
            return []

        self._load_generation += 1
        generation = self._load_generation

        self._begin()
        self._set_error(None)
        self._log.step_start(SyncStage.LOAD, "Loading quotes", bin_id=bin_id)
        try:
            fetched = await self._remote.fetch_latest(bin_id)
        except BinNotFoundError:
            self._log.step_warning(SyncStage.LOAD, "Bin not found, starting empty", bin_id=bin_id)
            if self._is_current_load(generation):
                self._set_quotes([])
                self._write_cache()
            return []
        except RemoteStoreError as exc:
            self._log.step_error(SyncStage.LOAD, LOAD_ERROR_PREFIX, error=exc)
            if self._is_current_load(generation):
                self._set_error(f"{LOAD_ERROR_PREFIX}: {exc.message}")
                self._set_quotes([])
            return []
        finally:
            self._end()

        if not self._is_current_load(generation):
            logger.info("Discarding stale load of bin %s", bin_id)
            return list(self._quotes)

        self._set_quotes(fetched)
        self._log.step_complete(SyncStage.LOAD, f"Loaded {len(fetched)} quote(s)", bin_id=bin_id)
        self._write_cache()
        return list(fetched)

    async def save_quotes(self) -> bool:
        """Write the whole collection to the bin, creating the bin if needed.

        Returns True on success. On failure ``error`` holds a message starting
        with "Failed to save quotes" and False is returned.
        """
        if not self._remote.has_credentials:
            exc = ConfigurationMissingError("access key")
            self._log.step_warning(SyncStage.SAVE, str(exc))
            self._set_error(str(exc))
            return False

        snapshot = list(self._quotes)
        self._begin()
        self._set_error(None)
        try:
            if self._bin_id:
                with self._log.timed_step(
                    SyncStage.SAVE, f"Saving {len(snapshot)} quote(s)", bin_id=self._bin_id
                ):
                    await self._remote.replace(self._bin_id, snapshot)
            else:
                with self._log.timed_step(SyncStage.CREATE, f"Creating bin with {len(snapshot)} quote(s)"):
                    metadata = await self._remote.create(snapshot)
                self._remember_bin_id(metadata.bin_id)
        except RemoteStoreError as exc:
            self._set_error(f"{SAVE_ERROR_PREFIX}: {exc.message}")
            return False
        finally:
            self._end()

        self._write_cache()
        return True

    # ── Two-phase mutations ─────────────────────────────────────────

    def stage_quote(
        self,
        text: str,
        author: str,
        font: str | None = None,
        size: int | None = None,
    ) -> Quote:
        """Phase one of an add: build the quote and prepend it locally.

        Font and size default to the current display settings.
        """
        quote = Quote.create(
            text,
            author,
            font=font if font is not None else self._settings.font_family,
            size=size if size is not None else self._settings.font_size,
        )
        self._quotes.insert(0, quote)
        self._notify("quotes")
        return quote

    def rollback_quote(self, quote: Quote) -> bool:
        """Undo a staged add. Matches by identity, so id collisions are harmless."""
        for index, existing in enumerate(self._quotes):
            if existing is quote:
                del self._quotes[index]
                self._log.step_warning(SyncStage.ROLLBACK, "Removed unsaved quote", quote_id=quote.id)
                self._notify("quotes")
                return True
        return False

    async def add_quote(
        self,
        text: str,
        author: str,
        font: str | None = None,
        size: int | None = None,
    ) -> Quote:
        """Add a quote and persist it; the quote is committed only if the save succeeds.

        Raises:
            QuoteSaveError: the save failed and the staged quote was removed.
        """
        quote = self.stage_quote(text, author, font=font, size=size)
        if await self.save_quotes():
            return quote
        self.rollback_quote(quote)
        raise QuoteSaveError(self._error or SAVE_ERROR_PREFIX)

    async def delete_quote(self, quote_id: str) -> Quote:
        """Remove a quote and persist; restores it in place if the save fails."""
        index = self._index_of(quote_id)
        if index is None:
            raise EntityNotFoundError("Quote", quote_id)

        quote = self._quotes.pop(index)
        remaining = self._quotes
        self._notify("quotes")
        if await self.save_quotes():
            return quote

        # A load that landed during the save replaced the list; leave it alone
        if self._quotes is remaining:
            self._quotes.insert(min(index, len(self._quotes)), quote)
            self._log.step_warning(SyncStage.ROLLBACK, "Restored quote after failed delete", quote_id=quote_id)
            self._notify("quotes")
        raise QuoteSaveError(self._error or SAVE_ERROR_PREFIX)

    # ── Lookup & navigation ─────────────────────────────────────────

    def get_quote_by_id(self, quote_id: str) -> Quote | None:
        return next((q for q in self._quotes if q.id == quote_id), None)

    def get_quote_by_slug(self, slug: str) -> Quote | None:
        return next((q for q in self._quotes if q.slug == slug), None)

    def get_next_quote(self, current_id: str) -> Quote | None:
        """The quote after ``current_id``, wrapping from the last to the first."""
        index = self._index_of(current_id)
        if index is None:
            return None
        return self._quotes[(index + 1) % len(self._quotes)]

    def get_previous_quote(self, current_id: str) -> Quote | None:
        """The quote before ``current_id``, wrapping from the first to the last."""
        index = self._index_of(current_id)
        if index is None:
            return None
        return self._quotes[(index - 1 + len(self._quotes)) % len(self._quotes)]

    # ── Internals ───────────────────────────────────────────────────

    def _index_of(self, quote_id: str) -> int | None:
        for index, quote in enumerate(self._quotes):
            if quote.id == quote_id:
                return index
        return None

    def _require_load_config(self) -> str:
        if not self._remote.has_credentials:
            raise ConfigurationMissingError("access key")
        if not self._bin_id:
            raise ConfigurationMissingError("bin id")
        return self._bin_id

    def _is_current_load(self, generation: int) -> bool:
        return generation == self._load_generation

    def _begin(self) -> None:
        self._in_flight += 1
        if self._in_flight == 1:
            self._notify("is_loading")

    def _end(self) -> None:
        self._in_flight -= 1
        if self._in_flight == 0:
            self._notify("is_loading")

    def _set_quotes(self, quotes: list[Quote]) -> None:
        self._quotes = list(quotes)
        self._notify("quotes")

    def _set_error(self, message: str | None) -> None:
        if message == self._error:
            return
        self._error = message
        self._notify("error")

    def _remember_bin_id(self, bin_id: str | None) -> None:
        """Keep a newly created bin id for this session and for later sessions."""
        if not bin_id:
            return
        self._bin_id = bin_id
        self._notify("bin_id")
        try:
            self._storage.set(BIN_ID_KEY, bin_id)
        except OSError:
            logger.exception("Created bin %s but could not persist its id locally", bin_id)

    def _read_cache(self) -> list[Quote]:
        raw = self._storage.get(QUOTES_CACHE_KEY)
        if not raw:
            return []
        try:
            items = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring corrupt local quotes cache")
            return []
        if not isinstance(items, list):
            return []
        return [Quote.from_dict(item) for item in items if isinstance(item, dict)]

    def _write_cache(self) -> None:
        try:
            self._storage.set(
                QUOTES_CACHE_KEY, json.dumps([q.to_dict() for q in self._quotes])
            )
        except OSError as exc:
            self._log.step_error(SyncStage.CACHE, "Could not update local quotes cache", error=exc)
