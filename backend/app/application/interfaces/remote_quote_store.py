"""Abstract remote quote store interface — port for JSON document store adapters."""

from abc import ABC, abstractmethod

from app.domain.entities import BinMetadata, Quote


class RemoteQuoteStore(ABC):
    """Port — defines what the quotes store needs from a remote bin service.

    Implementations are stateless: the bin id is passed on every call.
    Failures are raised as ``RemoteStoreError``; a missing bin on fetch is
    raised as ``BinNotFoundError``.
    """

    @property
    @abstractmethod
    def has_credentials(self) -> bool:
        """Whether an access key is configured; without one no call is attempted."""
        ...

    @abstractmethod
    async def fetch_latest(self, bin_id: str) -> list[Quote]:
        """Return the quotes held by the latest version of the bin."""
        ...

    @abstractmethod
    async def replace(self, bin_id: str, quotes: list[Quote]) -> BinMetadata:
        """Overwrite the bin's quotes with the given collection."""
        ...

    @abstractmethod
    async def create(self, quotes: list[Quote]) -> BinMetadata:
        """Create a new bin holding the given quotes and return its metadata."""
        ...
