"""Abstract key-value storage interface — flat string keys to string values."""

from abc import ABC, abstractmethod


class KeyValueStorage(ABC):
    """Port for local preference persistence (the browser localStorage analogue)."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value. Write failures propagate to the caller."""
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete a key; absent keys are ignored."""
        ...
