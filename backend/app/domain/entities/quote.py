"""Domain entities for quotes — pure Python business objects, no framework dependencies."""

import re
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

SLUG_MAX_LENGTH = 50

_NON_WORD = re.compile(r"[^A-Za-z0-9_\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def slugify(*parts: str, max_length: int = SLUG_MAX_LENGTH) -> str:
    """Build a URL-friendly slug from one or more text fragments.

    Fragments are joined with a space, lowercased, stripped of non-word
    characters, and whitespace runs become single hyphens. The result is
    truncated to ``max_length`` characters. Slugs are lossy and not unique.
    """
    text = " ".join(str(p) for p in parts).lower()
    text = _NON_WORD.sub("", text).strip()
    text = _WHITESPACE.sub("-", text)
    text = _HYPHENS.sub("-", text)
    return text[:max_length]


def _new_quote_id() -> str:
    """Timestamp-derived id (epoch milliseconds); unique on a best-effort basis."""
    return str(time.time_ns() // 1_000_000)


def _utc_iso_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _parse_size(value: Any) -> int | None:
    """Accept ints and digit strings; anything else is treated as absent."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


@dataclass
class Quote:
    """A captured quotation with the display preferences it was created with."""

    id: str
    text: str
    author: str
    slug: str
    font: str | None = None
    size: int | None = None
    created_at: str | None = None

    @classmethod
    def create(
        cls,
        text: str,
        author: str,
        *,
        font: str | None = None,
        size: int | None = None,
    ) -> "Quote":
        """Build a new quote, deriving its id, slug and creation timestamp."""
        if not text or not text.strip():
            raise ValueError("Quote text is required")
        if not author or not author.strip():
            raise ValueError("Quote author is required")
        return cls(
            id=_new_quote_id(),
            text=text,
            author=author,
            slug=slugify(text, author),
            font=font,
            size=size,
            created_at=_utc_iso_now(),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Quote":
        """Parse a quote from its wire (camelCase) representation."""
        return cls(
            id=str(data.get("id", "")),
            text=data.get("text", "") or "",
            author=data.get("author", "") or "",
            slug=data.get("slug", "") or "",
            font=data.get("font"),
            size=_parse_size(data.get("size")),
            created_at=data.get("createdAt"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire representation; absent optional fields are omitted."""
        result: dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "author": self.author,
            "slug": self.slug,
        }
        if self.font is not None:
            result["font"] = self.font
        if self.size is not None:
            result["size"] = self.size
        if self.created_at is not None:
            result["createdAt"] = self.created_at
        return result


@dataclass
class BinMetadata:
    """Metadata returned by the remote store alongside a bin record."""

    bin_id: str | None = None
    parent_id: str | None = None
    created_at: str | None = None
    private: bool | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "BinMetadata":
        data = data or {}
        known = {"id", "parentId", "createdAt", "private"}
        return cls(
            bin_id=data.get("id"),
            parent_id=data.get("parentId"),
            created_at=data.get("createdAt"),
            private=data.get("private"),
            extra={k: v for k, v in data.items() if k not in known},
        )
