"""JSON-file backed key-value storage — the server-side stand-in for localStorage.

All keys live in one JSON object on disk:

    {"fontFamily": "\\"Ballet\\"", "fontSize": "48", "darkMode": "true", "binId": "..."}

Values are always strings; callers serialize structured values themselves.
"""

import json
import logging
from pathlib import Path
from typing import Any

from app.application.interfaces.key_value_storage import KeyValueStorage

logger = logging.getLogger(__name__)


class JsonFileStorage(KeyValueStorage):
    """Infrastructure adapter persisting flat string keys to a JSON file.

    The file is re-read on every access, so edits made by another process
    are picked up. Writes replace the whole file.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, Any]:
        """Read the JSON object, returning {} if missing or corrupt."""
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.warning("Could not read %s — using defaults", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("%s does not hold a JSON object — using defaults", self._path)
            return {}
        return data

    def _write(self, data: dict[str, Any]) -> None:
        """Persist the whole mapping to the JSON file."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def get(self, key: str) -> str | None:
        value = self._read().get(key)
        if value is None:
            return None
        return value if isinstance(value, str) else json.dumps(value)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)
