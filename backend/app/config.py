import logging
from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Beautiful Words API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:5173"]

    # JSONBin configuration; an empty key or bin id disables remote sync
    jsonbin_base_url: str = "https://api.jsonbin.io/v3/b"
    jsonbin_access_key: str = ""
    jsonbin_bin_id: str = ""
    jsonbin_access_key_header: str = "X-Access-Key"
    jsonbin_bin_name: str = "Beautiful Words Quotes"
    jsonbin_timeout: float = 30.0

    # Local key-value persistence (display settings, bin id, quotes cache)
    local_storage_file: str = "data/local_storage.json"

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_http: str = "WARNING"          # httpx / httpcore outbound HTTP
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_sync: str = "INFO"             # QuotesStore sync pipeline
    log_level_jsonbin: str = "INFO"          # JSONBin client

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        """Normalize JSONBin values so stray whitespace counts as missing."""
        object.__setattr__(self, "jsonbin_access_key", self.jsonbin_access_key.strip())
        object.__setattr__(self, "jsonbin_bin_id", self.jsonbin_bin_id.strip())
        object.__setattr__(self, "jsonbin_base_url", self.jsonbin_base_url.rstrip("/"))
        if not self.jsonbin_access_key:
            _config_logger.debug("JSONBIN_ACCESS_KEY is empty; remote sync will be disabled")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
