"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - Source hosts carry no trailing slash (URLs are built by plain joining)

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Defaults provided for all settings: works out-of-the-box against public GitHub
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from mockapi.core.domain_types import (
    CONFIG_FILE_NAME,
    DEFAULT_NOTIFICATION_TIMEOUT_SECONDS,
)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="MOCKAPI_", case_sensitive=False,
    )

    # Configuration source
    config_file_name: str = CONFIG_FILE_NAME
    raw_content_host: str = "https://raw.githubusercontent.com"
    content_api_host: str = "https://api.github.com"
    content_api_accept: str = "application/vnd.github.raw"
    fetch_timeout_seconds: float = 10.0

    @field_validator("raw_content_host", "content_api_host")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # Notifications
    notification_request_timeout_seconds: float = DEFAULT_NOTIFICATION_TIMEOUT_SECONDS

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
