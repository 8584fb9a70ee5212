"""Application settings powered by Pydantic BaseSettings."""

from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pingwatch.status.constants import DEFAULT_HIGH_LATENCY_THRESHOLD_MS


class AppSettings(BaseSettings):
    """Centralized environment configuration."""

    model_config = SettingsConfigDict(
        env_prefix="", case_sensitive=False, env_file=".env", env_file_encoding="utf-8"
    )

    base_url: str = Field(
        default="http://localhost:8000", validation_alias="PINGWATCH_BASE_URL"
    )
    timeout_seconds: Annotated[float, Field(gt=0.0, le=300.0)] = Field(
        default=10.0, validation_alias="PINGWATCH_TIMEOUT_SECONDS"
    )
    fetch_limit: Annotated[int, Field(ge=1, le=100_000)] = Field(
        default=1000, validation_alias="PINGWATCH_FETCH_LIMIT"
    )
    high_latency_threshold_ms: float = Field(
        default=DEFAULT_HIGH_LATENCY_THRESHOLD_MS,
        validation_alias="PINGWATCH_HIGH_LATENCY_THRESHOLD_MS",
    )
    refresh_interval_seconds: Annotated[float, Field(gt=0.0)] = Field(
        default=10.0, validation_alias="PINGWATCH_REFRESH_INTERVAL_SECONDS"
    )
    target_urls: str | None = Field(default=None, validation_alias="TARGET_URLS")

    def configured_endpoints(self) -> set[str]:
        """Return the endpoints named in ``TARGET_URLS``.

        An unset or blank variable yields an empty set, meaning no filtering.
        """
        return parse_target_urls(self.target_urls)


def parse_target_urls(value: str | None) -> set[str]:
    """Split a comma-separated endpoint list, trimming blanks."""
    if not value:
        return set()
    return {item.strip() for item in value.split(",") if item.strip()}


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
