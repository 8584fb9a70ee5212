"""Configuration models for the ping data source."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pingwatch.source.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_FETCH_LIMIT,
    DEFAULT_TIMEOUT_SECONDS,
)


class SourceConfig(BaseModel):
    """Configuration for the HTTP ping data source.

    One request is made per fetch; a failed request is reported, not retried.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_url: Annotated[str, Field(min_length=1)] = DEFAULT_BASE_URL
    user_agent: Annotated[str, Field(min_length=1, max_length=500)] = (
        "pingwatch/0.1"
    )
    timeout_seconds: Annotated[float, Field(gt=0.0, le=300.0)] = (
        DEFAULT_TIMEOUT_SECONDS
    )
    fetch_limit: Annotated[int, Field(ge=1, le=100_000)] = DEFAULT_FETCH_LIMIT

    @field_validator("base_url")
    @classmethod
    def validate_scheme(cls, v: str) -> str:
        """Require an http(s) base URL without a trailing slash."""
        if not v.startswith(("http://", "https://")):
            msg = f"base_url must start with http:// or https://, got '{v}'"
            raise ValueError(msg)
        return v.rstrip("/")

    def url_for(self, path: str) -> str:
        """Join a server route onto the base URL."""
        return f"{self.base_url}{path}"
