"""Endpoint configuration schema."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator


class EndpointConfig(BaseModel):
    """Configuration for a single monitored endpoint.

    Attributes:
        id: Endpoint key as reported by probes (e.g. hostname).
        name: Optional display name.
        enabled: Disabled endpoints are not tracked.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: Annotated[str, Field(min_length=1, max_length=253)]
    name: str | None = None
    enabled: bool = True


class EndpointsConfig(BaseModel):
    """Root of ``endpoints.yaml``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    endpoints: list[EndpointConfig] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "EndpointsConfig":
        """Reject duplicate endpoint ids."""
        seen: set[str] = set()
        for endpoint in self.endpoints:
            if endpoint.id in seen:
                msg = f"Duplicate endpoint id: '{endpoint.id}'"
                raise ValueError(msg)
            seen.add(endpoint.id)
        return self

    @property
    def tracked_ids(self) -> set[str]:
        """Ids of enabled endpoints."""
        return {e.id for e in self.endpoints if e.enabled}
