"""Wire format of the ping data server.

``GET /ping-data`` returns a JSON array of objects such as::

    {"timestamp": "2026-10-19T08:00:00Z", "url": "github.com",
     "ip": "140.82.113.4", "status": "Success", "response_time": 23.4}

A missing or null ``response_time`` means no latency was measured; it is
never mapped to a sentinel number. ``NaN`` and infinite values are rejected
with the item. ``succeeded`` may be sent explicitly, otherwise it is derived
from ``status``.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Annotated

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from pingwatch.settings import parse_target_urls
from pingwatch.source.constants import TARGET_URLS_KEY
from pingwatch.source.errors import PayloadError
from pingwatch.status.models import ProbeRecord, ProbeStatus


class WirePingRecord(BaseModel):
    """One item of the ``/ping-data`` payload."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    timestamp: datetime
    url: Annotated[str, Field(min_length=1)]
    ip: str | None = None
    status: ProbeStatus | None = None
    response_time: Annotated[float, Field(allow_inf_nan=False)] | None = Field(
        default=None,
        validation_alias=AliasChoices("response_time", "responseTime"),
    )
    succeeded: bool | None = None

    def is_succeeded(self) -> bool:
        """Resolve the success flag, preferring the explicit field."""
        if self.succeeded is not None:
            return self.succeeded
        return self.status is not None and self.status != ProbeStatus.PING_FAILURE

    def to_record(self) -> ProbeRecord:
        """Convert to an engine ProbeRecord."""
        return ProbeRecord(
            timestamp=self.timestamp,
            endpoint_id=self.url,
            resolved_address=self.ip or None,
            latency_ms=self.response_time,
            succeeded=self.is_succeeded(),
        )


@dataclass
class ParsedPayload:
    """Records accepted from a payload plus the rejected items.

    Attributes:
        records: Valid probe records, in payload order.
        rejected: ``(index, reason)`` for every item that was dropped.
    """

    records: list[ProbeRecord] = field(default_factory=list)
    rejected: list[tuple[int, str]] = field(default_factory=list)


def parse_ping_payload(payload: object) -> ParsedPayload:
    """Parse a decoded ``/ping-data`` body.

    Malformed items are dropped individually so that one bad row does not
    discard the whole snapshot. An item without ``status`` and without
    ``succeeded`` is malformed.

    Args:
        payload: Decoded JSON body.

    Returns:
        ParsedPayload with accepted records and rejected item reasons.

    Raises:
        PayloadError: If the body is not a JSON array.
    """
    if not isinstance(payload, list):
        msg = f"Expected a JSON array of ping records, got {type(payload).__name__}"
        raise PayloadError(msg)

    parsed = ParsedPayload()
    for index, item in enumerate(payload):
        try:
            wire = WirePingRecord.model_validate(item)
            if wire.status is None and wire.succeeded is None:
                parsed.rejected.append((index, "missing both status and succeeded"))
                continue
            record = wire.to_record()
        except ValidationError as e:
            parsed.rejected.append((index, _first_error(e)))
            continue
        parsed.records.append(record)
    return parsed


def parse_env_config(payload: object) -> set[str]:
    """Extract configured endpoints from a decoded ``/env-config`` body.

    Args:
        payload: Decoded JSON body.

    Returns:
        Configured endpoint identifiers; empty when none are listed.

    Raises:
        PayloadError: If the body is not a JSON object.
    """
    if not isinstance(payload, dict):
        msg = f"Expected a JSON object for env-config, got {type(payload).__name__}"
        raise PayloadError(msg)
    targets = payload.get(TARGET_URLS_KEY)
    return parse_target_urls(str(targets) if targets is not None else None)


def _first_error(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "item"
    return f"{location}: {first['msg']}"
