"""Deterministic mock probe source for offline demos and tests."""

from collections.abc import Callable, Sequence
from datetime import UTC, datetime, timedelta

import structlog

from pingwatch.source.constants import COMPONENT_SOURCE
from pingwatch.status.models import ProbeRecord, ProbeStatus


logger = structlog.get_logger()

# (endpoint_id, resolved_address)
DEFAULT_MOCK_ENDPOINTS: tuple[tuple[str, str], ...] = (
    ("g.co", "8.8.8.8"),
    ("github.com", "140.82.113.4"),
    ("microsoft.com", "13.107.42.14"),
)

DEFAULT_MOCK_RECORD_COUNT = 100
MOCK_PROBE_SPACING = timedelta(seconds=10)


def generate_mock_records(
    now: datetime,
    count: int = DEFAULT_MOCK_RECORD_COUNT,
    endpoints: Sequence[tuple[str, str]] = DEFAULT_MOCK_ENDPOINTS,
) -> list[ProbeRecord]:
    """Generate a reproducible record set.

    Record ``i`` targets ``endpoints[i % len(endpoints)]`` at ``now - 10s * i``.
    Its outcome comes from ``r = (i * 7 + 3) % 100``: ``r < 75`` answers in
    ``20 + r % 50`` ms, ``r < 90`` answers slowly in ``100 + r % 200`` ms,
    anything else fails without latency.

    Args:
        now: Timestamp of the newest record.
        count: Number of records.
        endpoints: ``(endpoint_id, resolved_address)`` pairs to rotate over.

    Returns:
        Records newest-first.
    """
    records: list[ProbeRecord] = []
    for i in range(count):
        endpoint_id, address = endpoints[i % len(endpoints)]
        status, latency_ms = _mock_outcome((i * 7 + 3) % 100)
        records.append(
            ProbeRecord(
                timestamp=now - MOCK_PROBE_SPACING * i,
                endpoint_id=endpoint_id,
                resolved_address=address,
                latency_ms=latency_ms,
                succeeded=status != ProbeStatus.PING_FAILURE,
            )
        )
    return records


def _mock_outcome(r: int) -> tuple[ProbeStatus, float | None]:
    if r < 75:
        return ProbeStatus.SUCCESS, 20.0 + (r % 50)
    if r < 90:
        return ProbeStatus.HIGH_LATENCY, 100.0 + (r % 200)
    return ProbeStatus.PING_FAILURE, None


class MockProbeSource:
    """Probe source serving generated records instead of a server.

    Each fetch generates a fresh record set against the injected clock, so
    no data is shared between callers.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] | None = None,
        count: int = DEFAULT_MOCK_RECORD_COUNT,
        endpoints: Sequence[tuple[str, str]] = DEFAULT_MOCK_ENDPOINTS,
        configured_endpoints: set[str] | None = None,
    ) -> None:
        """Initialize the mock source.

        Args:
            clock: Returns the newest record timestamp (default: now in UTC).
            count: Records generated per fetch.
            endpoints: ``(endpoint_id, resolved_address)`` pairs.
            configured_endpoints: Set returned as the configured endpoints.
        """
        self._clock = clock or (lambda: datetime.now(UTC))
        self._count = count
        self._endpoints = tuple(endpoints)
        self._configured = set(configured_endpoints or ())
        self._log = logger.bind(component=COMPONENT_SOURCE, source="mock")

    def fetch_records(
        self, endpoint_id: str | None = None, limit: int | None = None
    ) -> list[ProbeRecord]:
        """Generate records, optionally for one endpoint and capped to limit."""
        records = generate_mock_records(self._clock(), self._count, self._endpoints)
        if endpoint_id is not None:
            records = [r for r in records if r.endpoint_id == endpoint_id]
        if limit is not None:
            records = records[:limit]
        self._log.debug("mock_records_generated", records=len(records))
        return records

    def fetch_configured_endpoints(self) -> set[str]:
        """Return the configured endpoint set given at construction."""
        return set(self._configured)
