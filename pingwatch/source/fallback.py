"""Source wrapper that switches to a fallback when the primary fails."""

import structlog

from pingwatch.source.constants import COMPONENT_SOURCE
from pingwatch.source.errors import SourceError
from pingwatch.source.metrics import SourceMetrics
from pingwatch.source.protocols import ProbeSource
from pingwatch.status.models import ProbeRecord


logger = structlog.get_logger()


class FallbackProbeSource:
    """Serves records from ``fallback`` whenever ``primary`` raises.

    Used to keep a dashboard populated with demo data while the ping data
    server is unreachable. Only :class:`SourceError` triggers the fallback;
    anything else propagates.
    """

    def __init__(
        self,
        primary: ProbeSource,
        fallback: ProbeSource,
        metrics: SourceMetrics | None = None,
    ) -> None:
        """Initialize the wrapper.

        Args:
            primary: Preferred source.
            fallback: Source used when the primary fails.
            metrics: Optional metrics instance.
        """
        self._primary = primary
        self._fallback = fallback
        self._metrics = metrics or SourceMetrics.get_instance()
        self._log = logger.bind(component=COMPONENT_SOURCE)

    def fetch_records(
        self, endpoint_id: str | None = None, limit: int | None = None
    ) -> list[ProbeRecord]:
        """Fetch from the primary, falling back on source errors."""
        try:
            return self._primary.fetch_records(endpoint_id=endpoint_id, limit=limit)
        except SourceError as e:
            self._metrics.record_fallback()
            self._log.warning(
                "source_fallback_used",
                error=str(e),
                error_class=e.error_class.value,
            )
            return self._fallback.fetch_records(endpoint_id=endpoint_id, limit=limit)

    def fetch_configured_endpoints(self) -> set[str]:
        """Configured endpoints always come from the primary."""
        return self._primary.fetch_configured_endpoints()
