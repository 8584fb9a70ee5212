"""One refresh pass: fetch a snapshot, aggregate it, summarize the fleet."""

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime

import structlog

from pingwatch.renderer.models import RunInfo
from pingwatch.source.protocols import ProbeSource
from pingwatch.status.aggregator import StatusAggregator, compute_overview
from pingwatch.status.models import EndpointSummary, FleetOverview


logger = structlog.get_logger()


@dataclass
class RefreshResult:
    """Output of a refresh pass.

    Attributes:
        summaries: Endpoint summaries sorted by endpoint_id.
        overview: Fleet overview computed from the summaries.
        run_info: Run metadata.
    """

    summaries: list[EndpointSummary]
    overview: FleetOverview
    run_info: RunInfo


@dataclass
class RefreshPipeline:
    """Fetches probe records and aggregates them into summaries.

    When ``configured_endpoints`` is set (from an endpoints file or
    ``TARGET_URLS``), it replaces the source's own configured set.
    Source errors propagate to the caller, which owns scheduling and
    decides whether a failed pass is fatal.

    Attributes:
        source: Probe record source.
        aggregator: Status aggregator.
        configured_endpoints: Optional static endpoint set.
        fetch_limit: Optional record limit passed to the source.
        source_name: Name reported in run info.
    """

    source: ProbeSource
    aggregator: StatusAggregator = field(default_factory=StatusAggregator)
    configured_endpoints: set[str] | None = None
    fetch_limit: int | None = None
    source_name: str = ""

    def refresh(self, endpoint_id: str | None = None) -> RefreshResult:
        """Run one pass.

        Args:
            endpoint_id: Restrict the pass to a single endpoint.

        Returns:
            RefreshResult for the pass.
        """
        run_id = uuid.uuid4().hex[:12]
        started_at = datetime.now(UTC)
        log = logger.bind(component="pipeline", run_id=run_id)

        records = self.source.fetch_records(
            endpoint_id=endpoint_id, limit=self.fetch_limit
        )
        if self.configured_endpoints is not None:
            configured = set(self.configured_endpoints)
        else:
            configured = self.source.fetch_configured_endpoints()
        if endpoint_id is not None:
            configured = {endpoint_id}

        summaries = self.aggregator.aggregate(records, configured)
        overview = compute_overview(summaries)

        run_info = RunInfo(
            run_id=run_id,
            started_at=started_at,
            finished_at=datetime.now(UTC),
            source=self.source_name or type(self.source).__name__,
            records_total=len(records),
            high_latency_threshold_ms=self.aggregator.config.high_latency_threshold_ms,
        )
        log.info(
            "refresh_complete",
            records_total=len(records),
            endpoints_total=overview.total,
            up=overview.up,
            degraded=overview.degraded,
            down=overview.down,
            no_data=overview.no_data,
        )
        return RefreshResult(summaries=summaries, overview=overview, run_info=run_info)
