"""Aggregation engine turning probe records into per-endpoint summaries."""

import statistics
import time
from collections.abc import Iterable, Sequence

import structlog

from pingwatch.status.classifier import ProbeClassifier
from pingwatch.status.constants import COMPONENT_STATUS
from pingwatch.status.metrics import AggregationMetrics
from pingwatch.status.models import (
    AggregatorConfig,
    EndpointSummary,
    FleetOverview,
    ProbeRecord,
    ProbeStatus,
    StatusDistribution,
)


logger = structlog.get_logger()

# A record paired with its status, classified once per pass.
ClassifiedProbe = tuple[ProbeRecord, ProbeStatus]


class StatusAggregator:
    """Computes reconciled per-endpoint summaries from probe records.

    Every call to :meth:`aggregate` is a pure function of its arguments:
    records are grouped by endpoint, sorted most-recent-first, classified
    once, and reduced to an :class:`EndpointSummary`. The instance only holds
    configuration, so one aggregator may serve concurrent callers.

    Rules:
    - every configured endpoint appears exactly once, with or without records
    - observed endpoints outside a non-empty configured set are dropped
    - an empty configured set surfaces every observed endpoint
    - output is sorted by endpoint_id
    """

    def __init__(
        self,
        config: AggregatorConfig | None = None,
        run_id: str | None = None,
        metrics: AggregationMetrics | None = None,
    ) -> None:
        """Initialize the aggregator.

        Args:
            config: Threshold and window sizes.
            run_id: Optional run identifier for logging.
            metrics: Optional metrics instance.
        """
        self._config = config or AggregatorConfig()
        self._classify = ProbeClassifier(self._config.high_latency_threshold_ms)
        self._metrics = metrics or AggregationMetrics.get_instance()
        self._log = logger.bind(component=COMPONENT_STATUS)
        if run_id:
            self._log = self._log.bind(run_id=run_id)

    @property
    def config(self) -> AggregatorConfig:
        """Aggregator configuration."""
        return self._config

    def aggregate(
        self,
        records: Iterable[ProbeRecord],
        configured_endpoints: Iterable[str] = (),
    ) -> list[EndpointSummary]:
        """Aggregate probe records into one summary per endpoint.

        Args:
            records: Probe records in any order. Never mutated.
            configured_endpoints: Endpoints that must be tracked. Empty means
                the configuration is unknown and nothing is filtered.

        Returns:
            Endpoint summaries sorted by endpoint_id.
        """
        start_time = time.perf_counter()
        configured = frozenset(configured_endpoints)

        groups = self._group_by_endpoint(records)
        records_total = sum(len(group) for group in groups.values())

        summaries: dict[str, EndpointSummary] = {}
        for endpoint_id, group in groups.items():
            if configured and endpoint_id not in configured:
                self._metrics.record_unconfigured_dropped(endpoint_id)
                self._log.debug(
                    "endpoint_not_configured",
                    endpoint_id=endpoint_id,
                    records=len(group),
                )
                continue
            summaries[endpoint_id] = self.summarize(endpoint_id, group)

        for endpoint_id in configured - summaries.keys():
            self._metrics.record_without_data(endpoint_id)
            self._log.debug("endpoint_without_data", endpoint_id=endpoint_id)
            summaries[endpoint_id] = EndpointSummary(endpoint_id=endpoint_id)

        result = [summaries[endpoint_id] for endpoint_id in sorted(summaries)]

        duration_ms = (time.perf_counter() - start_time) * 1000
        self._metrics.record_pass(records_total, duration_ms)
        self._log.info(
            "aggregation_complete",
            records_total=records_total,
            endpoints_observed=len(groups),
            endpoints_configured=len(configured),
            endpoints_total=len(result),
            duration_ms=round(duration_ms, 2),
        )

        return result

    def summarize(
        self, endpoint_id: str, records: Sequence[ProbeRecord]
    ) -> EndpointSummary:
        """Build the summary for a single endpoint.

        Args:
            endpoint_id: Endpoint the records belong to.
            records: That endpoint's records in any order.

        Returns:
            EndpointSummary for the endpoint.
        """
        # sorted() is stable: equal timestamps keep their input order
        ordered = sorted(records, key=lambda r: r.timestamp, reverse=True)
        if not ordered:
            return EndpointSummary(endpoint_id=endpoint_id)

        classified: list[ClassifiedProbe] = [
            (record, self._classify(record)) for record in ordered
        ]
        latest, latest_status = classified[0]

        latency_window = [r for r in ordered if r.latency_ms is not None][
            : self._config.chart_window_size
        ]

        return EndpointSummary(
            endpoint_id=endpoint_id,
            resolved_address=latest.resolved_address,
            latest_status=latest_status,
            latest_probe=latest,
            recent_window=tuple(ordered[: self._config.recent_window_size]),
            chart_window=tuple(reversed(latency_window)),
            average_latency_ms=_mean_latency(latency_window),
            uptime_percent=_uptime_percent(classified),
            consecutive_failures=_leading_run(classified, ProbeStatus.PING_FAILURE),
            consecutive_high_latency_alerts=_leading_run(
                classified, ProbeStatus.HIGH_LATENCY
            ),
            status_distribution=_distribution(
                classified[: self._config.distribution_window_size]
            ),
            total_probes=len(ordered),
        )

    def _group_by_endpoint(
        self, records: Iterable[ProbeRecord]
    ) -> dict[str, list[ProbeRecord]]:
        """Partition records by endpoint_id, keeping input order."""
        groups: dict[str, list[ProbeRecord]] = {}
        for record in records:
            groups.setdefault(record.endpoint_id, []).append(record)
        return groups


def aggregate(
    records: Iterable[ProbeRecord],
    configured_endpoints: Iterable[str] = (),
    config: AggregatorConfig | None = None,
) -> list[EndpointSummary]:
    """Aggregate records with a throwaway :class:`StatusAggregator`."""
    return StatusAggregator(config).aggregate(records, configured_endpoints)


def compute_overview(summaries: Sequence[EndpointSummary]) -> FleetOverview:
    """Compute fleet-wide counts for a list of endpoint summaries.

    Args:
        summaries: Summaries from one aggregation pass.

    Returns:
        FleetOverview with pre-computed counts.
    """
    reporting = [s for s in summaries if s.has_data]
    average_uptime = (
        statistics.fmean(s.uptime_percent for s in reporting) if reporting else 0.0
    )
    return FleetOverview(
        total=len(summaries),
        up=sum(1 for s in reporting if s.latest_status == ProbeStatus.SUCCESS),
        degraded=sum(
            1 for s in reporting if s.latest_status == ProbeStatus.HIGH_LATENCY
        ),
        down=sum(1 for s in reporting if s.latest_status == ProbeStatus.PING_FAILURE),
        no_data=len(summaries) - len(reporting),
        average_uptime_percent=min(average_uptime, 100.0),
    )


def _mean_latency(window: Sequence[ProbeRecord]) -> float | None:
    latencies = [r.latency_ms for r in window if r.latency_ms is not None]
    if not latencies:
        return None
    return statistics.fmean(latencies)


def _uptime_percent(classified: Sequence[ClassifiedProbe]) -> float:
    if not classified:
        return 0.0
    up = sum(1 for _, status in classified if status != ProbeStatus.PING_FAILURE)
    return 100 * up / len(classified)


def _leading_run(classified: Sequence[ClassifiedProbe], status: ProbeStatus) -> int:
    """Count consecutive ``status`` records from the most recent one."""
    run = 0
    for _, probe_status in classified:
        if probe_status != status:
            break
        run += 1
    return run


def _distribution(classified: Sequence[ClassifiedProbe]) -> StatusDistribution:
    statuses = [status for _, status in classified]
    return StatusDistribution(
        success=statuses.count(ProbeStatus.SUCCESS),
        high_latency=statuses.count(ProbeStatus.HIGH_LATENCY),
        ping_failure=statuses.count(ProbeStatus.PING_FAILURE),
    )
