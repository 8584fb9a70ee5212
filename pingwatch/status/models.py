"""Models for probe records and per-endpoint status summaries."""

from datetime import UTC, datetime
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pingwatch.status.constants import (
    CHART_WINDOW_SIZE,
    DEFAULT_HIGH_LATENCY_THRESHOLD_MS,
    DISTRIBUTION_WINDOW_SIZE,
    RECENT_WINDOW_SIZE,
)


class ProbeStatus(str, Enum):
    """Classification of a single probe outcome.

    - SUCCESS: Probe answered within the latency threshold
    - HIGH_LATENCY: Probe answered above the latency threshold
    - PING_FAILURE: Probe failed or produced no usable latency

    The values match the labels used on the wire by the ping data server.
    """

    SUCCESS = "Success"
    HIGH_LATENCY = "High Latency"
    PING_FAILURE = "Ping Failure"


# Label shown for an endpoint that has no probe records yet.
UNKNOWN_STATUS_LABEL = "Unknown"


class ProbeRecord(BaseModel):
    """One observed probe attempt against an endpoint.

    Records are immutable. ``succeeded`` is authoritative: a failed probe is a
    failure even when a latency value is present.

    Attributes:
        timestamp: When the probe ran.
        endpoint_id: Monitored endpoint key (e.g. hostname).
        resolved_address: Address the endpoint resolved to, if known.
        latency_ms: Finite round-trip time; None when no response arrived.
        succeeded: Whether the probe reported success.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    timestamp: datetime
    endpoint_id: Annotated[str, Field(min_length=1)]
    resolved_address: str | None = None
    latency_ms: Annotated[float, Field(allow_inf_nan=False)] | None = None
    succeeded: bool

    @field_validator("timestamp")
    @classmethod
    def assume_utc_when_naive(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC so records always compare."""
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    @property
    def has_latency(self) -> bool:
        """Whether a latency measurement is present."""
        return self.latency_ms is not None


class AggregatorConfig(BaseModel):
    """Tunables for the status aggregator."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    high_latency_threshold_ms: Annotated[float, Field(allow_inf_nan=False)] = (
        DEFAULT_HIGH_LATENCY_THRESHOLD_MS
    )
    recent_window_size: Annotated[int, Field(ge=1)] = RECENT_WINDOW_SIZE
    chart_window_size: Annotated[int, Field(ge=1)] = CHART_WINDOW_SIZE
    distribution_window_size: Annotated[int, Field(ge=1)] = DISTRIBUTION_WINDOW_SIZE


class StatusDistribution(BaseModel):
    """Status counts over the most recent probes of an endpoint."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    success: Annotated[int, Field(ge=0)] = 0
    high_latency: Annotated[int, Field(ge=0)] = 0
    ping_failure: Annotated[int, Field(ge=0)] = 0

    @property
    def total(self) -> int:
        """Number of probes counted."""
        return self.success + self.high_latency + self.ping_failure

    def count(self, status: ProbeStatus) -> int:
        """Get the count for one status."""
        counts = {
            ProbeStatus.SUCCESS: self.success,
            ProbeStatus.HIGH_LATENCY: self.high_latency,
            ProbeStatus.PING_FAILURE: self.ping_failure,
        }
        return counts[status]

    def percentage(self, status: ProbeStatus) -> float:
        """Share of counted probes with ``status``, in percent."""
        if self.total == 0:
            return 0.0
        return self.count(status) / self.total * 100


class EndpointSummary(BaseModel):
    """Reconciled health summary for one endpoint.

    Recomputed from scratch on every aggregation pass. An endpoint without
    any records is represented by the defaults: no status, empty windows,
    zero uptime and zero counters.

    Attributes:
        endpoint_id: Monitored endpoint key; configured ids are taken as given.
        resolved_address: Address from the latest record.
        latest_status: Status of the latest record, None without records.
        latest_probe: Most recent record, None without records.
        recent_window: Most recent probes, most-recent-first.
        chart_window: Most recent probes with latency, oldest-first.
        average_latency_ms: Mean latency over ``chart_window``.
        uptime_percent: Non-failure share of the full history.
        consecutive_failures: Ping Failure run from the latest record.
        consecutive_high_latency_alerts: High Latency run from the latest record.
        status_distribution: Status counts over the most recent probes.
        total_probes: Number of records in the full history.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    endpoint_id: str
    resolved_address: str | None = None
    latest_status: ProbeStatus | None = None
    latest_probe: ProbeRecord | None = None
    recent_window: tuple[ProbeRecord, ...] = ()
    chart_window: tuple[ProbeRecord, ...] = ()
    average_latency_ms: float | None = None
    uptime_percent: Annotated[float, Field(ge=0.0, le=100.0)] = 0.0
    consecutive_failures: Annotated[int, Field(ge=0)] = 0
    consecutive_high_latency_alerts: Annotated[int, Field(ge=0)] = 0
    status_distribution: StatusDistribution = Field(
        default_factory=StatusDistribution
    )
    total_probes: Annotated[int, Field(ge=0)] = 0

    @property
    def has_data(self) -> bool:
        """Whether any probe record was observed for this endpoint."""
        return self.latest_status is not None

    @property
    def status_label(self) -> str:
        """Display label for the latest status."""
        if self.latest_status is None:
            return UNKNOWN_STATUS_LABEL
        return self.latest_status.value

    @property
    def chart_points(self) -> list[tuple[datetime, float]]:
        """Chronological ``(timestamp, latency_ms)`` pairs for plotting."""
        return [
            (record.timestamp, record.latency_ms)
            for record in self.chart_window
            if record.latency_ms is not None
        ]


class FleetOverview(BaseModel):
    """Pre-computed counts across all endpoint summaries.

    - up: latest status Success
    - degraded: latest status High Latency
    - down: latest status Ping Failure
    - no_data: no records observed
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    total: Annotated[int, Field(ge=0)]
    up: Annotated[int, Field(ge=0)]
    degraded: Annotated[int, Field(ge=0)]
    down: Annotated[int, Field(ge=0)]
    no_data: Annotated[int, Field(ge=0)]
    average_uptime_percent: Annotated[float, Field(ge=0.0, le=100.0)] = 0.0

    @property
    def reporting(self) -> int:
        """Endpoints with at least one record."""
        return self.total - self.no_data
