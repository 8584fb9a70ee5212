"""Metrics collection for ping data sources."""

from dataclasses import dataclass, field
from typing import ClassVar

from pingwatch.source.errors import FetchErrorClass


@dataclass
class SourceMetrics:
    """Metrics for data source operations.

    Singleton class that tracks request counts, failures by class,
    records accepted and rejected, and fallback usage.
    """

    requests_total: int = 0
    failures_total: dict[str, int] = field(default_factory=dict)
    records_accepted_total: int = 0
    records_rejected_total: int = 0
    fallbacks_total: int = 0
    duration_ms_total: float = 0.0

    _instance: ClassVar["SourceMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "SourceMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_request(self, duration_ms: float) -> None:
        """Record a completed request.

        Args:
            duration_ms: Duration in milliseconds.
        """
        self.requests_total += 1
        self.duration_ms_total += duration_ms

    def record_failure(self, error_class: FetchErrorClass) -> None:
        """Record a source failure.

        Args:
            error_class: Classification of the failure.
        """
        key = error_class.value
        self.failures_total[key] = self.failures_total.get(key, 0) + 1

    def record_records(self, accepted: int, rejected: int) -> None:
        """Record payload items accepted and rejected."""
        self.records_accepted_total += accepted
        self.records_rejected_total += rejected

    def record_fallback(self) -> None:
        """Record a switch to the fallback source."""
        self.fallbacks_total += 1

    def to_dict(self) -> dict[str, int | float | dict[str, int]]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "source_requests_total": self.requests_total,
            "source_failures_total": dict(self.failures_total),
            "source_records_accepted_total": self.records_accepted_total,
            "source_records_rejected_total": self.records_rejected_total,
            "source_fallbacks_total": self.fallbacks_total,
            "source_duration_ms_total": self.duration_ms_total,
        }
