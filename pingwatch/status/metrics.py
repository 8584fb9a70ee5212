"""Metrics for status aggregation."""

from threading import Lock


class AggregationMetrics:
    """Collects metrics for aggregation passes.

    Provides thread-safe counters for:
    - aggregation_passes_total
    - probe_records_processed_total
    - endpoints_unconfigured_dropped_total{endpoint_id}
    - endpoints_without_data_total{endpoint_id}
    - last_aggregation_duration_ms

    Aggregation itself is stateless; these counters only observe it.
    """

    _instance: "AggregationMetrics | None" = None
    _lock = Lock()

    def __init__(self) -> None:
        """Initialize the metrics collector."""
        self._passes_total = 0
        self._records_processed_total = 0
        self._unconfigured_dropped: dict[str, int] = {}
        self._without_data: dict[str, int] = {}
        self._last_duration_ms = 0.0
        self._lock = Lock()

    @classmethod
    def get_instance(cls) -> "AggregationMetrics":
        """Get the singleton metrics instance.

        Returns:
            The shared AggregationMetrics instance.
        """
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance (for testing)."""
        with cls._lock:
            cls._instance = None

    def record_pass(self, records_processed: int, duration_ms: float) -> None:
        """Record a completed aggregation pass.

        Args:
            records_processed: Number of input records.
            duration_ms: Pass duration in milliseconds.
        """
        with self._lock:
            self._passes_total += 1
            self._records_processed_total += records_processed
            self._last_duration_ms = duration_ms

    def record_unconfigured_dropped(self, endpoint_id: str) -> None:
        """Record an observed endpoint dropped for not being configured."""
        with self._lock:
            self._unconfigured_dropped[endpoint_id] = (
                self._unconfigured_dropped.get(endpoint_id, 0) + 1
            )

    def record_without_data(self, endpoint_id: str) -> None:
        """Record a configured endpoint that had no records."""
        with self._lock:
            self._without_data[endpoint_id] = self._without_data.get(endpoint_id, 0) + 1

    @property
    def passes_total(self) -> int:
        """Total aggregation passes."""
        with self._lock:
            return self._passes_total

    @property
    def records_processed_total(self) -> int:
        """Total records fed into aggregation."""
        with self._lock:
            return self._records_processed_total

    @property
    def last_duration_ms(self) -> float:
        """Duration of the most recent pass."""
        with self._lock:
            return self._last_duration_ms

    def get_unconfigured_dropped_total(self) -> dict[str, int]:
        """Get drop counts per unconfigured endpoint."""
        with self._lock:
            return dict(self._unconfigured_dropped)

    def get_without_data_total(self) -> dict[str, int]:
        """Get no-data counts per configured endpoint."""
        with self._lock:
            return dict(self._without_data)

    def to_dict(self) -> dict[str, object]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        with self._lock:
            return {
                "aggregation_passes_total": self._passes_total,
                "probe_records_processed_total": self._records_processed_total,
                "endpoints_unconfigured_dropped_total": dict(
                    self._unconfigured_dropped
                ),
                "endpoints_without_data_total": dict(self._without_data),
                "last_aggregation_duration_ms": self._last_duration_ms,
            }
