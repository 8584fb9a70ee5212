"""Probe outcome classification."""

from pingwatch.status.constants import DEFAULT_HIGH_LATENCY_THRESHOLD_MS
from pingwatch.status.models import ProbeRecord, ProbeStatus


def classify(
    record: ProbeRecord,
    high_latency_threshold_ms: float = DEFAULT_HIGH_LATENCY_THRESHOLD_MS,
) -> ProbeStatus:
    """Classify a single probe record.

    Rules, evaluated in order:
    - a failed probe is PING_FAILURE, whatever its latency
    - a successful probe without latency is PING_FAILURE
    - latency above the threshold is HIGH_LATENCY
    - anything else is SUCCESS, zero and negative latencies included

    Args:
        record: Probe record to classify.
        high_latency_threshold_ms: Latency above which a probe is slow.

    Returns:
        The probe status.
    """
    if not record.succeeded or record.latency_ms is None:
        return ProbeStatus.PING_FAILURE
    if record.latency_ms > high_latency_threshold_ms:
        return ProbeStatus.HIGH_LATENCY
    return ProbeStatus.SUCCESS


class ProbeClassifier:
    """Classifier bound to a configured high-latency threshold."""

    def __init__(
        self, high_latency_threshold_ms: float = DEFAULT_HIGH_LATENCY_THRESHOLD_MS
    ) -> None:
        self._threshold_ms = high_latency_threshold_ms

    @property
    def high_latency_threshold_ms(self) -> float:
        """Configured threshold in milliseconds."""
        return self._threshold_ms

    def __call__(self, record: ProbeRecord) -> ProbeStatus:
        return classify(record, self._threshold_ms)
