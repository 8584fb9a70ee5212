"""Unit tests for probe classification."""

import pytest

from pingwatch.status.classifier import ProbeClassifier, classify
from pingwatch.status.models import ProbeRecord, ProbeStatus
from tests.helpers.time import FIXED_NOW


def make_probe(
    latency_ms: float | None = 20.0,
    succeeded: bool = True,
    endpoint_id: str = "github.com",
) -> ProbeRecord:
    """Create a test probe record."""
    return ProbeRecord(
        timestamp=FIXED_NOW,
        endpoint_id=endpoint_id,
        resolved_address="140.82.113.4",
        latency_ms=latency_ms,
        succeeded=succeeded,
    )


class TestClassify:
    """Tests for the classify function."""

    def test_fast_success(self) -> None:
        """Latency under the threshold is SUCCESS."""
        assert classify(make_probe(latency_ms=42.0)) == ProbeStatus.SUCCESS

    def test_slow_success_is_high_latency(self) -> None:
        """Latency over the threshold is HIGH_LATENCY."""
        assert classify(make_probe(latency_ms=150.0)) == ProbeStatus.HIGH_LATENCY

    def test_threshold_is_exclusive(self) -> None:
        """Latency equal to the threshold is still SUCCESS."""
        assert classify(make_probe(latency_ms=100.0)) == ProbeStatus.SUCCESS
        assert classify(make_probe(latency_ms=100.01)) == ProbeStatus.HIGH_LATENCY

    def test_failure_without_latency(self) -> None:
        """Failed probe without latency is PING_FAILURE."""
        probe = make_probe(latency_ms=None, succeeded=False)
        assert classify(probe) == ProbeStatus.PING_FAILURE

    def test_failure_flag_wins_over_latency(self) -> None:
        """succeeded=False is authoritative even with a latency present."""
        assert classify(make_probe(latency_ms=12.0, succeeded=False)) == (
            ProbeStatus.PING_FAILURE
        )
        assert classify(make_probe(latency_ms=500.0, succeeded=False)) == (
            ProbeStatus.PING_FAILURE
        )

    def test_success_without_latency_is_failure(self) -> None:
        """A success without a measured latency counts as a failure."""
        probe = make_probe(latency_ms=None, succeeded=True)
        assert classify(probe) == ProbeStatus.PING_FAILURE

    @pytest.mark.parametrize("latency_ms", [0.0, -1.0, -250.0])
    def test_zero_and_negative_latency_tolerated(self, latency_ms: float) -> None:
        """Zero and negative latencies classify without raising."""
        assert classify(make_probe(latency_ms=latency_ms)) == ProbeStatus.SUCCESS

    def test_custom_threshold(self) -> None:
        """Threshold is configurable per call."""
        probe = make_probe(latency_ms=60.0)
        assert classify(probe, high_latency_threshold_ms=50.0) == (
            ProbeStatus.HIGH_LATENCY
        )
        assert classify(probe, high_latency_threshold_ms=75.0) == ProbeStatus.SUCCESS

    def test_deterministic_across_calls(self) -> None:
        """Same record classifies identically on repeated calls."""
        probes = [
            make_probe(latency_ms=None, succeeded=False),
            make_probe(latency_ms=None, succeeded=True),
            make_probe(latency_ms=30.0),
            make_probe(latency_ms=300.0),
            make_probe(latency_ms=-5.0),
        ]
        first = [classify(p) for p in probes]
        for _ in range(5):
            assert [classify(p) for p in probes] == first

    def test_status_values_match_wire_labels(self) -> None:
        """Enum values are the labels used by the ping data server."""
        assert ProbeStatus.SUCCESS.value == "Success"
        assert ProbeStatus.HIGH_LATENCY.value == "High Latency"
        assert ProbeStatus.PING_FAILURE.value == "Ping Failure"


class TestProbeClassifier:
    """Tests for the threshold-bound classifier."""

    def test_default_threshold(self) -> None:
        """Default threshold is 100 ms."""
        classifier = ProbeClassifier()
        assert classifier.high_latency_threshold_ms == 100.0
        assert classifier(make_probe(latency_ms=101.0)) == ProbeStatus.HIGH_LATENCY

    def test_configured_threshold(self) -> None:
        """Configured threshold is applied on every call."""
        classifier = ProbeClassifier(high_latency_threshold_ms=250.0)
        assert classifier(make_probe(latency_ms=200.0)) == ProbeStatus.SUCCESS
        assert classifier(make_probe(latency_ms=251.0)) == ProbeStatus.HIGH_LATENCY
