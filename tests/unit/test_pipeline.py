"""Unit tests for the refresh pipeline."""

from unittest.mock import MagicMock

import pytest

from pingwatch.pipeline import RefreshPipeline
from pingwatch.source.errors import SourceFetchError
from pingwatch.source.mock import MockProbeSource
from pingwatch.status.aggregator import StatusAggregator
from pingwatch.status.models import AggregatorConfig
from tests.helpers.time import FIXED_NOW


def make_source(configured: set[str] | None = None) -> MockProbeSource:
    """Create a mock source with a fixed clock."""
    return MockProbeSource(clock=lambda: FIXED_NOW, configured_endpoints=configured)


class TestRefreshPipeline:
    """Tests for RefreshPipeline."""

    def test_refresh_all_observed(self) -> None:
        """Without configuration every observed endpoint is reported."""
        pipeline = RefreshPipeline(source=make_source(), source_name="mock")

        result = pipeline.refresh()

        assert [s.endpoint_id for s in result.summaries] == [
            "g.co",
            "github.com",
            "microsoft.com",
        ]
        assert result.overview.total == 3
        assert result.overview.no_data == 0
        assert result.run_info.records_total == 100
        assert result.run_info.source == "mock"
        assert result.run_info.high_latency_threshold_ms == 100.0

    def test_source_configuration_used(self) -> None:
        """The source's configured set filters and reconciles."""
        pipeline = RefreshPipeline(source=make_source({"g.co", "offline.io"}))

        result = pipeline.refresh()

        assert [s.endpoint_id for s in result.summaries] == ["g.co", "offline.io"]
        assert result.overview.no_data == 1
        assert result.run_info.source == "MockProbeSource"

    def test_static_configuration_overrides_source(self) -> None:
        """A static configured set replaces the source's set."""
        pipeline = RefreshPipeline(
            source=make_source({"g.co"}), configured_endpoints={"github.com"}
        )

        result = pipeline.refresh()

        assert [s.endpoint_id for s in result.summaries] == ["github.com"]

    def test_single_endpoint(self) -> None:
        """An endpoint filter reports exactly that endpoint."""
        pipeline = RefreshPipeline(source=make_source({"g.co", "github.com"}))

        result = pipeline.refresh(endpoint_id="microsoft.com")

        assert [s.endpoint_id for s in result.summaries] == ["microsoft.com"]
        assert result.summaries[0].has_data is True

    def test_fetch_limit_passed(self) -> None:
        """The fetch limit reaches the source."""
        source = MagicMock()
        source.fetch_records.return_value = []
        source.fetch_configured_endpoints.return_value = {"a.io"}
        pipeline = RefreshPipeline(source=source, fetch_limit=25)

        result = pipeline.refresh()

        source.fetch_records.assert_called_once_with(endpoint_id=None, limit=25)
        assert result.summaries[0].endpoint_id == "a.io"
        assert result.summaries[0].has_data is False

    def test_threshold_from_aggregator(self) -> None:
        """Run info reports the aggregator's threshold."""
        pipeline = RefreshPipeline(
            source=make_source(),
            aggregator=StatusAggregator(AggregatorConfig(high_latency_threshold_ms=30.0)),
        )

        result = pipeline.refresh()

        assert result.run_info.high_latency_threshold_ms == 30.0
        assert result.overview.degraded >= 1

    def test_source_error_propagates(self) -> None:
        """Source errors reach the caller."""
        source = MagicMock()
        source.fetch_records.side_effect = SourceFetchError("down")

        with pytest.raises(SourceFetchError):
            RefreshPipeline(source=source).refresh()
