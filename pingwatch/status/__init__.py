"""Probe classification and per-endpoint status aggregation.

This module provides:
- ProbeStatus enum for the three probe classifications
- ProbeRecord and EndpointSummary models
- classify / ProbeClassifier for single-probe classification
- StatusAggregator for windowed, reconciled per-endpoint summaries
- compute_overview for fleet-wide counts
- AggregationMetrics for pass tracking
"""

from pingwatch.status.aggregator import StatusAggregator, aggregate, compute_overview
from pingwatch.status.classifier import ProbeClassifier, classify
from pingwatch.status.metrics import AggregationMetrics
from pingwatch.status.models import (
    UNKNOWN_STATUS_LABEL,
    AggregatorConfig,
    EndpointSummary,
    FleetOverview,
    ProbeRecord,
    ProbeStatus,
    StatusDistribution,
)


__all__ = [
    "UNKNOWN_STATUS_LABEL",
    "AggregationMetrics",
    "AggregatorConfig",
    "EndpointSummary",
    "FleetOverview",
    "ProbeClassifier",
    "ProbeRecord",
    "ProbeStatus",
    "StatusAggregator",
    "StatusDistribution",
    "aggregate",
    "classify",
    "compute_overview",
]
