"""Ping data sources supplying probe records to the aggregator.

This module provides:
- HttpProbeSource for the ping data server (``/ping-data``, ``/env-config``)
- MockProbeSource for deterministic offline data
- FallbackProbeSource for switching to a fallback when the server is down
- Wire format parsing with per-item rejection
- SourceMetrics for request and rejection tracking
"""

from pingwatch.source.client import HttpProbeSource
from pingwatch.source.config import SourceConfig
from pingwatch.source.errors import (
    FetchErrorClass,
    PayloadError,
    SourceError,
    SourceFetchError,
)
from pingwatch.source.fallback import FallbackProbeSource
from pingwatch.source.metrics import SourceMetrics
from pingwatch.source.mock import MockProbeSource, generate_mock_records
from pingwatch.source.protocols import ProbeSource
from pingwatch.source.wire import parse_env_config, parse_ping_payload


__all__ = [
    "FallbackProbeSource",
    "FetchErrorClass",
    "HttpProbeSource",
    "MockProbeSource",
    "PayloadError",
    "ProbeSource",
    "SourceConfig",
    "SourceError",
    "SourceFetchError",
    "SourceMetrics",
    "generate_mock_records",
    "parse_env_config",
    "parse_ping_payload",
]
