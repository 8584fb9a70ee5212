"""Rendering of endpoint summaries.

This module provides:
- JsonRenderer for the atomic status.json snapshot
- Console table formatting for the CLI
- AtomicWriter for safe file output
"""

from pingwatch.renderer.console import (
    format_latency,
    format_overview,
    format_summary_table,
    format_uptime,
)
from pingwatch.renderer.io import AtomicWriter
from pingwatch.renderer.json_renderer import (
    JsonRenderer,
    render_snapshot,
    summary_to_dict,
)
from pingwatch.renderer.models import GeneratedFile, RunInfo


__all__ = [
    "AtomicWriter",
    "GeneratedFile",
    "JsonRenderer",
    "RunInfo",
    "format_latency",
    "format_overview",
    "format_summary_table",
    "format_uptime",
    "render_snapshot",
    "summary_to_dict",
]
