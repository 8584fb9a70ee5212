"""Plain-text rendering of endpoint summaries for the terminal."""

from collections.abc import Sequence

from pingwatch.status.models import EndpointSummary, FleetOverview


_COLUMNS = (
    ("ENDPOINT", 24),
    ("ADDRESS", 16),
    ("STATUS", 13),
    ("AVG LATENCY", 12),
    ("UPTIME", 8),
    ("FAIL RUN", 9),
    ("SLOW RUN", 9),
)


def format_latency(value: float | None) -> str:
    """Format an average latency, ``--`` when there is none."""
    if value is None:
        return "--"
    return f"{value:.1f}ms"


def format_uptime(value: float) -> str:
    """Format an uptime percentage with one decimal."""
    return f"{value:.1f}%"


def format_summary_table(summaries: Sequence[EndpointSummary]) -> str:
    """Render summaries as a fixed-width table.

    Args:
        summaries: Summaries in display order.

    Returns:
        Table text without a trailing newline.
    """
    lines = [_row([name for name, _ in _COLUMNS])]
    for summary in summaries:
        lines.append(
            _row(
                [
                    summary.endpoint_id,
                    summary.resolved_address or "-",
                    summary.status_label,
                    format_latency(summary.average_latency_ms),
                    format_uptime(summary.uptime_percent),
                    str(summary.consecutive_failures),
                    str(summary.consecutive_high_latency_alerts),
                ]
            )
        )
    return "\n".join(lines)


def format_overview(overview: FleetOverview) -> str:
    """One-line fleet overview."""
    return (
        f"{overview.total} endpoints: {overview.up} up, "
        f"{overview.degraded} degraded, {overview.down} down, "
        f"{overview.no_data} no data "
        f"(avg uptime {format_uptime(overview.average_uptime_percent)})"
    )


def _row(cells: list[str]) -> str:
    return "  ".join(
        cell.ljust(width) for cell, (_, width) in zip(cells, _COLUMNS, strict=True)
    ).rstrip()
