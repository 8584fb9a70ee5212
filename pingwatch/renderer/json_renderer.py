"""JSON renderer for the status.json snapshot."""

import json
import time
from collections.abc import Sequence
from pathlib import Path

import structlog

from pingwatch.renderer.io import AtomicWriter
from pingwatch.renderer.models import GeneratedFile, RunInfo
from pingwatch.status.models import (
    EndpointSummary,
    FleetOverview,
    ProbeRecord,
    ProbeStatus,
)


logger = structlog.get_logger()

STATUS_FILENAME = "status.json"


class JsonRenderer:
    """Renders endpoint summaries to ``status.json``.

    Numbers are copied from the summaries as-is; the renderer never
    recomputes averages or uptime. Output uses sorted keys and a stable
    endpoint order so identical passes produce identical files.
    """

    def __init__(self, output_dir: Path, run_id: str | None = None) -> None:
        """Initialize the JSON renderer.

        Args:
            output_dir: Output directory for rendered files.
            run_id: Optional run identifier for logging.
        """
        self._output_dir = output_dir
        self._log = logger.bind(component="renderer")
        if run_id:
            self._log = self._log.bind(run_id=run_id)
        self._writer = AtomicWriter(output_dir, run_id)

    def render(
        self,
        summaries: Sequence[EndpointSummary],
        overview: FleetOverview,
        run_info: RunInfo,
    ) -> GeneratedFile:
        """Write the snapshot file.

        Args:
            summaries: Summaries from one aggregation pass.
            overview: Fleet overview for the same pass.
            run_info: Run information.

        Returns:
            GeneratedFile for ``status.json``.
        """
        start_time = time.perf_counter()

        content = render_snapshot(summaries, overview, run_info)

        file_info = self._writer.write(self._output_dir / STATUS_FILENAME, content)

        duration_ms = (time.perf_counter() - start_time) * 1000
        self._log.info(
            "json_render_complete",
            file_path=file_info.path,
            bytes_written=file_info.bytes_written,
            sha256=file_info.sha256,
            endpoints=len(summaries),
            duration_ms=round(duration_ms, 2),
        )
        return file_info


def render_snapshot(
    summaries: Sequence[EndpointSummary],
    overview: FleetOverview,
    run_info: RunInfo,
) -> str:
    """Serialize a pass to the ``status.json`` document."""
    document = {
        "run_info": run_info.model_dump(mode="json"),
        "overview": overview.model_dump(mode="json"),
        "endpoints": [summary_to_dict(s) for s in summaries],
    }
    return json.dumps(document, sort_keys=True, indent=2, ensure_ascii=False)


def summary_to_dict(summary: EndpointSummary) -> dict[str, object]:
    """Convert an EndpointSummary to a JSON-serializable dictionary.

    Args:
        summary: Summary to convert.

    Returns:
        Dictionary suitable for JSON serialization.
    """
    distribution = summary.status_distribution
    return {
        "endpoint_id": summary.endpoint_id,
        "resolved_address": summary.resolved_address,
        "latest_status": summary.latest_status.value if summary.latest_status else None,
        "status_label": summary.status_label,
        "last_seen": (
            summary.latest_probe.timestamp.isoformat() if summary.latest_probe else None
        ),
        "average_latency_ms": summary.average_latency_ms,
        "uptime_percent": summary.uptime_percent,
        "consecutive_failures": summary.consecutive_failures,
        "consecutive_high_latency_alerts": summary.consecutive_high_latency_alerts,
        "total_probes": summary.total_probes,
        "status_distribution": {
            status.value: {
                "count": distribution.count(status),
                "percent": distribution.percentage(status),
            }
            for status in ProbeStatus
        },
        "chart": [
            {"timestamp": ts.isoformat(), "latency_ms": latency}
            for ts, latency in summary.chart_points
        ],
        "recent": [_probe_to_dict(r) for r in summary.recent_window],
    }


def _probe_to_dict(record: ProbeRecord) -> dict[str, object]:
    return {
        "timestamp": record.timestamp.isoformat(),
        "resolved_address": record.resolved_address,
        "latency_ms": record.latency_ms,
        "succeeded": record.succeeded,
    }
