"""CLI commands for the ping status monitor."""

import json
import logging
import sys
import time
import uuid
from dataclasses import dataclass
from pathlib import Path

import click
import structlog

from pingwatch import __version__
from pingwatch.config import ConfigValidationError, EndpointsLoader
from pingwatch.observability.logging import (
    bind_run_context,
    clear_run_context,
    configure_logging,
)
from pingwatch.pipeline import RefreshPipeline, RefreshResult
from pingwatch.renderer import (
    JsonRenderer,
    format_overview,
    format_summary_table,
    render_snapshot,
)
from pingwatch.settings import AppSettings, get_settings
from pingwatch.source import (
    FallbackProbeSource,
    HttpProbeSource,
    MockProbeSource,
    SourceConfig,
    SourceError,
)
from pingwatch.source.protocols import ProbeSource
from pingwatch.status import AggregatorConfig, StatusAggregator


logger = structlog.get_logger()


@dataclass
class MonitorOptions:
    """Options shared by the monitor commands."""

    endpoints_path: Path | None
    mock: bool
    fallback_to_mock: bool
    threshold_ms: float | None
    endpoint_id: str | None
    json_logs: bool
    verbose: bool


def _monitor_options(func):  # type: ignore[no-untyped-def]
    """Attach the options shared by status, watch and render."""
    options = [
        click.option(
            "--endpoints",
            "endpoints_path",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            default=None,
            help="Path to endpoints.yaml; overrides the server's TARGET_URLS.",
        ),
        click.option(
            "--mock",
            is_flag=True,
            help="Use generated demo data instead of the ping data server.",
        ),
        click.option(
            "--fallback-to-mock",
            is_flag=True,
            help="Serve demo data when the ping data server is unreachable.",
        ),
        click.option(
            "--threshold",
            "threshold_ms",
            type=float,
            default=None,
            help="High latency threshold in ms (default from settings: 100).",
        ),
        click.option(
            "--endpoint",
            "endpoint_id",
            type=str,
            default=None,
            help="Only report this endpoint.",
        ),
        click.option(
            "--json-logs/--no-json-logs",
            default=True,
            help="Use JSON format for logs (default: true).",
        ),
        click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_pipeline(
    options: MonitorOptions, settings: AppSettings, run_id: str
) -> RefreshPipeline:
    """Wire source, aggregator and configured endpoints from options.

    Exits with status 1 when the endpoints file is invalid.
    """
    source: ProbeSource
    if options.mock:
        source = MockProbeSource()
        source_name = "mock"
    else:
        source = HttpProbeSource(
            SourceConfig(
                base_url=settings.base_url,
                timeout_seconds=settings.timeout_seconds,
                fetch_limit=settings.fetch_limit,
            ),
            run_id=run_id,
        )
        source_name = "http"
        if options.fallback_to_mock:
            source = FallbackProbeSource(source, MockProbeSource())
            source_name = "http+mock"

    configured: set[str] | None = None
    if options.endpoints_path is not None:
        try:
            configured = EndpointsLoader(run_id).load(options.endpoints_path).tracked_ids
        except ConfigValidationError as e:
            click.echo(f"Endpoints file {e.file_path} is invalid:", err=True)
            for error in e.errors:
                click.echo(f"  - {error['loc']}: {error['msg']}", err=True)
            sys.exit(1)
    elif target_urls := settings.configured_endpoints():
        configured = target_urls

    threshold = (
        options.threshold_ms
        if options.threshold_ms is not None
        else settings.high_latency_threshold_ms
    )
    aggregator = StatusAggregator(
        AggregatorConfig(high_latency_threshold_ms=threshold), run_id=run_id
    )
    return RefreshPipeline(
        source=source,
        aggregator=aggregator,
        configured_endpoints=configured,
        fetch_limit=settings.fetch_limit,
        source_name=source_name,
    )


def _setup(options: MonitorOptions, command: str) -> tuple[str, AppSettings]:
    run_id = uuid.uuid4().hex[:12]
    configure_logging(
        level=logging.DEBUG if options.verbose else logging.INFO,
        json_format=options.json_logs,
    )
    bind_run_context(run_id, command)
    click.get_current_context().call_on_close(clear_run_context)
    logger.bind(component="cli").info("command_started", mock=options.mock)
    return run_id, get_settings()


def _refresh_or_exit(pipeline: RefreshPipeline, endpoint_id: str | None) -> RefreshResult:
    try:
        return pipeline.refresh(endpoint_id=endpoint_id)
    except SourceError as e:
        click.echo(f"Error fetching ping data: {e}", err=True)
        sys.exit(1)


def _echo_result(result: RefreshResult, as_json: bool) -> None:
    if as_json:
        click.echo(render_snapshot(result.summaries, result.overview, result.run_info))
        return
    click.echo(format_summary_table(result.summaries))
    click.echo("")
    click.echo(format_overview(result.overview))


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """Ping status monitor CLI."""


@cli.command()
@_monitor_options
@click.option("--json", "as_json", is_flag=True, help="Print the JSON snapshot.")
def status(as_json: bool, **kwargs: object) -> None:
    """Fetch probe records once and print per-endpoint status."""
    options = MonitorOptions(**kwargs)  # type: ignore[arg-type]
    run_id, settings = _setup(options, "status")
    pipeline = _build_pipeline(options, settings, run_id)
    _echo_result(_refresh_or_exit(pipeline, options.endpoint_id), as_json)


@cli.command()
@_monitor_options
@click.option(
    "--interval",
    "interval_seconds",
    type=click.FloatRange(min=0.0),
    default=None,
    help="Seconds between refreshes (default from settings: 10).",
)
@click.option(
    "--iterations",
    type=click.IntRange(min=1),
    default=None,
    help="Stop after this many refreshes (default: run until interrupted).",
)
@click.option("--json", "as_json", is_flag=True, help="Print JSON snapshots.")
def watch(
    interval_seconds: float | None,
    iterations: int | None,
    as_json: bool,
    **kwargs: object,
) -> None:
    """Refresh on a fixed interval and print status after every pass.

    A failed fetch is reported and the next pass is attempted as scheduled.
    """
    options = MonitorOptions(**kwargs)  # type: ignore[arg-type]
    run_id, settings = _setup(options, "watch")
    pipeline = _build_pipeline(options, settings, run_id)
    interval = (
        interval_seconds
        if interval_seconds is not None
        else settings.refresh_interval_seconds
    )
    log = logger.bind(component="cli", command="watch")

    completed = 0
    try:
        while iterations is None or completed < iterations:
            try:
                result = pipeline.refresh(endpoint_id=options.endpoint_id)
            except SourceError as e:
                log.warning("refresh_failed", error=str(e))
                click.echo(f"Error fetching ping data: {e}", err=True)
            else:
                _echo_result(result, as_json)
            completed += 1
            if iterations is None or completed < iterations:
                time.sleep(interval)
    except KeyboardInterrupt:
        log.info("watch_interrupted", passes=completed)


@cli.command()
@_monitor_options
@click.option(
    "--out",
    "output_dir",
    required=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Output directory for status.json.",
)
def render(output_dir: Path, **kwargs: object) -> None:
    """Run one pass and write status.json atomically."""
    options = MonitorOptions(**kwargs)  # type: ignore[arg-type]
    run_id, settings = _setup(options, "render")
    pipeline = _build_pipeline(options, settings, run_id)
    result = _refresh_or_exit(pipeline, options.endpoint_id)

    file_info = JsonRenderer(output_dir, run_id).render(
        result.summaries, result.overview, result.run_info
    )
    click.echo(f"Wrote {file_info.absolute_path} ({file_info.bytes_written} bytes)")


@cli.command()
@click.option(
    "--endpoints",
    "endpoints_path",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to endpoints.yaml.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
def validate(endpoints_path: Path, as_json: bool) -> None:
    """Validate an endpoints file without contacting the server."""
    configure_logging(json_format=False)
    loader = EndpointsLoader()
    try:
        config = loader.load(endpoints_path)
    except ConfigValidationError as e:
        click.echo("Endpoints validation failed:", err=True)
        for error in e.errors:
            click.echo(f"  - {error['loc']}: {error['msg']}", err=True)
        sys.exit(1)

    if as_json:
        output = {
            "endpoints": len(config.endpoints),
            "tracked": sorted(config.tracked_ids),
            "sha256": loader.checksum,
        }
        click.echo(json.dumps(output, indent=2))
        return
    click.echo("Endpoints file is valid!")
    click.echo(f"  Endpoints: {len(config.endpoints)}")
    click.echo(f"  Tracked: {', '.join(sorted(config.tracked_ids)) or '(none)'}")
    click.echo(f"  Checksum: {loader.checksum}")


if __name__ == "__main__":
    cli()
