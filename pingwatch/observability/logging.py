"""structlog setup for the monitor commands."""

import logging
import sys
from typing import TextIO

import structlog


# Context keys bound for the lifetime of one CLI command.
RUN_CONTEXT_KEYS = ("run_id", "command")

# Third-party loggers that log every request at INFO.
_CHATTY_LOGGERS = ("httpx", "httpcore")


def configure_logging(
    level: int = logging.INFO,
    output: TextIO = sys.stderr,
    json_format: bool = True,
) -> None:
    """Route structlog and standard library logging to ``output``.

    JSON lines suit ``status`` and ``render`` runs collected by a scheduler;
    the console renderer suits an interactive ``watch`` session. Per-request
    httpx lines are only shown at DEBUG, since ``watch`` polls every few
    seconds.

    Args:
        level: Minimum level for monitor events.
        output: Stream receiving log lines.
        json_format: Emit JSON lines instead of console output.
    """
    renderer: structlog.types.Processor
    if json_format:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=output.isatty())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(name)s %(message)s", stream=output, level=level)
    chatty_level = level if level <= logging.DEBUG else max(level, logging.WARNING)
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(chatty_level)


def bind_run_context(run_id: str, command: str | None = None) -> None:
    """Attach the run id, and optionally the command name, to every event."""
    structlog.contextvars.bind_contextvars(run_id=run_id)
    if command is not None:
        structlog.contextvars.bind_contextvars(command=command)


def clear_run_context() -> None:
    """Remove the keys bound by :func:`bind_run_context`."""
    structlog.contextvars.unbind_contextvars(*RUN_CONTEXT_KEYS)
