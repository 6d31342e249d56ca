"""
Structured logging for pod_spelling using structlog.

Log output always goes to stderr so it never interleaves with TAP output on
stdout. The library only installs handlers on its own "pod_spelling" stdlib
logger, and leaves an existing structlog configuration of the host
application alone.

Environment Variables:
    POD_SPELLING_LOG_LEVEL: Minimum level (default: WARNING)
    POD_SPELLING_LOG_FORMAT: "json" or "console" (default: console)
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.contextvars import merge_contextvars
from structlog.typing import Processor

from pod_spelling import __version__

LOGGER_NAME = "pod_spelling"

_configured = False


class _StderrHandler(logging.StreamHandler):  # type: ignore[type-arg]
    """Write to whatever sys.stderr is at emit time, so captured streams can be swapped."""

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    def emit(self, record: logging.LogRecord) -> None:
        self.stream = sys.stderr
        super().emit(record)


def add_library_context(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """
    Add library identification to every log entry.

    Fields added:
    - library.name: always "pod_spelling"
    - library.version: installed package version
    """
    event_dict.setdefault("library.name", LOGGER_NAME)
    event_dict.setdefault("library.version", __version__)
    return event_dict


def build_processors(log_format: str = "console") -> list[Processor]:
    """Return the structlog processor chain for the given output format."""
    processors: list[Processor] = [
        merge_contextvars,
        structlog.stdlib.filter_by_level,
        add_library_context,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
    ]
    if log_format == "json":
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors += [
            structlog.dev.set_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ]
    return processors


def configure_logging(
    log_level: str = "WARNING",
    log_format: str = "console",
    stream: TextIO | None = None,
) -> None:
    """
    Configure the "pod_spelling" logger and, if nobody else has, structlog.

    Args:
        log_level: Logging level name (e.g. "DEBUG", "INFO")
        log_format: "console" for human-readable lines, "json" for one JSON object per line
        stream: Output stream, defaults to sys.stderr
    """
    global _configured

    stdlib_logger = logging.getLogger(LOGGER_NAME)
    for existing in list(stdlib_logger.handlers):
        stdlib_logger.removeHandler(existing)

    handler: logging.Handler = (
        logging.StreamHandler(stream) if stream is not None else _StderrHandler()
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    stdlib_logger.addHandler(handler)
    stdlib_logger.setLevel(getattr(logging, log_level.upper()))
    stdlib_logger.propagate = False

    if not structlog.is_configured():
        structlog.configure(
            processors=build_processors(log_format),
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
    _configured = True


def ensure_logging_configured(log_level: str = "WARNING", log_format: str = "console") -> None:
    """Configure logging once; later calls are no-ops."""
    if not _configured:
        configure_logging(log_level, log_format)


def create_logger(name: str | None = None) -> Any:
    """
    Create a logger below the "pod_spelling" stdlib logger.

    Args:
        name: Optional component name (e.g. "resolver", "discovery")

    Returns:
        A structlog BoundLogger instance
    """
    # Always the stdlib logger, so output follows the "pod_spelling" handlers
    # even while structlog is unconfigured; processors are looked up lazily
    if name:
        return structlog.wrap_logger(
            logging.getLogger(f"{LOGGER_NAME}.{name}"), logger_name=name
        )
    return structlog.wrap_logger(logging.getLogger(LOGGER_NAME))
