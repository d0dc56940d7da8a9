"""Structured logging configuration for sprintsim.

The simulation modules log through :func:`get_logger`. Hosts call
:func:`configure_logging` once at startup to pick console or JSON output.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.typing import Processor


def configure_logging(
    log_level: str = "INFO",
    log_format: str = "console",
    enable_colors: bool = True,
) -> None:
    """Configure structured logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format ('json' or 'console')
        enable_colors: Whether to enable colored output for console format
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    structlog.configure(
        processors=_get_processors(log_format, enable_colors),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.WriteLoggerFactory(file=sys.stderr),
        context_class=dict,
        cache_logger_on_first_use=False,
    )


def _get_processors(log_format: str, enable_colors: bool) -> list[Processor]:
    """Get the appropriate processors for the given format."""
    processors: list[Processor] = [
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format.lower() == "json":
        processors.extend([
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ])
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=enable_colors))

    return processors


def get_logger(name: str, **context: Any) -> Any:
    """Get a structured logger with optional bound context.

    Args:
        name: Logger name (typically __name__)
        **context: Additional context to bind to the logger

    Returns:
        Bound structlog logger tagged with the short component name
    """
    return structlog.get_logger(name, component=name.rsplit(".", 1)[-1], **context)
