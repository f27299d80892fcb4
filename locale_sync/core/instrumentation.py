"""locale-sync – Logging setup.

Configures structlog once per process. Logs go to stderr so that the
synchronized JSON never mixes with diagnostics.
"""

import logging
import sys

import structlog

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def resolve_level(level: str) -> int:
    """Map a level name (case-insensitive) to a logging level, default INFO."""
    return _LEVELS.get(level.strip().lower(), logging.INFO)


def setup_logging(level: str = "info", fmt: str = "console") -> None:
    """Configure structlog.

    Args:
        level: Minimum level name (debug, info, warning, error, critical).
        fmt: 'json' for one JSON object per line, anything else for the
            human-readable console renderer.
    """
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if fmt.strip().lower() == "json":
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(resolve_level(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
