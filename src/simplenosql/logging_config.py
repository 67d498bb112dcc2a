"""Structured logging configuration.

Every module obtains its logger through :func:`get_logger`, which configures
structlog once with ISO timestamps, log levels and JSON rendering. Events go to
stderr so CLI output on stdout stays machine readable.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog

_configured = False


def _resolve_level() -> int:
    """Read the minimum level from SIMPLENOSQL_LOG_LEVEL (default WARNING)."""
    name = os.getenv("SIMPLENOSQL_LOG_LEVEL", "WARNING").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def _stderr_logger(*args: Any) -> structlog.PrintLogger:
    # sys.stderr may be swapped after configure(); look it up per call.
    return structlog.PrintLogger(file=sys.stderr)


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog bound logger with structured output.
    """
    global _configured
    if not _configured:
        structlog.configure(
            processors=[
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.add_log_level,
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(_resolve_level()),
            logger_factory=_stderr_logger,
            cache_logger_on_first_use=False,
        )
        _configured = True
    return structlog.get_logger(name)
