"""Structured logging for commandfile, built on structlog.

Logs go to stderr so command output on stdout stays clean. While a command
runs, :func:`command_context` binds the command and method names, and every
event logged in that window carries them.
"""

from __future__ import annotations

import logging as stdlib_logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog

VERBOSITY_LEVELS = {1: "INFO", 2: "DEBUG"}


def level_for_verbosity(verbose: int, default: str = "WARNING") -> str:
    """Map a ``-v`` count to a level name; no flag keeps *default*."""
    if verbose <= 0:
        return default
    return VERBOSITY_LEVELS[min(verbose, max(VERBOSITY_LEVELS))]


def configure_logging(
    level: str = "WARNING",
    json_output: bool = False,
    verbose: int = 0,
) -> str:
    """Configure structlog for commandfile.

    Args:
        level: Level used when *verbose* is 0 (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Unknown names fall back to WARNING.
        json_output: Emit one JSON object per line instead of console output.
        verbose: Count of ``-v`` flags; 1 means INFO and 2 or more DEBUG.

    Returns:
        The effective level name.
    """
    effective = level_for_verbosity(verbose, level).upper()
    numeric = getattr(stdlib_logging, effective, None)
    if not isinstance(numeric, int):
        effective, numeric = "WARNING", stdlib_logging.WARNING

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if json_output:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        # ConsoleRenderer formats tracebacks itself
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
    return effective


@contextmanager
def command_context(command: str, method: str) -> Iterator[None]:
    """Bind ``command`` and ``method`` to every event logged inside the block."""
    with structlog.contextvars.bound_contextvars(command=command, method=method):
        yield


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    return structlog.get_logger(name)
