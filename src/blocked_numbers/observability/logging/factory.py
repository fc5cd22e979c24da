"""Observability – structlog configuration.

Events are rendered as one JSON object per line through the stdlib
``logging`` bridge, so library loggers and ``structlog`` loggers share the
same handler and level.
"""
from __future__ import annotations

import logging
import sys
from typing import IO, Any

import structlog

from blocked_numbers.observability.logging.filters import SensitiveFieldsFilter


def _level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def shared_processors(
    sensitive_fields: frozenset[str] | None = None,
    redact: bool = True,
) -> list[Any]:
    """Processors applied to every event, before rendering."""
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]
    if redact:
        processors.append(SensitiveFieldsFilter(sensitive_fields))
    return processors


def configure_logging(
    level: int | str = logging.INFO,
    *,
    sensitive_fields: frozenset[str] | None = None,
    redact: bool = True,
    stream: IO[str] | None = None,
) -> logging.Handler:
    """Route structlog through stdlib logging with a JSON renderer.

    Replaces the root handlers and returns the installed handler.
    """
    resolved_level = _level(level)
    processors = shared_processors(sensitive_fields, redact)
    structlog.configure(
        processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.JSONRenderer(sort_keys=True),
            ],
        )
    )
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(resolved_level)
    return handler


__all__ = ["configure_logging", "shared_processors"]
