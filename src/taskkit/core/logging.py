"""Structured logging configuration built on structlog."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.typing import Processor

LOG_FORMATS = ("console", "json")


def configure_logging(level: str = "INFO", fmt: str = "console") -> None:
    """Configure structlog and the standard library root logger.

    Log records from third-party libraries (uvicorn, SQLAlchemy) are routed
    through the same renderer so the output stays uniform. ``fmt`` selects a
    human-readable console renderer or one JSON object per line.
    """
    if fmt not in LOG_FORMATS:
        raise ValueError(f"Unknown log format '{fmt}', expected one of {', '.join(LOG_FORMATS)}")

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    renderer: Processor
    if fmt == "json":
        shared_processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())

    # uvicorn installs its own handlers; let records propagate to ours instead
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True


def get_logger(name: str | None = None) -> Any:
    """Return a structlog logger bound to the given name."""
    return structlog.get_logger(name)


def add_request_context(**kwargs: Any) -> None:
    """Bind key-value pairs to every log line emitted in the current context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def reset_request_context(*keys: str) -> None:
    """Remove specific keys from the logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_request_context() -> None:
    """Remove all keys from the logging context."""
    structlog.contextvars.clear_contextvars()
