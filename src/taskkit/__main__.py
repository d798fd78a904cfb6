"""Run the task service: ``python -m taskkit`` or the ``taskkit`` console script."""

from __future__ import annotations

import argparse

from taskkit.api import configure_logging, get_logger, run_app
from taskkit.app import create_app
from taskkit.core import Settings

logger = get_logger(__name__)


def main(argv: list[str] | None = None) -> None:
    """Load configuration, build the app and serve it until interrupted."""
    parser = argparse.ArgumentParser(prog="taskkit", description="Task CRUD service")
    parser.add_argument("--host", help="Host to bind to (default: $HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Port to listen on (default: $PORT or 4000)")
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    overrides = {k: v for k, v in (("host", args.host), ("port", args.port)) if v is not None}
    if overrides:
        settings = Settings.model_validate({**settings.model_dump(), **overrides})

    configure_logging(level=settings.log_level, fmt=settings.log_format)
    logger.info("server.listening", host=settings.host, port=settings.port)
    run_app(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
