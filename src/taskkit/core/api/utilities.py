"""Utility helpers for building responses and running the ASGI server."""

from __future__ import annotations

from typing import Any

import uvicorn
from fastapi import FastAPI, Request


def build_location_url(request: Request, path: str) -> str:
    """Build an absolute URL for a resource path relative to the request's base URL."""
    return f"{str(request.base_url).rstrip('/')}/{path.lstrip('/')}"


def run_app(app: FastAPI | str, *, host: str = "0.0.0.0", port: int = 4000, **kwargs: Any) -> None:
    """Serve an app (or an import string like "module:app") with uvicorn.

    Logging is configured by the application lifespan, so uvicorn's own
    log config is disabled.
    """
    uvicorn.run(app, host=host, port=port, log_config=None, **kwargs)
