"""Exception handlers and request logging middleware."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from ulid import ULID

from taskkit.core.logging import add_request_context, get_logger, reset_request_context

from .responses import json_error

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render request validation failures as an error envelope."""
    assert isinstance(exc, RequestValidationError)
    logger.info("http.request.invalid", path=request.url.path, errors=len(exc.errors()))
    return json_error(
        "Validation error",
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        error=exc.errors(),
    )


async def database_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render database errors that escaped a route as a 500 error envelope."""
    logger.error("http.request.database_error", path=request.url.path, error=str(exc), exc_info=exc)
    return json_error("Server error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def add_error_handlers(app: FastAPI) -> None:
    """Register envelope-producing exception handlers on the app."""
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)


def add_logging_middleware(app: FastAPI) -> None:
    """Log each request with a request id bound to the logging context."""

    @app.middleware("http")
    async def log_requests(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(ULID())
        add_request_context(request_id=request_id, method=request.method, path=request.url.path)
        start = time.perf_counter()
        try:
            response = await call_next(request)
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            logger.info("http.request.completed", status_code=response.status_code, duration_ms=duration_ms)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            reset_request_context("request_id", "method", "path")
