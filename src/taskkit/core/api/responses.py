"""Uniform response envelope: {success, message, data} or {success, message, error}."""

from __future__ import annotations

from typing import Any, Generic, Literal, TypeVar

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

DataT = TypeVar("DataT")


class SuccessResponse(BaseModel, Generic[DataT]):
    """Envelope for successful operations."""

    success: Literal[True] = True
    message: str = Field(description="Human-readable outcome")
    data: DataT


class ErrorResponse(BaseModel):
    """Envelope for failed operations."""

    success: Literal[False] = False
    message: str = Field(description="Human-readable error summary")
    error: Any = Field(default=None, description="Optional diagnostic payload")


def success_response(data: Any, message: str = "Success") -> dict[str, Any]:
    """Wrap a result in a success envelope."""
    return {"success": True, "message": message, "data": data}


def error_response(message: str = "Error", error: Any = None) -> dict[str, Any]:
    """Wrap an error message and optional diagnostic payload in an error envelope."""
    return {"success": False, "message": message, "error": error}


def json_success(
    data: Any,
    message: str = "Success",
    *,
    status_code: int = 200,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Render a success envelope as a JSON response."""
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(success_response(data, message)),
        headers=headers,
    )


def json_error(message: str = "Error", *, status_code: int, error: Any = None) -> JSONResponse:
    """Render an error envelope as a JSON response."""
    return JSONResponse(status_code=status_code, content=jsonable_encoder(error_response(message, error)))


def describe_exception(exc: BaseException) -> dict[str, str]:
    """Build the diagnostic payload exposed for an unexpected exception."""
    return {"type": type(exc).__name__, "detail": str(exc)}
