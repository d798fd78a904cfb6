"""FastAPI framework layer - routers, middleware, envelopes, utilities."""

from .dependencies import get_database, get_session, set_database
from .middleware import add_error_handlers, add_logging_middleware, database_error_handler, validation_error_handler
from .responses import ErrorResponse, SuccessResponse, error_response, json_error, json_success, success_response
from .router import Router
from .routers import HealthRouter, HealthState, HealthStatus
from .service_builder import BaseServiceBuilder, ServiceInfo
from .utilities import build_location_url, run_app

__all__ = [
    # Base router class
    "Router",
    # Service builder
    "BaseServiceBuilder",
    "ServiceInfo",
    # Dependencies
    "get_database",
    "set_database",
    "get_session",
    # Middleware
    "add_error_handlers",
    "add_logging_middleware",
    "database_error_handler",
    "validation_error_handler",
    # Envelopes
    "SuccessResponse",
    "ErrorResponse",
    "success_response",
    "error_response",
    "json_success",
    "json_error",
    # Health router
    "HealthRouter",
    "HealthState",
    "HealthStatus",
    # Utilities
    "build_location_url",
    "run_app",
]
