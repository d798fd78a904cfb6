"""FastAPI routers and related presentation logic."""

from taskkit.core.api import (
    BaseServiceBuilder,
    ErrorResponse,
    HealthRouter,
    HealthState,
    HealthStatus,
    Router,
    ServiceInfo,
    SuccessResponse,
    add_error_handlers,
    add_logging_middleware,
    build_location_url,
    error_response,
    run_app,
    success_response,
)
from taskkit.core.logging import (
    add_request_context,
    clear_request_context,
    configure_logging,
    get_logger,
    reset_request_context,
)
from taskkit.modules.task import TaskRouter

from .dependencies import get_task_manager
from .service_builder import ServiceBuilder

__all__ = [
    # Base classes
    "Router",
    # Routers
    "HealthRouter",
    "HealthStatus",
    "HealthState",
    "TaskRouter",
    # Dependencies
    "get_task_manager",
    # Middleware
    "add_error_handlers",
    "add_logging_middleware",
    # Envelopes
    "SuccessResponse",
    "ErrorResponse",
    "success_response",
    "error_response",
    # Logging
    "configure_logging",
    "get_logger",
    "add_request_context",
    "clear_request_context",
    "reset_request_context",
    # Builders
    "BaseServiceBuilder",
    "ServiceBuilder",
    "ServiceInfo",
    # Utilities
    "build_location_url",
    "run_app",
]
