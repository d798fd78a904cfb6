"""Core routers shared by every service."""

from .health import CheckResult, HealthCheck, HealthRouter, HealthState, HealthStatus

__all__ = [
    "HealthRouter",
    "HealthStatus",
    "HealthState",
    "HealthCheck",
    "CheckResult",
]
