"""Health check router."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from enum import StrEnum

from pydantic import BaseModel, Field

from ..router import Router


class HealthState(StrEnum):
    """Health state enumeration for health checks."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


HealthCheck = Callable[[], Awaitable[tuple[HealthState, str | None]]]

_SEVERITY = {HealthState.HEALTHY: 0, HealthState.DEGRADED: 1, HealthState.UNHEALTHY: 2}


class CheckResult(BaseModel):
    """Result of an individual health check."""

    state: HealthState = Field(description="Health state of this check")
    message: str | None = Field(default=None, description="Optional message or error detail")


class HealthStatus(BaseModel):
    """Overall health status response."""

    status: HealthState = Field(description="Overall service health indicator")
    checks: dict[str, CheckResult] | None = Field(
        default=None, description="Individual health check results (if checks are configured)"
    )


async def _run_check(check_fn: HealthCheck) -> CheckResult:
    try:
        state, message = await check_fn()
    except Exception as e:
        return CheckResult(state=HealthState.UNHEALTHY, message=f"Check failed: {e}")
    return CheckResult(state=state, message=message)


class HealthRouter(Router):
    """Health check router; the overall state is the worst state among its checks."""

    def __init__(
        self,
        prefix: str,
        tags: list[str],
        checks: dict[str, HealthCheck] | None = None,
        **kwargs: object,
    ) -> None:
        """Initialize health router with optional health checks."""
        self.checks = checks or {}
        super().__init__(prefix=prefix, tags=tags, **kwargs)

    def _register_routes(self) -> None:
        """Register health check endpoint."""
        checks = self.checks

        @self.router.get(
            "",
            summary="Health check",
            response_model=HealthStatus,
            response_model_exclude_none=True,
        )
        async def health_check() -> HealthStatus:
            if not checks:
                return HealthStatus(status=HealthState.HEALTHY)

            results = await asyncio.gather(*(_run_check(fn) for fn in checks.values()))
            check_results = dict(zip(checks.keys(), results))
            overall_state = max((r.state for r in results), key=_SEVERITY.__getitem__)
            return HealthStatus(status=overall_state, checks=check_results)
