"""Tests for the health check router."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from taskkit.core.api.routers.health import CheckResult, HealthCheck, HealthRouter, HealthState, HealthStatus


async def _healthy() -> tuple[HealthState, str | None]:
    return (HealthState.HEALTHY, None)


async def _degraded() -> tuple[HealthState, str | None]:
    return (HealthState.DEGRADED, "Slow disk")


async def _unhealthy() -> tuple[HealthState, str | None]:
    return (HealthState.UNHEALTHY, "Database unreachable")


async def _raises() -> tuple[HealthState, str | None]:
    raise RuntimeError("connection refused")


def _client(checks: dict[str, HealthCheck] | None = None) -> TestClient:
    app = FastAPI()
    app.include_router(HealthRouter.create(prefix="/health", tags=["Observability"], checks=checks))
    return TestClient(app)


def test_no_checks_is_healthy() -> None:
    """Without checks the service reports healthy and omits the checks map."""
    response = _client().get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_check_results_are_reported() -> None:
    """Each check shows up by name; None messages are left out."""
    response = _client(
        {"db": _healthy, "disk": _degraded, "upstream": _unhealthy, "broken": _raises}
    ).get("/health")

    data = response.json()
    assert data["status"] == "unhealthy"
    checks = data["checks"]
    assert checks["db"] == {"state": "healthy"}
    assert checks["disk"] == {"state": "degraded", "message": "Slow disk"}
    assert checks["upstream"] == {"state": "unhealthy", "message": "Database unreachable"}
    assert checks["broken"]["state"] == "unhealthy"
    assert checks["broken"]["message"] == "Check failed: connection refused"


@pytest.mark.parametrize(
    ("checks", "expected"),
    [
        ({"a": _healthy}, "healthy"),
        ({"a": _healthy, "b": _degraded}, "degraded"),
        ({"a": _degraded, "b": _unhealthy}, "unhealthy"),
        ({"a": _raises}, "unhealthy"),
    ],
)
def test_overall_state_is_worst_check(checks: dict[str, HealthCheck], expected: str) -> None:
    """Unhealthy outranks degraded, which outranks healthy."""
    assert _client(checks).get("/health").json()["status"] == expected


def test_models() -> None:
    """Status models default to no message and no checks."""
    assert CheckResult(state=HealthState.HEALTHY).message is None
    status = HealthStatus(status=HealthState.DEGRADED)
    assert status.checks is None
    assert status.status == "degraded"
