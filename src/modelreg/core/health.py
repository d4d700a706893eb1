"""Health endpoints for the model registry service.

``create_health_router()`` returns a FastAPI router with three probes:

- ``GET /health``        all dependency checks, 503 when a required one fails
- ``GET /health/ready``  503 unless every check passes
- ``GET /health/live``   always 200 while the process runs

The registry has one dependency, the document store, so the usual wiring is::

    router = create_health_router(
        "modelreg",
        version=__version__,
        checks=[HealthCheck("store", store.ping)],
    )

Tags:
    health, readiness, liveness, modelreg

Doc-Types:
    - API Reference
    - Deployment Guide
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

Status = Literal["healthy", "degraded", "unhealthy"]

_START_TIME = time.monotonic()


def _uptime_s() -> float:
    return round(time.monotonic() - _START_TIME, 1)


# ── Response Models ──────────────────────────────────────────────────────


class CheckResult(BaseModel):
    """Outcome of one dependency probe."""

    status: Status
    latency_ms: float | None = None
    error: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    """Body of ``GET /health`` and ``GET /health/ready``."""

    status: Status = "healthy"
    service: str = ""
    version: str = ""
    uptime_s: float = Field(default_factory=_uptime_s)
    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    checks: dict[str, CheckResult] = Field(default_factory=dict)


class LivenessResponse(BaseModel):
    status: str = "alive"


# ── Checks ───────────────────────────────────────────────────────────────


@dataclass
class HealthCheck:
    """One named dependency probe.

    Parameters
    ----------
    name : str
        Dependency name shown in the response (``"store"``).
    check_fn : () -> Awaitable[bool]
        Returns truthy on success; a falsy return or an exception is a failure.
    required : bool
        A failing required check makes the service ``unhealthy``; an
        optional one only ``degraded``.
    timeout_s : float
        Seconds before the probe is abandoned.
    """

    name: str
    check_fn: Callable[[], Awaitable[bool]]
    required: bool = True
    timeout_s: float = 5.0

    async def run(self) -> CheckResult:
        start = time.perf_counter()
        try:
            ok = await asyncio.wait_for(self.check_fn(), timeout=self.timeout_s)
        except TimeoutError:
            return CheckResult(status="unhealthy", error="timeout")
        except Exception as exc:  # noqa: BLE001
            return CheckResult(
                status="unhealthy",
                latency_ms=round((time.perf_counter() - start) * 1000, 2),
                error=str(exc)[:200],
            )
        latency_ms = round((time.perf_counter() - start) * 1000, 2)
        if not ok:
            return CheckResult(status="unhealthy", latency_ms=latency_ms, error="check returned false")
        return CheckResult(status="healthy", latency_ms=latency_ms)


async def run_checks(checks: list[HealthCheck]) -> tuple[Status, dict[str, CheckResult]]:
    """Run *checks* concurrently and derive the aggregate status."""
    results = await asyncio.gather(*(hc.run() for hc in checks))
    by_name = {hc.name: result for hc, result in zip(checks, results, strict=True)}

    status: Status = "healthy"
    for hc in checks:
        if by_name[hc.name].status == "healthy":
            continue
        if hc.required:
            return "unhealthy", by_name
        status = "degraded"
    return status, by_name


# ── Router Factory ───────────────────────────────────────────────────────


def create_health_router(
    service_name: str,
    version: str,
    checks: list[HealthCheck] | None = None,
    prefix: str = "/health",
) -> APIRouter:
    """Build the ``/health``, ``/health/ready`` and ``/health/live`` router."""
    router = APIRouter(tags=["health"])
    probes = list(checks or [])

    async def _evaluate() -> tuple[Status, HealthResponse]:
        status, results = await run_checks(probes)
        return status, HealthResponse(
            status=status, service=service_name, version=version, checks=results
        )

    @router.get(prefix, response_model=HealthResponse)
    async def health() -> JSONResponse:
        status, body = await _evaluate()
        return JSONResponse(content=body.model_dump(), status_code=503 if status == "unhealthy" else 200)

    @router.get(f"{prefix}/ready", response_model=HealthResponse)
    async def readiness() -> JSONResponse:
        status, body = await _evaluate()
        return JSONResponse(content=body.model_dump(), status_code=200 if status == "healthy" else 503)

    @router.get(f"{prefix}/live", response_model=LivenessResponse)
    async def liveness() -> LivenessResponse:
        return LivenessResponse()

    return router


__all__ = [
    "CheckResult",
    "HealthCheck",
    "HealthResponse",
    "LivenessResponse",
    "create_health_router",
    "run_checks",
]
