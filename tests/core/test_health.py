"""
Tests for health checks and the health router.
"""

from __future__ import annotations

import asyncio

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from modelreg.core.health import HealthCheck, create_health_router, run_checks


async def _ok() -> bool:
    return True


async def _fail() -> bool:
    raise ConnectionError("store down")


async def _slow() -> bool:
    await asyncio.sleep(1)
    return True


def _client(checks: list[HealthCheck]) -> TestClient:
    app = FastAPI()
    app.include_router(create_health_router("modelreg", version="0.1.0", checks=checks))
    return TestClient(app)


class TestRunChecks:
    @pytest.mark.asyncio
    async def test_all_healthy(self):
        status, results = await run_checks([HealthCheck("store", _ok)])
        assert status == "healthy"
        assert results["store"].latency_ms is not None

    @pytest.mark.asyncio
    async def test_required_failure_is_unhealthy(self):
        status, results = await run_checks([HealthCheck("store", _fail)])
        assert status == "unhealthy"
        assert results["store"].error == "store down"

    @pytest.mark.asyncio
    async def test_optional_failure_is_degraded(self):
        status, _ = await run_checks([HealthCheck("store", _ok), HealthCheck("cache", _fail, required=False)])
        assert status == "degraded"

    @pytest.mark.asyncio
    async def test_timeout(self):
        status, results = await run_checks([HealthCheck("store", _slow, timeout_s=0.01)])
        assert status == "unhealthy"
        assert results["store"].error == "timeout"


class TestHealthRouter:
    def test_health_ok(self):
        resp = _client([HealthCheck("store", _ok)]).get("/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "healthy"
        assert body["service"] == "modelreg"
        assert body["checks"]["store"]["status"] == "healthy"

    def test_health_unhealthy_is_503(self):
        resp = _client([HealthCheck("store", _fail)]).get("/health")
        assert resp.status_code == 503

    def test_ready_503_when_degraded(self):
        resp = _client([HealthCheck("cache", _fail, required=False)]).get("/health/ready")
        assert resp.status_code == 503
        assert resp.json()["status"] == "degraded"

    def test_live(self):
        resp = _client([HealthCheck("store", _fail)]).get("/health/live")
        assert resp.status_code == 200
        assert resp.json() == {"status": "alive"}
