"""Tests for the health endpoint."""

import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from imobiguard import __version__
from imobiguard.config import Settings
from imobiguard.main import create_app
from imobiguard.routers.health import router


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    app.include_router(router)
    return TestClient(app)


class TestHealthEndpoint:
    def test_health_returns_ok(self, client: TestClient) -> None:
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "service": "imobiguard",
            "version": __version__,
        }

    def test_liveness_check_logs_no_threats(
        self, settings: Settings, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.WARNING, logger="imobiguard.middleware.threat_scan")
        with TestClient(create_app(settings)) as app_client:
            response = app_client.get("/api/health")

        assert response.status_code == 200
        assert [r for r in caplog.records if r.levelno >= logging.WARNING] == []
