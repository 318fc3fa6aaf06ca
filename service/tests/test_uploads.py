"""Tests for the upload pre-check router: POST /api/uploads/check."""

from __future__ import annotations

import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from imobiguard.config import Settings
from imobiguard.routers import uploads

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
PDF = b"%PDF-1.7\n" + b"\x00" * 32
ZIP = b"PK\x03\x04" + b"\x00" * 32
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def _make_app(settings: Settings) -> FastAPI:
    app = FastAPI()
    app.include_router(uploads.router)
    app.state.settings = settings
    return app


@pytest.fixture
def client(settings: Settings) -> TestClient:
    return TestClient(_make_app(settings))


class TestAcceptedUploads:
    def test_png_accepted(self, client: TestClient) -> None:
        resp = client.post(
            "/api/uploads/check",
            files={"file": ("fachada.png", PNG, "image/png")},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "accepted"
        assert data["file_name"] == "fachada.png"
        assert data["detected_type"] == "image/png"
        assert data["size_bytes"] == len(PNG)

    def test_name_is_sanitized(self, client: TestClient) -> None:
        resp = client.post(
            "/api/uploads/check",
            files={"file": ("Contrato de Locacao (1).pdf", PDF, "application/pdf")},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["file_name"] == "Contrato_de_Locacao__1_.pdf"
        assert data["original_name"] == "Contrato de Locacao (1).pdf"

    def test_docx_accepted_as_zip_container(self, client: TestClient) -> None:
        resp = client.post(
            "/api/uploads/check",
            files={"file": ("proposta.docx", ZIP, DOCX_MIME)},
        )
        assert resp.status_code == 200
        assert resp.json()["detected_type"] == "application/zip"

    def test_mime_parameters_ignored(self, client: TestClient) -> None:
        resp = client.post(
            "/api/uploads/check",
            files={"file": ("laudo.pdf", PDF, "application/pdf; charset=binary")},
        )
        assert resp.status_code == 200


class TestRejectedUploads:
    def test_bad_extension_returns_400(self, client: TestClient) -> None:
        resp = client.post(
            "/api/uploads/check",
            files={"file": ("malware.exe", b"MZ" + b"\x00" * 32, "image/png")},
        )
        assert resp.status_code == 400
        assert ".exe" in resp.json()["detail"]

    def test_bad_mime_returns_400(self, client: TestClient) -> None:
        resp = client.post(
            "/api/uploads/check",
            files={"file": ("foto.png", PNG, "text/html")},
        )
        assert resp.status_code == 400
        assert "text/html" in resp.json()["detail"]

    def test_too_large_returns_400(self, settings: Settings) -> None:
        small_limit = Settings(**{**settings.model_dump(), "max_upload_size_bytes": 16})
        client = TestClient(_make_app(small_limit))
        resp = client.post(
            "/api/uploads/check",
            files={"file": ("foto.png", PNG, "image/png")},
        )
        assert resp.status_code == 400
        assert "exceeds maximum size" in resp.json()["detail"]

    def test_disguised_script_returns_400(
        self, client: TestClient, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.WARNING, logger="imobiguard.routers.uploads")
        resp = client.post(
            "/api/uploads/check",
            files={"file": ("avatar.jpg", b"<?php system($_GET['c']); ?>", "image/jpeg")},
        )
        assert resp.status_code == 400
        assert "Could not detect file type" in resp.json()["detail"]
        assert any("avatar.jpg" in r.getMessage() for r in caplog.records)

    def test_content_type_mismatch_returns_400(self, client: TestClient) -> None:
        resp = client.post(
            "/api/uploads/check",
            files={"file": ("planta.png", PDF, "image/png")},
        )
        assert resp.status_code == 400
        assert "mismatch" in resp.json()["detail"]

    def test_truncated_file_returns_400(self, client: TestClient) -> None:
        resp = client.post(
            "/api/uploads/check",
            files={"file": ("foto.png", b"\x89PNG", "image/png")},
        )
        assert resp.status_code == 400
        assert "too small" in resp.json()["detail"]
