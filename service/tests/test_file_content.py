"""Tests for magic-byte upload validation."""

import pytest

from imobiguard.guardrails.file_content import detect_content_type, validate_file_content

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16
JPEG = b"\xff\xd8\xff\xe0" + b"\x00" * 16
GIF = b"GIF89a" + b"\x00" * 16
PDF = b"%PDF-1.7\n" + b"\x00" * 16
ZIP = b"PK\x03\x04" + b"\x00" * 16
WEBP = b"RIFF\x24\x00\x00\x00WEBPVP8 " + b"\x00" * 8
PHP = b"<?php system($_GET['c']); ?>"

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class TestDetectContentType:
    @pytest.mark.parametrize(
        "data, expected",
        [
            (PNG, ("png", "image/png")),
            (JPEG, ("jpg", "image/jpeg")),
            (GIF, ("gif", "image/gif")),
            (PDF, ("pdf", "application/pdf")),
            (ZIP, ("zip", "application/zip")),
            (WEBP, ("webp", "image/webp")),
        ],
    )
    def test_known_signatures(self, data: bytes, expected: tuple[str, str]) -> None:
        assert detect_content_type(data) == expected

    def test_unknown(self) -> None:
        assert detect_content_type(PHP) is None

    def test_riff_without_webp_tag(self) -> None:
        assert detect_content_type(b"RIFF\x24\x00\x00\x00WAVEfmt ") is None


class TestValidateFileContent:
    def test_matching_png(self) -> None:
        result = validate_file_content(PNG, "image/png", ".png")
        assert result.valid is True
        assert result.detected_type == "image/png"

    def test_jpeg_extension_alias(self) -> None:
        assert validate_file_content(JPEG, "image/jpeg", ".jpeg").valid is True

    def test_docx_is_zip_container(self) -> None:
        result = validate_file_content(ZIP, DOCX_MIME, ".docx")
        assert result.valid is True
        assert result.detected_type == "application/zip"

    def test_web_shell_disguised_as_image(self) -> None:
        result = validate_file_content(PHP, "image/jpeg", ".jpg")
        assert result.valid is False
        assert "Could not detect" in result.error

    def test_type_mismatch(self) -> None:
        result = validate_file_content(PDF, "image/png", ".png")
        assert result.valid is False
        assert "mismatch" in result.error
        assert result.detected_type == "application/pdf"

    def test_too_small(self) -> None:
        result = validate_file_content(b"\x89PNG", "image/png", ".png")
        assert result.valid is False
        assert "too small" in result.error

    def test_extension_without_dot(self) -> None:
        assert validate_file_content(PDF, "application/octet-stream", "pdf").valid is True
