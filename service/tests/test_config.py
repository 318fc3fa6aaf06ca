"""Tests for application config validation — fail-fast on invalid settings."""

import pytest
from pydantic import ValidationError

from imobiguard.config import Settings


class TestBoundsValidation:
    """Bounds that would make every request fail are rejected at startup."""

    def test_zero_max_string_length_rejected(self) -> None:
        with pytest.raises(ValidationError, match="max_string_length"):
            Settings(max_string_length=0)

    def test_zero_pagination_max_limit_rejected(self) -> None:
        with pytest.raises(ValidationError, match="pagination_max_limit"):
            Settings(pagination_max_limit=0)

    def test_negative_upload_size_rejected(self) -> None:
        with pytest.raises(ValidationError, match="max_upload_size_bytes"):
            Settings(max_upload_size_bytes=-1)

    def test_whitespace_only_extensions_rejected(self) -> None:
        with pytest.raises(ValidationError, match="allowed_upload_extensions"):
            Settings(allowed_upload_extensions="  , , ")

    def test_defaults_are_valid(self) -> None:
        s = Settings()
        assert s.max_string_length == 1000
        assert s.pagination_max_limit == 100
        assert s.sanitize_request_bodies is True
        assert s.threat_logging_enabled is True
        assert s.allow_http_redirects is False


class TestListParsing:
    def test_extensions_get_leading_dot_and_lowercase(self) -> None:
        s = Settings(allowed_upload_extensions=" PDF , .Png ,jpg")
        assert s.get_allowed_extensions_set() == frozenset({".pdf", ".png", ".jpg"})

    def test_mime_types_lowercased(self) -> None:
        s = Settings(allowed_upload_mime_types="Image/PNG, application/pdf")
        assert s.get_allowed_mime_types_set() == frozenset({"image/png", "application/pdf"})

    def test_redirect_lists(self) -> None:
        s = Settings(
            allowed_redirect_domains="Example.com, app.example.com",
            allowed_redirect_paths="/leads, /dashboard",
        )
        assert s.get_redirect_domains_set() == frozenset({"example.com", "app.example.com"})
        assert s.get_redirect_paths() == ("/dashboard", "/leads")

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("IMOBIGUARD_PAGINATION_MAX_LIMIT", "25")
        monkeypatch.setenv("IMOBIGUARD_THREAT_LOGGING_ENABLED", "false")
        s = Settings()
        assert s.pagination_max_limit == 25
        assert s.threat_logging_enabled is False
