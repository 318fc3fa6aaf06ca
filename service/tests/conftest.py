"""Shared test fixtures for the validation service."""

import pytest

from imobiguard.config import Settings


@pytest.fixture
def settings() -> Settings:
    """Settings with the defaults the service ships with."""
    return Settings()
