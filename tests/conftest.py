"""Shared fixtures for router tests."""

from __future__ import annotations

import pytest

from jsonapi_router import Router, RouterSettings

BASE_URL = "https://api.example.com/v1"


@pytest.fixture
def settings() -> RouterSettings:
    return RouterSettings(base_url=BASE_URL)


@pytest.fixture
def router(settings: RouterSettings) -> Router:
    """Router with the default equality-only filter strategy."""
    return Router(settings)
