"""Shared fixtures: a fresh application per test, no rate limiting."""

from collections.abc import Callable

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app


def build_app(environment: str = "test", **overrides) -> FastAPI:
    """Create an app with its own repositories and the given environment."""
    values = {"environment": environment, "rate_limit_enabled": False, **overrides}
    return create_app(Settings(**values))


@pytest.fixture
def client() -> TestClient:
    """Client for a fresh app in the test environment."""
    return TestClient(build_app(), raise_server_exceptions=False)


@pytest.fixture
def client_for() -> Callable[..., TestClient]:
    """Factory building a client for a fresh app in any environment."""

    def make(environment: str = "test", **overrides) -> TestClient:
        return TestClient(
            build_app(environment, **overrides), raise_server_exceptions=False
        )

    return make
