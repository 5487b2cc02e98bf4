"""Shared fixtures for the mock server test suite."""
from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from mockserver.core.config import Settings
from mockserver.core.metrics import metrics
from mockserver.main import create_app


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_metrics() -> Iterator[None]:
    """Isolate tests from the process-wide metrics collector."""
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def settings() -> Settings:
    """Settings with a ticker slow enough to never fire during a test."""
    return Settings(
        _env_file=None,
        max_players=10,
        tick_interval=3600,
        static_dir=None,
    )


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client
