"""
Pytest Configuration and Shared Fixtures.

The environment is pinned before any application module is imported, so that
importing sample_app.api.main never writes log files or waits for readiness.

- test_settings: Settings for an isolated test app (logs under tmp_path)
- app: Fresh FastAPI application per test
- client: TestClient with the application lifespan running
- read_log: Reader for the JSON log files the test app writes
- sample_user: Payload for creating a user
"""

import json
import logging
import os

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("STARTUP_DELAY_SECONDS", "0")

import pytest
from fastapi.testclient import TestClient

from sample_app.api.dependencies import reset_dependencies
from sample_app.api.main import create_app
from sample_app.config.settings import Settings, get_settings


@pytest.fixture(autouse=True)
def _reset_state():
    """Drop cached settings and shared singletons between tests."""
    get_settings.cache_clear()
    reset_dependencies()
    yield
    reset_dependencies()
    get_settings.cache_clear()


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings writing JSON log files into a temporary directory."""
    return Settings(
        app_env="test",
        log_to_file=True,
        log_dir=tmp_path / "logs",
        log_format="json",
        startup_delay_seconds=0,
    )


@pytest.fixture
def app(test_settings):
    """Return a freshly configured application."""
    return create_app(test_settings)


@pytest.fixture
def client(app):
    """TestClient with startup/shutdown events executed."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def read_log(test_settings):
    """Return a reader for the JSON log files written by the test app."""

    def _read(filename: str = "app.log") -> list[dict]:
        for handler in logging.getLogger().handlers:
            handler.flush()
        path = test_settings.log_dir / filename
        if not path.exists():
            return []
        return [json.loads(line) for line in path.read_text().splitlines() if line.strip()]

    return _read


@pytest.fixture
def sample_user() -> dict:
    """Return a sample user payload for testing."""
    return {
        "name": "Carol",
        "email": "carol@example.com",
    }
