"""Integration tests for health, probe, info, root and metrics endpoints."""

import time
from datetime import datetime

from fastapi.testclient import TestClient

from sample_app.api.main import create_app
from sample_app.api.routes.health import is_ready


class TestHealthEndpoints:
    """Test health check endpoints."""

    def test_api_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["uptime"] >= 0
        datetime.fromisoformat(data["timestamp"])

    def test_api_health_is_logged(self, client, read_log):
        response = client.get("/api/health")
        request_id = response.headers["X-Request-ID"]

        events = [r["event"] for r in read_log() if r.get("request_id") == request_id]

        assert "health_check" in events

    def test_liveness(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready_without_startup_delay(self, client):
        response = client.get("/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_not_ready_during_startup_delay(self, test_settings):
        settings = test_settings.model_copy(update={"startup_delay_seconds": 60})

        with TestClient(create_app(settings)) as client:
            response = client.get("/ready")

        assert response.status_code == 503
        assert response.json()["status"] == "not ready"

    def test_ready_once_startup_delay_elapses(self, test_settings):
        settings = test_settings.model_copy(update={"startup_delay_seconds": 0.5})

        with TestClient(create_app(settings)) as client:
            assert client.get("/ready").status_code == 503

            deadline = time.monotonic() + 5
            response = client.get("/ready")
            while response.status_code != 200 and time.monotonic() < deadline:
                time.sleep(0.05)
                response = client.get("/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_shutdown_clears_readiness(self, app):
        with TestClient(app) as client:
            assert client.get("/ready").status_code == 200

        assert is_ready() is False


class TestInfoEndpoint:
    """Test the /info endpoint."""

    def test_info_fields(self, client):
        response = client.get("/info")

        assert response.status_code == 200
        data = response.json()
        assert data["app"] == "sample-app"
        assert data["version"] == "1.0.0"
        assert data["environment"] == "test"
        assert data["hostname"]
        assert data["pythonVersion"]
        assert isinstance(data["uptime"], int)

    def test_request_count_increments(self, client):
        first = client.get("/info").json()["requestCount"]
        client.get("/api/users")
        second = client.get("/info").json()["requestCount"]

        assert second == first + 2


class TestRootEndpoint:
    """Test the root endpoint."""

    def test_root_lists_endpoints(self, client):
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["version"] == "1.0.0"
        assert data["endpoints"]["users"] == "/api/users"
        assert data["endpoints"]["metrics"] == "/metrics"

    def test_root_access_is_logged(self, client, read_log):
        client.get("/")

        assert any(r["event"] == "root_endpoint_accessed" for r in read_log())


class TestMetricsEndpoint:
    """Test the Prometheus scrape endpoint."""

    def test_metrics_exposition(self, client):
        client.get("/api/users")

        response = client.get("/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "sample_app_http_requests_total" in response.text
        assert 'endpoint="/api/users"' in response.text
        assert "sample_app_uptime_seconds" in response.text

    def test_route_template_used_as_label(self, client):
        client.get("/api/users/1")

        response = client.get("/metrics")

        assert 'endpoint="/api/users/{user_id}"' in response.text

    def test_metrics_requests_not_access_logged(self, client, read_log):
        client.get("/metrics")

        paths = [r.get("path") for r in read_log() if r["event"] == "incoming_request"]

        assert "/metrics" not in paths
