"""Integration tests for error simulation and the global error handlers."""

import pytest
from fastapi.testclient import TestClient

from sample_app.core.exceptions import SIMULATED_ERROR_MESSAGES


class TestSimulateError:
    """POST /api/simulate-error."""

    def test_default_type_is_generic(self, client):
        response = client.post("/api/simulate-error")

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == SIMULATED_ERROR_MESSAGES["generic"]
        assert data["requestId"] == response.headers["X-Request-ID"]

    @pytest.mark.parametrize("error_type", ["database", "validation", "timeout"])
    def test_known_types(self, client, error_type):
        response = client.post("/api/simulate-error", json={"type": error_type})

        assert response.status_code == 500
        assert response.json()["error"] == SIMULATED_ERROR_MESSAGES[error_type]

    def test_unknown_type_falls_back(self, client):
        response = client.post("/api/simulate-error", json={"type": "cosmic-ray"})

        assert response.json()["error"] == SIMULATED_ERROR_MESSAGES["generic"]

    @pytest.mark.parametrize(
        "body",
        [
            {"type": None},
            {"type": 123},
            {"type": ""},
            {"type": ["database"]},
            ["database"],
            "database",
        ],
    )
    def test_unusable_type_falls_back(self, client, body):
        response = client.post("/api/simulate-error", json=body)

        assert response.status_code == 500
        assert response.json()["error"] == SIMULATED_ERROR_MESSAGES["generic"]

    def test_malformed_body_still_fails_with_500(self, client):
        response = client.post(
            "/api/simulate-error",
            content="{bad",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == SIMULATED_ERROR_MESSAGES["generic"]
        assert data["requestId"] == response.headers["X-Request-ID"]

    def test_error_written_to_error_log(self, client, read_log):
        response = client.post("/api/simulate-error", json={"type": "database"})
        request_id = response.headers["X-Request-ID"]

        records = [r for r in read_log("error.log") if r.get("request_id") == request_id]
        by_event = {r["event"]: r for r in records}

        assert "simulated_error_triggered" in by_event
        occurred = by_event["error_occurred"]
        assert occurred["error"] == {
            "name": "SimulatedError",
            "message": SIMULATED_ERROR_MESSAGES["database"],
        }
        assert occurred["error_type"] == "database"
        assert "Traceback" in occurred["exception"]
        assert by_event["request_completed"]["status_code"] == 500

    def test_error_log_excludes_info_records(self, client, read_log):
        client.get("/api/users")
        client.post("/api/simulate-error")

        levels = {r["level"] for r in read_log("error.log")}

        assert levels == {"error"}

    def test_error_counter_incremented(self, client):
        client.post("/api/simulate-error", json={"type": "timeout"})

        text = client.get("/metrics").text

        assert 'sample_app_errors_total{error_type="timeout",endpoint="/api/simulate-error"}' in text


class TestRouteErrors:
    """Unknown routes and wrong methods."""

    def test_unknown_route(self, client, read_log):
        response = client.get("/api/nope")

        assert response.status_code == 404
        assert response.json() == {"error": "Route not found"}
        assert any(r["event"] == "route_not_found" for r in read_log())

    def test_method_not_allowed(self, client):
        response = client.patch("/api/users")

        assert response.status_code == 405
        assert response.json() == {"error": "Method Not Allowed"}


class TestUnhandledErrors:
    """Exceptions with no dedicated handler become a generic 500."""

    def test_unexpected_exception(self, app, read_log):
        @app.get("/api/explode")
        async def explode():
            raise RuntimeError("kaboom")

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/api/explode")

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "Internal server error"
        assert data["requestId"]
        assert response.headers["X-Request-ID"] == data["requestId"]

        record = next(r for r in read_log("error.log") if r["event"] == "unhandled_error")
        assert record["request_id"] == data["requestId"]
        assert record["error"] == {"name": "RuntimeError", "message": "kaboom"}
        assert "kaboom" not in response.text
