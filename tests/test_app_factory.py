"""Tests for app factory: routes mounted, correlation ID, framework errors."""

from unittest.mock import patch

from fastapi.testclient import TestClient

from reservas.api.factory import create_app
from reservas.observability.correlation import get_correlation_id


class TestRoutes:
    def test_health_available(self):
        client = TestClient(create_app())
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_reservation_routes_mounted(self, store):
        app = create_app()
        assert app.url_path_for("get_reservation", reservation_id=7) == "/reservations/7"

        client = TestClient(app)
        assert client.get("/reservations").status_code == 200
        assert client.get("/reservations/7").status_code == 404

    def test_docs_disabled(self):
        client = TestClient(create_app())
        assert client.get("/docs").status_code == 404


class TestFrameworkErrors:
    def test_unknown_route_uses_error_body(self):
        client = TestClient(create_app())
        response = client.get("/nope")
        assert response.status_code == 404
        assert response.json() == {
            "status": 404,
            "error": "Not Found",
            "message": "Not Found",
            "path": "/nope",
        }

    def test_wrong_method_uses_error_body(self):
        client = TestClient(create_app())
        response = client.patch("/reservations/1", json={})
        assert response.status_code == 405
        body = response.json()
        assert body["status"] == 405
        assert body["error"] == "Method Not Allowed"
        assert "allow" in {k.lower() for k in response.headers}


class TestCorrelationId:
    def test_generates_correlation_id(self):
        client = TestClient(create_app())
        response = client.get("/health")
        assert "X-Correlation-ID" in response.headers
        # UUID format check
        cid = response.headers["X-Correlation-ID"]
        assert len(cid) == 36  # UUID length

    def test_preserves_incoming_correlation_id(self):
        client = TestClient(create_app())
        response = client.get("/health", headers={"X-Correlation-ID": "test-123"})
        assert response.headers["X-Correlation-ID"] == "test-123"

    def test_replaces_oversized_correlation_id(self):
        client = TestClient(create_app())
        response = client.get("/health", headers={"X-Correlation-ID": "x" * 500})
        assert len(response.headers["X-Correlation-ID"]) == 36

    def test_present_on_error_responses(self):
        client = TestClient(create_app())
        response = client.get("/nope", headers={"X-Correlation-ID": "err-1"})
        assert response.headers["X-Correlation-ID"] == "err-1"

    def test_present_on_unexpected_error(self, store):
        client = TestClient(create_app(), raise_server_exceptions=False)
        logged_ids = []

        with patch(
            "reservas.domain.reservations.find_all",
            side_effect=RuntimeError("boom"),
        ), patch("reservas.api.errors.logger") as mock_logger:
            mock_logger.error.side_effect = lambda *args, **kwargs: logged_ids.append(
                get_correlation_id()
            )
            response = client.get("/reservations", headers={"X-Correlation-ID": "cid-500"})

        assert response.status_code == 500
        assert response.headers["X-Correlation-ID"] == "cid-500"
        assert response.json()["message"] == "An unexpected internal error occurred."
        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args.args[0] == "unexpected error"
        assert logged_ids == ["cid-500"]


class TestAsgiEntryPoint:
    def test_module_level_app(self):
        from fastapi import FastAPI

        from reservas.api.app import app

        assert isinstance(app, FastAPI)
        assert TestClient(app).get("/health").status_code == 200
