"""
Tests for the centralized error handlers.

Drives real requests through the application so faults originate where
they do in production: routing, argument binding and handler bodies.
"""

import logging

from fastapi.testclient import TestClient

from twiggle.main import app
from twiggle.shared.errors.codes import ErrorCode

client = TestClient(app)


def _assert_error_shape(body: dict, status: int, code: ErrorCode, path: str) -> None:
    assert body["status"] == status
    assert body["code"] == code.name
    assert body["suggestion"] == code.suggestion
    assert body["path"] == f"uri={path}"
    assert isinstance(body["details"], list)


class TestRoutingErrors:
    """Faults raised by the router before any handler runs."""

    def test_unknown_route_returns_404(self) -> None:
        response = client.get("/api/v1/compost")
        assert response.status_code == 404
        body = response.json()
        _assert_error_shape(body, 404, ErrorCode.RESOURCE_NOT_FOUND, "/api/v1/compost")
        assert body["error"] == "Not Found"
        assert body["message"] == "The requested resource '/api/v1/compost' was not found"

    def test_wrong_method_returns_405(self) -> None:
        response = client.post("/api/v1/test")
        assert response.status_code == 405
        body = response.json()
        _assert_error_shape(body, 405, ErrorCode.METHOD_NOT_ALLOWED, "/api/v1/test")
        assert body["message"] == "The POST method is not supported. Supported methods are: GET"
        assert response.headers["allow"] == "GET"

    def test_unsupported_media_type_returns_415(self, probe_client: TestClient) -> None:
        response = probe_client.post(
            "/probe/upload", content="seedlings", headers={"Content-Type": "text/plain"}
        )
        assert response.status_code == 415
        body = response.json()
        _assert_error_shape(body, 415, ErrorCode.UNSUPPORTED_MEDIA_TYPE, "/probe/upload")
        assert body["message"] == (
            "The media type text/plain is not supported. Supported types are: application/json"
        )

    def test_unsupported_media_type_without_content_type(self, probe_client: TestClient) -> None:
        response = probe_client.post("/probe/upload")
        assert response.status_code == 415
        body = response.json()
        assert body["message"] == (
            "The media type (none) is not supported. Supported types are: application/json"
        )


class TestBindingErrors:
    """Faults raised while binding query parameters and bodies."""

    def test_missing_parameter(self, probe_client: TestClient) -> None:
        response = probe_client.get("/probe/plots", params={"name": "north"})
        assert response.status_code == 400
        body = response.json()
        _assert_error_shape(body, 400, ErrorCode.MISSING_PARAMETER, "/probe/plots")
        assert body["message"] == "The required parameter 'limit' is missing"

    def test_parameter_type_mismatch(self, probe_client: TestClient) -> None:
        response = probe_client.get("/probe/plots", params={"name": "north", "limit": "lots"})
        assert response.status_code == 400
        body = response.json()
        _assert_error_shape(body, 400, ErrorCode.INVALID_PARAMETER_TYPE, "/probe/plots")
        assert body["message"] == "The parameter 'limit' must be a valid int"

    def test_parameter_constraint_violation(self, probe_client: TestClient) -> None:
        response = probe_client.get("/probe/plots", params={"name": "north", "limit": 0})
        assert response.status_code == 400
        body = response.json()
        _assert_error_shape(body, 400, ErrorCode.CONSTRAINT_VIOLATION, "/probe/plots")
        assert len(body["details"]) == 1
        assert body["details"][0].startswith("limit: ")

    def test_valid_parameters_pass(self, probe_client: TestClient) -> None:
        response = probe_client.get("/probe/plots", params={"name": "north", "limit": 3})
        assert response.status_code == 200
        assert response.json() == {"limit": 3, "name": "north"}

    def test_body_validation_lists_every_field(self, probe_client: TestClient) -> None:
        response = probe_client.post("/probe/plants", json={"name": "", "spacing_cm": "wide"})
        assert response.status_code == 400
        body = response.json()
        _assert_error_shape(body, 400, ErrorCode.INVALID_REQUEST, "/probe/plants")
        assert body["message"] == "Validation failed. Please check the provided data."
        assert len(body["details"]) == 2
        assert body["details"][0].startswith("name: ")
        assert body["details"][1].startswith("spacing_cm: ")

    def test_malformed_json(self, probe_client: TestClient) -> None:
        response = probe_client.post(
            "/probe/plants",
            content='{"name": ',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        body = response.json()
        _assert_error_shape(body, 400, ErrorCode.MALFORMED_JSON, "/probe/plants")

    def test_valid_body_is_created(self, probe_client: TestClient) -> None:
        response = probe_client.post("/probe/plants", json={"name": "basil", "spacing_cm": 20})
        assert response.status_code == 201
        assert response.json()["data"] == "basil"


class TestHandlerErrors:
    """Faults raised inside handler bodies."""

    def test_application_error_status_and_code(self) -> None:
        response = client.get("/api/v1/test-error")
        assert response.status_code == 400
        body = response.json()
        _assert_error_shape(body, 400, ErrorCode.INVALID_REQUEST, "/api/v1/test-error")
        assert body["message"] == "This is a test error"
        assert body["error"] == "Bad Request"
        assert body["details"] == []

    def test_application_error_default_code(self) -> None:
        response = client.get("/api/v1/test-server-error")
        assert response.status_code == 500
        body = response.json()
        _assert_error_shape(body, 500, ErrorCode.INTERNAL_ERROR, "/api/v1/test-server-error")
        assert body["message"] == "This is a test server error"

    def test_permission_error_returns_403(self, probe_client: TestClient) -> None:
        response = probe_client.get("/probe/forbidden")
        assert response.status_code == 403
        body = response.json()
        _assert_error_shape(body, 403, ErrorCode.ACCESS_DENIED, "/probe/forbidden")
        assert body["message"] == "You don't have permission to access this resource"

    def test_unauthorized_is_access_denied(self, probe_client: TestClient) -> None:
        response = probe_client.get("/probe/unauthorized")
        assert response.status_code == 403
        assert response.json()["code"] == "ACCESS_DENIED"

    def test_pydantic_error_in_handler_is_constraint_violation(
        self, probe_client: TestClient
    ) -> None:
        response = probe_client.get("/probe/constraint")
        assert response.status_code == 400
        body = response.json()
        _assert_error_shape(body, 400, ErrorCode.CONSTRAINT_VIOLATION, "/probe/constraint")
        assert body["details"][0].startswith("name: ")

    def test_other_http_exception_keeps_status(self, probe_client: TestClient) -> None:
        response = probe_client.get("/probe/conflict")
        assert response.status_code == 409
        body = response.json()
        assert body["code"] == "INVALID_REQUEST"
        assert body["message"] == "Plot already exists"

    def test_unexpected_exception_hides_internals(self, probe_client: TestClient) -> None:
        response = probe_client.get("/probe/crash")
        assert response.status_code == 500
        body = response.json()
        _assert_error_shape(body, 500, ErrorCode.INTERNAL_ERROR, "/probe/crash")
        assert "database exploded" not in response.text
        assert body["message"].startswith("An unexpected error occurred.")


class TestErrorLogging:
    """Every handled fault is logged before the response is sent."""

    def test_client_fault_logged_as_warning(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="twiggle.shared.errors.handlers"):
            client.get("/api/v1/test-error")
        records = [r for r in caplog.records if r.name == "twiggle.shared.errors.handlers"]
        assert records
        assert records[-1].levelno == logging.WARNING
        assert "This is a test error" in records[-1].getMessage()

    def test_unexpected_fault_logged_with_traceback(self, caplog, probe_client) -> None:
        with caplog.at_level(logging.ERROR, logger="twiggle.shared.errors.handlers"):
            probe_client.get("/probe/crash")
        records = [r for r in caplog.records if r.name == "twiggle.shared.errors.handlers"]
        assert records
        assert records[-1].levelno == logging.ERROR
        assert records[-1].exc_info is not None
