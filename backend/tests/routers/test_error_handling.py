# tests/routers/test_error_handling.py
"""
Integration tests for error handling across all API endpoints.

These tests verify:
- Consistent error response format (ErrorDetail schema)
- Correct HTTP status codes for different error types
- Correlation ID headers in responses
- Validation error details
"""

import pytest
from fastapi.testclient import TestClient


# =============================================================================
# TEST: CORRELATION ID HEADERS
# =============================================================================

class TestCorrelationIdHeaders:
    """Tests for correlation ID header handling on errors."""

    def test_error_responses_include_correlation_id(self, client: TestClient):
        """Error responses should also include correlation ID."""
        response = client.post("/curve/chart", params={"range": "2W"}, json={})

        assert response.status_code == 400
        assert "x-correlation-id" in response.headers

    def test_validation_errors_include_correlation_id(self, client: TestClient):
        response = client.post(
            "/curve",
            json={"assets": "not-a-list"},
            headers={"X-Correlation-ID": "bad-body-1"},
        )

        assert response.status_code == 422
        assert response.headers["x-correlation-id"] == "bad-body-1"


# =============================================================================
# TEST: 400 BAD REQUEST ERRORS
# =============================================================================

class TestInvalidTimeRange:
    """Tests for unknown chart time range labels."""

    @pytest.mark.parametrize("endpoint", ["/curve/chart", "/curve/overview"])
    def test_invalid_range_format(self, client: TestClient, endpoint):
        response = client.post(endpoint, params={"range": "2W"}, json={})

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "InvalidTimeRangeError"
        assert "2W" in data["message"]
        assert data["details"]["range"] == "2W"
        assert data["details"]["valid_options"] == ["1W", "1M", "6M", "1Y", "ALL"]


# =============================================================================
# TEST: 404 / 405 ERRORS
# =============================================================================

class TestRoutingErrors:
    """Tests for unknown paths and methods."""

    def test_unknown_path_format(self, client: TestClient):
        response = client.get("/nothing-here")

        assert response.status_code == 404
        data = response.json()
        assert data["error"] == "NotFoundError"
        assert data["message"]

    def test_wrong_method_format(self, client: TestClient):
        response = client.get("/curve")

        assert response.status_code == 405
        assert response.json()["error"] == "MethodNotAllowedError"


# =============================================================================
# TEST: 422 VALIDATION ERRORS
# =============================================================================

class TestValidationErrors:
    """Tests for request validation (422) responses."""

    def test_missing_field_format(self, client: TestClient):
        """Missing required fields list the failing location."""
        response = client.post("/curve", json={"assets": [{"id": 1, "cost_basis": "1"}]})

        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "ValidationError"
        assert data["message"] == "Request validation failed"
        assert isinstance(data["details"], list)
        assert any("quantity" in error["field"] for error in data["details"])

    @pytest.mark.parametrize("asset", [
        {"id": 1, "quantity": "-1", "cost_basis": "100"},
        {"id": 1, "quantity": "1", "cost_basis": "-100"},
        {"id": 1, "quantity": "abc", "cost_basis": "100"},
    ])
    def test_invalid_asset_values(self, client: TestClient, asset):
        response = client.post("/curve", json={"assets": [asset]})

        assert response.status_code == 422

    def test_negative_timestamp(self, client: TestClient):
        payload = {"history": [{"asset_id": 1, "timestamp": -1, "sell_price": "1"}]}

        response = client.post("/curve", json=payload)

        assert response.status_code == 422

    def test_timestamp_past_year_9999(self, client: TestClient):
        payload = {"history": [{"asset_id": 1, "timestamp": 10**17, "sell_price": "1"}]}

        response = client.post("/curve/daily-change", json=payload)

        assert response.status_code == 422
        assert any("timestamp" in error["field"] for error in response.json()["details"])

    def test_now_past_year_9999(self, client: TestClient):
        response = client.post("/curve/chart", params={"now": 10**17}, json={})

        assert response.status_code == 422

    @pytest.mark.parametrize("max_points", [0, 1001])
    def test_max_points_out_of_bounds(self, client: TestClient, max_points):
        response = client.post(
            "/curve/chart", params={"max_points": max_points}, json={}
        )

        assert response.status_code == 422
        assert any("max_points" in error["field"] for error in response.json()["details"])

    def test_non_integer_asset_id_in_path(self, client: TestClient):
        response = client.post("/curve/assets/abc/change", json={})

        assert response.status_code == 422
