# tests/test_correlation_id.py
"""
Tests for correlation ID middleware and context management.
"""

from goldfolio.utils.context import clear_correlation_id, get_correlation_id, set_correlation_id


class TestCorrelationIdContext:
    """Tests for correlation ID context functions."""

    def test_get_returns_none_when_not_set(self):
        """Should return None when correlation ID is not set."""
        clear_correlation_id()
        assert get_correlation_id() is None

    def test_set_and_get_correlation_id(self):
        """Should set and retrieve correlation ID."""
        set_correlation_id("test-correlation-123")
        assert get_correlation_id() == "test-correlation-123"
        clear_correlation_id()

    def test_clear_correlation_id(self):
        """Should clear correlation ID."""
        set_correlation_id("test-correlation-456")
        clear_correlation_id()
        assert get_correlation_id() is None


class TestCorrelationIdMiddleware:
    """Tests for correlation ID middleware."""

    def test_generates_correlation_id_when_not_provided(self, client):
        """Should generate a UUID when no ID is provided in the request."""
        response = client.get("/health/live")

        assert response.status_code == 200
        correlation_id = response.headers["X-Correlation-ID"]
        assert len(correlation_id) == 36  # UUID length
        assert correlation_id.count("-") == 4  # UUID format

    def test_uses_provided_correlation_id(self, client):
        """Should use correlation ID from request header."""
        custom_id = "my-custom-trace-id-123"
        response = client.get(
            "/health/live",
            headers={"X-Correlation-ID": custom_id}
        )

        assert response.headers["X-Correlation-ID"] == custom_id

    def test_uses_request_id_header_as_fallback(self, client):
        """Should use X-Request-ID header if X-Correlation-ID not provided."""
        custom_id = "my-request-id-456"
        response = client.get(
            "/health/live",
            headers={"X-Request-ID": custom_id}
        )

        assert response.headers["X-Correlation-ID"] == custom_id

    def test_prefers_correlation_id_over_request_id(self, client):
        """Should prefer X-Correlation-ID over X-Request-ID."""
        response = client.get(
            "/health/live",
            headers={
                "X-Correlation-ID": "correlation-123",
                "X-Request-ID": "request-456",
            }
        )

        assert response.headers["X-Correlation-ID"] == "correlation-123"

    def test_post_endpoints_carry_correlation_id(self, client, snapshot_payload):
        response = client.post(
            "/curve",
            json=snapshot_payload,
            headers={"X-Correlation-ID": "curve-trace"},
        )

        assert response.status_code == 200
        assert response.headers["X-Correlation-ID"] == "curve-trace"

    def test_different_requests_get_different_ids(self, client):
        """Different requests should get different correlation IDs."""
        id1 = client.get("/health/live").headers["X-Correlation-ID"]
        id2 = client.get("/health/live").headers["X-Correlation-ID"]

        assert id1 != id2

