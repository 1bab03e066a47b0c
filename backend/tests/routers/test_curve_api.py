# tests/routers/test_curve_api.py
"""
Integration tests for the /curve endpoints.

The request body is the (assets, history) snapshot from conftest:
A = 2 units @ 100, B = 1 unit @ 50, curve 250 -> 250 -> 290.

Tests verify:
- Decimal values are returned as strings
- Query parameters (range, max_points, now)
- Sentinel responses for empty snapshots
"""

from fastapi.testclient import TestClient

from goldfolio.services.constants import MAX_TIMESTAMP_MS, MS_PER_DAY
from goldfolio.services.curve import CurveBuilder
from tests.conftest import BASE_TS

NOW = BASE_TS + 3 * MS_PER_DAY


# =============================================================================
# TEST: CURVE
# =============================================================================

class TestCurveEndpoint:
    """Tests for POST /curve."""

    def test_returns_curve_points(self, client: TestClient, snapshot_payload):
        response = client.post("/curve", json=snapshot_payload)

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 3
        assert data["points"] == [
            {"timestamp": BASE_TS, "total_value": "250"},
            {"timestamp": BASE_TS + MS_PER_DAY, "total_value": "250"},
            {"timestamp": BASE_TS + 2 * MS_PER_DAY, "total_value": "290"},
        ]

    def test_accepts_numeric_decimals(self, client: TestClient):
        payload = {
            "assets": [{"id": 1, "quantity": 0.5, "cost_basis": 1800}],
            "history": [{"asset_id": 1, "timestamp": BASE_TS, "sell_price": "1912.40"}],
        }

        response = client.post("/curve", json=payload)

        assert response.json()["points"][0]["total_value"] == "956.2"

    def test_empty_body_returns_empty_curve(self, client: TestClient):
        response = client.post("/curve", json={})

        assert response.status_code == 200
        assert response.json() == {"points": [], "count": 0}


# =============================================================================
# TEST: DAILY CHANGE
# =============================================================================

class TestDailyChangeEndpoint:
    """Tests for POST /curve/daily-change."""

    def test_daily_change(self, client: TestClient, snapshot_payload):
        response = client.post("/curve/daily-change", json=snapshot_payload)

        assert response.status_code == 200
        assert response.json() == {
            "absolute": "40",
            "percent": "16",
            "formatted_percent": "+16.00%",
        }

    def test_no_baseline_returns_zeros(self, client: TestClient):
        payload = {
            "assets": [{"id": 1, "quantity": "1", "cost_basis": "100"}],
            "history": [{"asset_id": 1, "timestamp": BASE_TS, "sell_price": "110"}],
        }

        data = client.post("/curve/daily-change", json=payload).json()

        assert data["absolute"] == "0"
        assert data["percent"] == "0"

    def test_near_zero_baseline(self, client: TestClient):
        payload = {
            "assets": [{"id": 1, "quantity": "1", "cost_basis": "1"}],
            "history": [
                {"asset_id": 1, "timestamp": BASE_TS, "sell_price": "1E-40"},
                {"asset_id": 1, "timestamp": BASE_TS + MS_PER_DAY, "sell_price": "1000"},
            ],
        }

        response = client.post("/curve/daily-change", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert data["absolute"] == "1000"
        assert data["formatted_percent"] == "+1" + "0" * 45 + ".00%"

    def test_last_representable_timestamp(self, client: TestClient):
        payload = {
            "assets": [{"id": 1, "quantity": "1", "cost_basis": "100"}],
            "history": [
                {"asset_id": 1, "timestamp": MAX_TIMESTAMP_MS - MS_PER_DAY, "sell_price": "100"},
                {"asset_id": 1, "timestamp": MAX_TIMESTAMP_MS, "sell_price": "110"},
            ],
        }

        response = client.post("/curve/daily-change", json=payload)

        assert response.status_code == 200
        assert response.json()["absolute"] == "10"


# =============================================================================
# TEST: STATS
# =============================================================================

class TestStatsEndpoint:
    """Tests for POST /curve/stats."""

    def test_stats(self, client: TestClient, snapshot_payload):
        response = client.post("/curve/stats", json=snapshot_payload)

        assert response.status_code == 200
        data = response.json()
        assert data["has_sufficient_data"] is True
        assert data["all_time_high"] == "290"
        assert data["all_time_high_date"] == BASE_TS + 2 * MS_PER_DAY
        assert data["all_time_low"] == "250"
        assert data["all_time_low_date"] == BASE_TS
        assert data["best_step_absolute"] == "40"
        assert data["best_step_percent"] == "16"
        assert data["worst_step_absolute"] == "0"
        assert data["worst_step_date"] == 0
        assert data["max_drawdown_percent"] == "0"
        assert data["total_return_percent"] == "16"

    def test_builds_curve_once(self, client: TestClient, snapshot_payload, monkeypatch):
        calls = []
        original_build = CurveBuilder.build

        def counting_build(self, history, holdings):
            calls.append(len(history))
            return original_build(self, history, holdings)

        monkeypatch.setattr(CurveBuilder, "build", counting_build)

        response = client.post("/curve/stats", json=snapshot_payload)

        assert response.status_code == 200
        assert calls == [3]

    def test_insufficient_data(self, client: TestClient):
        response = client.post("/curve/stats", json={})

        data = response.json()
        assert data["has_sufficient_data"] is False
        assert data["all_time_high"] == "0"
        assert data["all_time_high_date"] == 0


# =============================================================================
# TEST: CHART
# =============================================================================

class TestChartEndpoint:
    """Tests for POST /curve/chart."""

    def test_chart_one_week(self, client: TestClient, snapshot_payload):
        response = client.post(
            "/curve/chart",
            params={"range": "1W", "now": NOW},
            json=snapshot_payload,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["range"] == "1W"
        assert len(data["points"]) == 3
        assert data["points"][0] == {
            "timestamp": BASE_TS,
            "total_value": "250",
            "date_label": "Wed",
            "value_label": "CHF 250",
        }
        # span 40 × 0.10 = 4
        assert data["y_axis_min"] == "246"
        assert data["y_axis_max"] == "294"
        assert data["y_axis_min_label"] == "246"
        assert data["label_spacing"] == 1
        assert data["date_format"] == "%a"

    def test_range_is_case_insensitive(self, client: TestClient, snapshot_payload):
        response = client.post(
            "/curve/chart", params={"range": "all", "now": NOW}, json=snapshot_payload
        )

        assert response.status_code == 200
        assert response.json()["range"] == "ALL"

    def test_window_excludes_old_points(self, client: TestClient, snapshot_payload):
        response = client.post(
            "/curve/chart",
            params={"range": "1W", "now": BASE_TS + 9 * MS_PER_DAY},
            json=snapshot_payload,
        )

        # Only the point two days after BASE_TS is inside the window
        assert [p["total_value"] for p in response.json()["points"]] == ["290"]

    def test_max_points(self, client: TestClient):
        payload = {
            "assets": [{"id": 1, "quantity": "1", "cost_basis": "100"}],
            "history": [
                {"asset_id": 1, "timestamp": NOW - i * MS_PER_DAY, "sell_price": str(100 + i)}
                for i in range(1, 41)
            ],
        }

        response = client.post(
            "/curve/chart",
            params={"range": "ALL", "max_points": 10, "now": NOW},
            json=payload,
        )

        # 40 points, step 4 -> indices 0..36 plus the last
        assert len(response.json()["points"]) == 11

    def test_empty_chart(self, client: TestClient):
        response = client.post("/curve/chart", params={"now": NOW}, json={})

        data = response.json()
        assert data["range"] == "1M"
        assert data["points"] == []
        assert data["y_axis_min"] == "0"
        assert data["y_axis_max"] == "100"


# =============================================================================
# TEST: OVERVIEW
# =============================================================================

class TestOverviewEndpoint:
    """Tests for POST /curve/overview."""

    def test_overview(self, client: TestClient, snapshot_payload):
        response = client.post(
            "/curve/overview", params={"range": "1M", "now": NOW}, json=snapshot_payload
        )

        assert response.status_code == 200
        data = response.json()
        assert data["summary"] == {
            "currency": "CHF",
            "total_value": "290",
            "total_invested": "250",
            "total_profit": "40",
            "profit_percent": "16",
            "total_value_label": "CHF 290,00",
        }
        assert data["daily_change"]["absolute"] == "40"
        assert data["stats"]["all_time_high"] == "290"
        assert len(data["chart"]["points"]) == 3
        assert data["curve_points"] == 3
        assert data["warnings"] == []

    def test_overview_reports_unknown_assets(self, client: TestClient, snapshot_payload):
        snapshot_payload["history"].append(
            {"asset_id": 99, "timestamp": BASE_TS, "sell_price": "1"}
        )

        data = client.post("/curve/overview", params={"now": NOW}, json=snapshot_payload).json()

        assert data["warnings"] == ["Ignored price events for unknown assets: [99]"]
        assert data["summary"]["total_value"] == "290"


# =============================================================================
# TEST: ASSET PRICE CHANGE
# =============================================================================

class TestAssetPriceChangeEndpoint:
    """Tests for POST /curve/assets/{asset_id}/change."""

    def test_asset_change(self, client: TestClient, snapshot_payload):
        response = client.post("/curve/assets/1/change", json=snapshot_payload)

        assert response.status_code == 200
        assert response.json() == {"asset_id": 1, "absolute": "20", "percent": "20"}

    def test_single_price_returns_zeros(self, client: TestClient, snapshot_payload):
        response = client.post("/curve/assets/2/change", json=snapshot_payload)

        assert response.json() == {"asset_id": 2, "absolute": "0", "percent": "0"}


# =============================================================================
# TEST: HEALTH
# =============================================================================

class TestHealthEndpoints:

    def test_root(self, client: TestClient):
        data = client.get("/").json()

        assert data["docs"] == "/docs"
        assert "Test App" in data["message"]

    def test_liveness(self, client: TestClient):
        response = client.get("/health/live")

        assert response.status_code == 200
        assert response.json() == {"status": "alive", "environment": "test"}
