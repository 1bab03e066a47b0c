# backend/tests/services/curve/test_sample_data.py
"""
Tests for the sample portfolio generator.
"""

from decimal import Decimal

from goldfolio.services.constants import MS_PER_DAY
from goldfolio.services.curve.sample_data import generate_sample_portfolio
from tests.conftest import BASE_TS


class TestGenerateSamplePortfolio:

    def test_counts(self):
        holdings, history = generate_sample_portfolio(
            asset_count=3, history_per_asset=10, now_ms=BASE_TS, seed=1
        )

        assert len(holdings) == 3
        assert len(history) == 30

    def test_ids_and_names(self):
        holdings, _ = generate_sample_portfolio(asset_count=4, seed=1)

        assert [h.id for h in holdings] == [1, 2, 3, 4]
        assert holdings[0].name == "Gold Coin 1"
        assert holdings[1].name == "Gold Bar 2"

    def test_same_seed_same_portfolio(self):
        first = generate_sample_portfolio(now_ms=BASE_TS, seed=42)
        second = generate_sample_portfolio(now_ms=BASE_TS, seed=42)

        assert first == second

    def test_timestamps_end_one_day_before_now(self):
        _, history = generate_sample_portfolio(
            asset_count=1, history_per_asset=5, now_ms=BASE_TS, seed=7
        )

        timestamps = [e.timestamp for e in history]
        assert timestamps == [BASE_TS - n * MS_PER_DAY for n in (5, 4, 3, 2, 1)]

    def test_prices_are_valid(self):
        holdings, history = generate_sample_portfolio(now_ms=BASE_TS, seed=3)

        assert all(h.quantity >= 1 for h in holdings)
        assert all(h.cost_basis > 0 for h in holdings)
        assert all(e.sell_price >= Decimal("0") for e in history)
        assert all(e.buy_price >= e.sell_price for e in history)
        assert not any(e.is_manual for e in history)

    def test_builds_a_curve(self, builder):
        holdings, history = generate_sample_portfolio(
            asset_count=2, history_per_asset=30, now_ms=BASE_TS, seed=5
        )

        curve = builder.build(history, holdings)

        # Both assets are priced at the same 30 instants
        assert len(curve) == 30


class TestSamplePayloadScript:
    """Tests for the request body produced by scripts/generate_sample_payload.py."""

    def test_payload_is_a_valid_snapshot(self):
        from goldfolio.schemas import PortfolioSnapshotRequest
        from scripts.generate_sample_payload import build_payload

        payload = build_payload(asset_count=2, days=5, seed=1)

        snapshot = PortfolioSnapshotRequest.model_validate(payload)
        assert len(snapshot.assets) == 2
        assert len(snapshot.history) == 10
