# backend/goldfolio/services/curve/sample_data.py
"""
Deterministic sample portfolio for demos and tests.

Generates alternating bar/coin holdings priced around a base price and a
daily random-walk price history for each of them. The same seed always
produces the same portfolio.

Usage:
    holdings, history = generate_sample_portfolio(
        asset_count=4, history_per_asset=30, now_ms=now, seed=42
    )
"""

from __future__ import annotations

import logging
import random
from decimal import Decimal

from goldfolio.services.constants import MS_PER_DAY, SAMPLE_BASE_PRICE, ZERO
from goldfolio.services.curve.types import Holding, PriceEvent

logger = logging.getLogger(__name__)

# Cost basis offset range around SAMPLE_BASE_PRICE
COST_BASIS_OFFSET_RANGE = (-200, 500)

# Daily random-walk step range
PRICE_STEP_RANGE = (-10, 15)

# Dealer spread applied to derive the buy price from the sell price
BUY_PRICE_MARKUP = Decimal("1.02")

_CENTS = Decimal("0.01")


def _random_amount(rng: random.Random, low: int, high: int) -> Decimal:
    """Uniform random amount rounded to cents."""
    return Decimal(str(rng.uniform(low, high))).quantize(_CENTS)


def generate_sample_portfolio(
        asset_count: int = 4,
        history_per_asset: int = 30,
        now_ms: int = 0,
        seed: int | None = None,
) -> tuple[list[Holding], list[PriceEvent]]:
    """
    Generate sample holdings and price history.

    Holding ids start at 1. Even ids are bars, odd ids are coins.
    Event j of an asset is dated (history_per_asset - j) days before
    now_ms, so the most recent price is one day old.

    Args:
        asset_count: Number of holdings
        history_per_asset: Number of price events per holding
        now_ms: Reference time (epoch ms)
        seed: Random seed (None = non-deterministic)

    Returns:
        Tuple of (holdings, history)
    """
    rng = random.Random(seed)
    holdings: list[Holding] = []
    history: list[PriceEvent] = []

    for asset_id in range(1, asset_count + 1):
        kind = "Bar" if asset_id % 2 == 0 else "Coin"
        cost_basis = SAMPLE_BASE_PRICE + _random_amount(rng, *COST_BASIS_OFFSET_RANGE)
        holdings.append(Holding(
            id=asset_id,
            quantity=Decimal(rng.randint(1, 9)),
            cost_basis=cost_basis,
            name=f"Gold {kind} {asset_id}",
        ))

        price = cost_basis
        for j in range(history_per_asset):
            price = max(ZERO, price + _random_amount(rng, *PRICE_STEP_RANGE))
            history.append(PriceEvent(
                asset_id=asset_id,
                timestamp=now_ms - (history_per_asset - j) * MS_PER_DAY,
                sell_price=price,
                buy_price=(price * BUY_PRICE_MARKUP).quantize(_CENTS),
                is_manual=False,
            ))

    logger.info(
        f"Generated sample portfolio: {len(holdings)} holdings, "
        f"{len(history)} price events"
    )
    return holdings, history
