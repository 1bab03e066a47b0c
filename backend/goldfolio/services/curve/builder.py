# backend/goldfolio/services/curve/builder.py
"""
Curve Builder for the portfolio valuation time series.

Merges sparse, irregularly-timestamped price events of many assets into a
single chronological curve of total portfolio value.

Algorithm (Rolling State pattern):
    1. Seed a last-known-price map with each holding's cost basis
    2. Sort events by timestamp (stable - input order breaks ties)
    3. Group events into valuation instants (same minute)
    4. For each instant: apply its events to the map, then snapshot
       total value = Σ quantity × last known price

Complexity: O(E log E + G × H) where E = events, G = instants, H = holdings.

Design Principles:
- No interpolation: a price holds until the next event for that asset
- Graceful handling of bad data: events for unknown assets are ignored
- The price map is local to one call and threaded through the fold
"""

from __future__ import annotations

import logging
from decimal import Decimal
from itertools import groupby
from typing import Iterable, Sequence

from goldfolio.services.constants import ZERO
from goldfolio.services.curve.types import CurvePoint, Holding, PriceEvent
from goldfolio.utils.date_utils import truncate_to_minute

logger = logging.getLogger(__name__)


class CurveBuilder:
    """
    Builds the portfolio value curve from holdings and price history.

    Key Insight:
        Assets are priced at different, unrelated moments. At every
        valuation instant, each holding is valued at the most recent
        price seen so far - or its cost basis if none has been seen yet.

    Example:
        builder = CurveBuilder()
        curve = builder.build(history, holdings)
    """

    def build(
            self,
            history: Sequence[PriceEvent],
            holdings: Sequence[Holding],
    ) -> list[CurvePoint]:
        """
        Build the valuation curve.

        Args:
            history: Price events in any order
            holdings: Current holdings snapshot

        Returns:
            One CurvePoint per valuation instant, strictly ascending by
            timestamp. Empty if either input is empty.
        """
        if not history or not holdings:
            logger.debug(
                f"Empty curve: {len(history)} events, {len(holdings)} holdings"
            )
            return []

        curve: list[CurvePoint] = []
        prices = self._seed_prices(holdings)

        for instant, events in self._group_by_instant(history):
            prices = self._apply_events(prices, events)
            curve.append(CurvePoint(
                timestamp=instant,
                total_value=self._total_value(holdings, prices),
            ))

        logger.debug(
            f"Built curve: {len(curve)} points from {len(history)} events "
            f"and {len(holdings)} holdings"
        )
        return curve

    def latest_prices(
            self,
            history: Sequence[PriceEvent],
            holdings: Sequence[Holding],
    ) -> dict[int, Decimal]:
        """
        Get the last known price of every holding after all events.

        Uses the same fold as build(), so the totals it implies match the
        last point of the curve.

        Returns:
            asset_id -> last known price (cost basis if never priced)
        """
        prices = self._seed_prices(holdings)
        for _, events in self._group_by_instant(history):
            prices = self._apply_events(prices, events)
        return prices

    # =========================================================================
    # FOLD STEPS
    # =========================================================================

    @staticmethod
    def _seed_prices(holdings: Iterable[Holding]) -> dict[int, Decimal]:
        """Start every holding at its cost basis."""
        return {holding.id: holding.cost_basis for holding in holdings}

    @staticmethod
    def _group_by_instant(
            history: Iterable[PriceEvent],
    ) -> Iterable[tuple[int, list[PriceEvent]]]:
        """
        Sort events and group them by minute.

        sorted() is stable, so events sharing a timestamp keep their input
        order and the later one wins when applied.
        """
        ordered = sorted(history, key=lambda event: event.timestamp)
        for instant, events in groupby(
                ordered, key=lambda event: truncate_to_minute(event.timestamp)
        ):
            yield instant, list(events)

    @staticmethod
    def _apply_events(
            prices: dict[int, Decimal],
            events: Iterable[PriceEvent],
    ) -> dict[int, Decimal]:
        """
        Return a new price map with the events applied.

        Events for assets that are not held are ignored.
        """
        updated = dict(prices)
        for event in events:
            if event.asset_id in updated:
                updated[event.asset_id] = event.sell_price
        return updated

    @staticmethod
    def _total_value(holdings: Iterable[Holding], prices: dict[int, Decimal]) -> Decimal:
        """Σ quantity × last known price over all holdings."""
        return sum(
            (holding.quantity * prices.get(holding.id, ZERO) for holding in holdings),
            ZERO,
        )
