#!/usr/bin/env python3
# backend/scripts/generate_sample_payload.py
"""
Print a sample request body for the curve endpoints.

Usage:
    cd backend
    python -m scripts.generate_sample_payload > payload.json
    python -m scripts.generate_sample_payload --assets 6 --days 90 --seed 7

    curl -X POST -H "Content-Type: application/json" -d @payload.json \\
         "http://localhost:8000/curve/overview?range=1M"
"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path

# Setup path to import goldfolio modules
backend_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(backend_dir))

from goldfolio.services.constants import MS_PER_SECOND
from goldfolio.services.curve.sample_data import generate_sample_portfolio

logging.basicConfig(level=logging.INFO, stream=sys.stderr)
logger = logging.getLogger(__name__)


def build_payload(asset_count: int, days: int, seed: int) -> dict:
    """Generate a sample portfolio and convert it to the request body format."""
    now_ms = int(time.time() * MS_PER_SECOND)
    holdings, history = generate_sample_portfolio(
        asset_count=asset_count,
        history_per_asset=days,
        now_ms=now_ms,
        seed=seed,
    )
    return {
        "assets": [
            {
                "id": holding.id,
                "name": holding.name,
                "quantity": str(holding.quantity),
                "cost_basis": str(holding.cost_basis),
            }
            for holding in holdings
        ],
        "history": [
            {
                "asset_id": event.asset_id,
                "timestamp": event.timestamp,
                "sell_price": str(event.sell_price),
                "buy_price": str(event.buy_price),
                "is_manual": event.is_manual,
            }
            for event in history
        ],
    }


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--assets", type=int, default=4, help="number of holdings")
    parser.add_argument("--days", type=int, default=30, help="price events per holding")
    parser.add_argument("--seed", type=int, default=42, help="random seed")
    args = parser.parse_args()

    payload = build_payload(args.assets, args.days, args.seed)
    logger.info(f"Writing payload with {len(payload['history'])} price events")
    json.dump(payload, sys.stdout, indent=2)
    sys.stdout.write("\n")


if __name__ == "__main__":
    main()
