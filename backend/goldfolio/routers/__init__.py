# backend/goldfolio/routers/__init__.py
"""
API routers for the Goldfolio curve API.

- curve: Valuation curve, daily change, stats, chart and overview
"""

from goldfolio.routers.curve import router as curve_router

__all__ = [
    "curve_router",
]
