# backend/goldfolio/dependencies.py
"""
Dependency injection module for FastAPI services.

This module provides singleton service instances that are shared across
all requests. The curve service holds only immutable configuration, so
sharing it is safe.

Services are lazily initialized on first use to avoid import-time side effects.

Usage in routers:
    from goldfolio.dependencies import get_portfolio_curve_service

    @router.post("/")
    def get_curve(
        service: PortfolioCurveService = Depends(get_portfolio_curve_service),
    ):
        ...
"""

import logging
from functools import lru_cache

from goldfolio.config import settings
from goldfolio.services.curve import PortfolioCurveService

logger = logging.getLogger(__name__)


# =============================================================================
# SINGLETON SERVICE INSTANCES
# =============================================================================

@lru_cache(maxsize=1)
def get_portfolio_curve_service() -> PortfolioCurveService:
    """
    Get the singleton PortfolioCurveService instance.

    Configured with the TIMEZONE and MAX_CHART_POINTS settings.
    """
    logger.debug(
        f"Initializing singleton PortfolioCurveService "
        f"(timezone={settings.timezone or 'system local'})"
    )
    return PortfolioCurveService(
        tz=settings.tzinfo,
        max_chart_points=settings.max_chart_points,
    )
