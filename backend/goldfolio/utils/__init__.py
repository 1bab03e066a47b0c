# backend/goldfolio/utils/__init__.py
"""
Utility modules for the Goldfolio curve API.

This package contains cross-cutting utilities:
- logging: Logging configuration with correlation ID support
- context: Request context (correlation ID)
- date_utils: Epoch-millisecond and calendar-day helpers

Usage:
    from goldfolio.utils import setup_logging
    from goldfolio.utils import get_correlation_id, set_correlation_id
    from goldfolio.utils.date_utils import start_of_day_ms
"""

from goldfolio.utils.context import (
    get_correlation_id,
    set_correlation_id,
    clear_correlation_id,
)
from goldfolio.utils.logging import setup_logging

__all__ = [
    # Logging
    "setup_logging",
    # Context
    "get_correlation_id",
    "set_correlation_id",
    "clear_correlation_id",
]
