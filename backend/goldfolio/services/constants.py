# backend/goldfolio/services/constants.py
"""
Centralized constants for the Goldfolio curve engine.

This module provides a single source of truth for the business constants
used by the curve calculators and the chart preparation step. Centralizing
these values:

1. Prevents inconsistencies from duplicate definitions
2. Makes it easy to tune parameters in one place
3. Documents the meaning and units of each constant

Usage:
    from goldfolio.services.constants import (
        MAX_CHART_POINTS,
        MS_PER_DAY,
        ZERO,
    )
"""

from decimal import Decimal


# =============================================================================
# NUMERIC HELPERS
# =============================================================================

ZERO: Decimal = Decimal("0")

HUNDRED: Decimal = Decimal("100")

TWO: Decimal = Decimal("2")


# =============================================================================
# TIME CONSTANTS
# =============================================================================

# Timestamps are epoch milliseconds throughout the engine
MS_PER_SECOND: int = 1_000

# Price events are grouped into one valuation instant per minute
MS_PER_MINUTE: int = 60 * MS_PER_SECOND

# Used to compute the cutoff of a time-range window (days * MS_PER_DAY)
MS_PER_DAY: int = 24 * 60 * MS_PER_MINUTE

# Latest timestamp with a calendar date (9999-12-31T23:59:59.999Z)
MAX_TIMESTAMP_MS: int = 253_402_300_799_999


# =============================================================================
# CHART SETTINGS
# =============================================================================

# Maximum number of chart points before downsampling
MAX_CHART_POINTS: int = 100

# Axis range returned when there is nothing to plot
DEFAULT_Y_AXIS_RANGE: tuple[Decimal, Decimal] = (Decimal("0"), Decimal("100"))

# Minimum vertical spread as a fraction of the average value
# A flat series is padded by half of this spread on each side
MIN_AXIS_SPREAD_RATIO: Decimal = Decimal("0.01")

# Axis label spacing thresholds (point counts)
LABEL_SPACING_DENSE_MAX: int = 7
LABEL_SPACING_MEDIUM_MAX: int = 30

# Axis label spacing divisors (number of labels to aim for)
LABEL_SPACING_MEDIUM_DIVISOR: int = 6
LABEL_SPACING_SPARSE_DIVISOR: int = 5


# =============================================================================
# DISPLAY SETTINGS
# =============================================================================

# Currency used for formatted labels when none is configured
DEFAULT_CURRENCY: str = "CHF"


# =============================================================================
# SAMPLE DATA SETTINGS
# =============================================================================

# Base price (per unit) around which sample holdings are generated
SAMPLE_BASE_PRICE: Decimal = Decimal("1800")
