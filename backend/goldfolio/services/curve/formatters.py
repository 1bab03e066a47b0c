# backend/goldfolio/services/curve/formatters.py
"""
Label formatting for chart axes, markers and currency amounts.

Amounts use German digit grouping ("." for thousands, "," for decimals)
and half-up rounding.

Usage:
    from goldfolio.services.curve.formatters import format_currency

    format_currency(Decimal("1234.567"))          # "CHF 1.234,57"
    format_currency(Decimal("1234.5"), short=True)  # "CHF 1.235"
"""

from datetime import tzinfo
from decimal import ROUND_HALF_UP, Decimal, localcontext

from goldfolio.services.constants import DEFAULT_CURRENCY
from goldfolio.services.curve.types import TimeRange
from goldfolio.utils.date_utils import to_datetime

ONE_THOUSAND = Decimal("1000")
ONE_MILLION = Decimal("1000000")

_WHOLE = Decimal("1")
_CENTS = Decimal("0.01")


def _round_half_up(value: Decimal, exponent: Decimal) -> Decimal:
    """
    Quantize with half-up rounding at any magnitude.

    Precision is widened to fit every integer digit, so huge ratios (e.g.
    a percentage against a near-zero baseline) round instead of raising.
    A rounded zero loses its sign ("-0.00" becomes "0.00").
    """
    if not value.is_finite():
        return value
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() - exponent.as_tuple().exponent + 2)
        rounded = value.quantize(exponent, rounding=ROUND_HALF_UP)
    return rounded.copy_abs() if rounded.is_zero() else rounded


def _group_german(value: Decimal, places: int) -> str:
    """Render a quantized Decimal with German separators."""
    english = f"{value:,.{places}f}"
    return english.replace(",", "_").replace(".", ",").replace("_", ".")


def format_axis_value(value: Decimal) -> str:
    """
    Compact label for the value axis.

    Examples:
        >>> format_axis_value(Decimal("2500000"))
        '3M'
        >>> format_axis_value(Decimal("12499"))
        '12k'
        >>> format_axis_value(Decimal("999.9"))
        '999'
    """
    if value >= ONE_MILLION:
        return f"{_round_half_up(value / ONE_MILLION, _WHOLE)}M"
    if value >= ONE_THOUSAND:
        return f"{_round_half_up(value / ONE_THOUSAND, _WHOLE)}k"
    return str(int(value))


def format_currency(
        value: Decimal,
        currency: str = DEFAULT_CURRENCY,
        short: bool = False,
) -> str:
    """
    Format an amount with the currency prefix.

    Args:
        value: Amount to format
        currency: Currency code used as prefix
        short: Round to whole units instead of two decimals

    Returns:
        e.g. "CHF 1.234,56" or, when short, "CHF 1.235"
    """
    if short:
        formatted = _group_german(_round_half_up(value, _WHOLE), 0)
    else:
        formatted = _group_german(_round_half_up(value, _CENTS), 2)
    return f"{currency} {formatted}"


def format_marker_value(value: Decimal, currency: str = DEFAULT_CURRENCY) -> str:
    """Label for the value under the chart marker (whole units, grouped)."""
    return format_currency(value, currency, short=True)


def format_percent(value: Decimal) -> str:
    """Signed percentage with two decimals, e.g. "+2.50%"."""
    rounded = _round_half_up(value, _CENTS)
    sign = "+" if rounded > 0 else ""
    return f"{sign}{rounded}%"


def format_point_date(
        timestamp: int,
        time_range: TimeRange,
        tz: tzinfo | None = None,
) -> str:
    """Format a point's timestamp with the time range's date pattern."""
    return to_datetime(timestamp, tz).strftime(time_range.date_format)
