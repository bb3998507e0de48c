"""
Display formatters for portfolio metrics.
Deterministic string formatting for values, percentages and ratios.
"""

import math
from typing import Optional

# Shown wherever a number cannot be displayed
PLACEHOLDER = "–"


class FormatterError(Exception):
    """Raised when formatter input validation fails."""
    pass


def _displayable(value: Optional[float]) -> bool:
    if value is None:
        return False

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FormatterError(f"Value must be numeric, got {type(value)}")

    return math.isfinite(value)


def format_value(value: Optional[float], decimal_places: int = 2) -> str:
    """
    Format a portfolio value or gain.

    Args:
        value: Amount in portfolio currency units
        decimal_places: Number of decimal places (default: 2)

    Returns:
        Formatted string (e.g., "1210.00"), placeholder for None/NaN/inf
    """
    if not _displayable(value):
        return PLACEHOLDER

    return f"{value:.{decimal_places}f}"


def format_percentage(value: Optional[float], decimal_places: int = 2) -> str:
    """
    Format a value that is already a percentage.

    MetricsBundle reports CAGR, volatility and drawdown in percent, so no
    scaling happens here.

    Args:
        value: Percentage (12.5 = 12.5%)
        decimal_places: Number of decimal places (default: 2)

    Returns:
        Formatted percentage string (e.g., "12.50%")
    """
    if not _displayable(value):
        return PLACEHOLDER

    return f"{value:.{decimal_places}f}%"


def format_ratio(value: Optional[float]) -> str:
    """Format Sharpe, Sortino or diversification score with 2 decimals."""
    return format_value(value, 2)


def format_signed_value(value: Optional[float]) -> str:
    """Format a gain with an explicit sign (e.g., "+210.00", "-35.10")."""
    if not _displayable(value):
        return PLACEHOLDER

    return f"{value:+.2f}"
