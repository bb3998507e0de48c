"""
Core validators for asset catalog entries.
Pure functions - no IO, network, or side effects.
"""

import math
from typing import Dict, Any, List


class ValidationError(ValueError):
    """Raised when data validation fails."""
    pass


def validate_catalog_entry(key: str, entry: Dict[str, Any]) -> None:
    """
    Validate one raw asset catalog entry.

    Args:
        key: Asset key the entry is stored under
        entry: Dictionary with name, color, yearlyYield and prices

    Raises:
        ValidationError: If validation fails
    """
    if not isinstance(key, str) or not key.strip():
        raise ValidationError(f"Asset key must be a non-empty string, got {key!r}")

    if not isinstance(entry, dict):
        raise ValidationError(f"{key}: entry must be a mapping, got {type(entry)}")

    # Optional display fields
    for field in ['name', 'color']:
        value = entry.get(field)
        if value is not None and not isinstance(value, str):
            raise ValidationError(f"{key}: {field} must be string, got {type(value)}")

    # Yield (either spelling)
    validate_yield_rate(key, entry.get('yearlyYield', entry.get('annualYieldRate')))

    validate_price_history(key, entry.get('prices'))


def validate_yield_rate(key: str, yield_rate: Any) -> None:
    """
    Validate an annual yield rate; None means no yield.

    Raises:
        ValidationError: If the rate is non-numeric, non-finite or at most -1
    """
    if yield_rate is None:
        return

    if isinstance(yield_rate, bool) or not isinstance(yield_rate, (int, float)):
        raise ValidationError(f"{key}: yearlyYield must be numeric, got {type(yield_rate)}")

    if not math.isfinite(yield_rate):
        raise ValidationError(f"{key}: yearlyYield must be finite, got {yield_rate}")

    # A rate of -1 or below has no real monthly equivalent
    if yield_rate <= -1:
        raise ValidationError(f"{key}: yearlyYield must be greater than -1, got {yield_rate}")


def validate_price_history(key: str, prices: Any) -> None:
    """
    Validate a monthly price list.

    Args:
        key: Asset key, used in error messages
        prices: Candidate price list

    Raises:
        ValidationError: If prices are missing, empty, non-numeric,
            non-finite or not positive
    """
    if prices is None:
        raise ValidationError(f"{key}: prices are required")

    if not isinstance(prices, (list, tuple)):
        raise ValidationError(f"{key}: prices must be a list, got {type(prices)}")

    if len(prices) == 0:
        raise ValidationError(f"{key}: prices must not be empty")

    for i, price in enumerate(prices):
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            raise ValidationError(f"{key}: prices[{i}] must be numeric, got {type(price)}")

        if not math.isfinite(price):
            raise ValidationError(f"{key}: prices[{i}] must be finite, got {price}")

        if price <= 0:
            raise ValidationError(f"{key}: prices[{i}] must be positive, got {price}")


def check_equal_lengths(price_lengths: Dict[str, int]) -> List[str]:
    """
    Find assets whose history length differs from the most common length.

    Such assets cannot be combined with the others in one calculation.

    Args:
        price_lengths: Asset key -> number of monthly prices

    Returns:
        Sorted list of keys that do not match the most common length
    """
    if not price_lengths:
        return []

    counts: Dict[int, int] = {}
    for length in price_lengths.values():
        counts[length] = counts.get(length, 0) + 1

    # Most common length wins; ties go to the longer history
    common = max(counts.items(), key=lambda kv: (kv[1], kv[0]))[0]

    return sorted(key for key, length in price_lengths.items() if length != common)
