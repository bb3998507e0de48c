"""
Normalizers for transforming catalog data and allocations to canonical shape.
Pure functions - no IO, network, or side effects.
Minimal normalization - only when necessary.
"""

import math
from typing import Dict, Any, List, Sequence

from analysis.models import AssetSeries

# Allocation points accepted by the builder and leaderboard
MIN_ALLOCATION_POINTS = 0
MAX_ALLOCATION_POINTS = 10


def normalize_catalog_entry(key: str, entry: Dict[str, Any]) -> AssetSeries:
    """
    Transform a raw catalog entry to an AssetSeries record.

    Minimal normalization:
    - Name falls back to the key (required for display)
    - Yield accepted as yearlyYield or annualYieldRate, default 0
    - Prices cast to float and frozen as a tuple

    Args:
        key: Asset key
        entry: Validated raw entry

    Returns:
        AssetSeries
    """
    normalized = dict(entry)
    normalized['prices'] = [float(p) for p in entry.get('prices') or []]
    return AssetSeries.from_catalog_entry(key, normalized)


def normalize_catalog(raw_assets: Dict[str, Dict[str, Any]]) -> Dict[str, AssetSeries]:
    """
    Normalize every entry of a raw catalog, preserving key order.

    Args:
        raw_assets: Key -> raw entry

    Returns:
        Key -> AssetSeries
    """
    return {key: normalize_catalog_entry(key, entry) for key, entry in raw_assets.items()}


def normalize_allocation_points(raw_points: Sequence[Any]) -> List[int]:
    """
    Round and clamp allocation points to integers in 0..10.

    Non-numeric and non-finite values become 0. This is the shape saved for
    leaderboard portfolios; calculate() accepts the result directly.

    Args:
        raw_points: Allocation values as submitted

    Returns:
        List of integer points, same order

    Example:
        [3.6, -2, 14, 'x', None] -> [4, 0, 10, 0, 0]
    """
    points = []
    for raw in raw_points:
        try:
            value = float(raw)
        except (TypeError, ValueError):
            value = 0.0

        if not math.isfinite(value):
            value = 0.0

        # Halves round up
        rounded = int(math.floor(value + 0.5))
        points.append(max(MIN_ALLOCATION_POINTS, min(MAX_ALLOCATION_POINTS, rounded)))

    return points
