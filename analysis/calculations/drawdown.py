"""
Drawdown calculation utilities.
Pure functions for maximum peak-to-trough decline of a value series.
"""

import numpy as np
from typing import Sequence


def max_drawdown(values: Sequence[float]) -> float:
    """
    Calculate maximum drawdown with a single forward pass.

    The running peak starts at the first value. At each point the drawdown is
    (peak - value) / peak while the peak is positive, otherwise 0.

    Args:
        values: Series values in chronological order

    Returns:
        Largest observed drawdown as a non-negative decimal (0.25 = 25%),
        0.0 for empty input

    Example:
        [100, 120, 90, 125] -> 0.25   (120 -> 90)
    """
    if len(values) == 0:
        return 0.0

    arr = np.asarray(values, dtype=float)

    # Running maximum (peak) seeded with the first value; NaN never becomes a peak
    peaks = np.fmax.accumulate(arr)

    drawdowns = np.zeros_like(arr)
    usable = (peaks > 0) & np.isfinite(arr)
    drawdowns[usable] = (peaks[usable] - arr[usable]) / peaks[usable]

    worst = float(np.max(drawdowns))
    return worst if worst > 0 else 0.0


def max_drawdown_pct(values: Sequence[float]) -> float:
    """Maximum drawdown as a non-positive percentage (-25.0 = 25% decline)."""
    return -max_drawdown(values) * 100
