"""
Returns calculation utilities.
Pure functions for simple returns, dispersion and downside risk of a series.
"""

import math
import numpy as np
from typing import List, Sequence


def simple_returns(series: Sequence[float]) -> List[float]:
    """
    Calculate period-over-period simple returns.

    Formula: R_t = (P_t / P_{t-1}) - 1

    Pairs whose previous value is zero or non-finite, or whose current value
    is non-finite, are skipped rather than rejected, so the result can be
    shorter than len(series) - 1.

    Args:
        series: Values in chronological order

    Returns:
        List of simple returns as decimals (0.05 = 5%)

    Example:
        [100, 110, 121] -> [0.10, 0.10]
        [100, 0, 50]    -> [-1.0]   (0 -> 50 is skipped)
    """
    rets = []
    for prev, curr in zip(series[:-1], series[1:]):
        if prev is None or curr is None:
            continue
        if math.isfinite(prev) and prev != 0 and math.isfinite(curr):
            rets.append(curr / prev - 1)
    return rets


def std_dev(values: Sequence[float]) -> float:
    """
    Population standard deviation (divides by N).

    Args:
        values: Sample values

    Returns:
        Standard deviation, 0.0 for empty input
    """
    if len(values) == 0:
        return 0.0
    return float(np.std(np.asarray(values, dtype=float), ddof=0))


def downside_deviation(values: Sequence[float]) -> float:
    """
    Semi-deviation of returns below zero.

    Root-mean-square of the negative values measured against 0, not against
    the mean of the series.

    Args:
        values: Returns as decimals

    Returns:
        Downside deviation, 0.0 when no value is negative
    """
    if len(values) == 0:
        return 0.0
    arr = np.asarray(values, dtype=float)
    downs = arr[arr < 0]
    if downs.size == 0:
        return 0.0
    return float(math.sqrt(np.mean(downs ** 2)))


def mean_return(values: Sequence[float]) -> float:
    """Arithmetic mean of a return list (0.0 when empty)."""
    if len(values) == 0:
        return 0.0
    return float(np.mean(np.asarray(values, dtype=float)))
