"""
Correlation and diversification utilities.
Pure functions measuring how independently a set of return series move.
"""

import math
import numpy as np
from itertools import combinations
from typing import List, Sequence

from analysis.calculations.returns import std_dev


def clamp01(value: float) -> float:
    """Clamp to [0, 1]; non-finite input maps to 0."""
    if value is None or not math.isfinite(value):
        return 0.0
    return min(1.0, max(0.0, float(value)))


def pearson_correlation(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Population Pearson correlation of two equal-length series.

    Formula: rho = cov(a, b) / (std(a) * std(b)), all moments divided by N

    Args:
        a: First series
        b: Second series (same length as a)

    Returns:
        Correlation in [-1, 1]; 0.0 when either side has zero standard
        deviation or the series are empty
    """
    n = len(a)
    if n == 0:
        return 0.0

    std_a = std_dev(a)
    std_b = std_dev(b)
    if not (std_a > 0 and std_b > 0):
        return 0.0

    arr_a = np.asarray(a, dtype=float)
    arr_b = np.asarray(b, dtype=float)
    cov = float(np.mean((arr_a - arr_a.mean()) * (arr_b - arr_b.mean())))

    return cov / (std_a * std_b)


def average_abs_pairwise_correlation(series_list: List[Sequence[float]]) -> float:
    """
    Average absolute correlation over every unordered pair of series.

    Inputs of different length are aligned to their shortest common trailing
    window before any pair is measured.

    Args:
        series_list: Return series, one per asset

    Returns:
        Mean |rho| across all pairs. With fewer than two series there is no
        diversification to measure and 1.0 is returned.

    Example:
        Two proportional price paths have identical returns -> 1.0
        Two flat series have zero variance -> 0.0
    """
    if len(series_list) < 2:
        return 1.0

    common = min(len(s) for s in series_list)
    aligned = [list(s[len(s) - common:]) for s in series_list]

    total = 0.0
    pairs = 0
    for a, b in combinations(aligned, 2):
        total += abs(pearson_correlation(a, b))
        pairs += 1

    return total / pairs if pairs > 0 else 1.0


def diversification_score(series_list: List[Sequence[float]]) -> float:
    """
    Diversification score in [0, 1]: 1 - average absolute pairwise correlation.

    Higher means the assets move more independently. A single series scores 0.
    """
    return clamp01(1 - average_abs_pairwise_correlation(series_list))
