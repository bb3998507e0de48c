"""
Value series construction for a weighted basket of assets.
Builds the buy-and-hold path and the yield-adjusted path as two separate passes.
"""

from typing import List, Sequence

INITIAL_CAPITAL = 1000.0


def unit_quantities(
    weights: Sequence[float],
    first_prices: Sequence[float],
    capital: float = INITIAL_CAPITAL
) -> List[float]:
    """
    Units of each asset bought with its share of the initial capital.

    Formula: q_i = (C * w_i) / P_i,0

    Args:
        weights: Normalized weights (sum to 1)
        first_prices: First price of each asset, same order as weights
        capital: Initial capital

    Returns:
        Per-asset unit holdings
    """
    return [(capital * w) / p for w, p in zip(weights, first_prices)]


def baseline_series(
    quantities: Sequence[float],
    price_tracks: Sequence[Sequence[float]]
) -> List[float]:
    """
    Buy-and-hold portfolio value at every period.

    Formula: V_t = sum_i q_i * P_i,t, rounded to 2 decimals

    Args:
        quantities: Unit holdings per asset
        price_tracks: Price series per asset, all of equal length

    Returns:
        Value series, one entry per price index
    """
    if not price_tracks:
        return []

    length = len(price_tracks[0])
    series = []
    for t in range(length):
        value = 0.0
        for qty, prices in zip(quantities, price_tracks):
            value += qty * prices[t]
        series.append(round(value, 2))
    return series


def yield_series(
    weights: Sequence[float],
    price_tracks: Sequence[Sequence[float]],
    compounded_tracks: Sequence[Sequence[float]],
    capital: float = INITIAL_CAPITAL
) -> List[float]:
    """
    Portfolio value when every asset also accrues its yield.

    Formula: V_t = sum_i C * w_i * (C_i,t / P_i,0), rounded to 2 decimals

    Each asset follows its own compounded price track; this is not a
    transform of the baseline series.

    Args:
        weights: Normalized weights
        price_tracks: Raw price series per asset (only the first price is used)
        compounded_tracks: Compounded price series per asset
        capital: Initial capital

    Returns:
        Yield-adjusted value series
    """
    if not compounded_tracks:
        return []

    length = len(compounded_tracks[0])
    series = []
    for t in range(length):
        value = 0.0
        for w, prices, compounded in zip(weights, price_tracks, compounded_tracks):
            value += capital * w * (compounded[t] / prices[0])
        series.append(round(value, 2))
    return series
