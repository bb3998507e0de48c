"""
Yield compounding utilities.
Pure functions for overlaying a monthly-compounded annual yield on a price path.
"""

from typing import List, Optional, Sequence

PERIODS_PER_YEAR = 12


def annual_to_monthly(annual_rate: Optional[float]) -> float:
    """
    Convert an annual rate to its equivalent monthly compounding rate.

    Formula: r_m = (1 + r_a)^(1/12) - 1

    Args:
        annual_rate: Annual rate as decimal (0.05 = 5%); None counts as 0

    Returns:
        Monthly rate as decimal
    """
    return (1.0 + float(annual_rate or 0.0)) ** (1.0 / PERIODS_PER_YEAR) - 1.0


def compounded_series(
    prices: Sequence[float],
    annual_yield_rate: Optional[float] = 0.0
) -> List[float]:
    """
    Build a price track that also accrues yield every month.

    Formula: C_0 = P_0
             C_t = C_{t-1} * (P_t / P_{t-1}) * (1 + r_m)

    The yield compounds on top of price appreciation rather than on a fixed
    principal. Each compounded value is rounded to 6 decimal places.

    Args:
        prices: Monthly prices in chronological order
        annual_yield_rate: Annual yield as decimal (0.04 = 4%)

    Returns:
        Compounded price track, same length as prices

    Example:
        prices [100, 100, 100] with 0% yield -> [100, 100.0, 100.0]
    """
    if len(prices) == 0:
        return []

    # Without yield the compounded track is the price track itself
    if not annual_yield_rate:
        return [float(p) for p in prices]

    monthly = annual_to_monthly(annual_yield_rate)

    out = [prices[0]]
    for t in range(1, len(prices)):
        price_factor = prices[t] / prices[t - 1]
        out.append(round(out[t - 1] * price_factor * (1.0 + monthly), 6))

    return out
