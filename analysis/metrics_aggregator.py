"""
Metrics aggregator - composes all calculations into one MetricsBundle.
Pure function combining growth, volatility, drawdown, risk-adjusted ratios
and diversification for a single value series.
"""

import math
from typing import List, Optional, Sequence

from analysis.calculations.returns import (
    simple_returns,
    std_dev,
    downside_deviation,
    mean_return
)
from analysis.calculations.drawdown import max_drawdown_pct
from analysis.calculations.correlation import diversification_score
from analysis.calculations.yield_compounding import PERIODS_PER_YEAR
from analysis.models import MetricsBundle

# Risk-free rate used by Sharpe and Sortino
RISK_FREE_RATE = 0.0


def compose_metrics(
    series: Sequence[float],
    per_asset_returns: Optional[List[Sequence[float]]] = None
) -> MetricsBundle:
    """
    Compute the full metrics bundle for one value series.

    Never raises: degenerate inputs (empty series, zero volatility, a single
    asset) resolve to 0 or to the documented fallback so the result can be
    rendered directly.

    Args:
        series: Portfolio value series at monthly cadence
        per_asset_returns: Simple-return series of each held asset, used only
            for the diversification score

    Returns:
        MetricsBundle with gain and gain_on_yield left at 0
    """
    if len(series) == 0:
        return MetricsBundle()

    rets = simple_returns(series)

    cagr = _cagr(series, rets)

    # Volatility
    vol_annual = std_dev(rets) * math.sqrt(PERIODS_PER_YEAR)

    # Risk-adjusted ratios
    sharpe = _ratio(cagr - RISK_FREE_RATE, vol_annual)

    downside_annual = downside_deviation(rets) * math.sqrt(PERIODS_PER_YEAR)
    if downside_annual > 0:
        sortino = _ratio(cagr - RISK_FREE_RATE, downside_annual)
    else:
        sortino = sharpe

    # Diversification
    diversification = 0.0
    if per_asset_returns is not None and len(per_asset_returns) >= 2:
        diversification = diversification_score(per_asset_returns)

    return MetricsBundle(
        cagr_pct=cagr * 100,
        annualized_volatility_pct=vol_annual * 100,
        max_drawdown_pct=max_drawdown_pct(series),
        sharpe=sharpe,
        sortino=sortino,
        diversification_score=diversification
    )


def _cagr(series: Sequence[float], rets: Sequence[float]) -> float:
    """
    Compound annual growth rate of a monthly series.

    Uses (end / start)^(1 / years) - 1 over the whole window. When that is
    undefined, annualizes the mean monthly return instead. Short windows
    annualize aggressively: 21% over two months is ~214% a year.
    """
    years = (len(series) - 1) / PERIODS_PER_YEAR
    start = series[0]
    end = series[-1]

    if (
        _finite(start) and _finite(end)
        and start > 0 and end >= 0 and years > 0
    ):
        return _power(end / start, 1.0 / years) - 1

    if rets:
        return _power(1 + mean_return(rets), PERIODS_PER_YEAR) - 1

    return 0.0


def _power(base: float, exponent: float) -> float:
    try:
        return base ** exponent
    except OverflowError:
        return math.inf


def _ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator when the denominator is positive, else 0."""
    if denominator > 0:
        return numerator / denominator
    return 0.0


def _finite(value) -> bool:
    return value is not None and math.isfinite(value)
