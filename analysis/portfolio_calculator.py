"""
Portfolio calculator - orchestrates validation, series construction and metrics.
Stateless: everything it needs arrives as arguments, nothing is cached.
"""

import logging
from typing import Any, List, Mapping, Sequence

from analysis.calculations.returns import simple_returns
from analysis.calculations.yield_compounding import compounded_series
from analysis.guardrails import InputError, resolve_assets, validate_weights
from analysis.metrics_aggregator import compose_metrics
from analysis.models import PortfolioResult
from analysis.value_series import (
    INITIAL_CAPITAL,
    unit_quantities,
    baseline_series,
    yield_series
)

logger = logging.getLogger(__name__)

__all__ = ['calculate', 'portfolio_calculator', 'InputError', 'INITIAL_CAPITAL']


def calculate(
    asset_keys: Sequence[str],
    raw_weights: Sequence[Any],
    asset_catalog: Mapping[str, Any]
) -> PortfolioResult:
    """
    Run the full analysis for one weighted basket.

    Args:
        asset_keys: Selected asset keys, in portfolio order
        raw_weights: Allocation per asset on any positive scale (e.g. 0-10 points)
        asset_catalog: Key -> AssetSeries (or raw catalog entry with name,
            color, yearlyYield and prices)

    Returns:
        PortfolioResult with baseline and yield-adjusted series and metrics

    Raises:
        InputError: If the inputs are inconsistent. Checked before any
            computation starts.
    """
    # Validate inputs
    weights_raw = validate_weights(asset_keys, raw_weights)
    assets = resolve_assets(asset_keys, asset_catalog)

    total = sum(weights_raw)
    weights = [w / total for w in weights_raw]

    logger.debug(
        f"Calculating portfolio: {', '.join(f'{a.key}={w:.4f}' for a, w in zip(assets, weights))}"
    )

    price_tracks = [list(a.prices) for a in assets]
    compounded_tracks = [
        compounded_series(a.prices, a.annual_yield_rate) for a in assets
    ]

    # Value series (two independent passes)
    quantities = unit_quantities(weights, [p[0] for p in price_tracks], INITIAL_CAPITAL)
    series = baseline_series(quantities, price_tracks)
    series_with_yield = yield_series(weights, price_tracks, compounded_tracks, INITIAL_CAPITAL)

    # Per-asset returns; only assets actually held count toward diversification
    held = [i for i, w in enumerate(weights) if w > 0]
    returns_off = [simple_returns(price_tracks[i]) for i in held]
    returns_on = [simple_returns(compounded_tracks[i]) for i in held]

    metrics_off = compose_metrics(series, returns_off)
    metrics_on = compose_metrics(series_with_yield, returns_on)

    # Gains
    start = series[0]
    end_off = series[-1]
    end_on = series_with_yield[-1]

    metrics_off.gain = end_off - start
    metrics_off.gain_on_yield = 0.0

    metrics_on.gain = end_on - start
    metrics_on.gain_on_yield = end_on - end_off

    logger.debug(
        f"Portfolio end value {end_off:.2f} (with yield {end_on:.2f}) "
        f"over {len(series)} periods"
    )

    return PortfolioResult(
        series=series,
        series_with_yield=series_with_yield,
        metrics_off=metrics_off,
        metrics_on=metrics_on,
        weights=weights,
        quantities=quantities,
        assets=asset_catalog
    )


# Name used by the web layer
portfolio_calculator = calculate
