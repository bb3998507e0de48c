"""
Portfolio scorecard - KPI tiles and 0..1 gauge scores.
Deterministic threshold-based scaling of a MetricsBundle for display.
"""

import math
from typing import Dict, Any, List, Optional

from analysis.calculations.correlation import clamp01
from analysis.models import MetricsBundle, PortfolioResult
from reports.formatters import format_value, format_percentage, format_ratio

# Metric value at which each gauge is full (or empty, for risk gauges)
GROWTH_FULL_CAGR_PCT = 30.0
STABILITY_EMPTY_VOL_PCT = 120.0
RESILIENCE_EMPTY_DRAWDOWN_PCT = 80.0
EFFICIENCY_FULL_SHARPE = 2.0
SMOOTHNESS_FULL_SORTINO = 3.0

# Smallest gain on yield worth a tile
GAIN_ON_YIELD_EPSILON = 1e-5

GAUGE_ORDER = ['Growth', 'Stability', 'Resilience', 'Efficiency', 'Smoothness', 'Balance']


class ScorecardError(Exception):
    """Raised when scorecard input validation fails."""
    pass


def _value(metric: Optional[float]) -> float:
    return 0.0 if metric is None else metric


def _risk_gauge(metric: Optional[float], empty_at: float) -> float:
    value = _value(metric)
    if not math.isfinite(value):
        return 0.0
    return 1 - clamp01(abs(value) / empty_at)


def gauge_scores(metrics: MetricsBundle) -> Dict[str, float]:
    """
    Scale each metric to a 0..1 gauge.

    - Growth:     CAGR / 30%
    - Stability:  1 - |volatility| / 120%
    - Resilience: 1 - |max drawdown| / 80%
    - Efficiency: Sharpe / 2
    - Smoothness: Sortino / 3
    - Balance:    diversification score

    Non-finite inputs give an empty gauge rather than an error.

    Args:
        metrics: MetricsBundle to score

    Returns:
        Gauge name -> score in [0, 1], in display order

    Raises:
        ScorecardError: If metrics is not a MetricsBundle
    """
    if not isinstance(metrics, MetricsBundle):
        raise ScorecardError(f"Expected MetricsBundle, got {type(metrics)}")

    return {
        'Growth': clamp01(_value(metrics.cagr_pct) / GROWTH_FULL_CAGR_PCT),
        'Stability': _risk_gauge(metrics.annualized_volatility_pct, STABILITY_EMPTY_VOL_PCT),
        'Resilience': _risk_gauge(metrics.max_drawdown_pct, RESILIENCE_EMPTY_DRAWDOWN_PCT),
        'Efficiency': clamp01(_value(metrics.sharpe) / EFFICIENCY_FULL_SHARPE),
        'Smoothness': clamp01(_value(metrics.sortino) / SMOOTHNESS_FULL_SORTINO),
        'Balance': clamp01(_value(metrics.diversification_score))
    }


def gauge_percent(score: float) -> int:
    """Gauge fill as a whole percentage."""
    return int(round(clamp01(score) * 100))


def gauge_hints(metrics: MetricsBundle) -> Dict[str, str]:
    """Tooltip text for each gauge."""
    return {
        'Growth': f"CAGR: {format_percentage(metrics.cagr_pct)}; higher is better.",
        'Stability': f"Volatility: {format_percentage(metrics.annualized_volatility_pct)}; lower is smoother.",
        'Resilience': f"Max drawdown: {format_percentage(metrics.max_drawdown_pct)}; less negative is better.",
        'Efficiency': f"Sharpe: {format_ratio(metrics.sharpe)}; higher is better.",
        'Smoothness': f"Sortino: {format_ratio(metrics.sortino)}; higher is better.",
        'Balance': f"Diversification: {format_ratio(metrics.diversification_score)}; higher is better."
    }


def kpi_tiles(result: PortfolioResult, with_yield: bool = False) -> List[Dict[str, Any]]:
    """
    KPI tiles for the selected view.

    End Value and Gain are always present; Gain on Yield only when the yield
    overlay actually moved the end value.

    Args:
        result: PortfolioResult from calculate()
        with_yield: Use the yield-adjusted series and metrics

    Returns:
        List of {'label', 'value', 'tone'} dictionaries; tone is "up" or "down"
    """
    metrics = result.metrics_on if with_yield else result.metrics_off
    series = result.series_with_yield if with_yield else result.series
    end_value = series[-1] if series else None

    gain_tone = "down" if metrics.gain < 0 else "up"
    tiles = [
        {'label': 'End Value', 'value': format_value(end_value), 'tone': gain_tone},
        {'label': 'Gain', 'value': format_value(metrics.gain), 'tone': gain_tone}
    ]

    if has_yield_gain(metrics):
        tiles.append({
            'label': 'Gain on Yield',
            'value': format_value(metrics.gain_on_yield),
            'tone': "down" if metrics.gain_on_yield < 0 else "up"
        })

    return tiles


def has_yield_gain(metrics: MetricsBundle) -> bool:
    """True when the gain on yield is large enough to show."""
    gain = metrics.gain_on_yield
    return gain is not None and abs(gain) > GAIN_ON_YIELD_EPSILON


def build_scorecard(result: PortfolioResult, with_yield: bool = False) -> Dict[str, Any]:
    """
    Everything a metrics panel renders for one view.

    Returns:
        {'tiles': [...], 'gauges': [{'category', 'score', 'percent', 'hint'}, ...]}
    """
    metrics = result.metrics_on if with_yield else result.metrics_off
    scores = gauge_scores(metrics)
    hints = gauge_hints(metrics)

    return {
        'tiles': kpi_tiles(result, with_yield=with_yield),
        'gauges': [
            {
                'category': name,
                'score': scores[name],
                'percent': gauge_percent(scores[name]),
                'hint': hints[name]
            }
            for name in GAUGE_ORDER
        ]
    }
