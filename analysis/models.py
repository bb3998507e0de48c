"""
Typed records for portfolio analysis inputs and outputs.
AssetSeries (catalog entry), MetricsBundle and PortfolioResult.
"""

import pandas as pd
from dataclasses import dataclass, field
from typing import Dict, Any, List, Mapping, Tuple


@dataclass(frozen=True)
class AssetSeries:
    """One catalog asset: display metadata, yield assumption and monthly prices."""

    key: str
    display_name: str
    color: str = ""
    annual_yield_rate: float = 0.0
    prices: Tuple[float, ...] = ()

    @classmethod
    def from_catalog_entry(cls, key: str, entry: Mapping[str, Any]) -> "AssetSeries":
        """
        Build an AssetSeries from a raw catalog mapping.

        Accepts the wire names used by the pricing service
        (name, color, yearlyYield, prices); annualYieldRate is accepted as an
        alias for yearlyYield. A missing or null yield means 0.
        """
        yield_rate = entry.get('yearlyYield', entry.get('annualYieldRate'))
        prices = entry.get('prices')
        return cls(
            key=key,
            display_name=entry.get('name') or key,
            color=entry.get('color') or "",
            annual_yield_rate=float(yield_rate or 0.0),
            prices=tuple(prices) if prices is not None else ()
        )

    def to_dict(self) -> Dict[str, Any]:
        """Catalog wire shape."""
        return {
            'name': self.display_name,
            'color': self.color,
            'yearlyYield': self.annual_yield_rate,
            'prices': list(self.prices)
        }


@dataclass
class MetricsBundle:
    """Risk/return metrics for one value series."""

    cagr_pct: float = 0.0
    annualized_volatility_pct: float = 0.0
    max_drawdown_pct: float = 0.0
    sharpe: float = 0.0
    sortino: float = 0.0
    diversification_score: float = 0.0
    gain: float = 0.0
    gain_on_yield: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {
            'cagrPct': self.cagr_pct,
            'annualizedVolatilityPct': self.annualized_volatility_pct,
            'maxDrawdownPct': self.max_drawdown_pct,
            'sharpe': self.sharpe,
            'sortino': self.sortino,
            'diversificationScore': self.diversification_score,
            'gain': self.gain,
            'gainOnYield': self.gain_on_yield
        }


@dataclass
class PortfolioResult:
    """
    Everything the presentation layer needs for one weighted basket.

    series and series_with_yield are anchored at the initial capital;
    metrics_off describes the price-only path, metrics_on the yield-adjusted
    one. assets is the catalog passed in, unchanged.
    """

    series: List[float]
    series_with_yield: List[float]
    metrics_off: MetricsBundle
    metrics_on: MetricsBundle
    weights: List[float]
    quantities: List[float]
    assets: Mapping[str, AssetSeries] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable view with camelCase keys."""
        return {
            'series': list(self.series),
            'seriesWithYield': list(self.series_with_yield),
            'metricsOff': self.metrics_off.to_dict(),
            'metricsOn': self.metrics_on.to_dict(),
            'weights': list(self.weights),
            'quantities': list(self.quantities),
            'assets': {
                key: asset.to_dict() if isinstance(asset, AssetSeries) else dict(asset)
                for key, asset in self.assets.items()
            }
        }

    def to_frame(self) -> pd.DataFrame:
        """Value series as a DataFrame indexed by period number."""
        df = pd.DataFrame({
            'value': self.series,
            'value_with_yield': self.series_with_yield
        })
        df.index.name = 'period'
        return df
