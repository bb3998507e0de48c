"""
Guardrails for the portfolio engine - input validation and output checks.
Shape violations stop the calculation before any number is computed.
"""

import math
from typing import Any, List, Mapping, Sequence

from analysis.models import AssetSeries, PortfolioResult
from ingestion.transforms.validators import (
    validate_price_history,
    validate_yield_rate,
    ValidationError
)


class InputError(ValueError):
    """Raised when calculation inputs violate a precondition."""
    pass


def clean_weight(value: Any) -> float:
    """Weight as float; None, NaN and infinities count as 0."""
    if value is None:
        return 0.0
    try:
        weight = float(value)
    except (TypeError, ValueError):
        raise InputError(f"Weight must be numeric, got {value!r}")
    return weight if math.isfinite(weight) else 0.0


def resolve_assets(
    asset_keys: Sequence[str],
    asset_catalog: Mapping[str, Any]
) -> List[AssetSeries]:
    """
    Look up every requested key and check the price arrays line up.

    Raw catalog mappings are coerced into AssetSeries records.

    Args:
        asset_keys: Selected asset keys, in portfolio order
        asset_catalog: Key -> AssetSeries (or raw catalog entry)

    Returns:
        AssetSeries per key, same order as asset_keys

    Raises:
        InputError: Unknown key, missing/empty prices, an entry that breaks
            the catalog contract (non-positive price, yield at or below -1)
            or unequal lengths
    """
    if not asset_keys:
        raise InputError("At least one asset is required")

    resolved = []
    for key in asset_keys:
        entry = asset_catalog.get(key) if asset_catalog is not None else None
        if entry is None:
            raise InputError(f"Unknown asset: {key}")

        resolved.append(_checked_asset(key, entry))

    expected = len(resolved[0].prices)
    for asset in resolved[1:]:
        if len(asset.prices) != expected:
            raise InputError(
                f"All asset price arrays must have same length: "
                f"{resolved[0].key} has {expected}, {asset.key} has {len(asset.prices)}"
            )

    return resolved


def _checked_asset(key: str, entry: Any) -> AssetSeries:
    """Coerce one catalog entry to AssetSeries after checking its prices and yield."""
    if isinstance(entry, AssetSeries):
        prices, yield_rate = list(entry.prices), entry.annual_yield_rate
    elif isinstance(entry, Mapping):
        prices = entry.get('prices')
        yield_rate = entry.get('yearlyYield', entry.get('annualYieldRate'))
    else:
        raise InputError(f"Invalid asset {key}: entry must be a mapping, got {type(entry)}")

    if prices is None or (isinstance(prices, (list, tuple)) and len(prices) == 0):
        raise InputError(f"No prices for asset: {key}")

    try:
        validate_price_history(key, prices)
        validate_yield_rate(key, yield_rate)
    except ValidationError as e:
        raise InputError(f"Invalid asset {e}") from e

    if isinstance(entry, AssetSeries):
        return entry
    return AssetSeries.from_catalog_entry(key, entry)


def validate_weights(asset_keys: Sequence[str], raw_weights: Sequence[Any]) -> List[float]:
    """
    Check the weight vector against the asset list.

    Args:
        asset_keys: Selected asset keys
        raw_weights: Raw allocation values, any positive scale

    Returns:
        Cleaned float weights (not yet normalized)

    Raises:
        InputError: Length mismatch, negative weight or non-positive sum
    """
    if len(asset_keys) != len(raw_weights):
        raise InputError(
            f"assets and weights must have the same length "
            f"({len(asset_keys)} assets, {len(raw_weights)} weights)"
        )

    weights = [clean_weight(w) for w in raw_weights]

    for key, weight in zip(asset_keys, weights):
        if weight < 0:
            raise InputError(f"Weight for {key} must be non-negative, got {weight}")

    if sum(weights) <= 0:
        raise InputError("Sum of weights must be > 0")

    return weights


def find_non_finite_metrics(result: PortfolioResult) -> List[str]:
    """
    List dotted paths of result values that are NaN or infinite.

    Never raises; callers decide whether to warn.
    """
    issues = []

    for name in ('series', 'series_with_yield'):
        for i, value in enumerate(getattr(result, name)):
            if not math.isfinite(value):
                issues.append(f"{name}[{i}]")

    for name in ('metrics_off', 'metrics_on'):
        for metric, value in getattr(result, name).to_dict().items():
            if not math.isfinite(value):
                issues.append(f"{name}.{metric}")

    return issues
