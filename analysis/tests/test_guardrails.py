"""
Tests for guardrails - input preconditions and output finiteness checks.
"""

import math
import pytest

from analysis.guardrails import (
    InputError,
    clean_weight,
    resolve_assets,
    validate_weights,
    find_non_finite_metrics
)
from analysis.models import AssetSeries, MetricsBundle, PortfolioResult


CATALOG = {
    'BTC': {'name': 'Bitcoin', 'color': '#f7931a', 'prices': [100.0, 110.0, 121.0]},
    'ETH': AssetSeries(key='ETH', display_name='Ether', prices=(50.0, 45.0, 60.0)),
    'SHORT': {'name': 'Short history', 'prices': [10.0, 11.0]},
    'EMPTY': {'name': 'No data', 'prices': []},
    'NOPRICES': {'name': 'Missing prices'}
}


class TestCleanWeight:
    """Tests for clean_weight."""

    def test_numeric_values(self):
        assert clean_weight(3) == 3.0
        assert clean_weight('2.5') == 2.5

    def test_non_finite_counts_as_zero(self):
        assert clean_weight(None) == 0.0
        assert clean_weight(float('nan')) == 0.0
        assert clean_weight(math.inf) == 0.0

    def test_non_numeric_raises(self):
        with pytest.raises(InputError, match="must be numeric"):
            clean_weight('lots')


class TestResolveAssets:
    """Tests for resolve_assets."""

    def test_resolves_in_order(self):
        assets = resolve_assets(['ETH', 'BTC'], CATALOG)

        assert [a.key for a in assets] == ['ETH', 'BTC']
        assert assets[1].display_name == 'Bitcoin'
        assert assets[1].annual_yield_rate == 0.0

    def test_unknown_asset(self):
        with pytest.raises(InputError, match="Unknown asset: DOGE"):
            resolve_assets(['BTC', 'DOGE'], CATALOG)

    def test_empty_prices(self):
        with pytest.raises(InputError, match="No prices for asset: EMPTY"):
            resolve_assets(['EMPTY'], CATALOG)

    def test_missing_prices(self):
        with pytest.raises(InputError, match="No prices for asset: NOPRICES"):
            resolve_assets(['NOPRICES'], CATALOG)

    def test_unequal_lengths(self):
        with pytest.raises(InputError, match="same length"):
            resolve_assets(['BTC', 'SHORT'], CATALOG)

    def test_no_assets(self):
        with pytest.raises(InputError, match="At least one asset"):
            resolve_assets([], CATALOG)

    def test_input_error_is_value_error(self):
        with pytest.raises(ValueError):
            resolve_assets(['DOGE'], CATALOG)

    def test_zero_price_rejected(self):
        catalog = {'A': {'prices': [0.0, 1.0, 2.0]}}

        with pytest.raises(InputError, match=r"Invalid asset A: prices\[0\] must be positive"):
            resolve_assets(['A'], catalog)

    def test_non_finite_price_rejected(self):
        catalog = {'A': {'prices': [10.0, float('nan'), 12.0]}}

        with pytest.raises(InputError, match=r"prices\[1\] must be finite"):
            resolve_assets(['A'], catalog)

    def test_text_yield_rejected(self):
        catalog = {'A': {'yearlyYield': 'abc', 'prices': [10.0, 11.0]}}

        with pytest.raises(InputError, match="Invalid asset A: yearlyYield must be numeric"):
            resolve_assets(['A'], catalog)

    def test_total_loss_yield_on_record_rejected(self):
        asset = AssetSeries(key='A', display_name='A', annual_yield_rate=-2.0, prices=(10.0, 11.0, 12.0))

        with pytest.raises(InputError, match="greater than -1"):
            resolve_assets(['A'], {'A': asset})

    def test_non_mapping_entry_rejected(self):
        with pytest.raises(InputError, match="Invalid asset A: entry must be a mapping"):
            resolve_assets(['A'], {'A': [10.0, 11.0]})

    def test_prices_not_a_list(self):
        with pytest.raises(InputError, match="prices must be a list"):
            resolve_assets(['A'], {'A': {'prices': '10,11'}})


class TestValidateWeights:
    """Tests for validate_weights."""

    def test_valid_weights(self):
        assert validate_weights(['A', 'B'], [7, 3]) == [7.0, 3.0]

    def test_length_mismatch(self):
        with pytest.raises(InputError, match="same length"):
            validate_weights(['A', 'B'], [1.0])

    def test_zero_sum(self):
        with pytest.raises(InputError, match="Sum of weights must be > 0"):
            validate_weights(['A', 'B'], [0, 0])

    def test_all_non_finite_sum(self):
        with pytest.raises(InputError, match="Sum of weights"):
            validate_weights(['A'], [float('nan')])

    def test_negative_weight(self):
        with pytest.raises(InputError, match="non-negative"):
            validate_weights(['A', 'B'], [5, -1])


class TestFindNonFiniteMetrics:
    """Tests for find_non_finite_metrics."""

    def _result(self, **metric_overrides):
        return PortfolioResult(
            series=[1000.0, 1100.0],
            series_with_yield=[1000.0, 1105.0],
            metrics_off=MetricsBundle(),
            metrics_on=MetricsBundle(**metric_overrides),
            weights=[1.0],
            quantities=[10.0]
        )

    def test_clean_result(self):
        assert find_non_finite_metrics(self._result()) == []

    def test_reports_paths(self):
        result = self._result(cagr_pct=math.inf, sharpe=float('nan'))

        assert find_non_finite_metrics(result) == ['metrics_on.cagrPct', 'metrics_on.sharpe']

    def test_reports_series_entries(self):
        result = self._result()
        result.series[1] = float('nan')

        assert find_non_finite_metrics(result) == ['series[1]']
