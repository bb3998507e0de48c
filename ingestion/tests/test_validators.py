"""
Tests for core validators - pure functions for catalog entry validation.
"""

import math
import pytest

from ingestion.transforms.validators import (
    validate_catalog_entry,
    validate_price_history,
    validate_yield_rate,
    check_equal_lengths,
    ValidationError
)


class TestCatalogEntryValidator:
    """Tests for validate_catalog_entry function."""

    def test_valid_entry(self):
        entry = {
            'name': 'Bitcoin',
            'color': '#f7931a',
            'yearlyYield': 0.0,
            'prices': [30000.0, 31000.0, 29500.5]
        }
        # Should not raise
        validate_catalog_entry('BTC', entry)

    def test_valid_minimal_entry(self):
        """Only prices are required."""
        validate_catalog_entry('BTC', {'prices': [1, 2, 3]})

    def test_valid_alias_yield(self):
        validate_catalog_entry('USDY', {'annualYieldRate': 0.05, 'prices': [1.0]})

    def test_blank_key(self):
        with pytest.raises(ValidationError, match="non-empty string"):
            validate_catalog_entry('  ', {'prices': [1.0]})

    def test_entry_not_mapping(self):
        with pytest.raises(ValidationError, match="must be a mapping"):
            validate_catalog_entry('BTC', [1.0, 2.0])

    def test_name_type(self):
        with pytest.raises(ValidationError, match="name must be string"):
            validate_catalog_entry('BTC', {'name': 42, 'prices': [1.0]})

    def test_yield_non_numeric(self):
        with pytest.raises(ValidationError, match="yearlyYield must be numeric"):
            validate_catalog_entry('BTC', {'yearlyYield': '5%', 'prices': [1.0]})

    def test_yield_bool_rejected(self):
        with pytest.raises(ValidationError, match="yearlyYield must be numeric"):
            validate_catalog_entry('BTC', {'yearlyYield': True, 'prices': [1.0]})

    def test_yield_not_finite(self):
        with pytest.raises(ValidationError, match="yearlyYield must be finite"):
            validate_catalog_entry('BTC', {'yearlyYield': math.nan, 'prices': [1.0]})

    def test_yield_total_loss(self):
        with pytest.raises(ValidationError, match="greater than -1"):
            validate_catalog_entry('BTC', {'yearlyYield': -1.0, 'prices': [1.0]})

    def test_null_yield_allowed(self):
        validate_catalog_entry('BTC', {'yearlyYield': None, 'prices': [1.0]})


class TestYieldRateValidator:
    """Tests for validate_yield_rate function."""

    def test_valid_rates(self):
        validate_yield_rate('ETH', 0.04)
        validate_yield_rate('ETH', -0.5)
        validate_yield_rate('ETH', None)

    def test_below_total_loss(self):
        with pytest.raises(ValidationError, match="ETH: yearlyYield must be greater than -1"):
            validate_yield_rate('ETH', -2.0)


class TestPriceHistoryValidator:
    """Tests for validate_price_history function."""

    def test_missing(self):
        with pytest.raises(ValidationError, match="prices are required"):
            validate_price_history('BTC', None)

    def test_not_list(self):
        with pytest.raises(ValidationError, match="must be a list"):
            validate_price_history('BTC', '1,2,3')

    def test_empty(self):
        with pytest.raises(ValidationError, match="must not be empty"):
            validate_price_history('BTC', [])

    def test_non_numeric(self):
        with pytest.raises(ValidationError, match=r"prices\[1\] must be numeric"):
            validate_price_history('BTC', [1.0, 'n/a'])

    def test_non_finite(self):
        with pytest.raises(ValidationError, match=r"prices\[2\] must be finite"):
            validate_price_history('BTC', [1.0, 2.0, math.inf])

    def test_non_positive(self):
        with pytest.raises(ValidationError, match=r"prices\[0\] must be positive"):
            validate_price_history('BTC', [0.0, 2.0])

    def test_tuple_accepted(self):
        validate_price_history('BTC', (1.0, 2.0))


class TestEqualLengths:
    """Tests for check_equal_lengths function."""

    def test_all_equal(self):
        assert check_equal_lengths({'A': 12, 'B': 12, 'C': 12}) == []

    def test_outliers_reported(self):
        assert check_equal_lengths({'A': 12, 'B': 12, 'C': 7, 'D': 24}) == ['C', 'D']

    def test_tie_prefers_longer_history(self):
        assert check_equal_lengths({'A': 12, 'B': 24}) == ['A']

    def test_empty(self):
        assert check_equal_lengths({}) == []
