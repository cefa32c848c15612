"""
Unit tests for domain type inference and numeric conversion.
"""
import datetime as dt

import numpy as np
import pandas as pd
import pytest

from framechart.errors import ChartError
from framechart.types import (
    DomainType,
    domain_timezone,
    from_numeric_values,
    infer_domain_type,
    is_categorical,
    is_time_based,
    to_numeric_values,
)


class TestInferDomainType:
    """Tests for infer_domain_type."""

    @pytest.mark.parametrize("values,expected", [
        (pd.Index([1, 2, 3]), DomainType.INTEGER),
        (pd.Index([1.5, 2.5]), DomainType.NUMBER),
        (pd.date_range("2024-01-01", periods=3), DomainType.DATETIME),
        (pd.period_range("2024-01", periods=3, freq="M"), DomainType.DATE),
        (pd.Index(["a", "b"]), DomainType.STRING),
        (pd.Index([True, False]), DomainType.BOOLEAN),
        (pd.CategoricalIndex(["x", "y"]), DomainType.STRING),
        (pd.to_timedelta([1, 2], unit="s"), DomainType.NUMBER),
    ])
    def test_typed_containers(self, values, expected):
        """Test dtype based inference."""
        assert infer_domain_type(values) == expected

    def test_object_values_use_first_non_null(self):
        """Test object containers are typed by their first non-null value."""
        assert infer_domain_type([None, dt.date(2024, 1, 1)]) == DomainType.DATE
        assert infer_domain_type([dt.time(9, 30), dt.time(10, 0)]) == DomainType.TIME
        assert infer_domain_type([None, "x"]) == DomainType.STRING

    def test_empty_is_number(self):
        """Test empty input falls back to NUMBER."""
        assert infer_domain_type([]) == DomainType.NUMBER

    def test_predicates(self):
        """Test category and time predicates."""
        assert is_categorical(DomainType.BOOLEAN)
        assert not is_categorical(DomainType.INTEGER)
        assert is_time_based(DomainType.TIME)
        assert not is_time_based(DomainType.NUMBER)


class TestNumericConversion:
    """Tests for to_numeric_values / from_numeric_values."""

    def test_dates_become_epoch_millis(self):
        """Test datetimes map to milliseconds since the epoch."""
        values = pd.DatetimeIndex(["1970-01-01", "1970-01-02"])
        result = to_numeric_values(values, DomainType.DATETIME)

        np.testing.assert_allclose(result, [0.0, 86_400_000.0])

    def test_times_become_millis_since_midnight(self):
        """Test times map to milliseconds since midnight."""
        result = to_numeric_values([dt.time(0, 0, 1), dt.time(1, 0)], DomainType.TIME)

        np.testing.assert_allclose(result, [1000.0, 3_600_000.0])

    def test_strings_cannot_be_numbers(self):
        """Test string domains raise ChartError."""
        with pytest.raises(ChartError, match="cannot be mapped to numbers"):
            to_numeric_values(["a"], DomainType.STRING)

    def test_dates_map_back(self):
        """Test epoch millis map back to a naive DatetimeIndex."""
        result = from_numeric_values([0.0, 86_400_000.0], DomainType.DATE)

        assert isinstance(result, pd.DatetimeIndex)
        assert result.tz is None
        assert list(result) == [pd.Timestamp("1970-01-01"), pd.Timestamp("1970-01-02")]

    def test_dates_map_back_with_timezone(self):
        """Test a timezone is applied when given."""
        values = pd.date_range("2024-01-01", periods=2, tz="US/Eastern")
        numeric = to_numeric_values(values, DomainType.DATETIME)
        result = from_numeric_values(numeric, DomainType.DATETIME, tz=domain_timezone(values))

        assert str(result.tz) == "US/Eastern"
        assert list(result) == list(values)

    def test_times_map_back(self):
        """Test millis since midnight map back to times."""
        result = from_numeric_values([3_600_000.0], DomainType.TIME)

        assert result[0] == dt.time(1, 0)

    def test_numbers_pass_through(self):
        """Test numeric domains come back as floats."""
        np.testing.assert_allclose(from_numeric_values([1, 2], DomainType.NUMBER), [1.0, 2.0])
