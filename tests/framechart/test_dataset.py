"""
Unit tests for XyDataset binding and change notification.
"""
import logging

import numpy as np
import pandas as pd
import pytest

from framechart.data import XyDataset
from framechart.errors import ChartError
from framechart.types import DomainType


class TestXyDatasetBinding:
    """Tests for binding frames to the domain/series view."""

    def test_index_domain(self, numbers):
        """Test the row index is the domain and every column a series."""
        dataset = XyDataset.of(numbers)

        assert dataset.series_keys == ["A", "B"]
        assert dataset.series_count == 2
        assert dataset.domain_size == 5
        assert dataset.domain_type == DomainType.INTEGER
        assert dataset.domain_value(2) == 2
        assert dataset.range_value(1, 0) == 3.0

    def test_column_domain(self):
        """Test a named column is the domain and excluded from the series."""
        frame = pd.DataFrame({"day": ["Mon", "Tue"], "sales": [3, 4]})
        dataset = XyDataset.of_column(frame, "day")

        assert dataset.series_keys == ["sales"]
        assert dataset.domain_type == DomainType.STRING
        assert list(dataset.domain_values) == ["Mon", "Tue"]
        assert dataset.contains("sales")
        assert not dataset.contains("day")

    def test_missing_domain_column(self, numbers):
        """Test an unknown domain column raises ChartError."""
        with pytest.raises(ChartError, match="Domain column 'X' not found"):
            XyDataset.of_column(numbers, "X")

    def test_supplier_must_return_frame(self):
        """Test non-frame supplier results raise ChartError."""
        with pytest.raises(ChartError, match="must return a DataFrame"):
            XyDataset(lambda: [1, 2, 3])

    def test_empty_dataset(self):
        """Test None frames produce an empty dataset."""
        dataset = XyDataset.empty()

        assert dataset.is_empty
        assert dataset.domain_type is None
        assert dataset.series_count == 0
        assert dataset.domain_size == 0
        assert dataset.domain_bounds() is None
        assert dataset.range_bounds() is None
        assert np.isnan(dataset.range_value(0, 0))

    def test_frame_without_series_is_empty(self):
        """Test a frame holding only the domain column counts as empty."""
        frame = pd.DataFrame({"x": [1, 2]})

        assert XyDataset.of_column(frame, "x").is_empty

    def test_series_values_coerce_to_float(self):
        """Test non-numeric entries become NaN."""
        frame = pd.DataFrame({"A": [1, "bad", 3]})
        values = XyDataset.of(frame).series_values("A")

        assert values[0] == 1.0
        assert np.isnan(values[1])

    def test_unknown_series(self, numbers):
        """Test missing series keys raise ChartError."""
        with pytest.raises(ChartError, match="Series 'Z' not found"):
            XyDataset.of(numbers).series_values("Z")

    def test_duplicate_series_key(self):
        """Test duplicated column names raise ChartError."""
        frame = pd.DataFrame([[1, 2]], columns=["A", "A"])

        with pytest.raises(ChartError, match="not unique"):
            XyDataset.of(frame).series_values("A")

    def test_bounds(self, numbers):
        """Test domain and range bounds."""
        dataset = XyDataset.of(numbers)

        assert dataset.domain_bounds() == (0, 4)
        assert dataset.range_bounds() == (1.0, 9.0)
        assert dataset.range_bounds("B") == (2.0, 4.0)

    def test_categorical_domain_has_no_bounds(self, categories):
        """Test unordered domains report no bounds."""
        assert XyDataset.of(categories).domain_bounds() is None

    def test_numeric_domain_dates(self, prices):
        """Test date domains become epoch millis."""
        numeric = XyDataset.of(prices).numeric_domain()

        assert numeric[1] - numeric[0] == 86_400_000.0


class TestXyDatasetIntervals:
    """Tests for lower/upper domain interval functions."""

    def test_defaults_to_domain_value(self, numbers):
        """Test without functions the interval collapses to the domain value."""
        dataset = XyDataset.of(numbers)

        assert not dataset.has_intervals
        assert dataset.lower_domain_value(1) == 1
        assert dataset.upper_domain_value(1) == 1

    def test_interval_functions(self, numbers):
        """Test interval functions are applied per item."""
        dataset = XyDataset.of(numbers)
        dataset.with_lower_domain_interval(lambda v: v - 0.5).with_upper_domain_interval(lambda v: v + 0.5)

        assert dataset.has_intervals
        assert dataset.lower_domain_value(2) == 1.5
        assert dataset.upper_domain_value(2) == 2.5


class TestXyDatasetRefresh:
    """Tests for refresh and listeners."""

    def test_refresh_rebinds_from_supplier(self):
        """Test refresh pulls the latest frame."""
        frames = [pd.DataFrame({"A": [1.0]}), pd.DataFrame({"A": [1.0, 2.0], "B": [3.0, 4.0]})]
        dataset = XyDataset(lambda: frames[0])
        assert dataset.series_keys == ["A"]

        frames[0] = frames[1]
        dataset.refresh()

        assert dataset.series_keys == ["A", "B"]
        assert dataset.domain_size == 2

    def test_listeners_notified(self, numbers):
        """Test refresh, interval changes and clears notify listeners."""
        dataset = XyDataset.of(numbers)
        calls = []
        dataset.add_listener(calls.append)

        dataset.refresh()
        dataset.with_upper_domain_interval(lambda v: v + 1)
        dataset.clear(notify=True)
        dataset.clear()

        assert calls == [dataset, dataset, dataset]

    def test_removed_listener_not_called(self, numbers):
        """Test removed listeners stay silent."""
        dataset = XyDataset.of(numbers)
        calls = []
        dataset.add_listener(calls.append)
        dataset.remove_listener(calls.append)

        dataset.refresh()
        assert calls == []

    def test_failing_listener_does_not_stop_others(self, numbers, caplog):
        """Test a raising listener is logged and the rest still run."""
        dataset = XyDataset.of(numbers)
        calls = []

        def broken(_):
            raise RuntimeError("boom")

        dataset.add_listener(broken)
        dataset.add_listener(calls.append)

        with caplog.at_level(logging.ERROR, logger="framechart"):
            dataset.refresh()

        assert calls == [dataset]
        assert "Change listener failed" in caplog.text

    def test_repr_with_zero_domain_key(self):
        """Test a falsy domain key is still shown."""
        frame = pd.DataFrame({0: [1, 2], 1: [3.0, 4.0]})

        assert "domain=0" in repr(XyDataset.of_column(frame, 0))
