"""
Least-squares trend lines drawn over an existing series.
"""
import logging
from typing import Callable, Hashable, Optional

import numpy as np
import pandas as pd
from scipy import stats

from ..errors import ChartError
from ..logging_utils import log_data_preparation
from ..types import domain_timezone, from_numeric_values, is_categorical, is_time_based, to_numeric_values
from .dataset import XyDataset

logger = logging.getLogger(__name__)

TREND_COLOR = "#000000"
TREND_LINE_WIDTH = 2.0


def trend_key_for(series_key: Hashable) -> str:
    return f"{series_key} (trend)"


def trend_grid(lower: float, upper: float) -> np.ndarray:
    """
    Regressor values at which a trend is evaluated.

    The grid starts one twentieth of the span below ``lower`` and steps by
    one tenth of the span until it passes ``upper`` by two twentieths.
    """
    if upper == lower:
        return np.array([lower], dtype=float)
    step1 = (upper - lower) / 20.0
    step2 = (upper - lower) / 10.0
    return np.arange(lower - step1, upper + step1 * 2.0, step2)


class TrendLine:
    """
    Ordinary least squares fit of one series against the domain.

    After :meth:`compute` the fitted ``slope``, ``intercept`` and
    ``r_squared`` are available on the instance.
    """

    def __init__(self, series_key: Hashable, on_clear: Optional[Callable[["TrendLine"], None]] = None):
        self.series_key = series_key
        self.trend_key = trend_key_for(series_key)
        self.color = TREND_COLOR
        self.line_width = TREND_LINE_WIDTH
        self.slope = float("nan")
        self.intercept = float("nan")
        self.r_squared = float("nan")
        self._on_clear = on_clear

    def with_color(self, color: str) -> "TrendLine":
        self.color = color
        return self

    def with_line_width(self, width: float) -> "TrendLine":
        if width <= 0:
            raise ValueError(f"Trend line width must be > 0, got {width}")
        self.line_width = width
        return self

    def clear(self) -> "TrendLine":
        """Remove this trend from the plot it was added to."""
        if self._on_clear is not None:
            self._on_clear(self)
            self._on_clear = None
        return self

    def equation(self) -> str:
        return f"Y = {self.slope:,.4f} * X + {self.intercept:,.4f}"

    def compute(self, dataset: XyDataset) -> pd.DataFrame:
        """
        Fit the series and evaluate the fitted line over a padded domain grid.

        Args:
            dataset: Dataset holding the series

        Returns:
            Frame indexed by domain values with a single ``trend_key`` column;
            empty when fewer than two finite points are available

        Raises:
            ChartError: If the series is missing or the domain is categorical
        """
        if not dataset.contains(self.series_key):
            raise ChartError(f"Series '{self.series_key}' not found for trend line")

        domain_type = dataset.domain_type
        if is_categorical(domain_type):
            raise ChartError(f"Cannot fit a trend over a {domain_type.value} domain: {self.series_key}")

        with log_data_preparation(f"Fitting trend for {self.series_key}"):
            x = to_numeric_values(dataset.domain_values, domain_type)
            y = dataset.series_values(self.series_key)
            mask = np.isfinite(x) & np.isfinite(y)
            x, y = x[mask], y[mask]

            if x.size < 2:
                logger.warning(f"⚠️  Not enough points to fit trend for {self.series_key} ({x.size})")
                return pd.DataFrame(columns=[self.trend_key], dtype=float)

            if np.ptp(x) == 0:
                # linregress is undefined when every x is the same
                self.slope = 0.0
                self.intercept = float(np.mean(y))
                self.r_squared = 1.0 if np.ptp(y) == 0 else 0.0
            elif np.ptp(y) == 0:
                self.slope = 0.0
                self.intercept = float(y[0])
                self.r_squared = 1.0
            else:
                slope, intercept, r_value, p_value, std_err = stats.linregress(x, y)
                self.slope = float(slope)
                self.intercept = float(intercept)
                self.r_squared = float(r_value ** 2)

            grid = trend_grid(float(x.min()), float(x.max()))
            values = self.slope * grid + self.intercept

            index = grid
            if is_time_based(domain_type):
                index = from_numeric_values(grid, domain_type, tz=domain_timezone(dataset.domain_values))

            return pd.DataFrame({self.trend_key: values}, index=pd.Index(index))

    def __repr__(self) -> str:
        return f"TrendLine({self.series_key!r}, slope={self.slope:.4g}, intercept={self.intercept:.4g})"
