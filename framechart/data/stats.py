"""
Statistical frames behind histogram and autocorrelation charts.
"""
import logging
from typing import Hashable, Tuple

import numpy as np
import pandas as pd
from scipy import stats

from ..errors import ChartError

logger = logging.getLogger(__name__)

ACF_KEY = "ACF"
BIN_STEP_ATTR = "bin_step"


def _finite(values) -> np.ndarray:
    array = pd.to_numeric(pd.Series(values), errors="coerce").to_numpy(dtype=float)
    return array[np.isfinite(array)]


def _check_bins(bin_count: int) -> None:
    if bin_count < 1:
        raise ValueError(f"Bin count must be >= 1, got {bin_count}")


def histogram(values: pd.Series, bin_count: int, name: Hashable = None) -> pd.DataFrame:
    """
    Frequency table of one series.

    Args:
        values: Values to bin; nulls and non-numeric entries are ignored
        bin_count: Number of equal-width bins spanning [min, max]
        name: Column name of the counts; the series name when None

    Returns:
        Frame indexed by bin lower edge with one column of counts

    Examples:
        >>> histogram(pd.Series([1, 2, 2, 3], name="x"), 2)
             x
        1.0  1
        2.0  3
    """
    _check_bins(bin_count)
    key = name if name is not None else getattr(values, "name", None)
    data = _finite(values)
    if data.size == 0:
        return pd.DataFrame({key: pd.Series([], dtype=int)}, index=pd.Index([], dtype=float))
    counts, edges = np.histogram(data, bins=bin_count, range=(data.min(), data.max()))
    hist = pd.DataFrame({key: counts}, index=pd.Index(edges[:-1], dtype=float))
    hist.attrs[BIN_STEP_ATTR] = float(edges[1] - edges[0])
    return hist


def histogram_frame(frame: pd.DataFrame, bin_count: int) -> pd.DataFrame:
    """
    Frequency table of every column over bins shared by all columns.

    Returns:
        Frame indexed by bin lower edge with one count column per input column
    """
    _check_bins(bin_count)
    pooled = np.concatenate([_finite(frame[key]) for key in frame.columns]) if len(frame.columns) else np.array([])
    if pooled.size == 0:
        raise ChartError("No finite values to build a histogram from")

    edges = np.histogram_bin_edges(pooled, bins=bin_count, range=(pooled.min(), pooled.max()))
    counts = {key: np.histogram(_finite(frame[key]), bins=edges)[0] for key in frame.columns}
    hist = pd.DataFrame(counts, index=pd.Index(edges[:-1], dtype=float), columns=list(frame.columns))
    hist.attrs[BIN_STEP_ATTR] = float(edges[1] - edges[0])
    return hist


def bin_step(hist: pd.DataFrame) -> float:
    """
    Width of the bins of a histogram frame.

    Frames from ``histogram`` and ``histogram_frame`` carry their bin width,
    so a single bin spans the whole value range.
    """
    step = hist.attrs.get(BIN_STEP_ATTR)
    if step is not None:
        return float(step)
    if len(hist.index) < 2:
        return 1.0
    return float(hist.index[1] - hist.index[0])


def autocorrelation(values: pd.Series, max_lags: int) -> pd.DataFrame:
    """
    Sample autocorrelation for lags 1..max_lags.

    Returns:
        Frame indexed by lag with a single ``ACF`` column

    Raises:
        ChartError: If there are not enough finite values for the lags asked for
    """
    if max_lags < 1:
        raise ValueError(f"max_lags must be >= 1, got {max_lags}")
    data = _finite(values)
    if data.size <= max_lags:
        raise ChartError(f"Need more than {max_lags} values for autocorrelation, got {data.size}")

    deviations = data - data.mean()
    denominator = float(np.sum(deviations ** 2))
    lags = np.arange(1, max_lags + 1)
    if denominator == 0:
        acf = np.zeros(max_lags)
    else:
        acf = np.array([np.sum(deviations[:-lag] * deviations[lag:]) / denominator for lag in lags])
    return pd.DataFrame({ACF_KEY: acf}, index=pd.Index(lags, name=None))


def confidence_bound(max_lags: int, alpha: float) -> float:
    """Two-sided normal confidence bound for autocorrelations at significance ``alpha``."""
    if not 0 < alpha < 1:
        raise ValueError(f"alpha must be within (0, 1), got {alpha}")
    return float(stats.norm.ppf(1.0 - alpha / 2.0) / np.sqrt(max_lags))


def acf_bounds(acf: pd.DataFrame, alpha: float) -> Tuple[pd.DataFrame, float]:
    """Upper and lower confidence bounds aligned to an autocorrelation frame."""
    bound = confidence_bound(len(acf.index), alpha)
    frame = pd.DataFrame({"Upper": bound, "Lower": -bound}, index=acf.index)
    return frame, bound
