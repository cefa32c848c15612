"""
Shared fixtures for framechart tests.
"""
import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

from framechart import logging_utils
from framechart.settings import reset_settings

FRAMECHART_ENV = (
    "FRAMECHART_ENGINE",
    "FRAMECHART_CHARTS_DIR",
    "FRAMECHART_OPEN_BROWSER",
    "FRAMECHART_THEME",
    "FRAMECHART_DPI",
    "FRAMECHART_PLOTLYJS",
    "FRAMECHART_DEBUG",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    """Isolate every test from the caller's environment and home directory."""
    for name in FRAMECHART_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("FRAMECHART_CHARTS_DIR", str(tmp_path / "charts"))
    monkeypatch.setenv("FRAMECHART_OPEN_BROWSER", "false")
    monkeypatch.setattr(logging_utils, "_DEBUG_MODE", None)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def prices():
    """Two random-walk price series on a daily DatetimeIndex."""
    dates = pd.date_range("2024-01-01", periods=30, freq="D")
    np.random.seed(42)
    return pd.DataFrame({
        "AAPL": 100 + np.cumsum(np.random.randn(30)),
        "MSFT": 200 + np.cumsum(np.random.randn(30)),
    }, index=dates)


@pytest.fixture
def numbers():
    """Linear series on an integer index."""
    return pd.DataFrame({
        "A": [1.0, 3.0, 5.0, 7.0, 9.0],
        "B": [2.0, 2.5, 3.0, 3.5, 4.0],
    }, index=[0, 1, 2, 3, 4])


@pytest.fixture
def categories():
    """Sales by region, indexed by region name."""
    return pd.DataFrame({
        "Q1": [10.0, 20.0, 30.0],
        "Q2": [15.0, 25.0, 35.0],
    }, index=["North", "South", "West"])
