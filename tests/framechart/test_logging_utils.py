"""
Tests for chart build logging utilities.
"""

import logging

import pandas as pd
import pytest

from framechart import logging_utils
from framechart.logging_utils import (
    apply_settings,
    is_debug_mode,
    log_chart_build,
    log_data_info,
    log_data_preparation,
    set_debug_mode,
)
from framechart.plotly import PlotlyChartFactory
from framechart.settings import ChartSettings, reset_settings


class _Title:
    text = "Prices"


class _FakeChart:
    title = _Title()


@pytest.fixture
def debug_off(monkeypatch):
    """Restore debug mode and the package log level after the test."""
    monkeypatch.setattr(logging_utils, "_DEBUG_MODE", None)
    level = logging.getLogger("framechart").level
    yield
    logging.getLogger("framechart").setLevel(level)


def test_log_chart_build_success(caplog):
    """Test start and finish lines with the chart title."""
    @log_chart_build
    def build(chart):
        return "figure"

    with caplog.at_level(logging.INFO, logger="framechart"):
        assert build(_FakeChart()) == "figure"

    assert "📊 Building chart: build title='Prices'" in caplog.text
    assert "✅ Chart built: build" in caplog.text
    assert "str" in caplog.text


def test_log_chart_build_failure(caplog, debug_off):
    """Test failures are logged with a debug hint and re-raised."""
    set_debug_mode(False)

    @log_chart_build
    def build(chart):
        raise RuntimeError("boom")

    with caplog.at_level(logging.INFO, logger="framechart"):
        with pytest.raises(RuntimeError, match="boom"):
            build(_FakeChart())

    assert "❌ Chart build failed: build" in caplog.text
    assert "RuntimeError: boom" in caplog.text
    assert "FRAMECHART_DEBUG=true" in caplog.text


def test_set_debug_mode(caplog, debug_off):
    """Test debug mode toggles the flag and the package log level."""
    set_debug_mode(True)

    assert is_debug_mode()
    assert logging.getLogger("framechart").level == logging.DEBUG
    assert "Chart debug mode: ON" in caplog.text

    set_debug_mode(False)
    assert not is_debug_mode()
    assert logging.getLogger("framechart").level == logging.INFO


def test_apply_settings_sets_level(debug_off):
    """Test the configured log level reaches the package logger."""
    set_debug_mode(False)
    settings = ChartSettings()
    settings.log_level = "WARNING"

    apply_settings(settings)

    assert logging.getLogger("framechart").level == logging.WARNING


def test_log_data_preparation_failure(caplog):
    """Test failed steps are logged and re-raised."""
    with caplog.at_level(logging.ERROR, logger="framechart"):
        with pytest.raises(ValueError):
            with log_data_preparation("Unifying datasets"):
                raise ValueError("bad frame")

    assert "Unifying datasets failed" in caplog.text
    assert "bad frame" in caplog.text


def test_log_data_info_only_in_debug(caplog, debug_off):
    """Test frame summaries are logged in debug mode only."""
    frame = pd.DataFrame({"a": [1.0, None]})

    set_debug_mode(False)
    with caplog.at_level(logging.DEBUG, logger="framechart"):
        log_data_info(frame, "prices")
    assert "📋 prices" not in caplog.text

    set_debug_mode(True)
    with caplog.at_level(logging.DEBUG, logger="framechart"):
        log_data_info(frame, "prices")
    assert "📋 prices: shape=(2, 1)" in caplog.text
    assert "nulls=1" in caplog.text


def test_describe_result():
    """Test build results are summarised by traces or axes."""
    class Figure:
        axes = [1, 2]

    assert logging_utils._describe_result(Figure()) == "2 axes"
    assert logging_utils._describe_result(3) == "int"


def test_debug_flag_follows_settings(monkeypatch, debug_off):
    """Test FRAMECHART_DEBUG from settings enables debug mode until overridden."""
    monkeypatch.setenv("FRAMECHART_DEBUG", "true")
    reset_settings()

    assert is_debug_mode()

    set_debug_mode(False)
    assert not is_debug_mode()


def test_debug_build_logs_each_dataset(caplog, debug_off):
    """Test debug logging reports dataset shapes without joining datasets."""
    factory = PlotlyChartFactory()
    chart = factory.with_line_plot(pd.DataFrame({"X": [1.0, 2.0]}))
    chart.plot.data().add(pd.DataFrame({"X": [3.0, 4.0, 5.0]}))
    set_debug_mode(True)

    with caplog.at_level(logging.DEBUG, logger="framechart"):
        fig = chart.figure()

    assert len(fig.data) == 2
    assert "dataset 0: shape=(2, 1)" in caplog.text
    assert "dataset 1: shape=(3, 1)" in caplog.text
