"""
Unit tests for environment driven chart settings.
"""
from pathlib import Path

import pytest

from framechart.settings import ChartSettings, Engine, get_settings, reset_settings


class TestChartSettings:
    """Tests for ChartSettings loading and validation."""

    def test_defaults(self, monkeypatch):
        """Test default values when no variables are set."""
        monkeypatch.delenv("FRAMECHART_CHARTS_DIR")
        monkeypatch.delenv("FRAMECHART_OPEN_BROWSER")
        settings = ChartSettings()

        assert settings.engine == Engine.DESKTOP
        assert settings.charts_dir == Path.home() / ".framechart" / "charts"
        assert settings.open_browser is True
        assert settings.theme_mode == "light"
        assert settings.dpi == 100
        assert settings.plotlyjs == "cdn"
        assert settings.debug is False
        assert settings.log_level == "INFO"

    def test_env_overrides(self, monkeypatch, tmp_path):
        """Test every variable is read from the environment."""
        monkeypatch.setenv("FRAMECHART_ENGINE", "HTML")
        monkeypatch.setenv("FRAMECHART_CHARTS_DIR", str(tmp_path))
        monkeypatch.setenv("FRAMECHART_OPEN_BROWSER", "no")
        monkeypatch.setenv("FRAMECHART_THEME", "dark")
        monkeypatch.setenv("FRAMECHART_DPI", "150")
        monkeypatch.setenv("FRAMECHART_PLOTLYJS", "inline")
        monkeypatch.setenv("LOG_LEVEL", "warning")

        settings = ChartSettings()

        assert settings.engine == Engine.HTML
        assert settings.charts_dir == tmp_path
        assert settings.open_browser is False
        assert settings.theme_mode == "dark"
        assert settings.dpi == 150
        assert settings.include_plotlyjs is True
        assert settings.log_level == "WARNING"

    def test_include_plotlyjs_passes_mode_through(self, monkeypatch):
        """Test non-inline modes are handed to plotly unchanged."""
        monkeypatch.setenv("FRAMECHART_PLOTLYJS", "directory")
        assert ChartSettings().include_plotlyjs == "directory"

    @pytest.mark.parametrize("name,value,match", [
        ("FRAMECHART_ENGINE", "swing", "FRAMECHART_ENGINE"),
        ("FRAMECHART_OPEN_BROWSER", "maybe", "FRAMECHART_OPEN_BROWSER"),
        ("FRAMECHART_THEME", "blue", "FRAMECHART_THEME"),
        ("FRAMECHART_DPI", "high", "FRAMECHART_DPI"),
        ("FRAMECHART_DPI", "5", "FRAMECHART_DPI"),
        ("FRAMECHART_PLOTLYJS", "bundle", "FRAMECHART_PLOTLYJS"),
        ("LOG_LEVEL", "chatty", "LOG_LEVEL"),
    ])
    def test_invalid_values_name_the_variable(self, monkeypatch, name, value, match):
        """Test invalid values raise ValueError naming the variable."""
        monkeypatch.setenv(name, value)

        with pytest.raises(ValueError, match=match):
            ChartSettings()


class TestSettingsSingleton:
    """Tests for get_settings / reset_settings."""

    def test_singleton(self):
        """Test the same instance is returned until reset."""
        assert get_settings() is get_settings()

    def test_reset_reloads_environment(self, monkeypatch):
        """Test reset picks up changed variables."""
        first = get_settings()
        monkeypatch.setenv("FRAMECHART_DPI", "200")
        reset_settings()

        second = get_settings()
        assert second is not first
        assert second.dpi == 200
