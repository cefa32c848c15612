"""
Charting Settings
=================

12-Factor style configuration for the charting layer using a dataclass.

Settings are loaded from:
1. Environment variables (highest priority)
2. .env file (if exists)
3. Default values (fallback)

Usage:
    from framechart.settings import get_settings

    settings = get_settings()
    engine = settings.engine
    charts_dir = settings.charts_dir
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

load_dotenv()

_TRUTHY = ("true", "1", "yes", "on")
_FALSY = ("false", "0", "no", "off")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
THEME_MODES = ("light", "dark")
PLOTLYJS_MODES = ("cdn", "inline", "directory")


class Engine(str, Enum):
    """Rendering engine used by the default chart factory."""
    DESKTOP = "desktop"
    HTML = "html"


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ValueError(f"Invalid boolean for {name}: {value!r}")


@dataclass
class ChartSettings:
    """
    Central configuration for chart creation and output.

    Attributes:
        engine: Engine used by the default factory (desktop or html)
        charts_dir: Directory where html pages are written by show()
        open_browser: Open written html pages in the system browser
        theme_mode: Light or dark chart theme
        dpi: Resolution used for PNG export and desktop figures
        plotlyjs: How plotly.js is referenced from written html pages
        debug: Verbose chart-build logging
        log_level: Level applied to the framechart logger hierarchy
    """

    engine: Engine = Engine.DESKTOP
    charts_dir: Path = field(default_factory=lambda: Path.home() / ".framechart" / "charts")
    open_browser: bool = True
    theme_mode: str = "light"
    dpi: int = 100
    plotlyjs: str = "cdn"
    debug: bool = False
    log_level: str = "INFO"

    def __post_init__(self):
        """Apply environment overrides and validate."""
        self._load_from_env()
        self._validate()

    def _load_from_env(self):
        """Load settings from environment variables."""
        if engine := os.getenv("FRAMECHART_ENGINE"):
            try:
                self.engine = Engine(engine.strip().lower())
            except ValueError:
                raise ValueError(
                    f"Invalid FRAMECHART_ENGINE: {engine!r}, "
                    f"must be one of {[e.value for e in Engine]}"
                ) from None

        if charts_dir := os.getenv("FRAMECHART_CHARTS_DIR"):
            self.charts_dir = Path(charts_dir).expanduser()

        if open_browser := os.getenv("FRAMECHART_OPEN_BROWSER"):
            self.open_browser = _parse_bool("FRAMECHART_OPEN_BROWSER", open_browser)

        if theme := os.getenv("FRAMECHART_THEME"):
            self.theme_mode = theme.strip().lower()

        if dpi := os.getenv("FRAMECHART_DPI"):
            try:
                self.dpi = int(dpi)
            except ValueError:
                raise ValueError(f"Invalid FRAMECHART_DPI: {dpi!r}") from None

        if plotlyjs := os.getenv("FRAMECHART_PLOTLYJS"):
            self.plotlyjs = plotlyjs.strip().lower()

        if debug := os.getenv("FRAMECHART_DEBUG"):
            self.debug = _parse_bool("FRAMECHART_DEBUG", debug)

        if log_level := os.getenv("LOG_LEVEL"):
            self.log_level = log_level.strip().upper()

    def _validate(self):
        if not isinstance(self.engine, Engine):
            self.engine = Engine(self.engine)

        if self.theme_mode not in THEME_MODES:
            raise ValueError(
                f"Invalid FRAMECHART_THEME '{self.theme_mode}', must be one of {THEME_MODES}"
            )

        if self.dpi < 10 or self.dpi > 1200:
            raise ValueError(f"FRAMECHART_DPI must be between 10 and 1200, got {self.dpi}")

        if self.plotlyjs not in PLOTLYJS_MODES:
            raise ValueError(
                f"Invalid FRAMECHART_PLOTLYJS '{self.plotlyjs}', must be one of {PLOTLYJS_MODES}"
            )

        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Invalid LOG_LEVEL '{self.log_level}', must be one of {LOG_LEVELS}")

    @property
    def include_plotlyjs(self) -> Union[bool, str]:
        """Value for plotly's ``include_plotlyjs`` argument."""
        return True if self.plotlyjs == "inline" else self.plotlyjs


# Singleton instance
_settings: Optional[ChartSettings] = None


def get_settings() -> ChartSettings:
    """
    Get singleton settings instance.

    Returns:
        ChartSettings instance
    """
    global _settings

    if _settings is None:
        _settings = ChartSettings()

    return _settings


def reset_settings():
    """
    Reset settings (for testing).

    WARNING: Only use in tests!
    """
    global _settings
    _settings = None
