"""
framechart: charts from pandas DataFrames.

One API builds line, area, scatter, bar, pie, histogram and autocorrelation
charts, drawn either by matplotlib (desktop windows, PNG export) or by
plotly (html pages in the browser).

Usage:
    import framechart

    charts = framechart.create()
    chart = charts.with_line_plot(prices, configure=lambda c: c.title.with_text("Prices"))
    charts.show([chart])
"""
from typing import Optional

from .chart import Chart
from .colors import ColorModel
from .data import PieModel, TrendLine, XyDataset, XyModel
from .errors import ChartError
from .factory import ChartFactory
from .proxy import ChartFactoryProxy
from .settings import ChartSettings, Engine, get_settings, reset_settings
from .style import ChartOptions, ChartShape, Font
from .theme import DARK_THEME, LIGHT_THEME, ChartTheme, get_default_theme
from .types import DomainType, infer_domain_type

__version__ = "1.0.0"
__all__ = [
    "create",
    # Charts and factories
    "Chart",
    "ChartFactory",
    "ChartFactoryProxy",
    # Data
    "XyDataset",
    "XyModel",
    "PieModel",
    "TrendLine",
    "DomainType",
    "infer_domain_type",
    # Presentation
    "ChartOptions",
    "ChartShape",
    "ColorModel",
    "Font",
    "ChartTheme",
    "DARK_THEME",
    "LIGHT_THEME",
    "get_default_theme",
    # Configuration and errors
    "ChartSettings",
    "Engine",
    "get_settings",
    "reset_settings",
    "ChartError",
]

_proxy: Optional[ChartFactoryProxy] = None


def create() -> ChartFactoryProxy:
    """
    Process-wide chart factory proxy, using the engine from settings.

    Returns:
        ChartFactoryProxy instance
    """
    global _proxy

    if _proxy is None:
        _proxy = ChartFactoryProxy()

    return _proxy
