"""
Plotly (html) engine.

All plotly imports are isolated in this package.
"""
from .chart import PlotlyChart
from .factory import PlotlyChartFactory

__all__ = [
    "PlotlyChart",
    "PlotlyChartFactory",
]
