"""
Desktop engine: charts drawn with matplotlib.
"""
from .chart import MatplotlibChart
from .factory import MatplotlibChartFactory

__all__ = ["MatplotlibChart", "MatplotlibChartFactory"]
