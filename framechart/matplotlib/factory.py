"""
Chart factory for the matplotlib desktop engine.
"""
import logging
import math
from typing import Iterable

import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from ..chart import Chart
from ..factory import ChartFactory, as_chart_list
from ..plot.pie import PiePlot
from ..plot.xy import XyPlot
from ..settings import Engine, get_settings
from .chart import MatplotlibChart

logger = logging.getLogger(__name__)


class MatplotlibChartFactory(ChartFactory):
    """Creates matplotlib charts and shows groups of them in one window."""

    engine = Engine.DESKTOP

    def _create_xy(self, plot: XyPlot) -> Chart:
        return MatplotlibChart(plot)

    def _create_pie(self, plot: PiePlot) -> Chart:
        return MatplotlibChart(plot)

    def grid_figure(self, charts: Iterable[Chart], columns: int = 1, pyplot: bool = False):
        """
        One figure holding every chart in a grid of sub-figures.

        Args:
            charts: Desktop charts to lay out row by row
            columns: Number of grid columns
            pyplot: Create the figure through pyplot so it can be shown

        Raises:
            ValueError: If columns < 1 or a chart belongs to another engine
        """
        if columns < 1:
            raise ValueError(f"columns must be >= 1, got {columns}")
        charts = as_chart_list(charts)
        if not charts:
            raise ValueError("No charts to lay out")
        for chart in charts:
            if not self.is_supported(chart):
                raise ValueError(f"Unsupported chart for desktop engine: {chart!r}")

        columns = min(columns, len(charts))
        rows = math.ceil(len(charts) / columns)
        dpi = get_settings().dpi
        width = max(chart.options.width for chart in charts) * columns / dpi
        height = max(chart.options.height for chart in charts) * rows / dpi

        if pyplot:
            figure = plt.figure(figsize=(width, height), dpi=dpi, layout="constrained")
        else:
            figure = Figure(figsize=(width, height), dpi=dpi, layout="constrained")

        cells = figure.subfigures(rows, columns, squeeze=False)
        for chart, cell in zip(charts, cells.flat):
            chart.draw(cell)
        return figure

    def show(self, charts: Iterable[Chart], columns: int = 1) -> None:
        charts = as_chart_list(charts)
        if not charts:
            logger.warning("⚠️  No charts to show")
            return
        logger.info(f"🖥️  Showing {len(charts)} chart(s) in {columns} column(s)")
        self.grid_figure(charts, columns, pyplot=True)
        plt.show()
