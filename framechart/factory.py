"""
ChartFactory: builds charts for one engine from DataFrames.

The convenience builders (line, area, scatter, bar, pie, histogram and
autocorrelation plots) are shared by every engine; subclasses only decide
which Chart class wraps the plot and how charts are shown.
"""
import html
import logging
import textwrap
from abc import ABC, abstractmethod
from typing import Callable, Hashable, Iterable, List, Optional

import pandas as pd

from .chart import Chart
from .data.stats import acf_bounds, autocorrelation, bin_step, histogram, histogram_frame
from .errors import ChartError
from .logging_utils import log_data_preparation
from .plot.pie import PiePlot
from .plot.render import XyRender
from .plot.xy import XyPlot
from .settings import Engine
from .types import DomainType, infer_domain_type

logger = logging.getLogger(__name__)

Configurator = Optional[Callable[[Chart], None]]

ACF_BOUND_COLOR = "#0000ff"


def _check_frame(frame: Optional[pd.DataFrame]) -> pd.DataFrame:
    if frame is None:
        raise ValueError("The DataFrame cannot be None")
    if not isinstance(frame, pd.DataFrame):
        raise ValueError(f"Expected a pandas DataFrame, got {type(frame).__name__}")
    return frame


def _domain_type_of(frame: pd.DataFrame, domain_key: Optional[Hashable]) -> DomainType:
    if domain_key is None:
        return infer_domain_type(frame.index)
    if domain_key not in frame.columns:
        raise ChartError(f"Domain column '{domain_key}' not found in frame columns {list(frame.columns)}")
    return infer_domain_type(frame[domain_key])


class ChartFactory(ABC):
    """
    Creates charts for a single rendering engine.

    Examples:
        >>> factory = MatplotlibChartFactory()
        >>> chart = factory.with_line_plot(prices, configure=lambda c: c.title.with_text("Prices"))
        >>> chart.write_png("prices.png")
    """

    engine: Engine

    @abstractmethod
    def _create_xy(self, plot: XyPlot) -> Chart:
        """Wrap an xy plot in this engine's chart class."""

    @abstractmethod
    def _create_pie(self, plot: PiePlot) -> Chart:
        """Wrap a pie plot in this engine's chart class."""

    @abstractmethod
    def show(self, charts: Iterable[Chart], columns: int = 1) -> None:
        """Display several charts laid out in a grid with ``columns`` columns."""

    def is_supported(self, chart: object) -> bool:
        return isinstance(chart, Chart) and chart.engine == self.engine.value

    @staticmethod
    def _configure(chart: Chart, configure: Configurator) -> Chart:
        if configure is not None:
            configure(chart)
        return chart

    def of_xy(self, domain_type: Optional[DomainType] = None, configure: Configurator = None) -> Chart:
        """Empty xy chart, optionally configured by ``configure(chart)``."""
        return self._configure(self._create_xy(XyPlot(domain_type)), configure)

    def of_pie(self, is_3d: bool = False, configure: Configurator = None) -> Chart:
        """Empty pie chart, optionally configured by ``configure(chart)``."""
        return self._configure(self._create_pie(PiePlot(is_3d)), configure)

    def _with_xy_plot(
        self,
        frame: pd.DataFrame,
        domain_key: Optional[Hashable],
        apply_render: Callable[[XyRender], XyRender],
        configure: Configurator,
    ) -> Chart:
        frame = _check_frame(frame)
        domain_type = _domain_type_of(frame, domain_key)

        def setup(chart: Chart) -> None:
            chart.plot.data().add(frame, domain_key)
            apply_render(chart.plot.render(0))
            self._configure(chart, configure)

        return self.of_xy(domain_type, setup)

    def with_line_plot(
        self,
        frame: pd.DataFrame,
        domain_key: Optional[Hashable] = None,
        configure: Configurator = None,
    ) -> Chart:
        """
        Line chart of every column against the row index (or ``domain_key`` column).

        Args:
            frame: Source data
            domain_key: Column holding domain values; the row index when None
            configure: Optional callable applied to the chart before it is returned

        Returns:
            Configured chart

        Raises:
            ValueError: If frame is None
            ChartError: If domain_key is not a column of frame
        """
        return self._with_xy_plot(frame, domain_key, lambda r: r.with_lines(False, False), configure)

    def with_area_plot(
        self,
        frame: pd.DataFrame,
        stacked: bool = False,
        domain_key: Optional[Hashable] = None,
        configure: Configurator = None,
    ) -> Chart:
        """Area chart, overlapping or stacked."""
        return self._with_xy_plot(frame, domain_key, lambda r: r.with_area(stacked), configure)

    def with_scatter_plot(
        self,
        frame: pd.DataFrame,
        shapes: bool = False,
        domain_key: Optional[Hashable] = None,
        configure: Configurator = None,
    ) -> Chart:
        """Scatter chart drawn with dots, or with a distinct shape per series."""
        return self._with_xy_plot(
            frame, domain_key, lambda r: r.with_shapes() if shapes else r.with_dots(), configure
        )

    def with_bar_plot(
        self,
        frame: pd.DataFrame,
        stacked: bool = False,
        domain_key: Optional[Hashable] = None,
        configure: Configurator = None,
    ) -> Chart:
        """Bar chart, grouped or stacked."""
        return self._with_xy_plot(frame, domain_key, lambda r: r.with_bars(stacked, 0.0), configure)

    def with_pie_plot(
        self,
        frame: pd.DataFrame,
        is_3d: bool = False,
        value_key: Optional[Hashable] = None,
        item_key: Optional[Hashable] = None,
        configure: Configurator = None,
    ) -> Chart:
        """
        Pie chart of one column.

        Args:
            frame: Source data
            is_3d: Draw with depth shading
            value_key: Column of section values; first numeric column when None
            item_key: Column of section names; the row index when None
            configure: Optional callable applied to the chart

        Raises:
            ValueError: If frame is None
        """
        frame = _check_frame(frame)

        def setup(chart: Chart) -> None:
            chart.plot.data().apply(frame, value_key=value_key, item_key=item_key)
            self._configure(chart, configure)

        return self.of_pie(is_3d, setup)

    def with_hist_plot(
        self,
        frame: pd.DataFrame,
        bin_count: int,
        shared_bins: bool = True,
        column_key: Optional[Hashable] = None,
        configure: Configurator = None,
    ) -> Chart:
        """
        Histogram of the columns of a frame.

        With shared bins every column is counted over the same bins in one
        dataset; otherwise each column gets its own bins and dataset.

        Args:
            frame: Source data
            bin_count: Number of bins
            shared_bins: Count all columns over common bins
            column_key: Restrict the histogram to a single column
            configure: Optional callable applied to the chart

        Raises:
            ValueError: If frame is None or bin_count < 1
            ChartError: If frame has no columns or fewer than two rows
        """
        frame = _check_frame(frame)
        if len(frame.columns) < 1:
            raise ChartError("The histogram frame should contain at least 1 column with values")
        if len(frame.index) < 2:
            raise ChartError("The histogram frame should have at least 2 rows")
        if column_key is not None:
            if column_key not in frame.columns:
                raise ChartError(f"Column '{column_key}' not found in frame columns {list(frame.columns)}")
            frame = frame[[column_key]]
            shared_bins = False

        with log_data_preparation(f"Binning {len(frame.columns)} column(s) into {bin_count} bins"):
            if shared_bins:
                hists = [histogram_frame(frame, bin_count)]
            else:
                hists = [histogram(frame[key], bin_count, name=key) for key in frame.columns]

        def setup(chart: Chart) -> None:
            model = chart.plot.data()
            for hist in hists:
                step = bin_step(hist)
                index = model.add(hist)
                model.at(index).with_upper_domain_interval(lambda v, step=step: v + step)
                chart.plot.render(index).with_bars(False, 0.0)
            if shared_bins:
                chart.title.with_text("Histogram")
            chart.plot.axes().range(0).label.with_text("Frequency")
            chart.plot.axes().domain().label.with_text("Values")
            self._configure(chart, configure)

        return self.of_xy(DomainType.NUMBER, setup)

    def with_acf(
        self,
        values: pd.Series,
        max_lags: int = 20,
        alpha: float = 0.05,
        configure: Configurator = None,
    ) -> Chart:
        """
        Autocorrelation bar chart with dashed confidence bounds.

        Args:
            values: Series to analyse (e.g. regression residuals)
            max_lags: Highest lag to show
            alpha: Significance level of the bounds
            configure: Optional callable applied to the chart
        """
        if values is None:
            raise ValueError("The series cannot be None")
        acf = autocorrelation(values, max_lags)
        bounds, bound = acf_bounds(acf, alpha)
        max_lag = int(acf.index[-1])
        logger.debug(f"ACF bounds ±{bound:.4f} for {max_lags} lags at alpha={alpha}")

        def setup(chart: Chart) -> None:
            plot = chart.plot
            chart.title.with_text("Autocorrelation Function (ACF)")
            plot.data().add(acf)
            plot.render(0).with_bars(False, 0.0)
            plot.data().at(0).with_lower_domain_interval(lambda v: v - 0.4)
            plot.data().at(0).with_upper_domain_interval(lambda v: v + 0.4)
            index = plot.data().add(bounds)
            plot.render(index).with_lines(False, True)
            plot.axes().domain().label.with_text("Lag")
            plot.axes().range(0).label.with_text("Autocorrelation")
            plot.axes().domain().with_range(-1, max_lag + 1)
            for key in ("Upper", "Lower"):
                plot.style(key).with_color(ACF_BOUND_COLOR).with_dashes(True).with_line_width(1.0)
            self._configure(chart, configure)

        return self.of_xy(DomainType.INTEGER, setup)

    def javascript(self, charts: Iterable[Chart]) -> str:
        """
        JavaScript defining ``drawCharts()``, which draws each chart into the
        element ``chart_<i>`` (or the chart's own element id), and runs it
        once the page has loaded.

        Raises:
            ValueError: If an item is not a chart
        """
        charts = list(charts)
        if not charts:
            return "console.info('No charts!');"

        for chart in charts:
            if not isinstance(chart, Chart):
                raise ValueError(f"Unsupported chart object: {chart!r}")

        lines = ["function drawCharts() {"]
        lines.extend(f"    drawChart_{i}();" for i in range(len(charts)))
        lines.append("}")
        for i, chart in enumerate(charts):
            lines.append(f"function drawChart_{i}() {{")
            lines.append(textwrap.indent(chart.to_script(self.element_id(chart, i)), "    "))
            lines.append("}")
        lines.append("window.addEventListener('load', drawCharts);")
        return "\n".join(lines)

    @staticmethod
    def element_id(chart: Chart, index: int) -> str:
        return chart.options.element_id or f"chart_{index}"

    def html_page(self, charts: Iterable[Chart], columns: int = 1, head: str = "", title: str = "Charts") -> str:
        """Standalone html page drawing ``charts`` in a grid."""
        if columns < 1:
            raise ValueError(f"columns must be >= 1, got {columns}")
        charts = list(charts)
        cells = "\n".join(
            f'    <div id="{self.element_id(chart, i)}" '
            f'style="width:{chart.options.width}px;height:{chart.options.height}px;"></div>'
            for i, chart in enumerate(charts)
        )
        return "\n".join([
            "<!DOCTYPE html>",
            "<html>",
            "<head>",
            '<meta charset="utf-8"/>',
            f"<title>{html.escape(title)}</title>",
            head,
            "</head>",
            "<body>",
            f'<div style="display:grid;grid-template-columns:repeat({columns}, max-content);gap:10px;">',
            cells,
            "</div>",
            "<script>",
            self.javascript(charts),
            "</script>",
            "</body>",
            "</html>",
        ])


def as_chart_list(charts: Iterable[Chart]) -> List[Chart]:
    if isinstance(charts, Chart):
        return [charts]
    return list(charts)
