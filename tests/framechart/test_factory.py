"""
Unit tests for the shared chart builders, plot state and page scripting.
"""
import numpy as np
import pandas as pd
import pytest

from framechart.errors import ChartError
from framechart.matplotlib import MatplotlibChartFactory
from framechart.plot import ChartAxis, XyRender
from framechart.plot.render import RenderKind
from framechart.style import ChartShape
from framechart.types import DomainType


@pytest.fixture
def factory():
    return MatplotlibChartFactory()


class TestBuilders:
    """Tests for the with_* convenience builders."""

    def test_line_plot(self, factory, prices):
        """Test line charts bind the frame with a lines render."""
        chart = factory.with_line_plot(prices)

        assert chart.is_xy
        assert chart.plot.declared_domain_type == DomainType.DATETIME
        assert chart.plot.data().series_keys() == ["AAPL", "MSFT"]
        assert chart.plot.render(0).kind == RenderKind.LINES

    def test_configure_callback(self, factory, numbers):
        """Test configure is applied after binding."""
        chart = factory.with_line_plot(numbers, configure=lambda c: c.title.with_text("Numbers"))

        assert chart.title.text == "Numbers"

    def test_domain_column(self, factory):
        """Test a domain column is taken out of the series."""
        frame = pd.DataFrame({"x": [1, 2, 3], "y": [3.0, 2.0, 1.0]})
        chart = factory.with_scatter_plot(frame, shapes=True, domain_key="x")

        assert chart.plot.data().series_keys() == ["y"]
        assert chart.plot.render(0).kind == RenderKind.SHAPES

    def test_missing_domain_column(self, factory, numbers):
        """Test an unknown domain column raises ChartError."""
        with pytest.raises(ChartError, match="Domain column 'x' not found"):
            factory.with_line_plot(numbers, domain_key="x")

    def test_none_frame(self, factory):
        """Test None frames raise ValueError."""
        with pytest.raises(ValueError, match="cannot be None"):
            factory.with_bar_plot(None)

    def test_area_and_bar_plots(self, factory, categories):
        """Test stacked flags reach the render."""
        area = factory.with_area_plot(categories, stacked=True)
        bars = factory.with_bar_plot(categories, stacked=True)

        assert area.plot.render(0).is_area and area.plot.render(0).stacked
        assert bars.plot.render(0).is_bars and bars.plot.render(0).stacked

    def test_pie_plot(self, factory):
        """Test pie charts bind values and items."""
        frame = pd.DataFrame({"share": [1.0, 2.0]}, index=["a", "b"])
        chart = factory.with_pie_plot(frame, is_3d=True)

        assert chart.is_pie
        assert chart.plot.is_3d
        assert chart.plot.data().items() == [("a", 1.0), ("b", 2.0)]


class TestHistogramBuilder:
    """Tests for with_hist_plot."""

    def test_shared_bins(self, factory):
        """Test one dataset with bars spanning each bin."""
        frame = pd.DataFrame({"a": [0.0, 1.0, 2.0, 3.0, 4.0], "b": [1.0, 1.5, 2.0, 2.5, 3.0]})
        chart = factory.with_hist_plot(frame, 4)
        dataset = chart.plot.data().at(0)

        assert len(chart.plot.data()) == 1
        assert chart.title.text == "Histogram"
        assert chart.plot.axes().range(0).label.text == "Frequency"
        assert chart.plot.axes().domain().label.text == "Values"
        assert chart.plot.render(0).is_bars
        assert dataset.lower_domain_value(0) == 0.0
        assert dataset.upper_domain_value(0) == 1.0

    def test_single_bin(self, factory):
        """Test one bin covers the whole value range."""
        chart = factory.with_hist_plot(pd.DataFrame({"A": [0.0, 2.0, 5.0, 10.0]}), 1)
        dataset = chart.plot.data().at(0)

        assert dataset.lower_domain_value(0) == 0.0
        assert dataset.upper_domain_value(0) == 10.0

    def test_per_column_bins(self, factory):
        """Test one dataset per column without the shared title."""
        frame = pd.DataFrame({"a": [0.0, 1.0, 2.0], "b": [10.0, 20.0, 30.0]})
        chart = factory.with_hist_plot(frame, 2, shared_bins=False)

        assert chart.plot.data().indexes == [0, 1]
        assert not chart.title.text

    def test_single_column(self, factory):
        """Test column_key restricts the histogram."""
        frame = pd.DataFrame({"a": [0.0, 1.0, 2.0], "b": [10.0, 20.0, 30.0]})
        chart = factory.with_hist_plot(frame, 2, column_key="b")

        assert chart.plot.data().series_keys() == ["b"]

    @pytest.mark.parametrize("frame,error", [
        (None, ValueError),
        (pd.DataFrame(index=[1, 2]), ChartError),
        (pd.DataFrame({"a": [1.0]}), ChartError),
    ])
    def test_validation(self, factory, frame, error):
        """Test invalid histogram input."""
        with pytest.raises(error):
            factory.with_hist_plot(frame, 5)


class TestAcfBuilder:
    """Tests for with_acf."""

    def test_acf_chart(self, factory):
        """Test bars, dashed bounds, labels and domain range."""
        np.random.seed(1)
        chart = factory.with_acf(pd.Series(np.random.randn(200)), max_lags=10)
        plot = chart.plot
        acf = plot.data().at(0)

        assert chart.title.text == "Autocorrelation Function (ACF)"
        assert plot.declared_domain_type == DomainType.INTEGER
        assert plot.render(0).is_bars
        assert plot.render(1).is_lines and plot.render(1).dashed
        assert acf.lower_domain_value(0) == pytest.approx(0.6)
        assert acf.upper_domain_value(0) == pytest.approx(1.4)
        assert plot.axes().domain().range == (-1, 11)
        assert plot.axes().domain().label.text == "Lag"
        assert plot.axes().range(0).label.text == "Autocorrelation"
        assert plot.series_color("Upper") == "#0000ff"
        assert plot.series_line_width("Lower") == 1.0

    def test_acf_none(self, factory):
        """Test None input raises ValueError."""
        with pytest.raises(ValueError):
            factory.with_acf(None)


class TestXyPlotState:
    """Tests for axes, renders, styles and trends held by XyPlot."""

    def test_series_styles_fall_back_to_render(self, factory, numbers):
        """Test style overrides win over render defaults."""
        chart = factory.with_line_plot(numbers)
        plot = chart.plot
        plot.render(0).with_lines(shapes=True, dashed=True)
        plot.style("B").with_dashes(False).with_point_shape(ChartShape.SQUARE)

        assert plot.series_dashed("A", plot.render(0))
        assert not plot.series_dashed("B", plot.render(0))
        assert plot.series_points_visible("A", plot.render(0))
        assert plot.series_point_shape("B", plot.render(0)) == ChartShape.SQUARE

    def test_zero_line_width_hides_line(self, factory, numbers):
        """Test a zero width turns the line off."""
        plot = factory.with_line_plot(numbers).plot
        plot.style("A").with_line_width(0)

        assert not plot.series_lines_visible("A", plot.render(0))
        assert plot.series_lines_visible("B", plot.render(0))

    def test_trend_lifecycle(self, factory, numbers):
        """Test trends are reused, computed and cleared."""
        plot = factory.with_line_plot(numbers).plot
        trend = plot.trend("A")

        assert plot.trend("A") is trend
        assert [t for t, _, _ in plot.trend_frames()] == [trend]

        trend.clear()
        assert plot.trends() == []

    def test_trend_unknown_series(self, factory, numbers):
        """Test trends need an existing series."""
        with pytest.raises(ChartError):
            factory.with_line_plot(numbers).plot.trend("Z")

    def test_rendered_domain_type_mismatch(self, factory, numbers, categories):
        """Test mixed domain types are reported."""
        plot = factory.with_line_plot(numbers).plot
        plot.data().add(categories)

        with pytest.raises(ChartError, match="Non-homogeneous"):
            plot.rendered_domain_type()

    def test_log_scale_on_categories(self, factory, categories):
        """Test non-linear scales are rejected on category axes."""
        plot = factory.with_bar_plot(categories).plot
        plot.axes().domain().as_log_scale()

        with pytest.raises(ChartError, match="log scale"):
            plot.rendered_domain_type()

    def test_categories_first_seen(self, factory, categories):
        """Test categories across datasets keep first-seen order."""
        plot = factory.with_bar_plot(categories).plot
        plot.data().add(pd.DataFrame({"Q3": [1.0]}, index=["East"]))

        assert plot.categories() == ["North", "South", "West", "East"]

    def test_axis_range_validation(self):
        """Test ranges need lower < upper."""
        with pytest.raises(ValueError):
            ChartAxis().with_range(5, 1)

    def test_render_validation(self):
        """Test render argument checks."""
        with pytest.raises(ValueError):
            XyRender().with_bars(margin=1.0)
        with pytest.raises(ValueError):
            XyRender().with_dots(0)

    def test_date_scale_sets_pattern(self):
        """Test the date scale falls back to the date pattern."""
        axis = ChartAxis().as_date_scale()

        assert axis.format.pattern == "%d-%b-%Y"


class TestPageScript:
    """Tests for javascript and html_page."""

    def test_no_charts(self, factory):
        """Test the empty script."""
        assert factory.javascript([]) == "console.info('No charts!');"

    def test_unsupported_object(self, factory):
        """Test non-chart items raise ValueError."""
        with pytest.raises(ValueError, match="Unsupported chart object"):
            factory.javascript(["not a chart"])

    def test_draw_functions(self, factory, numbers):
        """Test one draw function per chart into the right element."""
        charts = [factory.with_line_plot(numbers), factory.with_bar_plot(numbers).with_id("bars")]
        script = factory.javascript(charts)

        assert "function drawCharts() {" in script
        assert script.rstrip().endswith("window.addEventListener('load', drawCharts);")
        assert "drawChart_0();" in script and "drawChart_1();" in script
        assert 'document.getElementById("chart_0")' in script
        assert 'document.getElementById("bars")' in script

    def test_html_page(self, factory, numbers):
        """Test the page grid, title and load hook."""
        chart = factory.with_line_plot(numbers).with_preferred_size(400, 300)
        page = factory.html_page([chart], columns=2, title="My <charts>")

        assert "<title>My &lt;charts&gt;</title>" in page
        assert "repeat(2, max-content)" in page
        assert 'id="chart_0" style="width:400px;height:300px;"' in page
        assert "window.addEventListener('load', drawCharts);" in page

    def test_html_page_columns(self, factory):
        """Test columns below one are rejected."""
        with pytest.raises(ValueError):
            factory.html_page([], columns=0)
