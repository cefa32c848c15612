"""
Factory for browser charts drawn by plotly.js.
"""
import logging
import uuid
from pathlib import Path
from typing import Iterable, Optional

from plotly.offline import get_plotlyjs, get_plotlyjs_version

from ..chart import Chart
from ..factory import ChartFactory, as_chart_list
from ..plot.pie import PiePlot
from ..plot.xy import XyPlot
from ..settings import Engine, get_settings
from .chart import PlotlyChart, open_page

logger = logging.getLogger(__name__)

PLOTLY_CDN = "https://cdn.plot.ly/plotly-{version}.min.js"
PLOTLY_BUNDLE = "plotly.min.js"


def plotlyjs_head(directory: Optional[Path] = None) -> str:
    """
    Script tag loading plotly.js for a written page.

    In ``directory`` mode the bundle is written next to the page once and
    referenced by file name.
    """
    mode = get_settings().plotlyjs
    if mode == "inline":
        return f"<script>{get_plotlyjs()}</script>"
    if mode == "directory" and directory is not None:
        bundle = directory / PLOTLY_BUNDLE
        if not bundle.exists():
            directory.mkdir(parents=True, exist_ok=True)
            bundle.write_text(get_plotlyjs(), encoding="utf-8")
        return f'<script src="{PLOTLY_BUNDLE}"></script>'
    return f'<script src="{PLOTLY_CDN.format(version=get_plotlyjs_version())}"></script>'


class PlotlyChartFactory(ChartFactory):
    """
    Creates plotly charts; ``show`` writes one html page and opens it.

    Examples:
        >>> factory = PlotlyChartFactory()
        >>> chart = factory.with_bar_plot(sales, stacked=True)
        >>> factory.show([chart])
    """

    engine = Engine.HTML

    def _create_xy(self, plot: XyPlot) -> Chart:
        return PlotlyChart(plot)

    def _create_pie(self, plot: PiePlot) -> Chart:
        return PlotlyChart(plot)

    def write_page(self, charts: Iterable[Chart], columns: int = 1, path: Optional[Path] = None) -> Path:
        """
        Write an html page drawing ``charts`` in a grid.

        Charts of the desktop engine are embedded as PNG images.

        Returns:
            Path of the written page
        """
        charts = as_chart_list(charts)
        if path is None:
            path = get_settings().charts_dir / f"{uuid.uuid4()}.html"
        path = Path(path)
        page = self.html_page(charts, columns, head=plotlyjs_head(path.parent))
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(page, encoding="utf-8")
        logger.info(f"💾 HTML page written: {path} ({len(charts)} chart(s))")
        return path

    def show(self, charts: Iterable[Chart], columns: int = 1) -> Optional[Path]:
        charts = as_chart_list(charts)
        if not charts:
            logger.warning("⚠️  No charts to show")
            return None
        path = self.write_page(charts, columns)
        open_page(path)
        return path
