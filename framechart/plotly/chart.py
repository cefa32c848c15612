"""
Browser charts rendered with plotly.
"""
import json
import logging
import uuid
import webbrowser
from pathlib import Path
from typing import Optional

import plotly.graph_objects as go

from ..chart import Chart, PngTarget
from ..settings import Engine, get_settings
from .pie import build_pie_figure
from .xy import build_xy_figure

logger = logging.getLogger(__name__)

PLOTLY_CONFIG = {"displaylogo": False, "responsive": False}


def open_page(path: Path) -> None:
    """Open a written html page in the system browser when enabled in settings."""
    if get_settings().open_browser:
        logger.info(f"🌐 Opening {path} in browser")
        webbrowser.open(path.resolve().as_uri())


class PlotlyChart(Chart):
    """Chart drawn by plotly.js in a browser page."""

    engine = Engine.HTML.value

    def figure(self) -> go.Figure:
        if self.is_xy:
            return build_xy_figure(self)
        return build_pie_figure(self)

    def to_html(self, full_html: bool = True) -> str:
        """
        The chart as html, referencing plotly.js the way settings ask for.

        Args:
            full_html: Whole page when True, a ``<div>`` fragment otherwise
        """
        settings = get_settings()
        return self.figure().to_html(
            full_html=full_html,
            include_plotlyjs=settings.include_plotlyjs,
            div_id=self.options.element_id,
            config=PLOTLY_CONFIG,
        )

    def write_html(self, path: Optional[Path] = None) -> Path:
        """Write the chart page, by default to a fresh file in the charts directory."""
        if path is None:
            path = get_settings().charts_dir / f"{uuid.uuid4()}.html"
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.figure().write_html(
            path,
            include_plotlyjs=get_settings().include_plotlyjs,
            div_id=self.options.element_id,
            config=PLOTLY_CONFIG,
        )
        logger.info(f"💾 HTML written: {path}")
        return path

    def show(self) -> Path:
        path = self.write_html()
        open_page(path)
        return path

    def write_png(
        self,
        target: PngTarget,
        width: Optional[int] = None,
        height: Optional[int] = None,
        transparent: bool = False,
    ) -> None:
        logger.warning(
            f"⚠️  PNG export is not supported by the {self.engine} engine, "
            "use the desktop engine for images"
        )

    def to_script(self, element_id: str) -> str:
        """``Plotly.newPlot`` call drawing the figure into ``element_id``."""
        figure = json.loads(self.figure().to_json())
        return (
            f"Plotly.newPlot({json.dumps(element_id)}, "
            f"{json.dumps(figure.get('data', []))}, "
            f"{json.dumps(figure.get('layout', {}))}, "
            f"{json.dumps(PLOTLY_CONFIG)});"
        )
