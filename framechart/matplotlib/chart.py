"""
Desktop charts rendered with matplotlib.

Figures for export are created with ``matplotlib.figure.Figure`` directly so
no GUI backend is needed; only :meth:`MatplotlibChart.show` goes through
pyplot and opens a window.
"""
import base64
import html
import io
import json
import logging
from pathlib import Path
from typing import Any, Optional, Tuple

import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from ..chart import Chart, PngTarget
from ..settings import Engine, get_settings
from .pie import build_pie_figure
from .xy import build_xy_figure

logger = logging.getLogger(__name__)


class MatplotlibChart(Chart):
    """Chart drawn with matplotlib; open windows redraw when the data changes."""

    engine = Engine.DESKTOP.value

    def __init__(self, plot, options=None):
        self._live_figure = None
        super().__init__(plot, options)

    def _size(self, width: Optional[int] = None, height: Optional[int] = None) -> Tuple[Tuple[float, float], int]:
        dpi = get_settings().dpi
        width = width or self.options.width
        height = height or self.options.height
        return (width / dpi, height / dpi), dpi

    def draw(self, figure) -> Any:
        """Draw this chart into an existing Figure or SubFigure."""
        if self.is_xy:
            return build_xy_figure(self, figure)
        return build_pie_figure(self, figure)

    def figure(self, width: Optional[int] = None, height: Optional[int] = None) -> Figure:
        figsize, dpi = self._size(width, height)
        figure = Figure(figsize=figsize, dpi=dpi, layout="constrained")
        self.draw(figure)
        return figure

    def write_png(
        self,
        target: PngTarget,
        width: Optional[int] = None,
        height: Optional[int] = None,
        transparent: bool = False,
    ) -> None:
        figure = self.figure(width, height)
        if isinstance(target, (str, Path)):
            target = Path(target)
            target.parent.mkdir(parents=True, exist_ok=True)
        figure.savefig(
            target,
            format="png",
            dpi=figure.dpi,
            transparent=transparent,
            facecolor="none" if transparent else figure.get_facecolor(),
        )
        logger.info(f"💾 PNG written: {target if isinstance(target, Path) else type(target).__name__}")

    def to_png_bytes(self, width: Optional[int] = None, height: Optional[int] = None) -> bytes:
        buffer = io.BytesIO()
        self.write_png(buffer, width, height)
        return buffer.getvalue()

    def to_script(self, element_id: str) -> str:
        """Script that places the chart as a base64 PNG image into ``element_id``."""
        encoded = base64.b64encode(self.to_png_bytes()).decode("ascii")
        alt = html.escape(self.title.text or "chart")
        image = f'<img src="data:image/png;base64,{encoded}" alt="{alt}"/>'
        return f"document.getElementById({json.dumps(element_id)}).innerHTML = {json.dumps(image)};"

    def show(self) -> None:
        figsize, dpi = self._size()
        figure = plt.figure(figsize=figsize, dpi=dpi, layout="constrained")
        self.draw(figure)
        self._live_figure = figure
        plt.show()

    def _on_data_changed(self, model: Any) -> None:
        super()._on_data_changed(model)
        figure = self._live_figure
        if figure is not None and plt.fignum_exists(figure.number):
            figure.clear()
            self.draw(figure)
            figure.canvas.draw_idle()
