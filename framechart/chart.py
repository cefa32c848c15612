"""
Chart: title, legend, options and plot, rendered by an engine subclass.
"""
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, BinaryIO, Optional, Union

from .plot.pie import PiePlot
from .plot.xy import XyPlot
from .settings import get_settings
from .style import SUBTITLE_FONT, TITLE_FONT, ChartLabel, ChartLegend, ChartOptions
from .theme import ChartTheme, get_default_theme

logger = logging.getLogger(__name__)

Plot = Union[XyPlot, PiePlot]
PngTarget = Union[str, Path, BinaryIO]


class Chart(ABC):
    """
    Base class of engine specific charts.

    Args:
        plot: XyPlot or PiePlot holding the chart data and styles
        options: Sizing options; 800x500 when None
    """

    engine: str = ""

    def __init__(self, plot: Plot, options: Optional[ChartOptions] = None):
        self.plot = plot
        self.title = ChartLabel(font=TITLE_FONT)
        self.subtitle = ChartLabel(font=SUBTITLE_FONT)
        self.legend = ChartLegend()
        self.options = options or ChartOptions()
        self.theme: ChartTheme = get_default_theme(get_settings().theme_mode)
        self.model().add_listener(self._on_data_changed)

    def model(self) -> Any:
        return self.plot.data()

    @property
    def is_xy(self) -> bool:
        return isinstance(self.plot, XyPlot)

    @property
    def is_pie(self) -> bool:
        return isinstance(self.plot, PiePlot)

    def with_preferred_size(self, width: int, height: int) -> "Chart":
        self.options = self.options.with_preferred_size(width, height)
        return self

    def with_id(self, element_id: str) -> "Chart":
        self.options = self.options.with_id(element_id)
        return self

    def with_theme(self, theme: Union[str, ChartTheme]) -> "Chart":
        self.theme = get_default_theme(theme) if isinstance(theme, str) else theme
        return self

    def full_title(self) -> Optional[str]:
        """Title and subtitle on one line, for engines with a single title."""
        if self.title.text and self.subtitle.text:
            return f"{self.title.text} - ({self.subtitle.text})"
        return self.title.text or self.subtitle.text

    def refresh(self) -> "Chart":
        """Re-read data from the frame suppliers; listeners redraw open figures."""
        if self.is_xy:
            self.plot.data().refresh()
        return self

    def _on_data_changed(self, model: Any) -> None:
        logger.debug(f"Data changed for chart '{self.title.text or type(self).__name__}'")

    @abstractmethod
    def figure(self) -> Any:
        """Build the engine figure for the current state of the chart."""

    @abstractmethod
    def show(self) -> None:
        """Display the chart."""

    @abstractmethod
    def write_png(
        self,
        target: PngTarget,
        width: Optional[int] = None,
        height: Optional[int] = None,
        transparent: bool = False,
    ) -> None:
        """Write the chart as a PNG image to a path or binary stream."""

    @abstractmethod
    def to_script(self, element_id: str) -> str:
        """JavaScript statements that draw the chart into the DOM element ``element_id``."""

    def __repr__(self) -> str:
        kind = "xy" if self.is_xy else "pie"
        return f"{type(self).__name__}({kind}, title={self.title.text!r})"
