"""
XyPlot: engine-neutral state of an xy chart.

Holds the data model, axes, per-dataset render styles, per-series style
overrides and trend lines. Engines read the resolved styles through the
``series_*`` helpers so both engines agree on defaults.
"""
import logging
from typing import Dict, Hashable, List, Optional, Tuple

from ..colors import ColorModel
from ..data.dataset import XyDataset
from ..data.model import XyModel
from ..data.trend import TrendLine
from ..errors import ChartError
from ..style import ChartShape, SeriesStyle, ShapeProvider
from ..types import DomainType
from .axis import XyAxes
from .render import XyRender

logger = logging.getLogger(__name__)

DEFAULT_LINE_WIDTH = 1.5


class XyOrient:
    """Whether the domain runs along the x axis (vertical) or the y axis (horizontal)."""

    def __init__(self):
        self.is_horizontal = False

    def vertical(self) -> "XyOrient":
        self.is_horizontal = False
        return self

    def horizontal(self) -> "XyOrient":
        self.is_horizontal = True
        return self


class XyPlot:
    """
    State shared by xy charts of both engines.

    Args:
        domain_type: Declared domain type; inferred from the data when None
    """

    def __init__(self, domain_type: Optional[DomainType] = None):
        self.declared_domain_type = domain_type
        self._model = XyModel()
        self._axes = XyAxes()
        self._orient = XyOrient()
        self._renders: Dict[int, XyRender] = {}
        self._styles: Dict[Hashable, SeriesStyle] = {}
        self._trends: Dict[Hashable, TrendLine] = {}
        self._color_model = ColorModel.create("default")
        self._shapes = ShapeProvider()

    def data(self) -> XyModel:
        return self._model

    def axes(self) -> XyAxes:
        return self._axes

    def orient(self) -> XyOrient:
        return self._orient

    def render(self, index: int) -> XyRender:
        """Render style of dataset ``index``; lines until set otherwise."""
        render = self._renders.get(index)
        if render is None:
            render = XyRender()
            self._renders[index] = render
        return render

    def style(self, series_key: Hashable) -> SeriesStyle:
        style = self._styles.get(series_key)
        if style is None:
            style = SeriesStyle()
            self._styles[series_key] = style
        return style

    def with_color_model(self, color_model: ColorModel) -> "XyPlot":
        self._color_model = color_model
        return self

    @property
    def color_model(self) -> ColorModel:
        return self._color_model

    def trend(self, series_key: Hashable) -> TrendLine:
        """
        Trend line over ``series_key``, created on first request.

        Raises:
            ChartError: If no dataset holds the series
        """
        trend = self._trends.get(series_key)
        if trend is None:
            self._model.dataset_index(series_key)
            trend = TrendLine(series_key, on_clear=self._remove_trend)
            self._trends[series_key] = trend
            logger.debug(f"Added trend line for {series_key}")
        return trend

    def _remove_trend(self, trend: TrendLine) -> None:
        self._trends.pop(trend.series_key, None)

    def trends(self) -> List[TrendLine]:
        return list(self._trends.values())

    @property
    def domain_type(self) -> Optional[DomainType]:
        return self._model.domain_type or self.declared_domain_type

    def datasets(self) -> List[Tuple[int, XyDataset, XyRender]]:
        """Non-empty datasets with their render styles, in index order."""
        return [(index, dataset, self.render(index)) for index, dataset in self._model if not dataset.is_empty]

    def rendered_domain_type(self) -> Optional[DomainType]:
        """
        Domain type shared by all non-empty datasets.

        Raises:
            ChartError: If datasets disagree, or the domain axis scale does not
                fit the type
        """
        domain_types = {dataset.domain_type for _, dataset, _ in self.datasets()}
        if not domain_types:
            return self.declared_domain_type
        if len(domain_types) > 1:
            names = sorted(t.value for t in domain_types)
            raise ChartError(f"Non-homogeneous key types for domain dimension: {names}")
        domain_type = domain_types.pop()
        self._axes.domain().check_compatible(domain_type)
        return domain_type

    def categories(self) -> List:
        """Domain values of all datasets in first-seen order."""
        seen = {}
        for _, dataset, _ in self.datasets():
            for value in dataset.domain_values:
                seen.setdefault(value, None)
        return list(seen)

    def trend_frames(self):
        """Computed trend frames paired with their trend lines, skipping empty fits."""
        frames = []
        for trend in self.trends():
            index = self._model.dataset_index(trend.series_key)
            frame = trend.compute(self._model.at(index))
            if not frame.empty:
                frames.append((trend, frame, self._model.range_axis_of(index)))
        return frames

    def series_color(self, series_key: Hashable) -> str:
        style = self._styles.get(series_key)
        if style is not None and style.color is not None:
            return style.color
        return self._color_model.get_color(series_key)

    def series_line_width(self, series_key: Hashable) -> float:
        style = self._styles.get(series_key)
        if style is not None and style.line_width is not None:
            return style.line_width
        return DEFAULT_LINE_WIDTH

    def series_dashed(self, series_key: Hashable, render: XyRender) -> bool:
        style = self._styles.get(series_key)
        if style is not None and style.dashed is not None:
            return style.dashed
        return render.dashed

    def series_lines_visible(self, series_key: Hashable, render: XyRender) -> bool:
        return render.is_lines and self.series_line_width(series_key) > 0

    def series_points_visible(self, series_key: Hashable, render: XyRender) -> bool:
        style = self._styles.get(series_key)
        if style is not None and style.points_visible is not None:
            return style.points_visible
        return render.has_points

    def series_point_shape(self, series_key: Hashable, render: XyRender) -> ChartShape:
        style = self._styles.get(series_key)
        if style is not None and style.point_shape is not None:
            return style.point_shape
        if render.shapes:
            return self._shapes.shape_for(series_key)
        return ChartShape.CIRCLE
