"""
Builds plotly figures from an XyPlot.

Every dataset becomes one trace per series. Range axis ``i`` is plotly's
``y{i+1}`` axis (``x{i+1}`` when the plot is horizontal) overlaying the
first one; the domain axis is shared.
"""
import datetime as dt
import logging
import math
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from ..chart import Chart
from ..colors import rgba
from ..data.dataset import XyDataset
from ..logging_utils import is_debug_mode, log_chart_build, log_data_preparation
from ..plot.axis import ChartAxis
from ..plot.render import DASH_PATTERN, RenderKind, XyRender
from ..plot.xy import XyPlot
from ..style import TICK_FONT
from ..types import DomainType, from_numeric_values, is_categorical, is_null, to_numeric_values
from .layout import apply_layout, axis_title, empty_figure

logger = logging.getLogger(__name__)

SYMBOLS = {
    "circle": "circle",
    "square": "square",
    "diamond": "diamond",
    "triangle_up": "triangle-up",
    "triangle_down": "triangle-down",
    "triangle_left": "triangle-left",
    "triangle_right": "triangle-right",
}

AREA_ALPHA = 0.35
MARKER_SIZE = 7
SECONDARY_AXIS_SHIFT = 0.08
DASH = ",".join(f"{length:g}px" for length in DASH_PATTERN)


def domain_positions(values, domain_type: Optional[DomainType]) -> List[Any]:
    """Domain values as plotly understands them on the domain axis."""
    if is_categorical(domain_type):
        return [str(v) for v in values]
    if domain_type in (DomainType.DATE, DomainType.DATETIME):
        stamps = values if isinstance(values, pd.DatetimeIndex) else pd.to_datetime(pd.Index(list(values)))
        return list(stamps)
    if domain_type == DomainType.TIME:
        day = dt.date(1970, 1, 1)
        return [None if is_null(t) else dt.datetime.combine(day, t) for t in values]
    return list(to_numeric_values(values, domain_type))


def _axis_ref(letter: str, index: int) -> str:
    return letter if index == 0 else f"{letter}{index + 1}"


def _layout_key(letter: str, index: int) -> str:
    return f"{letter}axis" if index == 0 else f"{letter}axis{index + 1}"


class _TraceBuilder:
    """Turns the datasets of one plot into traces on the right axes."""

    def __init__(self, plot: XyPlot, domain_type: DomainType):
        self.plot = plot
        self.domain_type = domain_type
        self.horizontal = plot.orient().is_horizontal
        self.range_letter = "x" if self.horizontal else "y"

    def place(self, domain, values, axis_index: int) -> Dict[str, Any]:
        """x/y arguments plus the range axis reference of one trace."""
        values = [None if not np.isfinite(v) else float(v) for v in values]
        placed = {"y": domain, "x": values} if self.horizontal else {"x": domain, "y": values}
        placed[f"{self.range_letter}axis"] = _axis_ref(self.range_letter, axis_index)
        return placed

    def lines(self, dataset: XyDataset, render: XyRender, axis_index: int) -> List[go.Scatter]:
        plot = self.plot
        domain = domain_positions(dataset.domain_values, self.domain_type)
        traces = []
        for key in dataset.series_keys:
            lines = plot.series_lines_visible(key, render)
            points = plot.series_points_visible(key, render)
            mode = "+".join(part for part, shown in (("lines", lines), ("markers", points)) if shown) or "none"
            traces.append(go.Scatter(
                name=str(key),
                mode=mode,
                line=dict(
                    color=plot.series_color(key),
                    width=plot.series_line_width(key),
                    dash=DASH if plot.series_dashed(key, render) else "solid",
                    shape="spline" if render.kind == RenderKind.SPLINE else "linear",
                ),
                marker=dict(symbol=SYMBOLS[plot.series_point_shape(key, render).value], size=MARKER_SIZE),
                **self.place(domain, dataset.series_values(key), axis_index),
            ))
        return traces

    def scatter(self, dataset: XyDataset, render: XyRender, axis_index: int) -> List[go.Scatter]:
        plot = self.plot
        domain = domain_positions(dataset.domain_values, self.domain_type)
        size = render.dot_size * 1.5 if render.kind == RenderKind.DOTS else MARKER_SIZE + 1
        return [
            go.Scatter(
                name=str(key),
                mode="markers",
                marker=dict(
                    color=plot.series_color(key),
                    symbol=SYMBOLS[plot.series_point_shape(key, render).value],
                    size=size,
                    line=dict(color="gray", width=0.5 if render.shapes else 0),
                ),
                **self.place(domain, dataset.series_values(key), axis_index),
            )
            for key in dataset.series_keys
        ]

    def area(self, dataset: XyDataset, render: XyRender, axis_index: int) -> List[go.Scatter]:
        plot = self.plot
        domain = domain_positions(dataset.domain_values, self.domain_type)
        fill = "tozerox" if self.horizontal else "tozeroy"
        traces = []
        for key in dataset.series_keys:
            color = plot.series_color(key)
            kwargs = dict(
                name=str(key),
                mode="lines",
                line=dict(color=color, width=plot.series_line_width(key)),
                **self.place(domain, dataset.series_values(key), axis_index),
            )
            if render.stacked:
                kwargs.update(
                    stackgroup=f"stack_{id(dataset)}",
                    orientation="h" if self.horizontal else "v",
                    fillcolor=color,
                )
            else:
                kwargs.update(fill=fill, fillcolor=rgba(color, AREA_ALPHA))
            traces.append(go.Scatter(**kwargs))
        return traces

    def _intervals(self, dataset: XyDataset):
        """Centers and widths of interval bars, widths in axis units."""
        count = dataset.domain_size
        lower = to_numeric_values([dataset.lower_domain_value(i) for i in range(count)], self.domain_type)
        upper = to_numeric_values([dataset.upper_domain_value(i) for i in range(count)], self.domain_type)
        centers = (lower + upper) / 2
        widths = np.abs(upper - lower)
        if self.domain_type in (DomainType.DATE, DomainType.DATETIME):
            centers = list(from_numeric_values(centers, self.domain_type))
        else:
            centers = list(centers)
        return centers, widths

    def bars(self, dataset: XyDataset, render: XyRender, axis_index: int) -> List[go.Bar]:
        plot = self.plot
        keys = dataset.series_keys
        intervals = dataset.has_intervals and not is_categorical(self.domain_type)
        if intervals:
            domain, widths = self._intervals(dataset)
            widths = widths * (1.0 - render.margin)
        else:
            domain, widths = domain_positions(dataset.domain_values, self.domain_type), None

        traces = []
        for j, key in enumerate(keys):
            kwargs = dict(
                name=str(key),
                marker=dict(color=plot.series_color(key), line=dict(width=0)),
                orientation="h" if self.horizontal else "v",
                **self.place(domain, dataset.series_values(key), axis_index),
            )
            if widths is not None:
                if render.stacked or len(keys) == 1:
                    kwargs["width"] = list(widths)
                else:
                    # side by side inside each interval; explicit offsets draw outside plotly's grouping
                    kwargs["width"] = list(widths / len(keys))
                    kwargs["offset"] = list(-widths / 2 + j * widths / len(keys))
            traces.append(go.Bar(**kwargs))
        return traces


def _draw(builder: _TraceBuilder, dataset: XyDataset, render: XyRender, axis_index: int) -> List[Any]:
    if render.is_bars:
        return builder.bars(dataset, render, axis_index)
    if render.is_area:
        return builder.area(dataset, render, axis_index)
    if render.is_scatter:
        return builder.scatter(dataset, render, axis_index)
    return builder.lines(dataset, render, axis_index)


def _axis_range(config: ChartAxis, domain_type: Optional[DomainType]) -> Optional[List[Any]]:
    if config.range is None:
        return None
    lower, upper = config.range
    if is_categorical(domain_type):
        logger.warning(f"⚠️  Ignoring axis range {config.range} on a category axis")
        return None
    if domain_type == DomainType.TIME:
        lower, upper = domain_positions([lower, upper], domain_type)
    if config.is_log:
        if lower <= 0:
            logger.warning(f"⚠️  Ignoring axis range {config.range}: log axes need positive bounds")
            return None
        return [math.log10(lower), math.log10(upper)]
    return [lower, upper]


def _axis_layout(chart: Chart, config: ChartAxis, domain_type: Optional[DomainType] = None) -> Dict[str, Any]:
    theme = chart.theme
    ticks_font = config.ticks.font or TICK_FONT
    layout = dict(
        title=axis_title(chart, config.label),
        tickfont=dict(size=ticks_font.size, color=config.ticks.color or theme.font_color),
        showgrid=True,
        gridcolor=rgba(theme.grid_color, theme.grid_alpha),
        showline=True,
        linecolor=theme.axis_color,
        linewidth=1,
        zeroline=False,
    )
    if is_categorical(domain_type):
        layout["type"] = "category"
    elif domain_type in (DomainType.DATE, DomainType.DATETIME, DomainType.TIME):
        layout["type"] = "date"
    else:
        layout["type"] = "log" if config.is_log else "linear"

    pattern = config.pattern_for(domain_type)
    if pattern and not is_categorical(domain_type):
        layout["tickformat"] = pattern
    if domain_type == DomainType.INTEGER and not config.is_log:
        layout["tickformat"] = config.format.pattern or "d"

    axis_range = _axis_range(config, domain_type)
    if axis_range is not None:
        layout["range"] = axis_range
    return layout


def _range_axis_layout(chart: Chart, index: int, horizontal: bool, count: int) -> Dict[str, Any]:
    layout = _axis_layout(chart, chart.plot.axes().range(index))
    if index == 0:
        return layout
    main, domain_letter = ("x", "y") if horizontal else ("y", "x")
    layout.update(overlaying=main, showgrid=False, side="top" if horizontal else "right")
    if index == 1:
        layout["anchor"] = domain_letter
    else:
        # axes beyond the second sit in the space freed by shrinking the domain axis
        layout.update(anchor="free", position=1.0 - SECONDARY_AXIS_SHIFT * (count - 1 - index))
    return layout


@log_chart_build
def build_xy_figure(chart: Chart) -> go.Figure:
    """
    Build a plotly figure for an xy chart.

    Args:
        chart: Chart whose plot is an XyPlot

    Returns:
        Plotly Figure

    Raises:
        ChartError: If datasets disagree on domain type or an axis scale does
            not fit the domain
    """
    plot: XyPlot = chart.plot
    datasets = plot.datasets()
    if not datasets:
        logger.warning("⚠️  No data in xy plot, returning blank chart")
        return empty_figure(chart)

    domain_type = plot.rendered_domain_type()
    horizontal = plot.orient().is_horizontal
    model = plot.data()
    builder = _TraceBuilder(plot, domain_type)
    fig = go.Figure()

    with log_data_preparation(f"Adding traces for {len(datasets)} dataset(s)"):
        for index, dataset, render in datasets:
            axis_index = model.range_axis_of(index)
            if is_debug_mode():
                logger.debug(f"  → Dataset {index}: {render!r}, {dataset.series_count} series on axis {axis_index}")
            fig.add_traces(_draw(builder, dataset, render, axis_index))

        for trend, frame, axis_index in plot.trend_frames():
            domain = domain_positions(frame.index, domain_type)
            fig.add_trace(go.Scatter(
                name=trend.trend_key,
                mode="lines",
                line=dict(color=trend.color, width=trend.line_width),
                showlegend=False,
                hovertemplate=f"{trend.equation()}<extra>{trend.trend_key}</extra>",
                **builder.place(domain, frame[trend.trend_key].to_numpy(dtype=float), axis_index),
            ))

    bar_renders = [render for _, _, render in datasets if render.is_bars]
    apply_layout(
        chart,
        fig,
        barmode="stack" if any(r.stacked for r in bar_renders) else "group",
        bargap=max((r.margin for r in bar_renders), default=0.0) or 0.2,
        hovermode="closest",
    )

    domain_letter, range_letter = ("y", "x") if horizontal else ("x", "y")
    updates = {_layout_key(domain_letter, 0): _axis_layout(chart, plot.axes().domain(), domain_type)}
    if is_categorical(domain_type):
        updates[_layout_key(domain_letter, 0)].update(
            categoryorder="array", categoryarray=[str(c) for c in plot.categories()]
        )
    count = max(model.range_axis_of(index) for index, _, _ in datasets) + 1
    if count > 2:
        updates[_layout_key(domain_letter, 0)]["domain"] = [0.0, 1.0 - SECONDARY_AXIS_SHIFT * (count - 2)]
    for index in range(count):
        updates[_layout_key(range_letter, index)] = _range_axis_layout(chart, index, horizontal, count)
    fig.update_layout(**updates)
    return fig
