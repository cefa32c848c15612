"""
Draws an XyPlot onto a matplotlib figure.

Domain values are mapped to axis positions by domain type: numbers are used
as they are, dates and times become matplotlib date numbers, and categories
become consecutive integer positions labelled with the category text.
"""
import datetime as dt
import logging
from typing import Any, Dict, Hashable, List, Tuple

import matplotlib.dates as mdates
import numpy as np
import pandas as pd
from matplotlib.axes import Axes
from matplotlib.ticker import FuncFormatter, MaxNLocator

from ..chart import Chart
from ..data.dataset import XyDataset
from ..logging_utils import is_debug_mode, log_chart_build, log_data_preparation
from ..plot.axis import ChartAxis
from ..plot.render import DASH_PATTERN, RenderKind, XyRender
from ..plot.xy import XyPlot
from ..style import TICK_FONT
from ..types import DomainType, is_categorical, is_null, is_time_based, to_numeric_values
from .styling import MARKERS, apply_legend, apply_titles, font_kwargs, style_axes

logger = logging.getLogger(__name__)

AREA_ALPHA = 0.35
STACKED_AREA_ALPHA = 0.75
BAR_FILL = 0.8
SECONDARY_AXIS_OFFSET = 0.12


class DomainMapper:
    """Maps domain values of one plot to positions on the domain axis."""

    def __init__(self, domain_type: DomainType):
        self.domain_type = domain_type
        self.categories: Dict[Any, int] = {}

    def learn(self, values: pd.Index) -> None:
        """Register category values in first-seen order."""
        if is_categorical(self.domain_type):
            for value in values:
                if value not in self.categories:
                    self.categories[value] = len(self.categories)

    def to_x(self, values) -> np.ndarray:
        if is_categorical(self.domain_type):
            return np.array([self.categories.get(v, np.nan) for v in values], dtype=float)

        if self.domain_type in (DomainType.DATE, DomainType.DATETIME):
            stamps = values if isinstance(values, pd.DatetimeIndex) else pd.to_datetime(pd.Index(list(values)))
            if stamps.tz is not None:
                stamps = stamps.tz_localize(None)
            return np.asarray(mdates.date2num(stamps.to_numpy()), dtype=float)

        if self.domain_type == DomainType.TIME:
            day = dt.date(1970, 1, 1)
            return np.array([
                np.nan if is_null(t) else mdates.date2num(dt.datetime.combine(day, t))
                for t in values
            ], dtype=float)

        return to_numeric_values(values, self.domain_type)

    def ticks(self) -> Tuple[List[int], List[str]]:
        return list(self.categories.values()), [str(key) for key in self.categories]


def catmull_rom(x: np.ndarray, y: np.ndarray, samples: int = 8) -> Tuple[np.ndarray, np.ndarray]:
    """Smooth curve through the points (x, y) using Catmull-Rom segments."""
    if len(x) < 3:
        return x, y
    points = np.column_stack([x, y])
    padded = np.vstack([2 * points[0] - points[1], points, 2 * points[-1] - points[-2]])
    t = np.linspace(0.0, 1.0, samples, endpoint=False)[:, None]
    segments = []
    for i in range(1, len(padded) - 2):
        p0, p1, p2, p3 = padded[i - 1], padded[i], padded[i + 1], padded[i + 2]
        segments.append(0.5 * (
            2 * p1
            + (p2 - p0) * t
            + (2 * p0 - 5 * p1 + 4 * p2 - p3) * t ** 2
            + (3 * p1 - p0 - 3 * p2 + p3) * t ** 3
        ))
    segments.append(points[-1:])
    curve = np.vstack(segments)
    return curve[:, 0], curve[:, 1]


def _pair(x, y, horizontal: bool):
    return (y, x) if horizontal else (x, y)


def _slot_width(x: np.ndarray) -> float:
    finite = np.unique(x[np.isfinite(x)])
    return float(np.min(np.diff(finite))) if finite.size > 1 else 1.0


def _line_kwargs(plot: XyPlot, key: Hashable, render: XyRender) -> dict:
    lines = plot.series_lines_visible(key, render)
    points = plot.series_points_visible(key, render)
    dashed = plot.series_dashed(key, render)
    return {
        "color": plot.series_color(key),
        "linewidth": plot.series_line_width(key) if lines else 0,
        "linestyle": ((0, DASH_PATTERN) if dashed else "-") if lines else "none",
        "marker": MARKERS[plot.series_point_shape(key, render)] if points else None,
        "markersize": 5,
    }


def _draw_lines(ax: Axes, plot: XyPlot, dataset: XyDataset, render: XyRender, mapper: DomainMapper, horizontal: bool):
    x = mapper.to_x(dataset.domain_values)
    order = np.arange(len(x)) if is_categorical(mapper.domain_type) else np.argsort(x, kind="stable")
    xs = x[order]
    for key in dataset.series_keys:
        ys = dataset.series_values(key)[order]
        kwargs = _line_kwargs(plot, key, render)
        if render.kind == RenderKind.SPLINE and kwargs["linestyle"] != "none":
            mask = np.isfinite(xs) & np.isfinite(ys)
            sx, sy = catmull_rom(xs[mask], ys[mask])
            marker = kwargs.pop("marker")
            ax.plot(*_pair(sx, sy, horizontal), label=str(key), **kwargs)
            if marker:
                ax.plot(*_pair(xs, ys, horizontal), linestyle="none", marker=marker,
                        color=kwargs["color"], markersize=kwargs["markersize"], label="_nolegend_")
        else:
            ax.plot(*_pair(xs, ys, horizontal), label=str(key), **kwargs)


def _draw_scatter(ax: Axes, plot: XyPlot, dataset: XyDataset, render: XyRender, mapper: DomainMapper, horizontal: bool):
    x = mapper.to_x(dataset.domain_values)
    size = render.dot_size ** 2 if render.kind == RenderKind.DOTS else 36
    for key in dataset.series_keys:
        y = dataset.series_values(key)
        ax.scatter(
            *_pair(x, y, horizontal),
            s=size,
            marker=MARKERS[plot.series_point_shape(key, render)],
            color=plot.series_color(key),
            edgecolors="gray" if render.shapes else "none",
            linewidths=0.5,
            label=str(key),
        )


def _draw_area(ax: Axes, plot: XyPlot, dataset: XyDataset, render: XyRender, mapper: DomainMapper, horizontal: bool):
    x = mapper.to_x(dataset.domain_values)
    order = np.arange(len(x)) if is_categorical(mapper.domain_type) else np.argsort(x, kind="stable")
    xs = x[order]
    fill = ax.fill_betweenx if horizontal else ax.fill_between
    base = np.zeros(len(xs))
    for key in dataset.series_keys:
        ys = dataset.series_values(key)[order]
        color = plot.series_color(key)
        if render.stacked:
            top = base + np.nan_to_num(ys)
            fill(xs, base, top, color=color, alpha=STACKED_AREA_ALPHA, linewidth=0, label=str(key))
            base = top
        else:
            fill(xs, 0, ys, color=color, alpha=AREA_ALPHA, linewidth=0, label=str(key))
            ax.plot(*_pair(xs, ys, horizontal), color=color,
                    linewidth=plot.series_line_width(key), label="_nolegend_")


def _draw_bars(ax: Axes, plot: XyPlot, dataset: XyDataset, render: XyRender, mapper: DomainMapper, horizontal: bool):
    count = dataset.domain_size
    x = mapper.to_x(dataset.domain_values)
    if dataset.has_intervals:
        lower = mapper.to_x([dataset.lower_domain_value(i) for i in range(count)])
        upper = mapper.to_x([dataset.upper_domain_value(i) for i in range(count)])
        left, full = np.minimum(lower, upper), np.abs(upper - lower)
    else:
        full = np.full(count, _slot_width(x) * BAR_FILL)
        left = x - full / 2

    shrink = full * render.margin
    left, full = left + shrink / 2, full - shrink

    keys = dataset.series_keys
    positive, negative = np.zeros(count), np.zeros(count)
    draw = ax.barh if horizontal else ax.bar
    for j, key in enumerate(keys):
        values = dataset.series_values(key)
        if render.stacked:
            values = np.nan_to_num(values)
            base = np.where(values >= 0, positive, negative)
            start, width = left, full
            positive = positive + np.where(values > 0, values, 0)
            negative = negative + np.where(values < 0, values, 0)
        else:
            width = full / len(keys)
            start = left + j * width
            base = 0
        kwargs = {"color": plot.series_color(key), "label": str(key), "align": "edge", "linewidth": 0}
        if horizontal:
            draw(start, values, height=width, left=base, **kwargs)
        else:
            draw(start, values, width=width, bottom=base, **kwargs)


_DRAWERS = {
    RenderKind.LINES: _draw_lines,
    RenderKind.SPLINE: _draw_lines,
    RenderKind.DOTS: _draw_scatter,
    RenderKind.SHAPES: _draw_scatter,
    RenderKind.AREA: _draw_area,
    RenderKind.BARS: _draw_bars,
}


def _apply_axis(ax: Axes, which: str, config: ChartAxis, chart: Chart, domain_type=None, mapper=None) -> None:
    theme = chart.theme
    axis = ax.xaxis if which == "x" else ax.yaxis

    if config.label.text:
        getattr(ax, f"set_{which}label")(
            config.label.text,
            color=config.label.color or theme.font_color,
            **font_kwargs(config.label.font),
        )

    if config.is_log:
        getattr(ax, f"set_{which}scale")("log")

    ticks_font = config.ticks.font or TICK_FONT
    ax.tick_params(axis=which, labelsize=ticks_font.size, labelcolor=config.ticks.color or theme.font_color)

    if mapper is not None and is_categorical(domain_type):
        positions, labels = mapper.ticks()
        getattr(ax, f"set_{which}ticks")(positions)
        if which == "x" and len(labels) > 8:
            ax.set_xticklabels(labels, rotation=45, ha="right")
        else:
            getattr(ax, f"set_{which}ticklabels")(labels)
    elif is_time_based(domain_type):
        axis.set_major_locator(mdates.AutoDateLocator())
        axis.set_major_formatter(mdates.DateFormatter(config.pattern_for(domain_type)))
    else:
        if config.format.pattern:
            axis.set_major_formatter(FuncFormatter(lambda v, _pos, p=config.format.pattern: format(v, p)))
        if domain_type == DomainType.INTEGER and not config.is_log:
            axis.set_major_locator(MaxNLocator(integer=True))

    if config.range is not None:
        lower, upper = config.range
        if mapper is not None:
            lower, upper = mapper.to_x([lower, upper])
        if np.isfinite(lower) and np.isfinite(upper):
            getattr(ax, f"set_{which}lim")(lower, upper)
        else:
            logger.warning(f"⚠️  Ignoring axis range {config.range}: values not on the axis")


def _range_axes(ax: Axes, count: int, horizontal: bool, chart: Chart) -> Dict[int, Axes]:
    axes = {0: ax}
    for index in range(1, count):
        twin = ax.twiny() if horizontal else ax.twinx()
        if index > 1:
            side = "top" if horizontal else "right"
            twin.spines[side].set_position(("axes", 1 + SECONDARY_AXIS_OFFSET * (index - 1)))
        style_axes(twin, chart.theme, grid=False)
        axes[index] = twin
    return axes


@log_chart_build
def build_xy_figure(chart: Chart, figure) -> Any:
    """
    Draw an xy chart onto a matplotlib Figure or SubFigure.

    Args:
        chart: Chart whose plot is an XyPlot
        figure: Figure or SubFigure to draw into

    Returns:
        The figure that was drawn into

    Raises:
        ChartError: If datasets disagree on domain type or an axis scale does
            not fit the domain
    """
    plot: XyPlot = chart.plot
    theme = chart.theme
    figure.set_facecolor(theme.paper_color)
    ax = figure.add_subplot(111)
    style_axes(ax, theme)
    apply_titles(chart, figure, ax)

    datasets = plot.datasets()
    if not datasets:
        logger.warning("⚠️  No data in xy plot, drawing empty chart")
        ax.text(0.5, 0.5, "No data available", ha="center", va="center",
                transform=ax.transAxes, color=theme.font_color)
        return figure

    domain_type = plot.rendered_domain_type()
    mapper = DomainMapper(domain_type)
    for _, dataset, _ in datasets:
        mapper.learn(dataset.domain_values)

    horizontal = plot.orient().is_horizontal
    model = plot.data()
    used = max(model.range_axis_of(index) for index, _, _ in datasets)
    range_axes = _range_axes(ax, used + 1, horizontal, chart)

    with log_data_preparation(f"Drawing {len(datasets)} dataset(s)"):
        for index, dataset, render in datasets:
            target = range_axes[model.range_axis_of(index)]
            if is_debug_mode():
                logger.debug(f"  → Dataset {index}: {render!r}, {dataset.series_count} series")
            _DRAWERS[render.kind](target, plot, dataset, render, mapper, horizontal)

        for trend, frame, axis_index in plot.trend_frames():
            x = mapper.to_x(frame.index)
            y = frame[trend.trend_key].to_numpy(dtype=float)
            range_axes[axis_index].plot(
                *_pair(x, y, horizontal), color=trend.color, linewidth=trend.line_width, label="_nolegend_"
            )

    domain_which, range_which = ("y", "x") if horizontal else ("x", "y")
    _apply_axis(ax, domain_which, plot.axes().domain(), chart, domain_type, mapper)
    for index, target in range_axes.items():
        _apply_axis(target, range_which, plot.axes().range(index), chart)

    apply_legend(chart, ax, range_axes.values())
    return figure
