"""
Title, legend and axes styling shared by matplotlib xy and pie drawing.
"""
from typing import Iterable

from matplotlib.axes import Axes

from ..chart import Chart
from ..style import SUBTITLE_FONT, TITLE_FONT, ChartShape, Font
from ..theme import ChartTheme

MARKERS = {
    ChartShape.CIRCLE: "o",
    ChartShape.SQUARE: "s",
    ChartShape.DIAMOND: "D",
    ChartShape.TRIANGLE_UP: "^",
    ChartShape.TRIANGLE_DOWN: "v",
    ChartShape.TRIANGLE_LEFT: "<",
    ChartShape.TRIANGLE_RIGHT: ">",
}

# position -> (loc, bbox_to_anchor, horizontal layout)
LEGEND_PLACEMENT = {
    "right": ("center left", (1.02, 0.5), False),
    "left": ("center right", (-0.15, 0.5), False),
    "top": ("lower center", (0.5, 1.02), True),
    "bottom": ("upper center", (0.5, -0.15), True),
}


def font_kwargs(font: Font) -> dict:
    return {"fontsize": font.size, "fontweight": font.weight, "fontstyle": font.style}


def apply_titles(chart: Chart, figure, ax: Axes) -> None:
    """Title goes on the (sub)figure, subtitle on the axes."""
    theme = chart.theme
    if chart.title.text:
        figure.suptitle(
            chart.title.text,
            color=chart.title.color or theme.font_color,
            **font_kwargs(chart.title.font or TITLE_FONT),
        )
    if chart.subtitle.text:
        ax.set_title(
            chart.subtitle.text,
            color=chart.subtitle.color or theme.font_color,
            **font_kwargs(chart.subtitle.font or SUBTITLE_FONT),
        )


def style_axes(ax: Axes, theme: ChartTheme, grid: bool = True) -> None:
    ax.set_facecolor(theme.bg_color)
    for spine in ax.spines.values():
        spine.set_color(theme.axis_color)
    ax.tick_params(colors=theme.axis_color, labelcolor=theme.font_color)
    if grid:
        ax.grid(True, color=theme.grid_color, alpha=theme.grid_alpha, linewidth=0.8)
        ax.set_axisbelow(True)


def apply_legend(chart: Chart, ax: Axes, sources: Iterable[Axes], handles=None, labels=None) -> None:
    """Draw one legend for all ``sources`` axes; series labelled '_...' are skipped."""
    if not chart.legend.enabled:
        return

    if handles is None:
        handles, labels = [], []
        for source in sources:
            h, l = source.get_legend_handles_labels()
            handles.extend(h)
            labels.extend(l)
    if not handles:
        return

    loc, anchor, horizontal = LEGEND_PLACEMENT[chart.legend.position]
    font = chart.legend.text.font
    legend = ax.legend(
        handles,
        labels,
        loc=loc,
        bbox_to_anchor=anchor,
        ncol=min(len(handles), 5) if horizontal else 1,
        frameon=False,
        fontsize=font.size if font else None,
    )
    for text in legend.get_texts():
        text.set_color(chart.legend.text.color or chart.theme.font_color)
