"""
Draws a PiePlot onto a matplotlib figure.
"""
import logging
from typing import Any

from ..chart import Chart
from ..logging_utils import log_chart_build
from ..plot.pie import PiePlot
from .styling import apply_legend, apply_titles

logger = logging.getLogger(__name__)


@log_chart_build
def build_pie_figure(chart: Chart, figure) -> Any:
    """
    Draw a pie chart onto a matplotlib Figure or SubFigure.

    Sections start at the plot's start angle measured clockwise from
    12 o'clock. Null, zero and negative values are left out.
    """
    plot: PiePlot = chart.plot
    theme = chart.theme
    figure.set_facecolor(theme.paper_color)
    ax = figure.add_subplot(111)
    ax.set_facecolor(theme.paper_color)
    apply_titles(chart, figure, ax)

    slices = [s for s in plot.slices() if s[1] > 0]
    dropped = len(plot.slices()) - len(slices)
    if dropped:
        logger.warning(f"⚠️  Skipping {dropped} pie section(s) with negative values")

    if not slices:
        logger.warning("⚠️  No data in pie plot, drawing empty chart")
        ax.axis("off")
        ax.text(0.5, 0.5, "No data available", ha="center", va="center",
                transform=ax.transAxes, color=theme.font_color)
        return figure

    items, values, colors, offsets = zip(*slices)
    total = float(sum(values))
    labels = plot.labels()

    wedgeprops = {"edgecolor": plot.section_outline_color, "linewidth": 1.0}
    if plot.pie_hole > 0:
        wedgeprops["width"] = 1.0 - plot.pie_hole

    textprops = {
        "color": labels.text_color,
        "fontsize": labels.font.size,
        "fontweight": labels.font.weight,
        "fontstyle": labels.font.style,
    }
    if labels.background_color:
        textprops["bbox"] = {"facecolor": labels.background_color, "edgecolor": "none", "boxstyle": "round,pad=0.2"}

    wedges, _ = ax.pie(
        values,
        labels=[labels.format(item, value, total) for item, value in zip(items, values)] if labels.enabled else None,
        labeldistance=(1.0 + plot.pie_hole) / 2 if plot.pie_hole > 0 else 0.6,
        colors=colors,
        explode=offsets,
        startangle=90.0 - plot.start_angle,
        counterclock=False,
        shadow=plot.is_3d,
        wedgeprops=wedgeprops,
        textprops=textprops,
    )
    if labels.enabled:
        for text in ax.texts:
            text.set_horizontalalignment("center")
    ax.set_aspect("equal")

    apply_legend(chart, ax, [ax], handles=list(wedges), labels=[str(item) for item in items])
    return figure
