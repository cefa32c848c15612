"""
Builds plotly figures from a PiePlot.
"""
import logging

import plotly.graph_objects as go

from ..chart import Chart
from ..logging_utils import log_chart_build
from ..plot.pie import PiePlot
from .layout import apply_layout, empty_figure, font_dict

logger = logging.getLogger(__name__)

TEXT_INFO = {"name": "label", "value": "value", "percent": "percent"}


@log_chart_build
def build_pie_figure(chart: Chart) -> go.Figure:
    """
    Build a plotly figure for a pie chart.

    Sections run clockwise from the plot's start angle. Plotly has no 3D pie,
    so 3D pies are drawn flat.
    """
    plot: PiePlot = chart.plot
    slices = [s for s in plot.slices() if s[1] > 0]
    dropped = len(plot.slices()) - len(slices)
    if dropped:
        logger.warning(f"⚠️  Skipping {dropped} pie section(s) with negative values")
    if not slices:
        logger.warning("⚠️  No data in pie plot, returning blank chart")
        return empty_figure(chart)
    if plot.is_3d:
        logger.debug("3D pie requested, drawing flat pie")

    items, values, colors, offsets = zip(*slices)
    labels = plot.labels()
    text = dict(
        textinfo=TEXT_INFO[labels.content] if labels.enabled else "none",
        textposition="inside",
        insidetextfont=font_dict(labels.font, labels.text_color, chart.theme.font_family),
    )
    if labels.enabled and labels.content == "value":
        total = float(sum(values))
        text.update(
            textinfo="text",
            text=[labels.format(item, value, total) for item, value in zip(items, values)],
        )

    fig = go.Figure(go.Pie(
        labels=[str(item) for item in items],
        values=list(values),
        sort=False,
        direction="clockwise",
        rotation=plot.start_angle,
        hole=plot.pie_hole,
        pull=list(offsets),
        marker=dict(colors=list(colors), line=dict(color=plot.section_outline_color, width=1)),
        **text,
    ))
    if labels.enabled and labels.background_color:
        logger.debug("Pie label backgrounds are not drawn by plotly")
    return apply_layout(chart, fig)
