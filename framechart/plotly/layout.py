"""
Figure layout shared by plotly xy and pie figures: title, legend, theme colors.
"""
import html
from typing import Any, Dict, Optional

import plotly.graph_objects as go

from ..chart import Chart
from ..style import SUBTITLE_FONT, TITLE_FONT, ChartLabel, Font

LEGEND_PLACEMENT = {
    "right": dict(orientation="v", x=1.02, xanchor="left", y=0.5, yanchor="middle"),
    "left": dict(orientation="v", x=-0.12, xanchor="right", y=0.5, yanchor="middle"),
    "top": dict(orientation="h", x=0.5, xanchor="center", y=1.02, yanchor="bottom"),
    "bottom": dict(orientation="h", x=0.5, xanchor="center", y=-0.15, yanchor="top"),
}


def font_dict(font: Optional[Font], color: str, family: str) -> Dict[str, Any]:
    """Plotly font for a chart font; bold and italic go through the text markup."""
    if font is None:
        return dict(color=color, family=family)
    return dict(size=font.size, color=color, family=f"{font.name}, {family}")


def _markup(text: str, font: Optional[Font]) -> str:
    text = html.escape(text)
    if font is not None and font.bold:
        text = f"<b>{text}</b>"
    if font is not None and font.italic:
        text = f"<i>{text}</i>"
    return text


def axis_title(chart: Chart, label: ChartLabel) -> Dict[str, Any]:
    theme = chart.theme
    if not label.text:
        return dict(text="")
    return dict(
        text=_markup(label.text, label.font),
        font=font_dict(label.font, label.color or theme.font_color, theme.font_family),
    )


def _title(chart: Chart) -> Dict[str, Any]:
    theme = chart.theme
    text = _markup(chart.title.text, chart.title.font or TITLE_FONT) if chart.title.text else ""
    if chart.subtitle.text:
        subtitle = _markup(chart.subtitle.text, chart.subtitle.font or SUBTITLE_FONT)
        color = chart.subtitle.color or theme.font_color
        text = f"{text}<br><sup><span style='color:{color}'>{subtitle}</span></sup>" if text else subtitle
    return dict(
        text=text,
        x=0.5,
        xanchor="center",
        font=font_dict(chart.title.font or TITLE_FONT, chart.title.color or theme.font_color, theme.font_family),
    )


def apply_layout(chart: Chart, fig: go.Figure, **extra: Any) -> go.Figure:
    """Size, title, legend and theme colors of a chart applied to ``fig``."""
    theme = chart.theme
    legend = chart.legend
    legend_font = legend.text.font
    fig.update_layout(
        title=_title(chart),
        width=chart.options.width,
        height=chart.options.height,
        showlegend=legend.enabled,
        legend=dict(
            **LEGEND_PLACEMENT[legend.position],
            font=font_dict(legend_font, legend.text.color or theme.font_color, theme.font_family),
        ),
        plot_bgcolor=theme.bg_color,
        paper_bgcolor=theme.paper_color,
        font=dict(color=theme.font_color, family=theme.font_family),
        margin=dict(l=60, r=30, t=70 if chart.subtitle.text else 50, b=40),
        **extra,
    )
    return fig


def empty_figure(chart: Chart) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(
        text="No data available",
        showarrow=False,
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
        font=dict(color=chart.theme.font_color),
    )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    return apply_layout(chart, fig)
