"""
Engine-neutral plot state: axes, render styles, xy and pie plots.
"""
from .axis import ChartAxis, ChartFormat, XyAxes, default_pattern
from .render import RenderKind, XyRender
from .xy import XyOrient, XyPlot
from .pie import PieLabels, PiePlot, PieSection

__all__ = [
    "ChartAxis",
    "ChartFormat",
    "XyAxes",
    "default_pattern",
    "RenderKind",
    "XyRender",
    "XyOrient",
    "XyPlot",
    "PieLabels",
    "PiePlot",
    "PieSection",
]
