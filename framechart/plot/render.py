"""
Render styles applied to all series of one dataset.
"""
from enum import Enum

DASH_PATTERN = (2.0, 6.0)
DEFAULT_DOT_SIZE = 4


class RenderKind(str, Enum):
    DOTS = "dots"
    SHAPES = "shapes"
    LINES = "lines"
    SPLINE = "spline"
    BARS = "bars"
    AREA = "area"


class XyRender:
    """
    How a dataset is drawn. Every ``with_*`` call replaces the previous style.

    Defaults to plain lines.
    """

    def __init__(self):
        self.with_lines()

    def _reset(self, kind: RenderKind) -> "XyRender":
        self.kind = kind
        self.shapes = False
        self.dashed = False
        self.stacked = False
        self.margin = 0.0
        self.dot_size = DEFAULT_DOT_SIZE
        return self

    def with_dots(self, diameter: int = DEFAULT_DOT_SIZE) -> "XyRender":
        if diameter <= 0:
            raise ValueError(f"Dot diameter must be > 0, got {diameter}")
        self._reset(RenderKind.DOTS)
        self.dot_size = diameter
        return self

    def with_shapes(self) -> "XyRender":
        self._reset(RenderKind.SHAPES)
        self.shapes = True
        return self

    def with_lines(self, shapes: bool = False, dashed: bool = False) -> "XyRender":
        self._reset(RenderKind.LINES)
        self.shapes = shapes
        self.dashed = dashed
        return self

    def with_spline(self, shapes: bool = False, dashed: bool = False) -> "XyRender":
        self._reset(RenderKind.SPLINE)
        self.shapes = shapes
        self.dashed = dashed
        return self

    def with_bars(self, stacked: bool = False, margin: float = 0.0) -> "XyRender":
        if not 0.0 <= margin < 1.0:
            raise ValueError(f"Bar margin must be within [0, 1), got {margin}")
        self._reset(RenderKind.BARS)
        self.stacked = stacked
        self.margin = margin
        return self

    def with_area(self, stacked: bool = False) -> "XyRender":
        self._reset(RenderKind.AREA)
        self.stacked = stacked
        return self

    @property
    def is_lines(self) -> bool:
        return self.kind in (RenderKind.LINES, RenderKind.SPLINE)

    @property
    def is_bars(self) -> bool:
        return self.kind == RenderKind.BARS

    @property
    def is_area(self) -> bool:
        return self.kind == RenderKind.AREA

    @property
    def is_scatter(self) -> bool:
        return self.kind in (RenderKind.DOTS, RenderKind.SHAPES)

    @property
    def has_points(self) -> bool:
        return self.is_scatter or self.shapes

    @property
    def curve(self) -> str:
        return "spline" if self.kind == RenderKind.SPLINE else "linear"

    def __repr__(self) -> str:
        return f"XyRender(kind={self.kind.value}, stacked={self.stacked}, dashed={self.dashed})"
