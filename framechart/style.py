"""
Presentation value objects shared by both rendering engines.

Fonts, labels, legends and options are engine-neutral; each engine translates
them into its own configuration when a figure is built.
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Hashable, Dict, Literal, Optional

LegendPosition = Literal["right", "left", "top", "bottom"]


@dataclass(frozen=True)
class Font:
    """
    Immutable font description.

    Attributes:
        name: Font family name
        size: Point size
        bold: Bold weight
        italic: Italic style
    """

    name: str = "Arial"
    size: float = 12
    bold: bool = False
    italic: bool = False

    def __post_init__(self):
        """Validate font values."""
        if self.size <= 0:
            raise ValueError(f"Font size must be > 0, got {self.size}")

    @property
    def weight(self) -> str:
        return "bold" if self.bold else "normal"

    @property
    def style(self) -> str:
        return "italic" if self.italic else "normal"


TITLE_FONT = Font("Arial", 16, bold=True)
SUBTITLE_FONT = Font("Arial", 14, bold=True)
AXIS_LABEL_FONT = Font("Arial", 12, bold=True)
TICK_FONT = Font("Arial", 11)


class ChartTextStyle:
    """Color and font applied to a piece of chart text."""

    def __init__(self, color: Optional[str] = None, font: Optional[Font] = None):
        self.color = color
        self.font = font

    def with_color(self, color: str) -> "ChartTextStyle":
        self.color = color
        return self

    def with_font(self, font: Font) -> "ChartTextStyle":
        self.font = font
        return self


class ChartLabel(ChartTextStyle):
    """Text plus style, used for titles and axis labels."""

    def __init__(self, text: Optional[str] = None, color: Optional[str] = None, font: Optional[Font] = None):
        super().__init__(color, font)
        self.text = text

    def with_text(self, text: Optional[str]) -> "ChartLabel":
        self.text = text
        return self

    def __bool__(self) -> bool:
        return bool(self.text)


class ChartShape(str, Enum):
    """Point marker shapes understood by both engines."""
    CIRCLE = "circle"
    SQUARE = "square"
    DIAMOND = "diamond"
    TRIANGLE_UP = "triangle_up"
    TRIANGLE_DOWN = "triangle_down"
    TRIANGLE_LEFT = "triangle_left"
    TRIANGLE_RIGHT = "triangle_right"


class ShapeProvider:
    """Assigns shapes to series keys, cycling through all shapes in order."""

    def __init__(self):
        self._shapes: Dict[Hashable, ChartShape] = {}
        self._order = list(ChartShape)

    def shape_for(self, key: Hashable) -> ChartShape:
        shape = self._shapes.get(key)
        if shape is None:
            shape = self._order[len(self._shapes) % len(self._order)]
            self._shapes[key] = shape
        return shape


class SeriesStyle:
    """
    Explicit per-series overrides. Unset attributes (None) fall back to the
    render style of the dataset that owns the series.
    """

    def __init__(self):
        self.color: Optional[str] = None
        self.dashed: Optional[bool] = None
        self.line_width: Optional[float] = None
        self.point_shape: Optional[ChartShape] = None
        self.points_visible: Optional[bool] = None

    def with_color(self, color: str) -> "SeriesStyle":
        self.color = color
        return self

    def with_dashes(self, dashed: bool) -> "SeriesStyle":
        self.dashed = dashed
        return self

    def with_line_width(self, width: float) -> "SeriesStyle":
        """A width of zero hides the line and leaves only points."""
        if width < 0:
            raise ValueError(f"Line width must be >= 0, got {width}")
        self.line_width = width
        return self

    def with_point_shape(self, shape: ChartShape) -> "SeriesStyle":
        self.point_shape = ChartShape(shape)
        self.points_visible = True
        return self

    def with_points_visible(self, visible: bool) -> "SeriesStyle":
        self.points_visible = visible
        return self


class ChartLegend:
    """Legend visibility and placement. Hidden until switched on."""

    def __init__(self):
        self.enabled = False
        self.position: LegendPosition = "right"
        self.text = ChartTextStyle(font=Font("Arial", 11))

    def on(self) -> "ChartLegend":
        self.enabled = True
        return self

    def off(self) -> "ChartLegend":
        self.enabled = False
        return self

    def right(self) -> "ChartLegend":
        self.position = "right"
        return self

    def left(self) -> "ChartLegend":
        self.position = "left"
        return self

    def top(self) -> "ChartLegend":
        self.position = "top"
        return self

    def bottom(self) -> "ChartLegend":
        self.position = "bottom"
        return self


@dataclass(frozen=True)
class ChartOptions:
    """
    Immutable sizing options for a chart.

    Attributes:
        width: Preferred width in pixels
        height: Preferred height in pixels
        element_id: Optional DOM id used when the chart is embedded in html
    """

    width: int = 800
    height: int = 500
    element_id: Optional[str] = None

    def __post_init__(self):
        """Validate configuration values."""
        for name, value in (("width", self.width), ("height", self.height)):
            if value < 100:
                raise ValueError(f"Chart {name} must be >= 100px, got {value}")
            if value > 5000:
                raise ValueError(f"Chart {name} must be <= 5000px, got {value}")

    def with_preferred_size(self, width: int, height: int) -> "ChartOptions":
        return replace(self, width=width, height=height)

    def with_id(self, element_id: str) -> "ChartOptions":
        return replace(self, element_id=element_id)
