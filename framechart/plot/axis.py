"""
Axis configuration for xy plots.

Format patterns are strftime patterns for time based domains and Python
format specs (also valid d3 formats, e.g. ``",.2f"``) for numbers.
"""
from typing import Any, Dict, Literal, Optional, Tuple

from ..errors import ChartError
from ..style import AXIS_LABEL_FONT, TICK_FONT, ChartLabel, ChartTextStyle
from ..types import DomainType, is_categorical

AxisScale = Literal["linear", "log", "date"]

DATE_PATTERN = "%d-%b-%Y"
DATETIME_PATTERN = "%d-%b-%Y %H:%M"
TIME_PATTERN = "%H:%M"

_DEFAULT_PATTERNS = {
    DomainType.DATE: DATE_PATTERN,
    DomainType.DATETIME: DATETIME_PATTERN,
    DomainType.TIME: TIME_PATTERN,
}


def default_pattern(domain_type: Optional[DomainType]) -> Optional[str]:
    """Tick format used when none is set; None lets the engine decide."""
    return _DEFAULT_PATTERNS.get(domain_type)


class ChartFormat:
    """Tick label format of an axis."""

    def __init__(self):
        self.pattern: Optional[str] = None

    def with_pattern(self, pattern: Optional[str]) -> "ChartFormat":
        self.pattern = pattern
        return self


class ChartAxis:
    """
    Label, tick format, scale and range of one axis.

    Examples:
        >>> axis = ChartAxis()
        >>> axis.label.with_text("Price")
        >>> axis.as_log_scale().with_range(1, 1000)
    """

    def __init__(self):
        self.label = ChartLabel(font=AXIS_LABEL_FONT)
        self.format = ChartFormat()
        self.ticks = ChartTextStyle(font=TICK_FONT)
        self.scale: AxisScale = "linear"
        self.range: Optional[Tuple[Any, Any]] = None

    def as_log_scale(self) -> "ChartAxis":
        self.scale = "log"
        return self

    def as_linear_scale(self) -> "ChartAxis":
        self.scale = "linear"
        return self

    def as_date_scale(self) -> "ChartAxis":
        self.scale = "date"
        if self.format.pattern is None:
            self.format.with_pattern(DATE_PATTERN)
        return self

    def with_range(self, lower: Any, upper: Any) -> "ChartAxis":
        """
        Fix the visible range of the axis.

        Raises:
            ValueError: If lower is not below upper
        """
        if lower is None or upper is None:
            raise ValueError("Axis range bounds cannot be None")
        if not lower < upper:
            raise ValueError(f"Axis range lower bound must be < upper bound, got ({lower}, {upper})")
        self.range = (lower, upper)
        return self

    @property
    def is_log(self) -> bool:
        return self.scale == "log"

    def pattern_for(self, domain_type: Optional[DomainType]) -> Optional[str]:
        return self.format.pattern or default_pattern(domain_type)

    def check_compatible(self, domain_type: Optional[DomainType]) -> None:
        """Raise if the scale cannot be applied to values of ``domain_type``."""
        if self.scale != "linear" and is_categorical(domain_type):
            raise ChartError(f"A {self.scale} scale cannot be used with a {domain_type.value} axis")


class XyAxes:
    """The domain axis plus range axes created on first access."""

    def __init__(self):
        self._domain = ChartAxis()
        self._ranges: Dict[int, ChartAxis] = {0: ChartAxis()}

    def domain(self) -> ChartAxis:
        return self._domain

    def range(self, index: int) -> ChartAxis:
        if index < 0:
            raise ValueError(f"Range axis index must be >= 0, got {index}")
        axis = self._ranges.get(index)
        if axis is None:
            axis = ChartAxis()
            self._ranges[index] = axis
        return axis

    @property
    def range_axis_count(self) -> int:
        return max(self._ranges) + 1
