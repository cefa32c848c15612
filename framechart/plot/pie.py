"""
PiePlot: engine-neutral state of a pie chart.
"""
from typing import Any, Dict, Hashable, List, Literal, Optional, Tuple

from ..colors import ColorModel
from ..data.pie import PieModel
from ..style import Font

LabelContent = Literal["name", "value", "percent"]


class PieLabels:
    """Section labels; percentages in white Arial 12 unless changed."""

    def __init__(self):
        self.enabled = True
        self.content: LabelContent = "percent"
        self.font = Font("Arial", 12)
        self.text_color = "#ffffff"
        self.background_color: Optional[str] = None

    def on(self) -> "PieLabels":
        self.enabled = True
        return self

    def off(self) -> "PieLabels":
        self.enabled = False
        return self

    def with_name(self) -> "PieLabels":
        self.content = "name"
        return self

    def with_value(self) -> "PieLabels":
        self.content = "value"
        return self

    def with_percent(self) -> "PieLabels":
        self.content = "percent"
        return self

    def with_font(self, font: Font) -> "PieLabels":
        self.font = font
        return self

    def with_text_color(self, color: str) -> "PieLabels":
        self.text_color = color
        return self

    def with_background_color(self, color: Optional[str]) -> "PieLabels":
        self.background_color = color
        return self

    def format(self, name: Any, value: float, total: float) -> str:
        """Label text for one section."""
        if self.content == "name":
            return str(name)
        if self.content == "value":
            return f"{value:,.2f}".rstrip("0").rstrip(".")
        return f"{100.0 * value / total:.1f}%" if total else ""


class PieSection:
    """Color and explode offset of one pie section."""

    def __init__(self):
        self.color: Optional[str] = None
        self.offset = 0.0

    def with_color(self, color: str) -> "PieSection":
        self.color = color
        return self

    def with_offset(self, offset: float) -> "PieSection":
        """Pull the section out of the pie by a fraction of the radius."""
        if not 0.0 <= offset <= 1.0:
            raise ValueError(f"Section offset must be within [0, 1], got {offset}")
        self.offset = offset
        return self


class PiePlot:
    """
    State shared by pie charts of both engines.

    Args:
        is_3d: Draw with depth shading where the engine supports it
    """

    def __init__(self, is_3d: bool = False):
        self.is_3d = is_3d
        self.start_angle = 0.0
        self.pie_hole = 0.0
        self.section_outline_color = "#ffffff"
        self._model = PieModel()
        self._labels = PieLabels()
        self._sections: Dict[Hashable, PieSection] = {}
        self._color_model = ColorModel.create("default")

    def data(self) -> PieModel:
        return self._model

    def labels(self) -> PieLabels:
        return self._labels

    def section(self, item: Hashable) -> PieSection:
        section = self._sections.get(item)
        if section is None:
            section = PieSection()
            self._sections[item] = section
        return section

    def with_start_angle(self, degrees: float) -> "PiePlot":
        """Angle of the first section, clockwise from 12 o'clock."""
        self.start_angle = float(degrees) % 360.0
        return self

    def with_pie_hole(self, fraction: float) -> "PiePlot":
        """Turn the pie into a donut; the hole is a fraction of the radius."""
        if not 0.0 <= fraction < 1.0:
            raise ValueError(f"Pie hole must be within [0, 1), got {fraction}")
        self.pie_hole = fraction
        return self

    def with_section_outline_color(self, color: str) -> "PiePlot":
        self.section_outline_color = color
        return self

    def with_color_model(self, color_model: ColorModel) -> "PiePlot":
        self._color_model = color_model
        return self

    def section_color(self, item: Hashable) -> str:
        section = self._sections.get(item)
        if section is not None and section.color is not None:
            return section.color
        return self._color_model.get_color(item)

    def section_offset(self, item: Hashable) -> float:
        section = self._sections.get(item)
        return section.offset if section is not None else 0.0

    def slices(self) -> List[Tuple[Any, float, str, float]]:
        """(item, value, color, offset) for every drawn section."""
        return [
            (item, value, self.section_color(item), self.section_offset(item))
            for item, value in self._model.visible_items()
        ]
