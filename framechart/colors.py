"""
Color models that assign a stable color to each series or pie section key.

A model hands out colors from a palette in the order keys are first seen and
remembers the assignment, so the same key keeps its color across redraws.
"""
import colorsys
from abc import ABC, abstractmethod
from typing import Dict, Hashable, Sequence, Tuple

RGB = Tuple[int, int, int]


def to_hex(rgb: RGB) -> str:
    """
    Format an RGB triple as a lowercase hex color.

    Examples:
        >>> to_hex((230, 25, 75))
        '#e6194b'
    """
    r, g, b = rgb
    return "#%02x%02x%02x" % (r, g, b)


def from_hex(color: str) -> RGB:
    """Parse ``#rrggbb`` (or ``0xRRGGBB``) into an RGB triple."""
    value = color.strip()
    if value.lower().startswith("0x"):
        value = value[2:]
    value = value.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Invalid hex color: {color!r}")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def rgba(color: str, alpha: float) -> str:
    """Convert a hex color plus alpha into a CSS ``rgba(...)`` string."""
    r, g, b = from_hex(color)
    return f"rgba({r}, {g}, {b}, {alpha})"


DEFAULT_PALETTE = tuple(to_hex(c) for c in (
    (230, 25, 75),      # red
    (60, 180, 75),      # green
    (255, 225, 25),     # yellow
    (0, 130, 200),      # blue
    (245, 130, 48),     # orange
    (145, 30, 180),     # purple
    (70, 240, 240),     # cyan
    (240, 50, 230),     # magenta
    (210, 245, 60),     # lime
    (250, 190, 190),    # pink
    (0, 128, 128),      # teal
    (230, 190, 255),    # lavender
    (170, 110, 40),     # brown
    (255, 250, 200),    # beige
    (128, 0, 0),        # maroon
    (170, 255, 195),    # mint
    (128, 128, 0),      # olive
    (255, 215, 180),    # coral
    (0, 0, 200),        # navy
    (128, 128, 128),    # grey
    (196, 68, 65),      # pale red
    (140, 188, 79),     # light green
    (122, 88, 146),     # light purple
    (29, 115, 170),     # pale blue
    (255, 200, 25),     # yellow
    (0, 154, 178),      # blue green
    (244, 133, 51),     # light orange
    (139, 170, 209),    # light blue
    (180, 56, 148),     # light purple
))

# Kelly's 20 colors of maximum contrast
KELLY_PALETTE = (
    "#ffb300", "#803e75", "#ff6800", "#a6bdd7", "#c10020",
    "#cea262", "#817066", "#007d34", "#f6768e", "#00538a",
    "#ff7a5c", "#53377a", "#ff8e00", "#b32851", "#f4c800",
    "#7f180d", "#93aa00", "#593315", "#f13a13", "#232c16",
)

# Perceptually distinct colors chosen in CIE Lab space
CIE_PALETTE = (
    "#ffff00", "#1ce6ff", "#ff34ff", "#ff4a46", "#008941", "#006fa6",
    "#a30059", "#ffdbe5", "#7a4900", "#0000a6", "#63ffac", "#b79762",
    "#004d43", "#8fb0ff", "#997d87", "#5a0007", "#809693", "#feffe6",
    "#1b4400", "#4fc601", "#3b5dff", "#4a3b53", "#ff2f80", "#61615a",
    "#ba0900", "#6b7900", "#00c2a0", "#ffaa92", "#ff90c9", "#b903aa",
    "#d16100", "#ddefff", "#000035", "#7b4f4b", "#a1c299", "#300018",
    "#0aa6d8", "#013349", "#00846f", "#372101", "#ffb500", "#c2ffed",
    "#a079bf", "#cc0744", "#c0b9b2", "#c2ff99", "#001e09", "#00489c",
)

GOLDEN_RATIO = 0.618033988749895


class ColorModel(ABC):
    """
    Base color model: remembers key to color assignments.

    Subclasses implement ``_next()`` to produce the next unassigned color.
    """

    def __init__(self):
        self._colors: Dict[Hashable, str] = {}

    @abstractmethod
    def _next(self) -> str:
        """Produce the next unassigned color."""

    def get_color(self, key: Hashable) -> str:
        """Return the color for ``key``, assigning the next one on first use."""
        color = self._colors.get(key)
        if color is None:
            color = self._next()
            self._colors[key] = color
        return color

    def put(self, key: Hashable, color: str) -> None:
        """Pin ``key`` to an explicit color."""
        self._colors[key] = color

    def reset(self) -> "ColorModel":
        """Forget all assignments; palettes restart from their first color."""
        self._colors.clear()
        return self

    @staticmethod
    def create(name: str = "default") -> "ColorModel":
        """
        Create a color model by name.

        Args:
            name: One of "default", "kelly", "cie" or "golden"

        Raises:
            ValueError: For unknown names
        """
        models = {
            "default": lambda: PaletteColorModel(DEFAULT_PALETTE),
            "kelly": lambda: PaletteColorModel(KELLY_PALETTE),
            "cie": lambda: PaletteColorModel(CIE_PALETTE),
            "golden": GoldenRatioColorModel,
        }
        factory = models.get(name.lower())
        if factory is None:
            raise ValueError(f"Unknown color model '{name}', must be one of {sorted(models)}")
        return factory()


class PaletteColorModel(ColorModel):
    """Cycles through a fixed palette."""

    def __init__(self, palette: Sequence[str]):
        super().__init__()
        if not palette:
            raise ValueError("Palette must contain at least one color")
        self._palette = tuple(palette)
        self._index = -1

    def _next(self) -> str:
        self._index = (self._index + 1) % len(self._palette)
        return self._palette[self._index]

    def reset(self) -> "ColorModel":
        self._index = -1
        return super().reset()


class GoldenRatioColorModel(ColorModel):
    """Generates evenly spread hues by stepping the golden ratio around the wheel."""

    SATURATION = 0.5
    VALUE = 0.95

    def __init__(self, start_hue: float = 0.8):
        super().__init__()
        self._start_hue = start_hue
        self._hue = start_hue

    def _next(self) -> str:
        self._hue = (self._hue + GOLDEN_RATIO) % 1.0
        r, g, b = colorsys.hsv_to_rgb(self._hue, self.SATURATION, self.VALUE)
        return to_hex((round(r * 255), round(g * 255), round(b * 255)))

    def reset(self) -> "ColorModel":
        self._hue = self._start_hue
        return super().reset()
