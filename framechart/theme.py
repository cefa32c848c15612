"""
Theme definitions for consistent chart styling across both engines.

Provides predefined color schemes for light and dark modes. Colors are plain
hex strings so they can be handed to matplotlib and plotly alike; grid
transparency is carried separately as an alpha value.
"""
from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class ChartTheme:
    """
    Immutable color and style theme for charts.

    Attributes:
        bg_color: Plot area background color
        paper_color: Figure background color
        grid_color: Grid line color
        grid_alpha: Grid line opacity (0..1)
        axis_color: Axis line and tick color
        font_color: Text color
        font_family: Font stack
    """

    # Background colors
    bg_color: str
    paper_color: str

    # Grid and axes
    grid_color: str
    grid_alpha: float
    axis_color: str

    # Text
    font_color: str
    font_family: str = "Arial, Helvetica, sans-serif"

    def __post_init__(self):
        """Validate theme values."""
        if not 0.0 <= self.grid_alpha <= 1.0:
            raise ValueError(f"grid_alpha must be within [0, 1], got {self.grid_alpha}")


# Predefined theme: Light mode (default)
LIGHT_THEME = ChartTheme(
    bg_color="#ffffff",
    paper_color="#ffffff",
    grid_color="#000000",
    grid_alpha=0.12,
    axis_color="#666666",
    font_color="#333333",
)


# Predefined theme: Dark mode
DARK_THEME = ChartTheme(
    bg_color="#1a1a1a",
    paper_color="#2b2b2b",
    grid_color="#ffffff",
    grid_alpha=0.08,
    axis_color="#888888",
    font_color="#e0e0e0",
)


def get_default_theme(mode: Literal["light", "dark"] = "light") -> ChartTheme:
    """
    Get the default theme for the specified mode.

    Args:
        mode: Theme mode ("light" or "dark")

    Returns:
        ChartTheme instance

    Raises:
        ValueError: If mode is not "light" or "dark"

    Examples:
        >>> theme = get_default_theme("dark")
        >>> theme.bg_color
        '#1a1a1a'
    """
    if mode == "dark":
        return DARK_THEME
    elif mode == "light":
        return LIGHT_THEME
    else:
        raise ValueError(f"Invalid theme mode: {mode}. Must be 'light' or 'dark'")
