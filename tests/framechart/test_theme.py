"""
Unit tests for chart themes, colors and presentation value objects.
"""
import pytest

from framechart.colors import (
    CIE_PALETTE,
    DEFAULT_PALETTE,
    KELLY_PALETTE,
    ColorModel,
    from_hex,
    rgba,
    to_hex,
)
from framechart.style import ChartLabel, ChartOptions, ChartShape, Font, SeriesStyle, ShapeProvider
from framechart.theme import DARK_THEME, LIGHT_THEME, ChartTheme, get_default_theme


class TestChartTheme:
    """Tests for ChartTheme dataclass."""

    def test_theme_immutability(self):
        """Test that themes are immutable."""
        with pytest.raises(Exception):  # FrozenInstanceError
            DARK_THEME.bg_color = "#000000"  # type: ignore

    def test_predefined_themes(self):
        """Test light and dark backgrounds."""
        assert LIGHT_THEME.bg_color == "#ffffff"
        assert DARK_THEME.bg_color == "#1a1a1a"
        assert DARK_THEME.font_color == "#e0e0e0"

    def test_get_default_theme(self):
        """Test lookup by mode."""
        assert get_default_theme() is LIGHT_THEME
        assert get_default_theme("dark") is DARK_THEME

        with pytest.raises(ValueError, match="Invalid theme mode"):
            get_default_theme("sepia")  # type: ignore

    def test_grid_alpha_validation(self):
        """Test grid alpha outside [0, 1] is rejected."""
        with pytest.raises(ValueError, match="grid_alpha"):
            ChartTheme("#fff", "#fff", "#000", 1.5, "#666", "#333")


class TestColors:
    """Tests for hex helpers and color models."""

    def test_hex_round_trip(self):
        """Test hex formatting and parsing agree."""
        assert to_hex((230, 25, 75)) == "#e6194b"
        assert from_hex("#e6194b") == (230, 25, 75)
        assert from_hex("0xE6194B") == (230, 25, 75)

    def test_invalid_hex(self):
        """Test malformed colors are rejected."""
        with pytest.raises(ValueError, match="Invalid hex color"):
            from_hex("#fff")

    def test_rgba(self):
        """Test CSS rgba conversion."""
        assert rgba("#ff0000", 0.5) == "rgba(255, 0, 0, 0.5)"

    def test_palette_sizes(self):
        """Test palette lengths and first colors."""
        assert len(DEFAULT_PALETTE) == 29
        assert len(KELLY_PALETTE) == 20
        assert len(CIE_PALETTE) == 48
        assert DEFAULT_PALETTE[0] == "#e6194b"

    def test_colors_are_stable_per_key(self):
        """Test a key keeps its color and new keys get the next one."""
        model = ColorModel.create("default")

        assert model.get_color("A") == DEFAULT_PALETTE[0]
        assert model.get_color("B") == DEFAULT_PALETTE[1]
        assert model.get_color("A") == DEFAULT_PALETTE[0]

    def test_palette_wraps_around(self):
        """Test keys beyond the palette size reuse colors from the start."""
        model = ColorModel.create("kelly")
        colors = [model.get_color(i) for i in range(len(KELLY_PALETTE) + 1)]

        assert colors[-1] == KELLY_PALETTE[0]

    def test_put_and_reset(self):
        """Test pinned colors and reset restarting the palette."""
        model = ColorModel.create("cie")
        model.put("A", "#123456")
        model.get_color("B")

        assert model.get_color("A") == "#123456"

        model.reset()
        assert model.get_color("C") == CIE_PALETTE[0]

    def test_golden_ratio_model(self):
        """Test generated colors are distinct hex strings and repeat after reset."""
        model = ColorModel.create("golden")
        colors = [model.get_color(i) for i in range(10)]

        assert len(set(colors)) == 10
        assert all(c.startswith("#") and len(c) == 7 for c in colors)

        model.reset()
        assert model.get_color("x") == colors[0]

    def test_unknown_model(self):
        """Test unknown model names are rejected."""
        with pytest.raises(ValueError, match="Unknown color model"):
            ColorModel.create("rainbow")

    def test_base_model_is_abstract(self):
        """Test the base model cannot hand out colors itself."""
        with pytest.raises(TypeError):
            ColorModel()


class TestStyle:
    """Tests for fonts, labels, series styles and options."""

    def test_font(self):
        """Test font weight and style strings."""
        font = Font("Arial", 14, bold=True, italic=True)

        assert font.weight == "bold"
        assert font.style == "italic"

        with pytest.raises(ValueError):
            Font("Arial", 0)

    def test_label_text(self):
        """Test label truthiness follows its text."""
        label = ChartLabel()
        assert not label

        label.with_text("Prices")
        assert label
        assert label.text == "Prices"

    def test_series_style_point_shape_shows_points(self):
        """Test setting a shape also turns points on."""
        style = SeriesStyle().with_point_shape(ChartShape.DIAMOND)

        assert style.point_shape == ChartShape.DIAMOND
        assert style.points_visible is True

    def test_series_style_negative_width(self):
        """Test negative line widths are rejected."""
        with pytest.raises(ValueError, match="Line width"):
            SeriesStyle().with_line_width(-1)

    def test_shape_provider_cycles(self):
        """Test keys get shapes in order and keep them."""
        provider = ShapeProvider()
        shapes = [provider.shape_for(i) for i in range(len(ChartShape) + 1)]

        assert shapes[0] == ChartShape.CIRCLE
        assert shapes[-1] == ChartShape.CIRCLE
        assert provider.shape_for(1) == shapes[1]

    def test_options_validation(self):
        """Test size bounds and copy-on-write helpers."""
        options = ChartOptions()
        resized = options.with_preferred_size(400, 300)

        assert (options.width, options.height) == (800, 500)
        assert (resized.width, resized.height) == (400, 300)
        assert resized.with_id("c1").element_id == "c1"

        with pytest.raises(ValueError, match="width must be >= 100px"):
            ChartOptions(width=50)
        with pytest.raises(ValueError, match="height must be <= 5000px"):
            ChartOptions(height=6000)
