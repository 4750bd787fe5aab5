"""Color and style definitions shared by chartweave widgets."""

from pydantic import BaseModel, ConfigDict


class DataColors(BaseModel):
    """Colors for data representation."""

    model_config = ConfigDict(frozen=True)

    QUAL_10: tuple[str, ...] = (
        "#08192D",  # Blue
        "#2EA9DF",  # Teal
        "#2D6D4B",  # Green
        "#F7C242",  # Yellow
        "#F75C2F",  # Orange
        "#D0104C",  # Red
        "#6F3381",  # Purple
        "#E03C8A",  # Pink
        "#9C755F",  # Brown
        "#BAB0AC",  # Gray
    )


class StyleConstants(BaseModel):
    """Constants for visual styling (widths, opacity)."""

    model_config = ConfigDict(frozen=True)

    LINE_WIDTH_DEFAULT: float = 2.0
    AREA_FILL_OPACITY: float = 0.25
    BAR_FILL_OPACITY: float = 0.9


class ColorStrategy:
    """Assigns colors to series, layers and slices."""

    def __init__(self) -> None:
        """Initialize color strategy with default palettes."""
        self.data = DataColors()
        self.style = StyleConstants()

    def palette(self) -> tuple[str, ...]:
        return self.data.QUAL_10

    def series_colors(self, series_count: int, palette: tuple[str, ...] | None = None) -> list[str]:
        """Colors for ``series_count`` series, cycling through the palette.

        Args:
            series_count: Number of series/layers/slices to color
            palette: Palette to draw from; defaults to the qualitative palette

        Returns:
            List of hex colors, one per series
        """
        colors = palette or self.data.QUAL_10
        return [colors[i % len(colors)] for i in range(series_count)]


# Global instance for easy access
color_strategy = ColorStrategy()
