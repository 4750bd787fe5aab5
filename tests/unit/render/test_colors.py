"""Unit tests for color strategy."""

import pytest
from pydantic import ValidationError

from chartweave.render.colors import ColorStrategy, DataColors, StyleConstants, color_strategy


class TestColorStrategy:
    """Test ColorStrategy class."""

    def test_palette(self) -> None:
        """Test the default palette is the qualitative palette."""
        strategy = ColorStrategy()
        assert strategy.palette() == DataColors().QUAL_10
        assert len(strategy.palette()) == 10

    def test_series_colors_cycle(self) -> None:
        """Test colors wrap around when there are more series than colors."""
        palette = ("#111111", "#222222")
        colors = color_strategy.series_colors(5, palette)
        assert colors == ["#111111", "#222222", "#111111", "#222222", "#111111"]

    def test_series_colors_default_palette(self) -> None:
        """Test the qualitative palette is used without an explicit palette."""
        assert color_strategy.series_colors(3) == list(DataColors().QUAL_10[:3])

    def test_series_colors_empty(self) -> None:
        """Test zero series get no colors."""
        assert color_strategy.series_colors(0) == []


class TestStyleConstants:
    """Test StyleConstants model."""

    def test_defaults(self) -> None:
        """Test default style values."""
        style = StyleConstants()
        assert style.LINE_WIDTH_DEFAULT == 2.0
        assert 0 < style.AREA_FILL_OPACITY < style.BAR_FILL_OPACITY <= 1

    def test_frozen(self) -> None:
        """Test style constants cannot be reassigned."""
        style = StyleConstants()
        with pytest.raises(ValidationError):
            style.BAR_FILL_OPACITY = 0.5
