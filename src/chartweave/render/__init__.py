"""Scales, axes, colors and Altair spec helpers used by chart widgets."""

from chartweave.render.colors import ColorStrategy, color_strategy
from chartweave.render.scales import Axis, LinearScale

__all__ = [
    "Axis",
    "ColorStrategy",
    "LinearScale",
    "color_strategy",
]
