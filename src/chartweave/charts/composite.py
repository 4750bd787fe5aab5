"""Composite chart: several coordinate grid charts plotted on shared axes."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, ClassVar

import altair as alt

from chartweave.core import units
from chartweave.core.enums import ChartEvent
from chartweave.core.errors import UnsupportedOperationError
from chartweave.core.models import YAxisRanges
from chartweave.render.scales import Axis, LinearScale

from .coordinate_grid import CoordinateGridChart
from .protocols import ComposableChart

DEFAULT_RIGHT_Y_AXIS_LABEL_PADDING = 12
DEFAULT_COMPOSITE_TRANSITION_DURATION = 500


def align_y_axis_ranges(left_min: float, left_max: float, right_min: float, right_max: float) -> YAxisRanges:
    """Widen both y domains so zero sits at the same height on each axis.

    Each side becomes a multiple of the other with
    ``ratio = right_span / left_span``, so neither series is rescaled; only the
    domains grow. Ranges are returned unchanged when either one is empty or
    does not contain zero, since there is no zero line to align.

    Args:
        left_min: Minimum of the left axis domain
        left_max: Maximum of the left axis domain
        right_min: Minimum of the right axis domain
        right_max: Maximum of the right axis domain

    Returns:
        The aligned ranges
    """
    left_span, right_span = left_max - left_min, right_max - right_min
    spans_zero = left_min <= 0 <= left_max and right_min <= 0 <= right_max
    if not left_span or not right_span or not spans_zero:
        return YAxisRanges(left_min=left_min, left_max=left_max, right_min=right_min, right_max=right_max)

    ratio = right_span / left_span
    return YAxisRanges(
        left_min=min(left_min, right_min / ratio),
        left_max=max(left_max, right_max / ratio),
        right_min=min(right_min, left_min * ratio),
        right_max=max(right_max, left_max * ratio),
    )


class CompositeChart(CoordinateGridChart):
    """Parent chart hosting child grid charts on one coordinate system.

    The parent owns its children: composing removes them from the chart
    registry, so they are only rendered through the parent. Geometry and
    title are pushed down on compose; dimension, group, timing and the x/y
    scales are pushed down on every render. The parent has no y extent of its
    own; the left and right y domains are aggregated from the children
    assigned to each side.
    """

    MANDATORY_ATTRIBUTES: ClassVar[tuple[str, ...]] = ()

    def __init__(self, *args: Any, **kwargs: Any) -> None:  # noqa: ANN401
        super().__init__(*args, **kwargs)
        self._children: list[ComposableChart] = []
        self._child_options: dict[str, Any] = {}
        self._share_colors = False
        self._share_title = True
        self._align_y_axes = False
        self._use_right_axis_grid_lines = False

        self._right_y: LinearScale | None = None
        self._right_y_axis = Axis(orient="right")
        self._right_y_axis_label: str | None = None
        self._right_y_axis_label_padding = DEFAULT_RIGHT_Y_AXIS_LABEL_PADDING

        self.set_transition_duration(DEFAULT_COMPOSITE_TRANSITION_DURATION, 0)
        self.on(ChartEvent.FILTERED, self._propagate_filters)

    # children

    def compose(self, children: Sequence[ComposableChart]) -> CompositeChart:
        """Replace the child charts.

        Args:
            children: Grid charts to plot on this chart's axes, in drawing order
        """
        for child in self._children:
            if child not in children:
                child.detach()

        self._children = list(children)
        for child in self._children:
            child.attach_to(self)
            child.set_height(self.height())
            child.set_width(self.width())
            child.set_margins(self.margins())
            if self._share_title:
                child.set_title(self.title())
            child.options(self._child_options)

        self.logger.debug("Children composed", chart=self.name(), children=len(self._children))
        return self

    def children(self) -> list[ComposableChart]:
        return list(self._children)

    def child_options(self) -> dict[str, Any]:
        return dict(self._child_options)

    def set_child_options(self, bag: Mapping[str, Any]) -> CompositeChart:
        """Set the option bag applied to every child, now and on compose."""
        self._child_options = dict(bag)
        for child in self._children:
            child.options(self._child_options)
        return self

    def _left_children(self) -> list[ComposableChart]:
        return [child for child in self._children if not child.use_right_y_axis()]

    def _right_children(self) -> list[ComposableChart]:
        return [child for child in self._children if child.use_right_y_axis()]

    def _propagate_filters(self, _chart: Any) -> None:  # noqa: ANN401
        # children get the whole set, never an incremental add
        for child in self._children:
            child.replace_filter(self.filters())

    # flags

    def share_colors(self) -> bool:
        return self._share_colors

    def set_share_colors(self, share: bool) -> CompositeChart:
        self._share_colors = share
        return self

    def share_title(self) -> bool:
        return self._share_title

    def set_share_title(self, share: bool) -> CompositeChart:
        self._share_title = share
        return self

    def align_y_axes(self) -> bool:
        return self._align_y_axes

    def set_align_y_axes(self, align: bool) -> CompositeChart:
        self._align_y_axes = align
        return self

    def use_right_axis_grid_lines(self) -> bool:
        return self._use_right_axis_grid_lines

    def set_use_right_axis_grid_lines(self, use_right: bool) -> CompositeChart:
        self._use_right_axis_grid_lines = use_right
        return self

    # right axis

    def right_y(self) -> LinearScale | None:
        return self._right_y

    def set_right_y(self, scale: LinearScale | None) -> CompositeChart:
        self._right_y = scale
        return self

    def right_y_axis(self) -> Axis:
        return self._right_y_axis

    def set_right_y_axis(self, axis: Axis) -> CompositeChart:
        self._right_y_axis = axis
        return self

    def right_y_axis_label(self) -> str | None:
        return self._right_y_axis_label

    def set_right_y_axis_label(
        self, label: str | None, padding: int = DEFAULT_RIGHT_Y_AXIS_LABEL_PADDING
    ) -> CompositeChart:
        """Set the right axis label, moving the right margin by the padding change."""
        self._right_y_axis_label = label
        right = self.margins().right - self._right_y_axis_label_padding + padding
        self._right_y_axis_label_padding = padding
        self.set_margins({"right": right})
        return self

    # extents

    def y_axis_min(self) -> Any:  # noqa: ANN401
        raise UnsupportedOperationError(
            "y_axis_min", "CompositeChart", hint="Query the children or y_axis_ranges() instead"
        )

    def y_axis_max(self) -> Any:  # noqa: ANN401
        raise UnsupportedOperationError(
            "y_axis_max", "CompositeChart", hint="Query the children or y_axis_ranges() instead"
        )

    def _side_min(self, children: list[ComposableChart]) -> Any:  # noqa: ANN401
        return min(child.y_axis_min() for child in children)

    def _side_max(self, children: list[ComposableChart]) -> Any:  # noqa: ANN401
        return units.add(max(child.y_axis_max() for child in children), self._y_axis_padding)

    def y_axis_ranges(self) -> YAxisRanges:
        """Left and right y domains aggregated from the children on each side.

        A side without children has no range. With ``align_y_axes`` on and
        both sides populated, the ranges are aligned on zero.
        """
        left, right = self._left_children(), self._right_children()
        ranges = YAxisRanges()
        if left:
            ranges.left_min, ranges.left_max = self._side_min(left), self._side_max(left)
        if right:
            ranges.right_min, ranges.right_max = self._side_min(right), self._side_max(right)

        if self._align_y_axes and left and right:
            return align_y_axis_ranges(ranges.left_min, ranges.left_max, ranges.right_min, ranges.right_max)
        return ranges

    def x_axis_min(self) -> Any:  # noqa: ANN401
        lows = [child.x_axis_min() for child in self._children]
        if not lows:
            return 0
        return units.subtract(min(lows), self._x_axis_padding)

    def x_axis_max(self) -> Any:  # noqa: ANN401
        highs = [child.x_axis_max() for child in self._children]
        if not highs:
            return 0
        return units.add(max(highs), self._x_axis_padding)

    def grid_line_axis(self) -> str | None:
        """Side whose scale horizontal grid lines follow, if any child is plotted."""
        if self._left_children() and not self._use_right_axis_grid_lines:
            return "left"
        if self._right_children():
            return "right"
        return None

    # rendering

    def _prepare_children(self) -> None:
        for child in self._children:
            if child.dimension() is None:
                child.set_dimension(self.dimension())
            if child.group() is None:
                child.set_group(self.group(), self.group_name())
            child.set_chart_group(self.chart_group())
            child.set_x_units(self.x_units())
            child.set_transition_duration(self.transition_duration(), self.transition_delay())
            child.set_render_title(self.render_title())
            child.set_elastic_x(self.elastic_x())

    def _prepare_y_axis(self) -> None:
        ranges = self.y_axis_ranges()
        if ranges.has_left():
            self._y = self._prepare_side(self._y, (ranges.left_min, ranges.left_max))
            self._y_axis.with_scale(self._y)
        if ranges.has_right():
            self._right_y = self._prepare_side(self._right_y, (ranges.right_min, ranges.right_max))
            self._right_y_axis.with_scale(self._right_y)

    def _prepare_side(self, scale: LinearScale | None, domain: tuple[float, float]) -> LinearScale:
        if scale is None or self._elastic_y:
            scale = scale or LinearScale()
            scale.set_domain(domain)
        scale.set_range((self.y_axis_height(), 0))
        return scale

    def _do_render(self) -> Any:  # noqa: ANN401
        self._prepare_children()
        return super()._do_render()

    def plot_data(self) -> alt.LayerChart:
        """Plot every child against the shared scales and layer the results.

        Returns:
            Altair layer chart; y scales are independent when a right axis is used
        """
        grid_side = self.grid_line_axis() if self._render_horizontal_grid_lines else None
        specs = []
        for child in self._children:
            if self._share_colors:
                child.set_colors(self.colors())
            child.set_x(self._x)
            child.set_x_axis(self._x_axis)
            side = "right" if child.use_right_y_axis() else "left"
            if side == "right":
                child.set_y(self._right_y)
                child.set_y_axis(self._right_y_axis)
            else:
                child.set_y(self._y)
                child.set_y_axis(self._y_axis)
            child.set_render_horizontal_grid_lines(side == grid_side)

            specs.append(child.plot_data())
            child.activate_renderlets()

        layered = alt.layer(*specs)
        if self._right_children():
            layered = layered.resolve_scale(y="independent")
        return layered.properties(width=self.x_axis_length(), height=self.y_axis_height())

    # legend

    def legendables(self) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        for child in self._children:
            if self._share_colors:
                child.set_colors(self.colors())
            items.extend(child.legendables())
        return items

    def legend_highlight(self, item: dict[str, Any]) -> None:
        for child in self._children:
            child.legend_highlight(item)

    def legend_reset(self, item: dict[str, Any]) -> None:
        for child in self._children:
            child.legend_reset(item)

    def legend_toggle(self, item: dict[str, Any]) -> None:
        self.logger.warning("Composite chart should not receive legend_toggle itself", chart=self.name())
