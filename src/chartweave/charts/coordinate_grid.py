"""Charts plotted on an x/y coordinate grid."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Callable
from typing import Any

from chartweave.core import units
from chartweave.render.scales import Axis, LinearScale

from .base import MarginableChart

Padding = float | str


class CoordinateGridChart(MarginableChart):
    """Base for charts with x and y scales, axes and margins.

    Rendering prepares the x axis, then the y axis, then calls
    :meth:`plot_data`. A scale's domain is recomputed from the data extents
    when the scale is unset or the matching ``elastic`` flag is on.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:  # noqa: ANN401
        super().__init__(*args, **kwargs)
        self._x: LinearScale | None = None
        self._y: LinearScale | None = None
        self._x_axis = Axis(orient="bottom")
        self._y_axis = Axis(orient="left")
        self._elastic_x = False
        self._elastic_y = False
        self._x_axis_padding: Padding = 0
        self._y_axis_padding: Padding = 0
        self._use_right_y_axis = False
        self._render_horizontal_grid_lines = False
        self._x_units: Callable[..., Any] = units.integers
        self._x_axis_label: str | None = None
        self._y_axis_label: str | None = None

    # geometry

    def x_axis_length(self) -> int:
        return self.effective_width()

    def y_axis_height(self) -> int:
        return self.effective_height()

    # scales and axes

    def x(self) -> LinearScale | None:
        return self._x

    def set_x(self, scale: LinearScale | None) -> CoordinateGridChart:
        self._x = scale
        return self

    def y(self) -> LinearScale | None:
        return self._y

    def set_y(self, scale: LinearScale | None) -> CoordinateGridChart:
        self._y = scale
        return self

    def x_axis(self) -> Axis:
        return self._x_axis

    def set_x_axis(self, axis: Axis) -> CoordinateGridChart:
        self._x_axis = axis
        return self

    def y_axis(self) -> Axis:
        return self._y_axis

    def set_y_axis(self, axis: Axis) -> CoordinateGridChart:
        self._y_axis = axis
        return self

    def x_axis_label(self) -> str | None:
        return self._x_axis_label

    def set_x_axis_label(self, label: str | None) -> CoordinateGridChart:
        self._x_axis_label = label
        return self

    def y_axis_label(self) -> str | None:
        return self._y_axis_label

    def set_y_axis_label(self, label: str | None) -> CoordinateGridChart:
        self._y_axis_label = label
        return self

    def elastic_x(self) -> bool:
        return self._elastic_x

    def set_elastic_x(self, elastic: bool) -> CoordinateGridChart:
        self._elastic_x = elastic
        return self

    def elastic_y(self) -> bool:
        return self._elastic_y

    def set_elastic_y(self, elastic: bool) -> CoordinateGridChart:
        self._elastic_y = elastic
        return self

    def x_axis_padding(self) -> Padding:
        return self._x_axis_padding

    def set_x_axis_padding(self, padding: Padding) -> CoordinateGridChart:
        self._x_axis_padding = padding
        return self

    def y_axis_padding(self) -> Padding:
        return self._y_axis_padding

    def set_y_axis_padding(self, padding: Padding) -> CoordinateGridChart:
        self._y_axis_padding = padding
        return self

    def use_right_y_axis(self) -> bool:
        return self._use_right_y_axis

    def set_use_right_y_axis(self, use_right: bool) -> CoordinateGridChart:
        self._use_right_y_axis = use_right
        self._y_axis.orient = "right" if use_right else "left"
        return self

    def render_horizontal_grid_lines(self) -> bool:
        return self._render_horizontal_grid_lines

    def set_render_horizontal_grid_lines(self, render: bool) -> CoordinateGridChart:
        self._render_horizontal_grid_lines = render
        return self

    def x_units(self) -> Callable[..., Any]:
        return self._x_units

    def set_x_units(self, counter: Callable[..., Any]) -> CoordinateGridChart:
        self._x_units = counter
        return self

    def is_ordinal(self) -> bool:
        return self._x_units is units.ordinal

    def x_unit_count(self) -> Any:  # noqa: ANN401
        """Number of x units in the current x domain."""
        if self.is_ordinal():
            return len(self.data())
        if self._x is None or self._x.domain() is None:
            return 0
        low, high = self._x.domain()
        return self._x_units(low, high)

    # extents

    @abstractmethod
    def x_axis_min(self) -> Any: ...  # noqa: ANN401

    @abstractmethod
    def x_axis_max(self) -> Any: ...  # noqa: ANN401

    @abstractmethod
    def y_axis_min(self) -> Any: ...  # noqa: ANN401

    @abstractmethod
    def y_axis_max(self) -> Any: ...  # noqa: ANN401

    # rendering

    def _prepare_x_axis(self) -> None:
        if self._x is None or self._elastic_x:
            if self._x is None:
                self._x = LinearScale()
            self._x.set_domain((self.x_axis_min(), self.x_axis_max()))
        self._x.set_range((0, self.x_axis_length()))
        self._x_axis.with_scale(self._x)

    def _prepare_y_axis(self) -> None:
        if self._y is None or self._elastic_y:
            if self._y is None:
                self._y = LinearScale()
            self._y.set_domain((self.y_axis_min(), self.y_axis_max()))
        self._y.set_range((self.y_axis_height(), 0))
        self._y_axis.with_scale(self._y)

    def _do_render(self) -> Any:  # noqa: ANN401
        self._prepare_x_axis()
        self._prepare_y_axis()
        self.logger.debug(
            "Axes prepared",
            chart=self.name(),
            x_domain=self._x.domain() if self._x is not None else None,
            y_domain=self._y.domain() if self._y is not None else None,
        )
        return self.plot_data()

    @abstractmethod
    def plot_data(self) -> Any:  # noqa: ANN401
        """Build the chart's plot against the prepared scales."""
