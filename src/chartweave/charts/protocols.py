"""Capability sets charts must satisfy to take part in coordination."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from chartweave.coordination.registry import GroupId
from chartweave.core.filters import Filter
from chartweave.core.models import Margins
from chartweave.render.scales import Axis, LinearScale


@runtime_checkable
class Chart(Protocol):
    """Minimal contract for a widget living in a chart group."""

    def filter_all(self) -> Any: ...  # noqa: ANN401

    def render(self) -> Any: ...  # noqa: ANN401

    def redraw(self) -> Any: ...  # noqa: ANN401

    def chart_group(self) -> GroupId: ...

    def set_chart_group(self, group: GroupId) -> Any: ...  # noqa: ANN401

    def filters(self) -> list[Filter]: ...

    def replace_filter(self, filters: Any) -> Any: ...  # noqa: ANN401

    def options(self, bag: Mapping[str, Any]) -> Any: ...  # noqa: ANN401


@runtime_checkable
class GridChart(Chart, Protocol):
    """A chart plotted on a coordinate grid, composable into a composite."""

    def height(self) -> int: ...

    def set_height(self, height: int) -> Any: ...  # noqa: ANN401

    def width(self) -> int: ...

    def set_width(self, width: int) -> Any: ...  # noqa: ANN401

    def margins(self) -> Margins: ...

    def set_margins(self, margins: Margins | Mapping[str, int]) -> Any: ...  # noqa: ANN401

    def x(self) -> LinearScale | None: ...

    def set_x(self, scale: LinearScale | None) -> Any: ...  # noqa: ANN401

    def y(self) -> LinearScale | None: ...

    def set_y(self, scale: LinearScale | None) -> Any: ...  # noqa: ANN401

    def x_axis(self) -> Axis: ...

    def set_x_axis(self, axis: Axis) -> Any: ...  # noqa: ANN401

    def y_axis(self) -> Axis: ...

    def set_y_axis(self, axis: Axis) -> Any: ...  # noqa: ANN401

    def use_right_y_axis(self) -> bool: ...

    def y_axis_min(self) -> Any: ...  # noqa: ANN401

    def y_axis_max(self) -> Any: ...  # noqa: ANN401

    def x_axis_min(self) -> Any: ...  # noqa: ANN401

    def x_axis_max(self) -> Any: ...  # noqa: ANN401

    def legendables(self) -> Sequence[dict[str, Any]]: ...

    def plot_data(self) -> Any: ...  # noqa: ANN401

    def legend_highlight(self, item: dict[str, Any]) -> None: ...

    def legend_reset(self, item: dict[str, Any]) -> None: ...


@runtime_checkable
class ComposableChart(GridChart, Protocol):
    """A grid chart a composite can own and push its shared state into."""

    def attach_to(self, parent: Any) -> None: ...  # noqa: ANN401

    def detach(self) -> None: ...

    def dimension(self) -> Any: ...  # noqa: ANN401

    def set_dimension(self, dimension: Any) -> Any: ...  # noqa: ANN401

    def group(self) -> Any: ...  # noqa: ANN401

    def set_group(self, group: Any, name: str | None = None) -> Any: ...  # noqa: ANN401

    def set_title(self, title: Any) -> Any: ...  # noqa: ANN401

    def set_colors(self, colors: Sequence[str]) -> Any: ...  # noqa: ANN401

    def set_x_units(self, counter: Any) -> Any: ...  # noqa: ANN401

    def set_transition_duration(self, duration: int, delay: int | None = None) -> Any: ...  # noqa: ANN401

    def set_render_title(self, render_title: bool) -> Any: ...  # noqa: ANN401

    def set_elastic_x(self, elastic: bool) -> Any: ...  # noqa: ANN401

    def set_render_horizontal_grid_lines(self, render: bool) -> Any: ...  # noqa: ANN401

    def activate_renderlets(self) -> None: ...
