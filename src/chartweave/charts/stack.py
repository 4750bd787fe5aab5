"""Stacked coordinate grid charts: bars and lines built from stack layers."""

from __future__ import annotations

from abc import abstractmethod
from typing import Any

import altair as alt

from chartweave.core import units
from chartweave.core.enums import StackDomain
from chartweave.core.errors import ConfigurationError
from chartweave.data.chain import DataTransformChain, stacked_chain
from chartweave.data.stages import Accessor, GroupedSource, StackLayer, StackStage
from chartweave.render.altair_spec import flatten_layers, key_encoding_type, prepare_data_for_altair, scale_spec
from chartweave.render.colors import color_strategy

from .coordinate_grid import CoordinateGridChart


class StackChart(CoordinateGridChart):
    """Coordinate grid chart whose data is a stack of layers.

    The chart's own group is layer 0. Further layers are added with
    :meth:`stack` and are stacked on top in insertion order. Hidden layers
    keep their stacking slot but are left out of the axis extents and the
    plot.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:  # noqa: ANN401
        super().__init__(*args, **kwargs)
        self._extra_layers: list[StackLayer] = []
        self._base_hidden = False
        self._hidden: set[str] = set()
        self._stack_domain = StackDomain.FIRST_LAYER

    # layer configuration

    def stack(self, group: GroupedSource, accessor: Accessor | None = None, name: str | None = None) -> StackChart:
        """Stack another group on top of the existing layers.

        Args:
            group: Grouped aggregate for the new layer
            accessor: Value accessor; the previous layer's accessor when omitted
            name: Layer name; its position in the stack when omitted
        """
        if accessor is None:
            accessor = self._extra_layers[-1].accessor if self._extra_layers else self._value_accessor
        layer_name = name if name is not None else str(len(self._extra_layers) + 1)
        self._extra_layers.append(StackLayer(group=group, accessor=accessor, name=layer_name))
        return self

    def clear_stack(self) -> StackChart:
        """Drop every layer above layer 0."""
        self._extra_layers = []
        self._hidden.clear()
        return self

    def stack_layers(self) -> list[StackLayer]:
        """All layers in stacking order, layer 0 first."""
        stage = self._stack_stage()
        return stage.layers() if stage is not None else []

    def hide_stack(self, name: str) -> StackChart:
        self._set_hidden(name, True)
        return self

    def show_stack(self, name: str) -> StackChart:
        self._set_hidden(name, False)
        return self

    def _set_hidden(self, name: str, hidden: bool) -> None:
        # layer 0 is tracked by position, its name follows the group name
        self._check_layer_name(name)
        if name == self._base_layer_name():
            self._base_hidden = hidden
        elif hidden:
            self._hidden.add(name)
        else:
            self._hidden.discard(name)

    def _is_hidden(self, name: str) -> bool:
        if name == self._base_layer_name():
            return self._base_hidden
        return name in self._hidden

    def stack_domain(self) -> StackDomain:
        return self._stack_domain

    def set_stack_domain(self, domain: StackDomain | str) -> StackChart:
        self._stack_domain = StackDomain(domain)
        return self

    def _base_layer_name(self) -> str:
        return self._group_name if self._group_name is not None else "0"

    def _check_layer_name(self, name: str) -> None:
        names = [self._base_layer_name(), *(layer.name for layer in self._extra_layers)]
        if name not in names:
            raise ConfigurationError(
                f"No stack layer named '{name}' on chart {self.name()}",
                hint=f"Known layers: {', '.join(names)}",
            )

    # data

    def _build_data_chain(self) -> DataTransformChain:
        chain = stacked_chain(
            self._group, self._value_accessor, self.filters, self._stack_domain, self._base_layer_name()
        )
        stage = chain.find(StackStage)
        for layer in self._extra_layers:
            stage.add_layer(layer.group, layer.accessor, layer.name)
        if self._base_hidden:
            stage.hide_layer(self._base_layer_name())
        for name in self._hidden:
            stage.hide_layer(name)
        return chain

    def _stack_stage(self) -> StackStage | None:
        if self._group is None:
            return None
        return self.data_chain().find(StackStage)

    def layer_data(self) -> list[dict[str, Any]]:
        """Per-layer ``{name, hidden, values}`` series with cumulative offsets."""
        stage = self._stack_stage()
        return stage.layer_data() if stage is not None else []

    def _visible_layers(self) -> list[dict[str, Any]]:
        return [layer for layer in self.layer_data() if not layer["hidden"]]

    # extents

    def _stacked_edges(self) -> list[Any]:
        # zero is always part of the extent
        edges = [0]
        for layer in self._visible_layers():
            for point in layer["values"]:
                edges.extend((point["y0"], point["y1"]))
        return edges

    def y_axis_min(self) -> Any:  # noqa: ANN401
        return units.subtract(min(self._stacked_edges()), self._y_axis_padding)

    def y_axis_max(self) -> Any:  # noqa: ANN401
        return units.add(max(self._stacked_edges()), self._y_axis_padding)

    def _keys(self) -> list[Any]:
        layers = self.layer_data()
        return [point["key"] for point in layers[0]["values"]] if layers else []

    def x_axis_min(self) -> Any:  # noqa: ANN401
        keys = self._keys()
        if not keys:
            return 0
        low = min(keys)
        return low if self.is_ordinal() else units.subtract(low, self._x_axis_padding)

    def x_axis_max(self) -> Any:  # noqa: ANN401
        keys = self._keys()
        if not keys:
            return 0
        high = max(keys)
        return high if self.is_ordinal() else units.add(high, self._x_axis_padding)

    # legend

    def legendables(self) -> list[dict[str, Any]]:
        layers = self.layer_data()
        colors = color_strategy.series_colors(len(layers), self._colors)
        return [
            {"chart": self, "name": layer["name"], "color": color, "hidden": layer["hidden"]}
            for layer, color in zip(layers, colors, strict=True)
        ]

    def legend_highlight(self, item: dict[str, Any]) -> None:
        self.logger.debug("Legend highlight", chart=self.name(), layer=item.get("name"))

    def legend_reset(self, item: dict[str, Any]) -> None:
        self.logger.debug("Legend reset", chart=self.name(), layer=item.get("name"))

    def legend_toggle(self, item: dict[str, Any]) -> None:
        """Toggle a layer's visibility from its legend item."""
        name = item["name"]
        if self._is_hidden(name):
            self.show_stack(name)
        else:
            self.hide_stack(name)

    # plotting

    @abstractmethod
    def _mark(self, base: alt.Chart) -> alt.Chart:
        """Apply the mark type to the base chart."""

    def _uses_baseline(self) -> bool:
        return True

    def plot_data(self) -> alt.Chart:
        """Layered Altair spec of the visible stack layers.

        Returns:
            Altair chart with one color per layer, y spanning ``y0`` to ``y1``
        """
        layers = self.layer_data()
        colors = color_strategy.series_colors(len(layers), self._colors)
        rows = flatten_layers([layer for layer in layers if not layer["hidden"]])
        if self._render_title:
            for row in rows:
                row["title"] = self._title({"key": row["key"], "value": row["value"], "_value": row["value"]})

        key_type = key_encoding_type(rows)
        x_scale = scale_spec(self._x) if key_type == "Q" else None
        y_scale = scale_spec(self._y)

        x_kwargs: dict[str, Any] = {"title": self._x_axis_label or "key"}
        if x_scale is not None:
            x_kwargs["scale"] = x_scale
        y_kwargs: dict[str, Any] = {
            "title": self._y_axis_label or "value",
            "axis": alt.Axis(grid=self._render_horizontal_grid_lines, orient=self._y_axis.orient),
        }
        if y_scale is not None:
            y_kwargs["scale"] = y_scale

        encodings: dict[str, Any] = {
            "x": alt.X(f"key:{key_type}", **x_kwargs),
            "y": alt.Y("y1:Q", **y_kwargs),
            "color": alt.Color(
                "layer:N",
                scale=alt.Scale(domain=[layer["name"] for layer in layers], range=colors),
                title="layer",
            ),
        }
        if self._uses_baseline():
            encodings["y2"] = alt.Y2(field="y0")
        if self._render_title:
            encodings["tooltip"] = ["title:N"]

        chart = self._mark(alt.Chart(prepare_data_for_altair(rows))).encode(**encodings)
        return chart.properties(width=self.x_axis_length(), height=self.y_axis_height())


class BarChart(StackChart):
    """Stacked bar chart."""

    def _mark(self, base: alt.Chart) -> alt.Chart:
        return base.mark_bar(opacity=color_strategy.style.BAR_FILL_OPACITY)


class LineChart(StackChart):
    """Stacked line chart, optionally filling the area under each layer."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:  # noqa: ANN401
        super().__init__(*args, **kwargs)
        self._render_area = False

    def render_area(self) -> bool:
        return self._render_area

    def set_render_area(self, render_area: bool) -> LineChart:
        self._render_area = render_area
        return self

    def _uses_baseline(self) -> bool:
        return self._render_area

    def _mark(self, base: alt.Chart) -> alt.Chart:
        if self._render_area:
            return base.mark_area(opacity=color_strategy.style.AREA_FILL_OPACITY)
        return base.mark_line(strokeWidth=color_strategy.style.LINE_WIDTH_DEFAULT)
