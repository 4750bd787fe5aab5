"""Unit tests for stacked bar and line charts."""

import altair as alt
import pytest

from chartweave.charts.protocols import ComposableChart, GridChart
from chartweave.charts.stack import BarChart, LineChart
from chartweave.coordination import CoordinationContext
from chartweave.core import units
from chartweave.core.enums import StackDomain
from chartweave.core.errors import ConfigurationError
from chartweave.core.filters import RangedFilter
from chartweave.render.scales import LinearScale


@pytest.fixture
def bar(context: CoordinationContext, make_group, dimension) -> BarChart:
    chart = BarChart("g", context=context, anchor="bars")
    chart.set_dimension(dimension).set_group(make_group({1: 2, 2: 4, 3: 6}), "base")
    return chart


class TestStacking:
    """Test layer configuration."""

    def test_stack_adds_layers(self, bar: BarChart, make_group) -> None:
        """Test that stacked groups sit on top of the base layer."""
        bar.stack(make_group({1: 1, 2: 1, 3: 1}), name="extra")
        layers = bar.layer_data()
        assert [layer["name"] for layer in layers] == ["base", "extra"]
        assert [point["y1"] for point in layers[1]["values"]] == [3, 5, 7]

    def test_default_layer_names(self, bar: BarChart, make_group) -> None:
        """Test names derived from stack position."""
        bar.stack(make_group({1: 1}))
        bar.stack(make_group({1: 1}))
        assert [layer.name for layer in bar.stack_layers()] == ["base", "1", "2"]

    def test_stack_reuses_previous_accessor(self, bar: BarChart, make_group) -> None:
        """Test accessor inheritance between layers."""
        bar.set_value_accessor(lambda record: record["value"] * 2)
        bar.stack(make_group({1: 5, 2: 5, 3: 5}))
        top = bar.layer_data()[1]["values"][0]
        assert top["value"] == 10
        assert top["y0"] == 4

    def test_hide_and_show(self, bar: BarChart, make_group) -> None:
        """Test that hidden layers keep their slot."""
        bar.stack(make_group({1: 1, 2: 1, 3: 1}), name="extra")
        bar.hide_stack("base")
        layers = bar.layer_data()
        assert layers[0]["hidden"]
        assert layers[1]["values"][0]["y0"] == 2
        bar.show_stack("base")
        assert not bar.layer_data()[0]["hidden"]

    def test_hidden_base_survives_rename(self, context: CoordinationContext, make_group, dimension) -> None:
        """Test that layer 0 stays hidden when the group name changes."""
        chart = BarChart(context=context).set_dimension(dimension).set_group(make_group({1: 2}))
        chart.hide_stack("0")
        chart.set_group(make_group({1: 3, 2: 4}), "base")

        layers = chart.layer_data()
        assert [layer["name"] for layer in layers] == ["base"]
        assert layers[0]["hidden"]
        chart.show_stack("base")
        assert not chart.layer_data()[0]["hidden"]

    def test_hide_unknown_layer(self, bar: BarChart) -> None:
        """Test hiding a layer that does not exist."""
        with pytest.raises(ConfigurationError):
            bar.hide_stack("ghost")

    def test_clear_stack(self, bar: BarChart, make_group) -> None:
        """Test dropping the extra layers."""
        bar.stack(make_group({1: 1}), name="extra")
        bar.clear_stack()
        assert [layer.name for layer in bar.stack_layers()] == ["base"]

    def test_stack_domain(self, bar: BarChart, make_group) -> None:
        """Test switching to the union of layer keys."""
        bar.stack(make_group({4: 1}))
        assert [record["key"] for record in bar.data()] == [1, 2, 3]
        bar.set_stack_domain("union")
        assert bar.stack_domain() == StackDomain.UNION
        assert [record["key"] for record in bar.data()] == [1, 2, 3, 4]

    def test_filters_restrict_layers(self, bar: BarChart, make_group) -> None:
        """Test that the chart's filters apply to every layer."""
        bar.stack(make_group({1: 1, 2: 1, 3: 1}))
        bar.add_filter(RangedFilter(2, 3))
        layers = bar.layer_data()
        assert [point["key"] for point in layers[1]["values"]] == [2]


class TestExtents:
    """Test axis extents."""

    def test_y_extent_includes_zero(self, bar: BarChart) -> None:
        """Test that zero is always in the y domain."""
        assert bar.y_axis_min() == 0
        assert bar.y_axis_max() == 6

    def test_y_extent_ignores_hidden_layers(self, bar: BarChart, make_group) -> None:
        """Test that hidden layers do not stretch the axis."""
        bar.stack(make_group({1: 100}), name="tall")
        assert bar.y_axis_max() == 102
        bar.hide_stack("tall")
        assert bar.y_axis_max() == 6

    def test_negative_values(self, context: CoordinationContext, make_group, dimension) -> None:
        """Test extents below zero."""
        chart = BarChart(context=context).set_dimension(dimension).set_group(make_group({1: -5, 2: 3}))
        assert chart.y_axis_min() == -5
        assert chart.y_axis_max() == 3

    def test_padding(self, bar: BarChart) -> None:
        """Test numeric and percentage padding."""
        bar.set_y_axis_padding("50%")
        assert bar.y_axis_max() == pytest.approx(9)
        bar.set_x_axis_padding(1)
        assert bar.x_axis_min() == 0
        assert bar.x_axis_max() == 4

    def test_ordinal_x_extent(self, context: CoordinationContext, make_group, dimension) -> None:
        """Test that ordinal keys are not padded."""
        chart = BarChart(context=context).set_dimension(dimension).set_group(make_group({"b": 1, "a": 2}))
        chart.set_x_units(units.ordinal).set_x_axis_padding(5)
        assert chart.x_axis_min() == "a"
        assert chart.x_axis_max() == "b"

    def test_empty_group(self, context: CoordinationContext, make_group, dimension) -> None:
        """Test extents without data."""
        chart = BarChart(context=context).set_dimension(dimension).set_group(make_group({}))
        assert (chart.x_axis_min(), chart.x_axis_max()) == (0, 0)
        assert (chart.y_axis_min(), chart.y_axis_max()) == (0, 0)


class TestRendering:
    """Test axis preparation and Altair output."""

    def test_render_prepares_scales(self, bar: BarChart) -> None:
        """Test that unset scales get data-driven domains."""
        bar.render()
        assert bar.x().domain() == (1, 3)
        assert bar.y().domain() == (0, 6)
        assert bar.y().range() == (bar.y_axis_height(), 0)
        assert bar.x_axis().scale is bar.x()

    def test_fixed_scale_kept_unless_elastic(self, bar: BarChart) -> None:
        """Test that a configured domain survives rendering."""
        bar.set_y(LinearScale((0, 100)))
        bar.render()
        assert bar.y().domain() == (0, 100)
        bar.set_elastic_y(True)
        bar.redraw()
        assert bar.y().domain() == (0, 6)

    def test_bar_spec(self, bar: BarChart) -> None:
        """Test the Altair bar chart."""
        bar.render()
        spec = bar.spec().to_dict()
        assert isinstance(bar.spec(), alt.Chart)
        assert spec["mark"]["type"] == "bar"
        assert spec["encoding"]["y"]["field"] == "y1"
        assert spec["encoding"]["y2"]["field"] == "y0"
        assert spec["width"] == bar.x_axis_length()

    def test_hidden_layers_not_plotted(self, bar: BarChart, make_group) -> None:
        """Test that hidden layers are left out of the plot rows."""
        bar.stack(make_group({1: 1, 2: 1, 3: 1}), name="extra")
        bar.hide_stack("extra")
        chart = bar.plot_data()
        assert {row["layer"] for row in chart.data["values"]} == {"base"}

    def test_line_and_area(self, context: CoordinationContext, make_group, dimension) -> None:
        """Test line marks and the area option."""
        line = LineChart(context=context).set_dimension(dimension).set_group(make_group({1: 1, 2: 2}))
        line.render()
        spec = line.spec().to_dict()
        assert spec["mark"]["type"] == "line"
        assert "y2" not in spec["encoding"]

        line.set_render_area(True).redraw()
        area = line.spec().to_dict()
        assert area["mark"]["type"] == "area"
        assert area["encoding"]["y2"] == {"field": "y0"}

    def test_layer_accessor_errors_propagate(self, bar: BarChart, make_group) -> None:
        """Test that a failing stacked accessor surfaces from render()."""

        def broken(record):
            raise KeyError("missing")

        bar.stack(make_group({1: 1}), accessor=broken, name="bad")
        with pytest.raises(KeyError):
            bar.render()
        assert not bar.is_rendered()

    def test_legendables(self, bar: BarChart, make_group) -> None:
        """Test one legend item per layer."""
        bar.stack(make_group({1: 1}), name="extra")
        items = bar.legendables()
        assert [item["name"] for item in items] == ["base", "extra"]
        assert items[0]["color"] == bar.colors()[0]

    def test_legend_toggle(self, bar: BarChart) -> None:
        """Test toggling a layer from its legend item."""
        bar.legend_toggle({"name": "base"})
        assert bar.layer_data()[0]["hidden"]

    def test_grid_protocols(self, bar: BarChart) -> None:
        """Test the richer capability sets."""
        assert isinstance(bar, GridChart)
        assert isinstance(bar, ComposableChart)
