"""Unit tests for group broadcasts and the transition gate."""

from unittest.mock import MagicMock

import pytest

from chartweave.coordination.registry import ChartRegistry
from chartweave.coordination.render_cycle import RenderCycleController
from chartweave.core.enums import LifecyclePhase
from chartweave.core.errors import BroadcastError
from chartweave.core.models import CoordinationConfig


@pytest.fixture
def registry() -> ChartRegistry:
    return ChartRegistry()


@pytest.fixture
def controller(registry: ChartRegistry) -> RenderCycleController:
    return RenderCycleController(registry)


def make_selection() -> MagicMock:
    """Transition collaborator whose calls chain back to itself."""
    selection = MagicMock()
    selection.transition.return_value = selection
    selection.duration.return_value = selection
    selection.delay.return_value = selection
    return selection


class TestBroadcasts:
    """Test filter_all/render_all/redraw_all scoping."""

    def test_filter_all_scoped_to_group(self, registry, controller) -> None:
        """Test that only charts of the group are reset."""
        in_group, other = MagicMock(), MagicMock()
        registry.register(in_group, "g")
        registry.register(other, "h")

        result = controller.filter_all("g")

        in_group.filter_all.assert_called_once_with()
        other.filter_all.assert_not_called()
        assert result.ok
        assert result.phase == LifecyclePhase.FILTER
        assert result.charts == [in_group]

    def test_render_and_redraw_paths(self, registry, controller) -> None:
        """Test that render_all renders and redraw_all redraws."""
        chart = MagicMock()
        registry.register(chart, "g")
        controller.render_all("g")
        controller.redraw_all("g")
        chart.render.assert_called_once_with()
        chart.redraw.assert_called_once_with()

    def test_global_group_excludes_named_groups(self, registry, controller) -> None:
        """Test that the global group only holds ungrouped charts."""
        ungrouped, grouped = MagicMock(), MagicMock()
        registry.register(ungrouped)
        registry.register(grouped, "g")
        controller.redraw_all()
        ungrouped.redraw.assert_called_once_with()
        grouped.redraw.assert_not_called()


class TestRenderlets:
    """Test renderlet callbacks."""

    def test_fired_once_per_broadcast_with_group(self, registry, controller) -> None:
        """Test that each renderlet sees the group once per cycle."""
        for _ in range(3):
            registry.register(MagicMock(), "g")
        first, second = MagicMock(), MagicMock()
        controller.add_renderlet(first)
        controller.add_renderlet(second)

        controller.render_all("g")
        first.assert_called_once_with("g")
        second.assert_called_once_with("g")

        controller.redraw_all("g")
        assert first.call_count == 2
        first.assert_called_with("g")

    def test_global_marker_is_truthy(self, controller) -> None:
        """Test the marker passed for the global group."""
        callback = MagicMock()
        controller.add_renderlet(callback)
        controller.redraw_all()
        callback.assert_called_once_with(True)

    def test_not_fired_by_filter_all(self, registry, controller) -> None:
        """Test that resetting filters is not a render cycle."""
        callback = MagicMock()
        controller.add_renderlet(callback)
        controller.filter_all()
        callback.assert_not_called()

    def test_remove_renderlet(self, controller) -> None:
        """Test unregistering a callback."""
        callback = MagicMock()
        controller.add_renderlet(callback)
        controller.remove_renderlet(callback)
        controller.render_all()
        callback.assert_not_called()
        assert controller.renderlets() == []


class TestFailureIsolation:
    """Test per-chart failure handling."""

    def test_failures_collected(self, registry, controller) -> None:
        """Test that one failing chart does not stop its siblings."""
        broken, healthy = MagicMock(), MagicMock()
        broken.render.side_effect = ValueError("bad accessor")
        registry.register(broken, "g")
        registry.register(healthy, "g")
        callback = MagicMock()
        controller.add_renderlet(callback)

        result = controller.render_all("g")

        healthy.render.assert_called_once_with()
        callback.assert_called_once_with("g")
        assert not result.ok
        assert len(result.failures) == 1
        assert result.failures[0].chart is broken
        assert isinstance(result.failures[0].error, ValueError)
        with pytest.raises(BroadcastError) as exc_info:
            result.raise_for_failures()
        assert exc_info.value.phase == LifecyclePhase.RENDER

    def test_first_failure_aborts_without_isolation(self, registry) -> None:
        """Test propagating mode."""
        controller = RenderCycleController(registry, CoordinationConfig(isolate_failures=False))
        broken, healthy = MagicMock(), MagicMock()
        broken.redraw.side_effect = ValueError("bad accessor")
        registry.register(broken, "g")
        registry.register(healthy, "g")
        callback = MagicMock()
        controller.add_renderlet(callback)

        with pytest.raises(ValueError, match="bad accessor"):
            controller.redraw_all("g")
        healthy.redraw.assert_not_called()
        callback.assert_not_called()


class TestTransitionGate:
    """Test the transition skip decision."""

    def test_zero_duration_skips(self, controller) -> None:
        """Test that no collaborator call happens without a duration."""
        selection = make_selection()
        assert controller.transition(selection, 0, 0) is selection
        selection.transition.assert_not_called()
        selection.duration.assert_not_called()
        selection.delay.assert_not_called()

    def test_configured_transition(self, controller) -> None:
        """Test that duration and delay are passed through unchanged."""
        selection = make_selection()
        controller.transition(selection, 100, 100)
        selection.transition.assert_called_once_with()
        selection.duration.assert_called_once_with(100)
        selection.delay.assert_called_once_with(100)

    def test_named_transition(self, controller) -> None:
        """Test named transitions."""
        selection = make_selection()
        controller.transition(selection, 250, name="fade")
        selection.transition.assert_called_once_with("fade")
        selection.duration.assert_called_once_with(250)
        selection.delay.assert_not_called()

    def test_disabled_switch_skips(self, registry) -> None:
        """Test the process-wide disable switch."""
        controller = RenderCycleController(registry, CoordinationConfig(disable_transitions=True))
        selection = make_selection()
        assert controller.transition(selection, 500, 10) is selection
        selection.duration.assert_not_called()
        selection.delay.assert_not_called()

    @pytest.mark.parametrize("duration", [None, -1])
    def test_non_positive_duration_skips(self, controller, duration) -> None:
        """Test missing and negative durations."""
        selection = make_selection()
        controller.transition(selection, duration)
        selection.transition.assert_not_called()
