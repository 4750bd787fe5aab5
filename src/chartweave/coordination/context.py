"""Coordination context bundling a chart registry and its render cycle."""

from __future__ import annotations

from typing import Any

from chartweave.core.models import CoordinationConfig

from .registry import ALL_GROUPS, GLOBAL_GROUP, AllGroups, ChartRegistry, GroupId
from .render_cycle import BroadcastResult, RenderCycleController, Renderlet


class CoordinationContext:
    """One isolated world of charts.

    Charts created against the same context share chart groups and
    broadcasts; separate contexts never see each other's charts.
    """

    def __init__(self, config: CoordinationConfig | None = None) -> None:
        self.config = config or CoordinationConfig()
        self.registry = ChartRegistry()
        self.cycle = RenderCycleController(self.registry, self.config)

    def register(self, chart: Any, group: GroupId = GLOBAL_GROUP) -> None:  # noqa: ANN401
        self.registry.register(chart, group)

    def deregister(self, chart: Any, group: GroupId = GLOBAL_GROUP) -> None:  # noqa: ANN401
        self.registry.deregister(chart, group)

    def deregister_all(self, group: GroupId | AllGroups = ALL_GROUPS) -> None:
        self.registry.deregister_all(group)

    def has_chart(self, chart: Any) -> bool:  # noqa: ANN401
        return self.registry.has(chart)

    def charts(self, group: GroupId = GLOBAL_GROUP) -> list[Any]:
        return self.registry.list_charts(group)

    def filter_all(self, group: GroupId = GLOBAL_GROUP) -> BroadcastResult:
        return self.cycle.filter_all(group)

    def render_all(self, group: GroupId = GLOBAL_GROUP) -> BroadcastResult:
        return self.cycle.render_all(group)

    def redraw_all(self, group: GroupId = GLOBAL_GROUP) -> BroadcastResult:
        return self.cycle.redraw_all(group)

    def add_renderlet(self, callback: Renderlet) -> None:
        self.cycle.add_renderlet(callback)

    def transition(
        self,
        target: Any,  # noqa: ANN401
        duration: int | None = None,
        delay: int | None = None,
        name: str | None = None,
    ) -> Any:  # noqa: ANN401
        return self.cycle.transition(target, duration, delay, name)


_default_context: CoordinationContext | None = None


def default_context() -> CoordinationContext:
    """Process-wide context used by charts created without one."""
    global _default_context  # noqa: PLW0603
    if _default_context is None:
        _default_context = CoordinationContext(CoordinationConfig.from_env())
    return _default_context


def reset_default_context(config: CoordinationConfig | None = None) -> CoordinationContext:
    """Replace the process-wide context with a fresh, empty one."""
    global _default_context  # noqa: PLW0603
    _default_context = CoordinationContext(config or CoordinationConfig.from_env())
    return _default_context
