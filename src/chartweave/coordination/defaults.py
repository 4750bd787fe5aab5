"""Module-level shortcuts operating on the default coordination context."""

from __future__ import annotations

from typing import Any

from .context import default_context
from .registry import ALL_GROUPS, GLOBAL_GROUP, AllGroups, GroupId
from .render_cycle import BroadcastResult, Renderlet


def register_chart(chart: Any, group: GroupId = GLOBAL_GROUP) -> None:  # noqa: ANN401
    default_context().register(chart, group)


def deregister_chart(chart: Any, group: GroupId = GLOBAL_GROUP) -> None:  # noqa: ANN401
    default_context().deregister(chart, group)


def deregister_all_charts(group: GroupId | AllGroups = ALL_GROUPS) -> None:
    default_context().deregister_all(group)


def has_chart(chart: Any) -> bool:  # noqa: ANN401
    return default_context().has_chart(chart)


def filter_all(group: GroupId = GLOBAL_GROUP) -> BroadcastResult:
    return default_context().filter_all(group)


def render_all(group: GroupId = GLOBAL_GROUP) -> BroadcastResult:
    return default_context().render_all(group)


def redraw_all(group: GroupId = GLOBAL_GROUP) -> BroadcastResult:
    return default_context().redraw_all(group)


def renderlet(callback: Renderlet) -> None:
    default_context().add_renderlet(callback)


def transition(
    target: Any,  # noqa: ANN401
    duration: int | None = None,
    delay: int | None = None,
    name: str | None = None,
) -> Any:  # noqa: ANN401
    return default_context().transition(target, duration, delay, name)
