"""Catalogue of chart instances partitioned into chart groups."""

from __future__ import annotations

from typing import Any

from chartweave.infra.logging import get_logger

logger = get_logger(__name__)

GroupId = str | None

GLOBAL_GROUP: GroupId = None


class AllGroups:
    def __repr__(self) -> str:
        return "ALL_GROUPS"


ALL_GROUPS = AllGroups()


def _contains(charts: list[Any], chart: Any) -> bool:  # noqa: ANN401
    return any(member is chart for member in charts)


class ChartRegistry:
    """Ordered chart lists keyed by chart group.

    Membership is tested by identity and a chart lives in at most one group.
    ``None`` is the global group used by charts created without a group.
    """

    def __init__(self) -> None:
        self._groups: dict[GroupId, list[Any]] = {}

    def register(self, chart: Any, group: GroupId = GLOBAL_GROUP) -> None:  # noqa: ANN401
        """Append a chart to a group, leaving any other group it was in."""
        charts = self._groups.setdefault(group, [])
        if _contains(charts, chart):
            return
        self._remove_everywhere(chart)
        charts.append(chart)
        logger.debug("Registered chart", chart=describe_chart(chart), chart_group=group)

    def deregister(self, chart: Any, group: GroupId = GLOBAL_GROUP) -> None:  # noqa: ANN401
        """Remove a chart from one group; absent charts and groups are ignored."""
        charts = self._groups.get(group)
        if not charts:
            return
        self._groups[group] = [member for member in charts if member is not chart]
        logger.debug("Deregistered chart", chart=describe_chart(chart), chart_group=group)

    def deregister_all(self, group: GroupId | AllGroups = ALL_GROUPS) -> None:
        """Clear one group, or every group when no group is given."""
        if group is ALL_GROUPS:
            self._groups.clear()
        else:
            self._groups.pop(group, None)

    def list_charts(self, group: GroupId = GLOBAL_GROUP) -> list[Any]:
        """Charts of one group, in registration order."""
        return list(self._groups.get(group, []))

    def has(self, chart: Any) -> bool:  # noqa: ANN401
        """Whether the chart is registered in any group."""
        return any(_contains(charts, chart) for charts in self._groups.values())

    def group_of(self, chart: Any) -> GroupId:  # noqa: ANN401
        """Group the chart is registered in.

        Raises:
            KeyError: If the chart is not registered
        """
        for group, charts in self._groups.items():
            if _contains(charts, chart):
                return group
        raise KeyError(describe_chart(chart))

    def migrate(self, chart: Any, new_group: GroupId) -> None:  # noqa: ANN401
        """Move a chart to ``new_group``, dropping it from its former group."""
        self._remove_everywhere(chart)
        self._groups.setdefault(new_group, []).append(chart)
        logger.debug("Migrated chart", chart=describe_chart(chart), chart_group=new_group)

    def groups(self) -> list[GroupId]:
        """Identifiers of the groups that currently hold charts."""
        return [group for group, charts in self._groups.items() if charts]

    def _remove_everywhere(self, chart: Any) -> None:  # noqa: ANN401
        for group, charts in self._groups.items():
            if _contains(charts, chart):
                self._groups[group] = [member for member in charts if member is not chart]

    def __len__(self) -> int:
        return sum(len(charts) for charts in self._groups.values())


def describe_chart(chart: Any) -> str:  # noqa: ANN401
    name = getattr(chart, "name", None)
    if callable(name):
        return str(name())
    return f"{type(chart).__name__}@{id(chart):x}"
