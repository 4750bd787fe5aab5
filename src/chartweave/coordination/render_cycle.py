"""Group-scoped broadcasts and the transition gate."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from chartweave.core.enums import LifecyclePhase
from chartweave.core.errors import BroadcastError
from chartweave.core.models import CoordinationConfig
from chartweave.infra.logging import get_logger

from .registry import GLOBAL_GROUP, ChartRegistry, GroupId, describe_chart

logger = get_logger(__name__)

Renderlet = Callable[[Any], None]


@runtime_checkable
class TransitionTarget(Protocol):
    """Something that can start an animated transition (a selection)."""

    def transition(self, *name: str) -> Any: ...  # noqa: ANN401


@dataclass
class ChartFailure:
    """A chart that raised during a broadcast."""

    chart: Any
    phase: LifecyclePhase
    error: BaseException

    @property
    def chart_name(self) -> str:
        return describe_chart(self.chart)


@dataclass
class BroadcastResult:
    """Outcome of one filter_all/render_all/redraw_all broadcast."""

    group: GroupId
    phase: LifecyclePhase
    charts: list[Any] = field(default_factory=list)
    failures: list[ChartFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def raise_for_failures(self) -> None:
        """Raise a BroadcastError if any chart failed."""
        if self.failures:
            raise BroadcastError(self.failures, phase=self.phase)


class RenderCycleController:
    """Drives filter/render/redraw broadcasts over one chart registry.

    Each chart runs to completion synchronously. With
    ``config.isolate_failures`` set, an exception from one chart is logged
    and collected so the rest of the group still updates; otherwise the
    first exception aborts the broadcast.
    """

    def __init__(self, registry: ChartRegistry, config: CoordinationConfig | None = None) -> None:
        self.registry = registry
        self.config = config or CoordinationConfig()
        self._renderlets: list[Renderlet] = []

    def add_renderlet(self, callback: Renderlet) -> None:
        """Register a callback fired after every render_all/redraw_all."""
        self._renderlets.append(callback)

    def remove_renderlet(self, callback: Renderlet) -> None:
        self._renderlets = [existing for existing in self._renderlets if existing is not callback]

    def renderlets(self) -> list[Renderlet]:
        return list(self._renderlets)

    def filter_all(self, group: GroupId = GLOBAL_GROUP) -> BroadcastResult:
        """Reset the filters of every chart in the group."""
        return self._broadcast(group, LifecyclePhase.FILTER, lambda chart: chart.filter_all())

    def render_all(self, group: GroupId = GLOBAL_GROUP) -> BroadcastResult:
        """Render every chart in the group, then fire the renderlets."""
        result = self._broadcast(group, LifecyclePhase.RENDER, lambda chart: chart.render())
        self._fire_renderlets(group)
        return result

    def redraw_all(self, group: GroupId = GLOBAL_GROUP) -> BroadcastResult:
        """Redraw every chart in the group, then fire the renderlets."""
        result = self._broadcast(group, LifecyclePhase.REDRAW, lambda chart: chart.redraw())
        self._fire_renderlets(group)
        return result

    def _broadcast(
        self,
        group: GroupId,
        phase: LifecyclePhase,
        action: Callable[[Any], Any],
    ) -> BroadcastResult:
        charts = self.registry.list_charts(group)
        result = BroadcastResult(group=group, phase=phase, charts=charts)
        logger.debug("Broadcast started", chart_group=group, phase=phase.value, charts=len(charts))

        for chart in charts:
            if not self.config.isolate_failures:
                action(chart)
                continue
            try:
                action(chart)
            except Exception as e:
                failure = ChartFailure(chart=chart, phase=phase, error=e)
                result.failures.append(failure)
                logger.exception(
                    "Chart failed during broadcast",
                    chart=failure.chart_name,
                    chart_group=group,
                    phase=phase.value,
                )

        if result.failures:
            logger.warning(
                "Broadcast finished with failures",
                chart_group=group,
                phase=phase.value,
                failures=len(result.failures),
            )
        return result

    def _fire_renderlets(self, group: GroupId) -> None:
        marker = group if group is not None else True
        for callback in list(self._renderlets):
            callback(marker)

    def transition(
        self,
        target: Any,  # noqa: ANN401
        duration: int | None = None,
        delay: int | None = None,
        name: str | None = None,
    ) -> Any:  # noqa: ANN401
        """Start a transition on ``target``, or skip it entirely.

        With no positive duration, or with transitions disabled, the target
        is returned untouched so values apply immediately. Otherwise the
        transition is configured with the duration and, when given, the delay.

        Args:
            target: Object exposing ``transition(name?)``
            duration: Transition duration in milliseconds
            delay: Transition delay in milliseconds
            name: Optional named transition

        Returns:
            The configured transition, or ``target`` when skipped
        """
        if self.config.disable_transitions or not duration or duration <= 0:
            logger.debug("Transition skipped", duration=duration, disabled=self.config.disable_transitions)
            return target

        started = target.transition(name) if name is not None else target.transition()
        started = started.duration(duration)
        if delay is not None:
            started = started.delay(delay)
        return started
