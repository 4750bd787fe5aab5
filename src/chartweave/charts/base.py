"""Base chart: group membership, filter state and render/redraw lifecycle."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import defaultdict
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import ValidationError

from chartweave.coordination.context import CoordinationContext, default_context
from chartweave.coordination.registry import GLOBAL_GROUP, GroupId
from chartweave.core.enums import ChartEvent, LifecyclePhase
from chartweave.core.errors import ConfigurationError, MissingAttributeError
from chartweave.core.filters import Filter, as_filter, filter_predicate
from chartweave.core.models import Margins, TransitionSettings
from chartweave.data.chain import DataTransformChain, simple_chain
from chartweave.data.stages import Accessor, GroupedSource, Record, default_key_accessor, default_value_accessor
from chartweave.infra.logging import get_logger
from chartweave.render.colors import color_strategy

if TYPE_CHECKING:
    from chartweave.coordination.render_cycle import BroadcastResult

Listener = Callable[..., None]
TitleFunction = Callable[[Mapping[str, Any]], str]


def default_title(record: Mapping[str, Any]) -> str:
    """``"<key>: <value>"`` label for tooltips."""
    return f"{record.get('key')}: {record.get('_value', record.get('value'))}"


class BaseChart(ABC):
    """Abstract widget taking part in a coordination context.

    A chart registers itself in its context's chart group on creation. It
    owns its filter set: every mutation is pushed to the dimension and fires
    the ``filtered`` event. ``render()``/``redraw()`` check the mandatory
    attributes, run the lifecycle events and keep the Altair spec built by
    the concrete widget.
    """

    MANDATORY_ATTRIBUTES: ClassVar[tuple[str, ...]] = ("dimension", "group")
    DEFAULT_WIDTH: ClassVar[int] = 200
    DEFAULT_HEIGHT: ClassVar[int] = 200

    def __init__(
        self,
        chart_group: GroupId = GLOBAL_GROUP,
        context: CoordinationContext | None = None,
        anchor: str | None = None,
    ) -> None:
        """Create a chart and register it in its chart group.

        Args:
            chart_group: Chart group the chart broadcasts within (None = global)
            context: Coordination context; the default context when omitted
            anchor: Optional identifier, used as the chart's name
        """
        self.logger = get_logger(self.__class__.__name__)
        self._context = context if context is not None else default_context()
        self._anchor = anchor
        self._chart_group = chart_group
        self._parent: BaseChart | None = None

        self._dimension: Any = None
        self._group: GroupedSource | None = None
        self._group_name: str | None = None
        self._value_accessor: Accessor = default_value_accessor
        self._key_accessor: Accessor = default_key_accessor
        self._ordering: Accessor | None = None
        self._filters: list[Filter] = []

        self._width = self.DEFAULT_WIDTH
        self._height = self.DEFAULT_HEIGHT
        self._title: TitleFunction = default_title
        self._render_title = True
        self._colors: tuple[str, ...] = color_strategy.palette()
        self._transition = TransitionSettings()

        self._listeners: dict[ChartEvent, list[Listener]] = defaultdict(list)
        self._rendered = False
        self._spec: Any = None

        self._context.register(self, chart_group)

    # identity and group membership

    def name(self) -> str:
        return self._anchor or f"{type(self).__name__}@{id(self):x}"

    def anchor(self) -> str | None:
        return self._anchor

    def context(self) -> CoordinationContext:
        return self._context

    def chart_group(self) -> GroupId:
        return self._chart_group

    def set_chart_group(self, group: GroupId) -> BaseChart:
        """Move the chart to another chart group."""
        if self.is_child():
            self._chart_group = group
            return self
        if group == self._chart_group and self._context.has_chart(self):
            return self
        self._context.registry.migrate(self, group)
        self._chart_group = group
        return self

    def is_child(self) -> bool:
        """Whether a composite chart owns this chart."""
        return self._parent is not None

    def parent(self) -> BaseChart | None:
        return self._parent

    def attach_to(self, parent: BaseChart) -> None:
        """Hand ownership to a composite; the chart leaves the registry."""
        self._context.registry.deregister(self, self._chart_group)
        self._parent = parent
        self._chart_group = parent.chart_group()

    def detach(self) -> None:
        """Release the chart from its composite."""
        self._parent = None

    def dispose(self) -> None:
        """Remove the chart from its chart group."""
        self._context.deregister(self, self._chart_group)

    # data configuration

    def dimension(self) -> Any:  # noqa: ANN401
        return self._dimension

    def set_dimension(self, dimension: Any) -> BaseChart:  # noqa: ANN401
        self._dimension = dimension
        return self

    def group(self) -> GroupedSource | None:
        return self._group

    def set_group(self, group: GroupedSource | None, name: str | None = None) -> BaseChart:
        self._group = group
        self._group_name = name
        return self

    def group_name(self) -> str | None:
        return self._group_name

    def value_accessor(self) -> Accessor:
        return self._value_accessor

    def set_value_accessor(self, accessor: Accessor) -> BaseChart:
        self._value_accessor = accessor
        return self

    def key_accessor(self) -> Accessor:
        return self._key_accessor

    def set_key_accessor(self, accessor: Accessor) -> BaseChart:
        self._key_accessor = accessor
        return self

    def ordering(self) -> Accessor | None:
        return self._ordering

    def set_ordering(self, ordering: Accessor | None) -> BaseChart:
        self._ordering = ordering
        return self

    def data_chain(self) -> DataTransformChain:
        """Transform chain feeding this chart, built from its current configuration."""
        if self._group is None:
            raise MissingAttributeError(self.name(), ["group"], phase=LifecyclePhase.DATA)
        return self._build_data_chain()

    def _build_data_chain(self) -> DataTransformChain:
        return simple_chain(self._group, self._value_accessor, self.filters, self._ordering)

    def data(self) -> list[Record]:
        return self.data_chain().data()

    # filters

    def filters(self) -> list[Filter]:
        return list(self._filters)

    def has_filter(self, flt: Any = None) -> bool:  # noqa: ANN401
        """Whether any filter is active, or whether ``flt`` is one of them."""
        if flt is None:
            return bool(self._filters)
        return as_filter(flt) in self._filters

    def add_filter(self, flt: Any) -> BaseChart:  # noqa: ANN401
        candidate = as_filter(flt)
        if candidate not in self._filters:
            self._filters.append(candidate)
            self._filters_changed()
        return self

    def remove_filter(self, flt: Any) -> BaseChart:  # noqa: ANN401
        candidate = as_filter(flt)
        if candidate in self._filters:
            self._filters = [existing for existing in self._filters if existing != candidate]
            self._filters_changed()
        return self

    def toggle_filter(self, flt: Any) -> BaseChart:  # noqa: ANN401
        if self.has_filter(flt):
            return self.remove_filter(flt)
        return self.add_filter(flt)

    def replace_filter(self, filters: Any) -> BaseChart:  # noqa: ANN401
        """Replace the whole filter set; a list sets several, None clears."""
        if filters is None:
            self._filters = []
        elif isinstance(filters, list):
            self._filters = [as_filter(flt) for flt in filters]
        else:
            self._filters = [as_filter(filters)]
        self._filters_changed()
        return self

    def filter_all(self) -> BaseChart:
        """Clear this chart's own filters."""
        self._filters = []
        self._filters_changed()
        return self

    def _filters_changed(self) -> None:
        self._apply_filters()
        self._fire(ChartEvent.FILTERED, self)

    def _apply_filters(self) -> None:
        dimension = self._dimension
        if dimension is not None and hasattr(dimension, "filter"):
            dimension.filter(filter_predicate(self._filters))

    def select(self, flt: Any) -> BroadcastResult:  # noqa: ANN401
        """User selection: toggle a filter, then redraw the chart group."""
        self.toggle_filter(flt)
        return self.redraw_group()

    def redraw_group(self) -> BroadcastResult:
        return self._context.redraw_all(self._chart_group)

    def render_group(self) -> BroadcastResult:
        return self._context.render_all(self._chart_group)

    # events

    def on(self, event: ChartEvent | str, listener: Listener) -> BaseChart:
        self._listeners[ChartEvent(event)].append(listener)
        return self

    def off(self, event: ChartEvent | str, listener: Listener) -> BaseChart:
        key = ChartEvent(event)
        self._listeners[key] = [existing for existing in self._listeners[key] if existing is not listener]
        return self

    def _fire(self, event: ChartEvent, *args: Any) -> None:
        for listener in list(self._listeners[event]):
            listener(*args)

    # lifecycle

    def _check_mandatory(self, phase: LifecyclePhase) -> None:
        missing = [attribute for attribute in self.MANDATORY_ATTRIBUTES if getattr(self, attribute)() is None]
        if missing:
            raise MissingAttributeError(self.name(), missing, phase=phase)

    def render(self) -> BaseChart:
        self._check_mandatory(LifecyclePhase.RENDER)
        self._fire(ChartEvent.PRE_RENDER, self)
        self._spec = self._do_render()
        self._rendered = True
        self._fire(ChartEvent.POST_RENDER, self)
        self.activate_renderlets()
        return self

    def redraw(self) -> BaseChart:
        self._check_mandatory(LifecyclePhase.REDRAW)
        self._fire(ChartEvent.PRE_REDRAW, self)
        self._spec = self._do_redraw()
        self._rendered = True
        self._fire(ChartEvent.POST_REDRAW, self)
        self.activate_renderlets()
        return self

    def activate_renderlets(self) -> None:
        self._fire(ChartEvent.RENDERLET, self)

    @abstractmethod
    def _do_render(self) -> Any:  # noqa: ANN401
        """Build the chart's output from scratch."""

    def _do_redraw(self) -> Any:  # noqa: ANN401
        return self._do_render()

    def is_rendered(self) -> bool:
        return self._rendered

    def spec(self) -> Any:  # noqa: ANN401
        """Output of the last render/redraw (an Altair chart for plotted widgets)."""
        return self._spec

    # geometry and presentation

    def width(self) -> int:
        return self._width

    def set_width(self, width: int) -> BaseChart:
        if width <= 0:
            raise ConfigurationError(f"Width must be positive, got {width}")
        self._width = width
        return self

    def height(self) -> int:
        return self._height

    def set_height(self, height: int) -> BaseChart:
        if height <= 0:
            raise ConfigurationError(f"Height must be positive, got {height}")
        self._height = height
        return self

    def title(self) -> TitleFunction:
        return self._title

    def set_title(self, title: TitleFunction) -> BaseChart:
        self._title = title
        return self

    def render_title(self) -> bool:
        return self._render_title

    def set_render_title(self, render_title: bool) -> BaseChart:
        self._render_title = render_title
        return self

    def colors(self) -> tuple[str, ...]:
        return self._colors

    def set_colors(self, colors: tuple[str, ...] | list[str]) -> BaseChart:
        self._colors = tuple(colors)
        return self

    def legendables(self) -> list[dict[str, Any]]:
        return []

    # transitions

    def transition_duration(self) -> int:
        return self._transition.duration

    def set_transition_duration(self, duration: int, delay: int | None = None) -> BaseChart:
        self._transition = self._validated_transition(
            duration=duration, delay=self._transition.delay if delay is None else delay
        )
        return self

    def transition_delay(self) -> int:
        return self._transition.delay

    def set_transition_delay(self, delay: int) -> BaseChart:
        self._transition = self._validated_transition(duration=self._transition.duration, delay=delay)
        return self

    def _validated_transition(self, duration: int, delay: int) -> TransitionSettings:
        try:
            return TransitionSettings(duration=duration, delay=delay)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid transition timing: duration={duration}, delay={delay}") from e

    def transition(self, target: Any, name: str | None = None) -> Any:  # noqa: ANN401
        """Run ``target`` through the context's transition gate with this chart's timing."""
        return self._context.transition(target, self._transition.duration, self._transition.delay, name)

    # bulk configuration

    def options(self, bag: Mapping[str, Any]) -> BaseChart:
        """Apply ``{"name": value}`` pairs through the matching ``set_name`` methods."""
        for option, value in bag.items():
            setter = getattr(self, f"set_{option}", None)
            if callable(setter):
                setter(value)
            else:
                self.logger.warning("Not a valid option setter name", option=option, chart=self.name())
        return self


class MarginableChart(BaseChart):
    """Chart drawing inside a margin-inset plotting area."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:  # noqa: ANN401
        super().__init__(*args, **kwargs)
        self._margins = Margins()

    def margins(self) -> Margins:
        return self._margins

    def set_margins(self, margins: Margins | Mapping[str, int]) -> MarginableChart:
        """Replace the margins, or update some sides from a mapping."""
        if isinstance(margins, Margins):
            self._margins = margins.model_copy()
            return self
        try:
            self._margins = Margins(**{**self._margins.model_dump(), **dict(margins)})
        except ValidationError as e:
            raise ConfigurationError(f"Invalid margins: {dict(margins)}") from e
        return self

    def effective_width(self) -> int:
        """Width of the plotting area."""
        return self._width - self._margins.left - self._margins.right

    def effective_height(self) -> int:
        """Height of the plotting area."""
        return self._height - self._margins.top - self._margins.bottom
