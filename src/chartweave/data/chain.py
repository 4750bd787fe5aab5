"""Ordered composition of data transform stages."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chartweave.core.enums import StackDomain

from .stages import (
    DEFAULT_OTHERS_LABEL,
    Accessor,
    CapperStage,
    DataStage,
    FilterSource,
    FilterStage,
    GroupedSource,
    OthersGrouper,
    Record,
    SourceStage,
    StackStage,
    default_value_accessor,
    no_filters,
)

if TYPE_CHECKING:
    from collections.abc import Callable


class DataTransformChain:
    """Pipeline object holding every stage from the source read to the tail.

    Example:
        chain = DataTransformChain(SourceStage(group)).then(lambda s: FilterStage(s, chart.filters))
    """

    def __init__(self, source: DataStage) -> None:
        self._stages: list[DataStage] = [source]

    def then(self, factory: Callable[[DataStage], DataStage]) -> DataTransformChain:
        """Wrap the current tail with the stage built by ``factory``."""
        self._stages.append(factory(self._stages[-1]))
        return self

    def stages(self) -> list[DataStage]:
        return list(self._stages)

    def tail(self) -> DataStage:
        return self._stages[-1]

    def find(self, stage_type: type) -> DataStage | None:
        """Last stage of the given type, if any."""
        for stage in reversed(self._stages):
            if isinstance(stage, stage_type):
                return stage
        return None

    def data(self) -> list[Record]:
        return self._stages[-1].data()


def simple_chain(
    group: GroupedSource,
    value_accessor: Accessor = default_value_accessor,
    filters: FilterSource = no_filters,
    ordering: Accessor | None = None,
) -> DataTransformChain:
    """Source read followed by filtering."""
    return DataTransformChain(SourceStage(group, value_accessor, ordering)).then(
        lambda upstream: FilterStage(upstream, filters)
    )


def capped_chain(  # noqa: PLR0913
    group: GroupedSource,
    value_accessor: Accessor = default_value_accessor,
    filters: FilterSource = no_filters,
    ordering: Accessor | None = None,
    cap: int | None = None,
    others_label: str = DEFAULT_OTHERS_LABEL,
    others_grouper: OthersGrouper | None = None,
) -> DataTransformChain:
    """Filtered sequence collapsed to the top ``cap`` records plus "others"."""
    return simple_chain(group, value_accessor, filters, ordering).then(
        lambda upstream: CapperStage(upstream, cap, others_label, others_grouper)
    )


def stacked_chain(
    group: GroupedSource,
    value_accessor: Accessor = default_value_accessor,
    filters: FilterSource = no_filters,
    domain: StackDomain = StackDomain.FIRST_LAYER,
    name: str | None = None,
) -> DataTransformChain:
    """Layered sequence whose layer 0 is ``group``."""
    stack = StackStage(filters=filters, domain=domain)
    stack.set_base_layer(group, value_accessor, name)
    return DataTransformChain(stack)
