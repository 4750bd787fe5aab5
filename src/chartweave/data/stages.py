"""Data transform stages turning grouped aggregates into plottable records.

Each stage exposes the same ``data() -> list[Record]`` contract and wraps the
stage before it, so plain, filtered, capped and stacked sequences are built
by composing stages instead of subclassing.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from chartweave.core.enums import StackDomain
from chartweave.core.errors import ConfigurationError, InvalidCapError
from chartweave.core.filters import Filter, matches_all

Record = dict[str, Any]
Accessor = Callable[[Mapping[str, Any]], Any]
FilterSource = Callable[[], Sequence[Filter]]
OthersGrouper = Callable[[list[Record], list[Record]], list[Record]]

DEFAULT_OTHERS_LABEL = "Others"


@runtime_checkable
class GroupedSource(Protocol):
    """Live view over a grouped aggregate of a dimensional index."""

    def all(self) -> Sequence[Mapping[str, Any]]: ...


@runtime_checkable
class DataStage(Protocol):
    """Anything producing the record sequence a chart plots."""

    def data(self) -> list[Record]: ...


def default_value_accessor(record: Mapping[str, Any]) -> Any:  # noqa: ANN401
    """Plot the record's ``value`` field."""
    return record["value"]


def default_key_accessor(record: Mapping[str, Any]) -> Any:  # noqa: ANN401
    """Key the record by its ``key`` field."""
    return record["key"]


def no_filters() -> Sequence[Filter]:
    return ()


class SourceStage:
    """Base read: copy every source record and derive its ``_value``."""

    def __init__(
        self,
        group: GroupedSource,
        value_accessor: Accessor = default_value_accessor,
        ordering: Accessor | None = None,
    ) -> None:
        """Initialize the base read.

        Args:
            group: Grouped aggregate exposing ``all()``
            value_accessor: Derives the plotted value from a record
            ordering: Optional sort key; the source order is kept when unset
        """
        self.group = group
        self.value_accessor = value_accessor
        self.ordering = ordering

    def data(self) -> list[Record]:
        records = [dict(record) for record in self.group.all()]
        for record in records:
            record["_value"] = self.value_accessor(record)
        if self.ordering is not None:
            records.sort(key=self.ordering)
        return records


class FilterStage:
    """Keep only records whose key passes every active filter."""

    def __init__(self, upstream: DataStage, filters: FilterSource = no_filters) -> None:
        self.upstream = upstream
        self.filters = filters

    def data(self) -> list[Record]:
        records = self.upstream.data()
        active = list(self.filters())
        if not active:
            return records
        return [record for record in records if matches_all(active, record["key"])]


class CapperStage:
    """Top-N records plus one synthetic "others" record for the tail."""

    def __init__(
        self,
        upstream: DataStage,
        cap: int | None = None,
        others_label: str = DEFAULT_OTHERS_LABEL,
        others_grouper: OthersGrouper | None = None,
    ) -> None:
        """Initialize the capper.

        Args:
            upstream: Stage producing the sequence to cap
            cap: Number of records kept as-is; None disables capping
            others_label: Key of the synthetic record
            others_grouper: Replaces the default tail aggregation when set

        Raises:
            InvalidCapError: If cap is negative
        """
        self.upstream = upstream
        self.set_cap(cap)
        self.others_label = others_label
        self.others_grouper = others_grouper

    @property
    def cap(self) -> int | None:
        return self._cap

    def set_cap(self, cap: int | None) -> None:
        if cap is not None and cap < 0:
            raise InvalidCapError(cap)
        self._cap = cap

    def data(self) -> list[Record]:
        records = self.upstream.data()
        if self._cap is None or self._cap >= len(records):
            return records

        # sorted() is stable, so equal values keep their source order
        ranked = sorted(records, key=lambda record: record["_value"], reverse=True)
        top, rest = ranked[: self._cap], ranked[self._cap :]
        if self.others_grouper is not None:
            return self.others_grouper(top, rest)
        return [*top, self._group_others(rest)]

    def _group_others(self, rest: list[Record]) -> Record:
        total = sum(record["_value"] for record in rest)
        return {
            "key": self.others_label,
            "value": total,
            "_value": total,
            "others": [record["key"] for record in rest],
        }


@dataclass
class StackLayer:
    """One series contributing cumulative offsets to a stack."""

    group: GroupedSource
    accessor: Accessor
    name: str
    hidden: bool = False


class StackStage:
    """Stack several layers over a shared key domain.

    Layer 0 is the chart's own group. For every key in the domain each layer
    contributes ``y0`` (the previous layer's ``y1``, 0 for layer 0) and
    ``y1 = y0 + value``. Keys missing from a layer count as 0. Hidden layers
    keep their place in the stacking order; only renderers skip them.
    """

    def __init__(
        self,
        filters: FilterSource = no_filters,
        domain: StackDomain = StackDomain.FIRST_LAYER,
        layers: Sequence[StackLayer] | None = None,
    ) -> None:
        self.filters = filters
        self.domain = domain
        self._layers: list[StackLayer] = list(layers or [])

    def layers(self) -> list[StackLayer]:
        return list(self._layers)

    def add_layer(self, group: GroupedSource, accessor: Accessor | None = None, name: str | None = None) -> StackLayer:
        """Append a layer; without an accessor the previous layer's is reused."""
        if accessor is None:
            accessor = self._layers[-1].accessor if self._layers else default_value_accessor
        layer = StackLayer(group=group, accessor=accessor, name=name if name is not None else str(len(self._layers)))
        self._layers.append(layer)
        return layer

    def set_base_layer(self, group: GroupedSource, accessor: Accessor, name: str | None = None) -> None:
        """Replace layer 0, keeping any layers stacked on top of it."""
        base = StackLayer(group=group, accessor=accessor, name=name if name is not None else "0")
        if self._layers:
            base.hidden = self._layers[0].hidden
            self._layers[0] = base
        else:
            self._layers.append(base)

    def clear_layers(self) -> None:
        """Drop every layer above layer 0."""
        del self._layers[1:]

    def hide_layer(self, name: str) -> None:
        self._find(name).hidden = True

    def show_layer(self, name: str) -> None:
        self._find(name).hidden = False

    def _find(self, name: str) -> StackLayer:
        for layer in self._layers:
            if layer.name == name:
                return layer
        raise ConfigurationError(f"No stack layer named '{name}'")

    def _layer_values(self, layer: StackLayer) -> tuple[list[Any], dict[Any, Any]]:
        stage = FilterStage(SourceStage(layer.group, layer.accessor), self.filters)
        keys: list[Any] = []
        values: dict[Any, Any] = {}
        for record in stage.data():
            key = record["key"]
            if key not in values:
                keys.append(key)
            values[key] = record["_value"]
        return keys, values

    def _key_domain(self, per_layer: list[tuple[list[Any], dict[Any, Any]]]) -> list[Any]:
        if self.domain is StackDomain.FIRST_LAYER:
            return per_layer[0][0]
        seen: dict[Any, None] = {}
        for keys, _ in per_layer:
            for key in keys:
                seen.setdefault(key, None)
        return list(seen)

    def layer_data(self) -> list[dict[str, Any]]:
        """Per-layer series of ``{key, value, y0, y1}`` points."""
        if not self._layers:
            return []
        per_layer = [self._layer_values(layer) for layer in self._layers]
        keys = self._key_domain(per_layer)

        series: list[dict[str, Any]] = [
            {"name": layer.name, "hidden": layer.hidden, "values": []} for layer in self._layers
        ]
        for key in keys:
            y0 = 0
            for index, (_, values) in enumerate(per_layer):
                raw = values.get(key, 0)
                # a negative value yields y1 < y0; segments share one running baseline
                y1 = y0 + raw
                series[index]["values"].append({"key": key, "value": raw, "y0": y0, "y1": y1})
                y0 = y1
        return series

    def data(self) -> list[Record]:
        series = self.layer_data()
        if not series:
            return []
        records: list[Record] = []
        for position, point in enumerate(series[0]["values"]):
            layers = []
            for layer in series:
                stacked = layer["values"][position]
                layers.append(
                    {
                        "name": layer["name"],
                        "hidden": layer["hidden"],
                        "value": stacked["value"],
                        "y0": stacked["y0"],
                        "y1": stacked["y1"],
                    }
                )
            records.append({"key": point["key"], "value": point["value"], "_value": point["value"], "layers": layers})
        return records
