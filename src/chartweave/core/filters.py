"""Selection criteria a chart can hold on its dimension."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from .enums import FilterKind

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


class Filter(ABC):
    """One active selection criterion on a dimension key."""

    filter_type: ClassVar[FilterKind]

    @abstractmethod
    def is_filtered(self, key: Any) -> bool:  # noqa: ANN401
        """Whether the key passes this filter."""

    def __call__(self, key: Any) -> bool:  # noqa: ANN401
        return self.is_filtered(key)


@dataclass(frozen=True)
class ValueFilter(Filter):
    """Exact equality against a single key."""

    filter_type: ClassVar[FilterKind] = FilterKind.VALUE

    value: Any

    def is_filtered(self, key: Any) -> bool:  # noqa: ANN401
        return bool(key == self.value)


@dataclass(frozen=True)
class RangedFilter(Filter):
    """Half-open interval ``[low, high)`` over numeric or ordinal keys."""

    filter_type: ClassVar[FilterKind] = FilterKind.RANGE

    low: Any
    high: Any

    def is_filtered(self, key: Any) -> bool:  # noqa: ANN401
        return bool(self.low <= key < self.high)


@dataclass(frozen=True)
class PredicateFilter(Filter):
    """Arbitrary caller-supplied predicate over a key."""

    filter_type: ClassVar[FilterKind] = FilterKind.PREDICATE

    predicate: Callable[[Any], bool]

    def is_filtered(self, key: Any) -> bool:  # noqa: ANN401
        return bool(self.predicate(key))


def as_filter(obj: Any) -> Filter:  # noqa: ANN401
    """Coerce a raw value into a Filter.

    Filter instances are returned as-is, callables become predicate filters
    and anything else is matched by equality.
    """
    if isinstance(obj, Filter):
        return obj
    if callable(obj):
        return PredicateFilter(obj)
    return ValueFilter(obj)


def matches_all(filters: Iterable[Filter], key: Any) -> bool:  # noqa: ANN401
    """Whether every filter accepts the key (vacuously true with no filters)."""
    return all(f.is_filtered(key) for f in filters)


def filter_predicate(filters: Iterable[Filter]) -> Callable[[Any], bool] | None:
    """Build the predicate pushed to a dimension, or None for "unfiltered"."""
    active = list(filters)
    if not active:
        return None

    def predicate(key: Any) -> bool:  # noqa: ANN401
        return matches_all(active, key)

    return predicate
