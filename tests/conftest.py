"""Shared fixtures for chartweave tests."""

from collections.abc import Callable, Iterator
from typing import Any

import pytest

from chartweave.coordination import CoordinationContext, reset_default_context
from chartweave.core.models import CoordinationConfig


class StaticGroup:
    """Grouped source returning fixed records, counting reads."""

    def __init__(self, records: list[dict[str, Any]]) -> None:
        self.records = records
        self.reads = 0

    def all(self) -> list[dict[str, Any]]:
        self.reads += 1
        return self.records


class RecordingDimension:
    """Dimension stub remembering the last predicate pushed to it."""

    def __init__(self) -> None:
        self.predicate: Any = None
        self.calls = 0

    def filter(self, predicate: Any) -> "RecordingDimension":
        self.predicate = predicate
        self.calls += 1
        return self


@pytest.fixture
def make_group() -> Callable[[dict[Any, float]], StaticGroup]:
    """Factory for groups of ``{key, value}`` records in the given key order."""

    def factory(values: dict[Any, float]) -> StaticGroup:
        return StaticGroup([{"key": key, "value": value} for key, value in values.items()])

    return factory


@pytest.fixture
def dimension() -> RecordingDimension:
    return RecordingDimension()


@pytest.fixture
def context() -> CoordinationContext:
    """Fresh, isolated coordination context."""
    return CoordinationContext(CoordinationConfig())


@pytest.fixture(autouse=True)
def _fresh_default_context() -> Iterator[None]:
    reset_default_context(CoordinationConfig())
    yield
    reset_default_context(CoordinationConfig())
