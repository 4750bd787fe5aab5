"""Polars-backed stand-in for a dimensional index.

Charts only need ``dimension.filter(predicate | None)`` and ``group.all()``;
this module provides both over a polars DataFrame so widgets can be wired up
without an external indexing engine. Groups follow the usual crossfilter
semantics: a group ignores the filter of its own dimension and reports every
key of the full frame, with 0 for keys filtered away elsewhere.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Literal

import polars as pl

from chartweave.core.errors import ConfigurationError

Reduce = Literal["count", "sum"]
KeyPredicate = Callable[[Any], bool]

_VALUE_ALIAS = "__value"


class FrameIndex:
    """Dimensional index over one DataFrame."""

    def __init__(self, frame: pl.DataFrame) -> None:
        self._frame = frame
        self._dimensions: list[FrameDimension] = []

    def frame(self) -> pl.DataFrame:
        return self._frame

    def size(self) -> int:
        """Total number of rows, ignoring filters."""
        return self._frame.height

    def dimension(self, column: str) -> FrameDimension:
        if column not in self._frame.columns:
            raise ConfigurationError(
                f"Column '{column}' not found",
                hint=f"Available columns: {', '.join(self._frame.columns[:10])}",
            )
        dimension = FrameDimension(self, column)
        self._dimensions.append(dimension)
        return dimension

    def group_all(self) -> FrameGroupAll:
        return FrameGroupAll(self)

    def filtered(self, exclude: FrameDimension | None = None) -> pl.DataFrame:
        """Rows passing the filters of every dimension except ``exclude``."""
        frame = self._frame
        for dimension in self._dimensions:
            if dimension is exclude or dimension.predicate is None:
                continue
            keys = frame.get_column(dimension.column).to_list()
            mask = pl.Series([bool(dimension.predicate(key)) for key in keys], dtype=pl.Boolean)
            frame = frame.filter(mask)
        return frame


class FrameDimension:
    """Filterable key column of a FrameIndex."""

    def __init__(self, index: FrameIndex, column: str) -> None:
        self.index = index
        self.column = column
        self.predicate: KeyPredicate | None = None

    def filter(self, predicate: KeyPredicate | None) -> FrameDimension:
        """Replace the active predicate; None clears it."""
        self.predicate = predicate
        return self

    def filter_all(self) -> FrameDimension:
        return self.filter(None)

    def group(self, reduce: Reduce = "count", value_column: str | None = None) -> FrameGroup:
        if reduce not in ("count", "sum"):
            raise ConfigurationError(f"Unknown reduce '{reduce}'", hint="Use 'count' or 'sum'")
        if reduce == "sum" and value_column is None:
            raise ConfigurationError("A 'sum' group needs a value_column")
        return FrameGroup(self, reduce, value_column)


class FrameGroup:
    """Grouped aggregate of a dimension, exposing ``all()`` records."""

    def __init__(self, dimension: FrameDimension, reduce: Reduce, value_column: str | None) -> None:
        self.dimension = dimension
        self.reduce = reduce
        self.value_column = value_column

    def _aggregation(self) -> pl.Expr:
        if self.reduce == "sum":
            return pl.col(self.value_column).sum().alias(_VALUE_ALIAS)
        return pl.len().alias(_VALUE_ALIAS)

    def all(self) -> list[dict[str, Any]]:
        column = self.dimension.column
        index = self.dimension.index
        keys = index.frame().get_column(column).unique().sort().to_list()

        filtered = index.filtered(exclude=self.dimension)
        totals = dict(filtered.group_by(column).agg(self._aggregation()).iter_rows())
        return [{"key": key, "value": totals.get(key, 0)} for key in keys]


class FrameGroupAll:
    """Single aggregate: number of rows passing every filter."""

    def __init__(self, index: FrameIndex) -> None:
        self.index = index

    def value(self) -> int:
        return self.index.filtered().height
