"""Pie chart: a capped sequence drawn as arcs."""

from __future__ import annotations

from typing import Any

import altair as alt

from chartweave.core.errors import ConfigurationError, InvalidCapError
from chartweave.data.chain import DataTransformChain, capped_chain
from chartweave.data.stages import DEFAULT_OTHERS_LABEL, OthersGrouper
from chartweave.render.altair_spec import prepare_data_for_altair
from chartweave.render.colors import color_strategy

from .base import BaseChart


class PieChart(BaseChart):
    """Slices for the top ``cap`` keys plus one slice for everything else."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:  # noqa: ANN401
        super().__init__(*args, **kwargs)
        self._cap: int | None = None
        self._others_label = DEFAULT_OTHERS_LABEL
        self._others_grouper: OthersGrouper | None = None
        self._inner_radius = 0

    def cap(self) -> int | None:
        return self._cap

    def set_cap(self, cap: int | None) -> PieChart:
        """Keep at most ``cap`` slices; None shows every key."""
        if cap is not None and cap < 0:
            raise InvalidCapError(cap)
        self._cap = cap
        return self

    def others_label(self) -> str:
        return self._others_label

    def set_others_label(self, label: str) -> PieChart:
        self._others_label = label
        return self

    def others_grouper(self) -> OthersGrouper | None:
        return self._others_grouper

    def set_others_grouper(self, grouper: OthersGrouper | None) -> PieChart:
        self._others_grouper = grouper
        return self

    def inner_radius(self) -> int:
        return self._inner_radius

    def set_inner_radius(self, radius: int) -> PieChart:
        if radius < 0:
            raise ConfigurationError(f"Inner radius must be zero or positive, got {radius}")
        self._inner_radius = radius
        return self

    def radius(self) -> int:
        return min(self._width, self._height) // 2

    def _build_data_chain(self) -> DataTransformChain:
        return capped_chain(
            self._group,
            self._value_accessor,
            self.filters,
            self._ordering,
            cap=self._cap,
            others_label=self._others_label,
            others_grouper=self._others_grouper,
        )

    def legendables(self) -> list[dict[str, Any]]:
        records = self.data()
        colors = color_strategy.series_colors(len(records), self._colors)
        return [
            {"chart": self, "name": record["key"], "color": color, "hidden": False}
            for record, color in zip(records, colors, strict=True)
        ]

    def _do_render(self) -> alt.Chart:
        records = self.data()
        keys = [record["key"] for record in records]
        colors = color_strategy.series_colors(len(records), self._colors)
        if self._render_title:
            records = [{**record, "title": self._title(record)} for record in records]

        encodings: dict[str, Any] = {
            "theta": alt.Theta("_value:Q", stack=True),
            "color": alt.Color("key:N", scale=alt.Scale(domain=keys, range=colors), sort=keys, title="key"),
            "order": alt.Order("rank:Q"),
        }
        if self._render_title:
            encodings["tooltip"] = ["title:N"]

        rows = prepare_data_for_altair(records)
        for rank, row in enumerate(rows["values"]):
            row["rank"] = rank

        chart = alt.Chart(rows).mark_arc(innerRadius=self._inner_radius, outerRadius=self.radius())
        return chart.encode(**encodings).properties(width=self._width, height=self._height)
