"""Heat map: one color-coded box per record on a row/column grid."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, ClassVar

import altair as alt

from chartweave.data.stages import Accessor, default_value_accessor
from chartweave.render.altair_spec import key_encoding_type, prepare_data_for_altair

from .base import MarginableChart

BOX_CORNER_RATIO = 0.15


def _sorted_unique(values: list[Any]) -> list[Any]:
    return sorted(set(values))


def _domain(values: list[Any]) -> list[Any]:
    return [value.isoformat() if hasattr(value, "isoformat") else value for value in values]


class HeatMap(MarginableChart):
    """Matrix of two keys colored by a third value.

    Columns come from the key accessor and rows from the value accessor;
    both are ordinal and default to the sorted distinct values in the data.
    The box color is read with the color accessor, which also provides the
    default title. Only ``group`` is mandatory.
    """

    MANDATORY_ATTRIBUTES: ClassVar[tuple[str, ...]] = ("group",)

    def __init__(self, *args: Any, **kwargs: Any) -> None:  # noqa: ANN401
        super().__init__(*args, **kwargs)
        self._rows: list[Any] | None = None
        self._cols: list[Any] | None = None
        self._color_accessor: Accessor = default_value_accessor
        self._title = self._color_title

    def _color_title(self, record: Mapping[str, Any]) -> str:
        return str(self._color_accessor(record))

    def color_accessor(self) -> Accessor:
        return self._color_accessor

    def set_color_accessor(self, accessor: Accessor) -> HeatMap:
        self._color_accessor = accessor
        return self

    def rows(self) -> list[Any]:
        """Row domain, bottom to top: the override, or the sorted row values."""
        if self._rows is not None:
            return list(self._rows)
        return _sorted_unique([self._value_accessor(record) for record in self.data()])

    def set_rows(self, rows: Sequence[Any] | None) -> HeatMap:
        """Fix the row domain; None derives it from the data again."""
        self._rows = list(rows) if rows is not None else None
        return self

    def cols(self) -> list[Any]:
        """Column domain, left to right: the override, or the sorted keys."""
        if self._cols is not None:
            return list(self._cols)
        return _sorted_unique([self._key_accessor(record) for record in self.data()])

    def set_cols(self, cols: Sequence[Any] | None) -> HeatMap:
        """Fix the column domain; None derives it from the data again."""
        self._cols = list(cols) if cols is not None else None
        return self

    def box_size(self) -> tuple[int, int]:
        """Width and height of one box in the plotting area."""
        cols, rows = self.cols(), self.rows()
        if not cols or not rows:
            return 0, 0
        return self.effective_width() // len(cols), self.effective_height() // len(rows)

    def boxes(self) -> list[dict[str, Any]]:
        """One ``{col, row, color, title}`` box per record inside the row/column domains."""
        cols, rows = set(self.cols()), set(self.rows())
        boxes = []
        for record in self.data():
            col, row = self._key_accessor(record), self._value_accessor(record)
            if col not in cols or row not in rows:
                continue
            boxes.append(
                {
                    "col": col,
                    "row": row,
                    "color": self._color_accessor(record),
                    "title": self._title(record),
                }
            )
        return boxes

    def _do_render(self) -> alt.Chart:
        cols, rows = self.cols(), self.rows()
        boxes = self.boxes()
        box_width, box_height = self.box_size()
        # the first row sits at the bottom
        row_order = list(reversed(rows))

        if key_encoding_type(boxes, "color") == "Q":
            color = alt.Color("color:Q", scale=alt.Scale(range=[self._colors[-1], self._colors[0]]), title="value")
        else:
            color = alt.Color("color:N", scale=alt.Scale(range=list(self._colors)), title="value")

        encodings: dict[str, Any] = {
            "x": alt.X("col:O", scale=alt.Scale(domain=_domain(cols)), title=None),
            "y": alt.Y("row:O", scale=alt.Scale(domain=_domain(row_order)), title=None),
            "color": color,
        }
        if self._render_title:
            encodings["tooltip"] = ["title:N"]

        corner = round(BOX_CORNER_RATIO * min(box_width, box_height))
        chart = alt.Chart(prepare_data_for_altair(boxes)).mark_rect(cornerRadius=corner)
        self.logger.debug("Heat map boxes", chart=self.name(), boxes=len(boxes), rows=len(rows), cols=len(cols))
        return chart.encode(**encodings).properties(width=self.effective_width(), height=self.effective_height())
