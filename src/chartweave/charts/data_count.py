"""Widget reporting how many records the current filters select."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, ClassVar, Protocol

from .base import BaseChart

NumberFormat = Callable[[float], str]


class RecordIndex(Protocol):
    """Dimensional index exposing its total record count."""

    def size(self) -> int: ...


class GroupAll(Protocol):
    """Aggregate over all currently selected records."""

    def value(self) -> float: ...


def thousands(number: float) -> str:
    """Integer with comma thousands separators."""
    return f"{round(number):,d}"


class DataCount(BaseChart):
    """Shows the selected record count out of the total.

    Templates may contain ``%total-count`` and ``%filter-count``. The
    ``all`` template is used when every record is selected, the ``some``
    template otherwise; without templates a plain sentence is produced.
    """

    MANDATORY_ATTRIBUTES: ClassVar[tuple[str, ...]] = ("crossfilter", "group_all")

    def __init__(self, *args: Any, **kwargs: Any) -> None:  # noqa: ANN401
        super().__init__(*args, **kwargs)
        self._crossfilter: RecordIndex | None = None
        self._group_all: GroupAll | None = None
        self._html = {"all": "", "some": ""}
        self._format_number: NumberFormat = thousands
        self._text = ""

    def crossfilter(self) -> RecordIndex | None:
        return self._crossfilter

    def set_crossfilter(self, index: RecordIndex) -> DataCount:
        self._crossfilter = index
        return self

    def group_all(self) -> GroupAll | None:
        return self._group_all

    def set_group_all(self, group_all: GroupAll) -> DataCount:
        self._group_all = group_all
        return self

    def html(self) -> dict[str, str]:
        return dict(self._html)

    def set_html(self, all: str | None = None, some: str | None = None) -> DataCount:  # noqa: A002
        """Set the templates; an empty or missing value keeps the current one."""
        if all:
            self._html["all"] = all
        if some:
            self._html["some"] = some
        return self

    def format_number(self) -> NumberFormat:
        return self._format_number

    def set_format_number(self, formatter: NumberFormat) -> DataCount:
        self._format_number = formatter
        return self

    def text(self) -> str:
        """Text produced by the last render/redraw."""
        return self._text

    def _do_render(self) -> str:
        total = self._crossfilter.size()
        selected = self._group_all.value()
        total_text = self._format_number(total)
        selected_text = self._format_number(selected)

        if total == selected and self._html["all"]:
            template = self._html["all"]
        elif self._html["some"]:
            template = self._html["some"]
        else:
            template = "%filter-count selected out of %total-count records"

        self._text = template.replace("%total-count", total_text).replace("%filter-count", selected_text)
        return self._text
