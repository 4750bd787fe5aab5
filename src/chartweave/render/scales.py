"""Minimal scale and axis objects configured by coordinate grid charts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

Orient = Literal["left", "right", "bottom", "top"]


class LinearScale:
    """Continuous linear mapping from a domain to a range."""

    def __init__(self, domain: tuple[float, float] | None = None, range_: tuple[float, float] = (0.0, 1.0)) -> None:
        self._domain = tuple(domain) if domain is not None else None
        self._range = tuple(range_)

    def domain(self) -> tuple[Any, Any] | None:
        return self._domain

    def set_domain(self, values: tuple[Any, Any] | list[Any]) -> LinearScale:
        low, high = values
        self._domain = (low, high)
        return self

    def range(self) -> tuple[float, float]:
        return self._range

    def set_range(self, values: tuple[float, float] | list[float]) -> LinearScale:
        low, high = values
        self._range = (low, high)
        return self

    def __call__(self, value: float) -> float:
        if self._domain is None:
            raise ValueError("Scale domain is not set")
        d0, d1 = self._domain
        r0, r1 = self._range
        if d1 == d0:
            return (r0 + r1) / 2
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)


@dataclass
class Axis:
    """An axis: its orientation plus the scale it draws."""

    orient: Orient = "left"
    scale: LinearScale | None = None

    def with_scale(self, scale: LinearScale | None) -> Axis:
        self.scale = scale
        return self
