"""Unit counting and padding helpers for coordinate grids."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

from .errors import InvalidStateError

if TYPE_CHECKING:
    from collections.abc import Callable

EPS = 1e-9


def integers(start: float, end: float) -> float:
    """Number of integer units between two points."""
    return end - start


def fp_precision(precision: float) -> Callable[[float, float], int]:
    """Build a unit counter for floating point keys rounded to ``precision``.

    >>> fp_precision(0.001)(0.49999, 1.0)
    501
    """

    def count(start: float, end: float) -> int:
        d = abs((end - start) / precision)
        rounded = round(d)
        if abs(d - rounded) < EPS:
            return int(rounded) + 1
        return math.ceil(d)

    return count


def ordinal(*_args: Any) -> Any:  # noqa: ANN401
    """Marker for ordinal x units. Charts check identity, never call it."""
    raise InvalidStateError(
        "units.ordinal should not be called - it is a placeholder",
        hint="Pass units.ordinal to set_x_units() without calling it",
    )


def _percentage(amount: Any) -> float | None:  # noqa: ANN401
    if isinstance(amount, str) and amount.strip().endswith("%"):
        return float(amount.strip()[:-1]) / 100.0
    return None


def add(value: Any, increment: Any) -> Any:  # noqa: ANN401
    """Add a numeric or percentage (``"10%"``) increment to a value."""
    if value is None or not increment:
        return value
    pct = _percentage(increment)
    if pct is not None:
        return value + abs(value) * pct
    return value + increment


def subtract(value: Any, decrement: Any) -> Any:  # noqa: ANN401
    """Subtract a numeric or percentage (``"10%"``) decrement from a value."""
    if value is None or not decrement:
        return value
    pct = _percentage(decrement)
    if pct is not None:
        return value - abs(value) * pct
    return value - decrement
