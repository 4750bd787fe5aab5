"""Core types: filters, errors, enums, configuration models and unit helpers."""

from chartweave.core.errors import (
    BroadcastError,
    ChartweaveError,
    ConfigurationError,
    InvalidCapError,
    InvalidStateError,
    MissingAttributeError,
    UnsupportedOperationError,
)
from chartweave.core.filters import (
    Filter,
    PredicateFilter,
    RangedFilter,
    ValueFilter,
    as_filter,
    filter_predicate,
    matches_all,
)
from chartweave.core.models import CoordinationConfig, Margins, TransitionSettings, YAxisRanges

__all__ = [
    "BroadcastError",
    "ChartweaveError",
    "ConfigurationError",
    "CoordinationConfig",
    "Filter",
    "InvalidCapError",
    "InvalidStateError",
    "Margins",
    "MissingAttributeError",
    "PredicateFilter",
    "RangedFilter",
    "TransitionSettings",
    "UnsupportedOperationError",
    "ValueFilter",
    "YAxisRanges",
    "as_filter",
    "filter_predicate",
    "matches_all",
]
