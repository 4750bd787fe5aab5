"""Unit tests for filter primitives."""

import pytest

from chartweave.core.enums import FilterKind
from chartweave.core.filters import (
    PredicateFilter,
    RangedFilter,
    ValueFilter,
    as_filter,
    filter_predicate,
    matches_all,
)


class TestRangedFilter:
    """Test half-open range filters."""

    @pytest.mark.parametrize("key", [2, 3, 4, 2.5, 4.999])
    def test_keys_inside_range_pass(self, key: float) -> None:
        """Test that keys in [2, 5) pass."""
        assert RangedFilter(2, 5).is_filtered(key)

    @pytest.mark.parametrize("key", [1, 5, 6, 1.999])
    def test_keys_outside_range_rejected(self, key: float) -> None:
        """Test that the upper bound is excluded."""
        assert not RangedFilter(2, 5).is_filtered(key)

    def test_ordinal_range(self) -> None:
        """Test ranges over ordinal keys."""
        flt = RangedFilter("b", "d")
        assert flt("b")
        assert flt("c")
        assert not flt("d")

    def test_filter_type(self) -> None:
        """Test the kind tag."""
        assert RangedFilter(0, 1).filter_type == FilterKind.RANGE


class TestValueFilter:
    """Test scalar equality filters."""

    def test_exact_equality(self) -> None:
        """Test that only the equal key passes."""
        flt = ValueFilter("apple")
        assert flt("apple")
        assert not flt("pear")

    def test_filters_compare_by_value(self) -> None:
        """Test that equal filters are interchangeable."""
        assert ValueFilter(3) == ValueFilter(3)
        assert RangedFilter(1, 2) == RangedFilter(1, 2)
        assert ValueFilter(3) != ValueFilter(4)


class TestAsFilter:
    """Test coercion of raw values."""

    def test_filter_returned_as_is(self) -> None:
        """Test that Filter instances pass through."""
        flt = RangedFilter(0, 10)
        assert as_filter(flt) is flt

    def test_callable_becomes_predicate(self) -> None:
        """Test that callables are wrapped."""
        flt = as_filter(lambda key: key > 3)
        assert isinstance(flt, PredicateFilter)
        assert flt(4)
        assert not flt(3)

    def test_scalar_becomes_value_filter(self) -> None:
        """Test that scalars match by equality."""
        assert as_filter(7) == ValueFilter(7)


class TestCombination:
    """Test combining several filters."""

    def test_no_filters_pass_everything(self) -> None:
        """Test that an empty filter set is unfiltered."""
        assert matches_all([], "anything")
        assert filter_predicate([]) is None

    def test_all_filters_must_pass(self) -> None:
        """Test conjunction of active filters."""
        filters = [RangedFilter(0, 10), PredicateFilter(lambda key: key % 2 == 0)]
        predicate = filter_predicate(filters)
        assert predicate is not None
        assert predicate(4)
        assert not predicate(5)
        assert not predicate(12)
