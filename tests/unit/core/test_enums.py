"""Unit tests for enumerations."""

import pytest

from chartweave.core.enums import ChartEvent, ErrorCode, FilterKind, LifecyclePhase, StackDomain


class TestErrorCode:
    """Test ErrorCode enumeration."""

    def test_error_codes(self) -> None:
        """Test error codes are defined."""
        codes = list(ErrorCode)
        assert ErrorCode.E400_CONFIGURATION in codes
        assert ErrorCode.E409_INVALID_STATE in codes
        assert ErrorCode.E500_BROADCAST in codes
        assert ErrorCode.E500_INTERNAL in codes

    def test_error_code_values(self) -> None:
        """Test error code values match their names."""
        for code in ErrorCode:
            assert code.value == code.name


class TestLifecyclePhase:
    """Test LifecyclePhase enumeration."""

    def test_phases(self) -> None:
        """Test every lifecycle phase is defined."""
        assert [phase.value for phase in LifecyclePhase] == ["configure", "data", "filter", "render", "redraw"]


class TestStackDomain:
    """Test StackDomain enumeration."""

    def test_from_string(self) -> None:
        """Test domains can be created from their values."""
        assert StackDomain("union") is StackDomain.UNION
        assert StackDomain("first_layer") is StackDomain.FIRST_LAYER

    def test_unknown_value(self) -> None:
        """Test unknown domains are rejected."""
        with pytest.raises(ValueError):
            StackDomain("intersection")


class TestChartEvent:
    """Test ChartEvent enumeration."""

    @pytest.mark.parametrize(
        ("value", "event"),
        [
            ("pre_render", ChartEvent.PRE_RENDER),
            ("post_redraw", ChartEvent.POST_REDRAW),
            ("filtered", ChartEvent.FILTERED),
            ("renderlet", ChartEvent.RENDERLET),
        ],
    )
    def test_event_names(self, value: str, event: ChartEvent) -> None:
        """Test events are addressable by name."""
        assert ChartEvent(value) is event

    def test_filter_kinds(self) -> None:
        """Test filter kinds are string-valued."""
        assert FilterKind.RANGE == "range"
        assert {kind.value for kind in FilterKind} == {"value", "range", "predicate"}
