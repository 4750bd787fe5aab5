"""Unit tests for configuration models."""

import pytest
from pydantic import ValidationError

from chartweave.core.models import (
    DISABLE_TRANSITIONS_ENV,
    ISOLATE_FAILURES_ENV,
    CoordinationConfig,
    Margins,
    TransitionSettings,
    YAxisRanges,
)


class TestCoordinationConfig:
    """Test CoordinationConfig model."""

    def test_defaults(self) -> None:
        """Test default switches."""
        config = CoordinationConfig()
        assert config.disable_transitions is False
        assert config.isolate_failures is True

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test reading switches from the environment."""
        monkeypatch.setenv(DISABLE_TRANSITIONS_ENV, "true")
        monkeypatch.setenv(ISOLATE_FAILURES_ENV, "0")
        config = CoordinationConfig.from_env()
        assert config.disable_transitions is True
        assert config.isolate_failures is False

    def test_from_env_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test defaults when variables are unset."""
        monkeypatch.delenv(DISABLE_TRANSITIONS_ENV, raising=False)
        monkeypatch.delenv(ISOLATE_FAILURES_ENV, raising=False)
        assert CoordinationConfig.from_env() == CoordinationConfig()

    @pytest.mark.parametrize("raw", ["ture", "2", "maybe"])
    def test_from_env_rejects_invalid_flag(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        """Test that a mistyped switch fails instead of silently turning off."""
        monkeypatch.setenv(ISOLATE_FAILURES_ENV, raw)
        with pytest.raises(ValidationError):
            CoordinationConfig.from_env()

    def test_explicit_values_override_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test constructor arguments win over the environment."""
        monkeypatch.setenv(DISABLE_TRANSITIONS_ENV, "yes")
        assert CoordinationConfig().disable_transitions is True
        assert CoordinationConfig(disable_transitions=False).disable_transitions is False


class TestGeometryModels:
    """Test margins and transition timing."""

    def test_margins_defaults(self) -> None:
        """Test default margins."""
        margins = Margins()
        assert (margins.top, margins.right, margins.bottom, margins.left) == (10, 50, 30, 30)

    def test_negative_margin_rejected(self) -> None:
        """Test validation of margins."""
        with pytest.raises(ValidationError):
            Margins(left=-1)

    def test_transition_settings(self) -> None:
        """Test transition timing defaults and validation."""
        assert TransitionSettings().duration == 750
        with pytest.raises(ValidationError):
            TransitionSettings(duration=-5)


class TestYAxisRanges:
    """Test YAxisRanges helpers."""

    def test_sides(self) -> None:
        """Test populated side detection."""
        ranges = YAxisRanges(left_min=0, left_max=10)
        assert ranges.has_left()
        assert not ranges.has_right()
