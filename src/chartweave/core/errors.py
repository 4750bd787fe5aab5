"""Error handling and exception definitions for chartweave."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .enums import ErrorCode, LifecyclePhase
from .models import ErrorDetail, ErrorResponse

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chartweave.coordination.render_cycle import ChartFailure


class ChartweaveError(Exception):
    """Base exception for all chartweave errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        details: list[ErrorDetail] | None = None,
        hint: str | None = None,
        phase: LifecyclePhase | None = None,
    ):
        """Initialize chartweave error.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            details: Optional detailed error information
            hint: Optional correction hint for the caller
            phase: Optional lifecycle phase where the error occurred
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or []
        self.hint = hint
        self.phase = phase

    def to_error_response(self) -> ErrorResponse:
        """Convert exception to ErrorResponse model."""
        return ErrorResponse(
            code=self.code.value,
            message=self.message,
            details=self.details if self.details else None,
            hint=self.hint,
            phase=self.phase.value if self.phase else None,
        )


class ConfigurationError(ChartweaveError):
    """Raised when charts are wired up incorrectly."""

    def __init__(
        self,
        message: str,
        details: list[ErrorDetail] | None = None,
        hint: str | None = None,
        phase: LifecyclePhase | None = LifecyclePhase.CONFIGURE,
    ):
        """Initialize configuration error."""
        super().__init__(
            message=message,
            code=ErrorCode.E400_CONFIGURATION,
            details=details,
            hint=hint,
            phase=phase,
        )


class InvalidCapError(ConfigurationError):
    """Raised when a capper is given a negative cap count."""

    def __init__(self, cap: int):
        """Initialize invalid cap error."""
        super().__init__(
            message=f"Cap count must be zero or positive, got {cap}",
            details=[ErrorDetail(field="cap", reason=f"{cap} < 0", suggestion="Use None to disable capping")],
        )
        self.cap = cap


class MissingAttributeError(ConfigurationError):
    """Raised when a chart lacks a mandatory attribute before rendering."""

    def __init__(
        self,
        chart_name: str,
        attributes: Sequence[str],
        phase: LifecyclePhase | None = LifecyclePhase.RENDER,
    ):
        """Initialize missing attribute error."""
        details = [
            ErrorDetail(
                field=attribute,
                reason=f"Mandatory attribute '{attribute}' is not set",
                suggestion=f"Call set_{attribute}() before rendering",
            )
            for attribute in attributes
        ]
        super().__init__(
            message=f"Mandatory attribute(s) {', '.join(attributes)} missing on chart {chart_name}",
            details=details,
            phase=phase,
        )
        self.attributes = list(attributes)


class UnsupportedOperationError(ConfigurationError):
    """Raised when a chart type does not support an operation."""

    def __init__(self, operation: str, chart_type: str, hint: str | None = None):
        """Initialize unsupported operation error."""
        super().__init__(
            message=f"'{operation}' is not supported for {chart_type}",
            hint=hint,
        )
        self.operation = operation


class InvalidStateError(ChartweaveError):
    """Raised when something is used in a state it cannot handle."""

    def __init__(self, message: str, hint: str | None = None):
        """Initialize invalid state error."""
        super().__init__(message=message, code=ErrorCode.E409_INVALID_STATE, hint=hint)


class BroadcastError(ChartweaveError):
    """Raised when a group broadcast collected per-chart failures."""

    def __init__(self, failures: Sequence[ChartFailure], phase: LifecyclePhase | None = None):
        """Initialize broadcast error."""
        details = [
            ErrorDetail(field=failure.chart_name, reason=f"{type(failure.error).__name__}: {failure.error}")
            for failure in failures
        ]
        super().__init__(
            message=f"{len(failures)} chart(s) failed during broadcast",
            code=ErrorCode.E500_BROADCAST,
            details=details,
            phase=phase,
        )
        self.failures = list(failures)
