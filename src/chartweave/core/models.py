"""Pydantic models for chartweave configuration and value objects."""

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "CHARTWEAVE_"
DISABLE_TRANSITIONS_ENV = f"{ENV_PREFIX}DISABLE_TRANSITIONS"
ISOLATE_FAILURES_ENV = f"{ENV_PREFIX}ISOLATE_FAILURES"


class CoordinationConfig(BaseSettings):
    """Process-level switches shared by every chart of a coordination context.

    Unset fields fall back to CHARTWEAVE_* environment variables; values that
    are not valid booleans are rejected.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore",
    )

    disable_transitions: bool = Field(default=False, description="Skip every animated transition")
    isolate_failures: bool = Field(
        default=True,
        description="Collect per-chart failures during broadcasts instead of aborting the loop",
    )

    @classmethod
    def from_env(cls) -> "CoordinationConfig":
        """Build a config from CHARTWEAVE_* environment variables only.

        Raises:
            ValidationError: If a variable is not a valid boolean
        """
        return cls()


class Margins(BaseModel):
    """Space reserved around a chart's plotting area, in pixels."""

    top: int = Field(default=10, ge=0)
    right: int = Field(default=50, ge=0)
    bottom: int = Field(default=30, ge=0)
    left: int = Field(default=30, ge=0)


class TransitionSettings(BaseModel):
    """Animated transition timing for a chart, in milliseconds."""

    duration: int = Field(default=750, ge=0)
    delay: int = Field(default=0, ge=0)


class YAxisRanges(BaseModel):
    """Aggregated y-axis extents of a composite chart, per side."""

    left_min: float | None = Field(default=None, description="Minimum of the left axis domain")
    left_max: float | None = Field(default=None, description="Maximum of the left axis domain")
    right_min: float | None = Field(default=None, description="Minimum of the right axis domain")
    right_max: float | None = Field(default=None, description="Maximum of the right axis domain")

    def has_left(self) -> bool:
        """Whether the left axis has a domain."""
        return self.left_min is not None and self.left_max is not None

    def has_right(self) -> bool:
        """Whether the right axis has a domain."""
        return self.right_min is not None and self.right_max is not None


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Attribute or option that caused the error")
    reason: str | None = Field(default=None, description="Detailed reason for the error")
    suggestion: str | None = Field(default=None, description="Suggested correction")


class ErrorResponse(BaseModel):
    """Serializable form of a chartweave error."""

    code: str = Field(..., description="Error code (e.g., E400_CONFIGURATION)")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] | None = Field(default=None, description="Detailed error information")
    hint: str | None = Field(default=None, description="Correction hint for the caller")
    phase: str | None = Field(default=None, description="Lifecycle phase where the error occurred")
