"""Infrastructure helpers shared across chartweave."""

from chartweave.infra.logging import StructuredLogger, get_logger

__all__ = ["StructuredLogger", "get_logger"]
