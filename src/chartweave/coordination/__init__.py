"""Chart registry, group broadcasts and the coordination context."""

from chartweave.coordination.context import CoordinationContext, default_context, reset_default_context
from chartweave.coordination.registry import ALL_GROUPS, GLOBAL_GROUP, ChartRegistry, GroupId
from chartweave.coordination.render_cycle import BroadcastResult, ChartFailure, RenderCycleController, TransitionTarget

__all__ = [
    "ALL_GROUPS",
    "GLOBAL_GROUP",
    "BroadcastResult",
    "ChartFailure",
    "ChartRegistry",
    "CoordinationContext",
    "GroupId",
    "RenderCycleController",
    "TransitionTarget",
    "default_context",
    "reset_default_context",
]
