"""Enumerations for chartweave core types."""

from enum import Enum


class ErrorCode(str, Enum):
    """Application error codes for structured error reporting."""

    E400_CONFIGURATION = "E400_CONFIGURATION"
    E409_INVALID_STATE = "E409_INVALID_STATE"
    E500_BROADCAST = "E500_BROADCAST"
    E500_INTERNAL = "E500_INTERNAL"


class LifecyclePhase(str, Enum):
    """Chart lifecycle phases, used to tag errors and broadcast results."""

    CONFIGURE = "configure"
    DATA = "data"
    FILTER = "filter"
    RENDER = "render"
    REDRAW = "redraw"


class FilterKind(str, Enum):
    """Kinds of selection criteria a chart can hold."""

    VALUE = "value"
    RANGE = "range"
    PREDICATE = "predicate"


class StackDomain(str, Enum):
    """How a stack derives the keys it plots."""

    FIRST_LAYER = "first_layer"  # keys of layer 0, in its order
    UNION = "union"  # first-seen union over every layer


class ChartEvent(str, Enum):
    """Events a chart fires during its lifecycle."""

    PRE_RENDER = "pre_render"
    POST_RENDER = "post_render"
    PRE_REDRAW = "pre_redraw"
    POST_REDRAW = "post_redraw"
    FILTERED = "filtered"
    RENDERLET = "renderlet"
