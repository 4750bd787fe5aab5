"""chartweave: coordinated, filterable chart widgets over shared dimensional data."""

from chartweave.charts import (
    BarChart,
    BaseChart,
    CompositeChart,
    DataCount,
    HeatMap,
    LineChart,
    PieChart,
)
from chartweave.coordination import CoordinationContext, default_context, reset_default_context
from chartweave.coordination.defaults import (
    deregister_all_charts,
    deregister_chart,
    filter_all,
    has_chart,
    redraw_all,
    register_chart,
    render_all,
    renderlet,
    transition,
)
from chartweave.core import CoordinationConfig, RangedFilter, ValueFilter
from chartweave.data import FrameIndex

__version__ = "0.1.0"

__all__ = [
    "BarChart",
    "BaseChart",
    "CompositeChart",
    "CoordinationConfig",
    "CoordinationContext",
    "DataCount",
    "FrameIndex",
    "HeatMap",
    "LineChart",
    "PieChart",
    "RangedFilter",
    "ValueFilter",
    "__version__",
    "default_context",
    "deregister_all_charts",
    "deregister_chart",
    "filter_all",
    "has_chart",
    "redraw_all",
    "register_chart",
    "render_all",
    "renderlet",
    "reset_default_context",
    "transition",
]
