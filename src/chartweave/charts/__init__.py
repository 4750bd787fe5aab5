"""Chart widgets taking part in group coordination."""

from chartweave.charts.base import BaseChart, MarginableChart
from chartweave.charts.composite import CompositeChart, align_y_axis_ranges
from chartweave.charts.coordinate_grid import CoordinateGridChart
from chartweave.charts.data_count import DataCount
from chartweave.charts.heatmap import HeatMap
from chartweave.charts.pie import PieChart
from chartweave.charts.protocols import Chart, ComposableChart, GridChart
from chartweave.charts.stack import BarChart, LineChart, StackChart

__all__ = [
    "BarChart",
    "BaseChart",
    "Chart",
    "ComposableChart",
    "CompositeChart",
    "CoordinateGridChart",
    "DataCount",
    "GridChart",
    "HeatMap",
    "LineChart",
    "MarginableChart",
    "PieChart",
    "StackChart",
    "align_y_axis_ranges",
]
