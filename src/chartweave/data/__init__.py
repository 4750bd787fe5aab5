"""Data transform chain turning grouped aggregates into plottable records."""

from chartweave.data.chain import DataTransformChain, capped_chain, simple_chain, stacked_chain
from chartweave.data.frame import FrameDimension, FrameGroup, FrameGroupAll, FrameIndex
from chartweave.data.stages import (
    CapperStage,
    DataStage,
    FilterStage,
    GroupedSource,
    Record,
    SourceStage,
    StackLayer,
    StackStage,
)

__all__ = [
    "CapperStage",
    "DataStage",
    "DataTransformChain",
    "FilterStage",
    "FrameDimension",
    "FrameGroup",
    "FrameGroupAll",
    "FrameIndex",
    "GroupedSource",
    "Record",
    "SourceStage",
    "StackLayer",
    "StackStage",
    "capped_chain",
    "simple_chain",
    "stacked_chain",
]
