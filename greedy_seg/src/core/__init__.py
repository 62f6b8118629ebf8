"""Core data structures: the disjoint-set forest and edge buffers."""

from .disjoint_set import DisjointSetForest
from .edges import Edge, EdgeList
from .errors import (
    AllocationError,
    IndexOutOfRangeError,
    InvalidParameterError,
    InvalidSizeError,
    PreconditionError,
    SegmentationError,
)

__all__ = [
    "DisjointSetForest",
    "Edge",
    "EdgeList",
    "SegmentationError",
    "InvalidSizeError",
    "InvalidParameterError",
    "IndexOutOfRangeError",
    "AllocationError",
    "PreconditionError",
]
