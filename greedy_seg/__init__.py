"""Greedy graph-based segmentation."""

from greedy_seg.src.core import DisjointSetForest, Edge, EdgeList
from greedy_seg.src.segment import (
    GraphSegmenter,
    SizeThresholdStrategy,
    StatisticalRegionStrategy,
    merge_small_regions,
)

__version__ = "0.1.0"

__all__ = [
    "DisjointSetForest",
    "Edge",
    "EdgeList",
    "GraphSegmenter",
    "SizeThresholdStrategy",
    "StatisticalRegionStrategy",
    "merge_small_regions",
]
