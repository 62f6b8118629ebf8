"""Greedy graph segmentation engine, merge rules and post-processing."""

from .cleanup import merge_small_regions
from .labels import dense_labels, region_sizes, root_labels
from .segmenter import GraphSegmenter, SegmentationResult, segment_graph
from .strategies import (
    STRATEGIES,
    RegionMergeStrategy,
    SizeThresholdStrategy,
    StatisticalRegionStrategy,
)

__all__ = [
    "GraphSegmenter",
    "SegmentationResult",
    "segment_graph",
    "merge_small_regions",
    "root_labels",
    "dense_labels",
    "region_sizes",
    "RegionMergeStrategy",
    "SizeThresholdStrategy",
    "StatisticalRegionStrategy",
    "STRATEGIES",
]
