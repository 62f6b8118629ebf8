"""End-to-end image segmentation: graph building, merging and cleanup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from scipy.ndimage import median_filter

from greedy_seg.src.core.errors import InvalidParameterError
from greedy_seg.src.segment.segmenter import GraphSegmenter, SegmentationResult
from greedy_seg.src.segment.strategies import (
    NUM_LEVELS,
    SizeThresholdStrategy,
    StatisticalRegionStrategy,
)
from greedy_seg.src.utils.config_loader import SegmentationConfig
from greedy_seg.src.utils.logger import get_logger

from .graph_builder import as_channels, build_grid_graph, pixel_seeds
from .render import label_image

logger = get_logger(__name__)


@dataclass
class ImageSegmentation:
    """Dense label image plus the run that produced it."""

    labels: np.ndarray
    num_components: int
    result: SegmentationResult

    @property
    def shape(self) -> Tuple[int, int]:
        return self.labels.shape


def median_blur(image: np.ndarray, size: int = 3) -> np.ndarray:
    """Median-filter each channel of ``image`` with a ``size x size`` window."""
    if size <= 1:
        return np.asarray(image)
    arr = np.asarray(image)
    window = (size, size) if arr.ndim == 2 else (size, size, 1)
    return median_filter(arr, size=window, mode="nearest")


def _finish(
    segmenter: GraphSegmenter,
    result: SegmentationResult,
    shape: Tuple[int, int],
    min_size: int,
) -> ImageSegmentation:
    segmenter.merge_small_regions(min_size)
    labels = label_image(result.forest, shape)
    logger.info(f"PIPELINE {result.strategy.name}: {result.num_components} components")
    return ImageSegmentation(labels=labels, num_components=result.num_components, result=result)


def segment_image_felzenszwalb(
    image: np.ndarray,
    threshold: float = 300.0,
    min_size: int = 100,
    connectivity: int = 4,
    segmenter: Optional[GraphSegmenter] = None,
) -> ImageSegmentation:
    """Segment ``image`` with the size-threshold rule on Euclidean colour distances.

    Passing the same ``segmenter`` for consecutive frames of one size reuses
    its forest and threshold array.
    """
    arr = as_channels(image)
    segmenter = segmenter or GraphSegmenter()
    strategy = segmenter.strategy(SizeThresholdStrategy.name, threshold)
    edges = build_grid_graph(arr, connectivity=connectivity, metric="euclidean")
    result = segmenter.segment(arr.shape[0] * arr.shape[1], edges, strategy)
    return _finish(segmenter, result, arr.shape[:2], min_size)


def segment_image_srm(
    image: np.ndarray,
    q: float = 40.0,
    min_size: int = 100,
    levels: int = NUM_LEVELS,
    connectivity: int = 4,
    segmenter: Optional[GraphSegmenter] = None,
) -> ImageSegmentation:
    """Segment ``image`` by statistical region merging.

    Pixel pairs are visited in order of their largest channel difference.
    Channel values are expected on a ``0..levels-1`` scale.
    """
    arr = as_channels(image)
    segmenter = segmenter or GraphSegmenter()
    strategy = segmenter.strategy(
        StatisticalRegionStrategy.name, pixel_seeds(arr), q=q, levels=levels
    )
    edges = build_grid_graph(arr, connectivity=connectivity, metric="chebyshev")
    result = segmenter.segment(arr.shape[0] * arr.shape[1], edges, strategy)
    return _finish(segmenter, result, arr.shape[:2], min_size)


def segment_image(
    image: np.ndarray,
    config: Optional[SegmentationConfig] = None,
    segmenter: Optional[GraphSegmenter] = None,
) -> ImageSegmentation:
    """Blur and segment ``image`` according to ``config``."""
    config = (config or SegmentationConfig()).validate()
    if config.blur > 1:
        image = median_blur(image, config.blur)
    if config.method == "felzenszwalb":
        return segment_image_felzenszwalb(
            image,
            threshold=config.threshold,
            min_size=config.min_size,
            connectivity=config.connectivity,
            segmenter=segmenter,
        )
    if config.method == "srm":
        return segment_image_srm(
            image,
            q=config.q,
            min_size=config.min_size,
            levels=config.levels,
            connectivity=config.connectivity,
            segmenter=segmenter,
        )
    raise InvalidParameterError(f"unknown method {config.method!r}")


__all__ = [
    "ImageSegmentation",
    "median_blur",
    "segment_image",
    "segment_image_felzenszwalb",
    "segment_image_srm",
]
