"""Merge rules for the greedy graph segmenter.

Two rules are provided:

* :class:`SizeThresholdStrategy` - the internal-variation criterion of
  Felzenszwalb and Huttenlocher. Every component carries a threshold
  ``Int(C) + k / |C|`` where ``Int(C)`` is the heaviest edge merged into it.
  Since edges arrive in ascending order that is simply the weight of the
  last accepted edge.
* :class:`StatisticalRegionStrategy` - statistical region merging of Nock
  and Nielsen. Edge weights only fix the visiting order; the decision
  compares running channel means against a bound that shrinks with region
  size.
"""

from __future__ import annotations

import math
from typing import Dict, Optional, Type

import numpy as np

from greedy_seg.src.core.disjoint_set import DisjointSetForest
from greedy_seg.src.core.errors import (
    AllocationError,
    InvalidParameterError,
    InvalidSizeError,
    PreconditionError,
)

from .strategy_base import RegionMergeStrategy

# number of distinguishable levels per channel in 8-bit images
NUM_LEVELS = 256


def _fresh_array(current: Optional[np.ndarray], shape: tuple) -> np.ndarray:
    """Return ``current`` when it already has ``shape``, else a new float array."""
    if current is not None and current.shape == shape:
        return current
    try:
        return np.empty(shape, dtype=np.float64)
    except MemoryError as exc:
        raise AllocationError(f"cannot allocate region state of shape {shape}") from exc


class SizeThresholdStrategy(RegionMergeStrategy):
    """Merge when the edge weight is within both components' thresholds."""

    name = "felzenszwalb"

    def __init__(self, threshold: float = 300.0) -> None:
        super().__init__()
        if not threshold > 0:
            raise InvalidParameterError(f"threshold must be > 0, got {threshold}")
        self.threshold = float(threshold)
        self.thresholds: Optional[np.ndarray] = None

    def initialize(self, forest: DisjointSetForest) -> None:
        super().initialize(forest)
        self.thresholds = _fresh_array(self.thresholds, (forest.total_elements,))
        # threshold / 1 for singleton components
        self.thresholds.fill(self.threshold)

    def edge_threshold(self, size: int) -> float:
        return self.threshold / size

    def should_merge(self, ra: int, rb: int, weight: float) -> bool:
        t = self.thresholds
        if t is None:
            raise PreconditionError(f"{self.name} strategy used before initialize()")
        return bool(weight <= t[ra] and weight <= t[rb])

    def on_merged(self, root: int, ra: int, rb: int, weight: float) -> None:
        self.thresholds[root] = weight + self.edge_threshold(self.forest.set_size(root))

    def describe(self) -> dict:
        return {"strategy": self.name, "threshold": self.threshold}

    def adopt_state(self, previous: RegionMergeStrategy) -> None:
        if isinstance(previous, SizeThresholdStrategy):
            self.thresholds = previous.thresholds


class StatisticalRegionStrategy(RegionMergeStrategy):
    """Merge when every channel mean differs by less than the SRM bound.

    ``seeds`` holds the initial value of every vertex, one row per vertex
    and one column per channel (a 1-D array is a single channel). ``q``
    controls coarseness: larger values yield more, smaller regions.
    """

    name = "srm"

    def __init__(self, seeds: np.ndarray, q: float = 40.0, levels: int = NUM_LEVELS) -> None:
        super().__init__()
        if not q > 0:
            raise InvalidParameterError(f"q must be > 0, got {q}")
        if levels <= 0:
            raise InvalidParameterError(f"levels must be > 0, got {levels}")
        seeds = np.asarray(seeds, dtype=np.float64)
        if seeds.ndim == 1:
            seeds = seeds[:, None]
        if seeds.ndim != 2 or seeds.shape[0] == 0:
            raise InvalidSizeError(f"seeds must be (vertices, channels), got {seeds.shape}")
        self.seeds = seeds
        self.q = float(q)
        self.levels = int(levels)
        self.means: Optional[np.ndarray] = None
        self.log_delta = 0.0
        self.thresh_factor = (self.levels * self.levels) / (2.0 * self.q)

    @property
    def num_channels(self) -> int:
        return self.seeds.shape[1]

    def initialize(self, forest: DisjointSetForest) -> None:
        n = forest.total_elements
        if self.seeds.shape[0] != n:
            raise InvalidSizeError(
                f"{self.seeds.shape[0]} seed rows for a graph of {n} vertices"
            )
        super().initialize(forest)
        self.means = _fresh_array(self.means, self.seeds.shape)
        self.means[:] = self.seeds
        self.log_delta = 2.0 * math.log(6.0 * n)

    def merge_bound(self, size_a: int, size_b: int) -> float:
        """Largest per-channel mean difference still accepted for two regions."""
        g = self.levels
        term_a = (min(g, size_a) * math.log(1.0 + size_a) + self.log_delta) / size_a
        term_b = (min(g, size_b) * math.log(1.0 + size_b) + self.log_delta) / size_b
        return math.sqrt(self.thresh_factor * (term_a + term_b))

    def should_merge(self, ra: int, rb: int, weight: float) -> bool:
        forest = self.forest
        bound = self.merge_bound(forest.set_size(ra), forest.set_size(rb))
        diff = np.abs(self.means[ra] - self.means[rb])
        return bool(np.all(diff < bound))

    def on_merged(self, root: int, ra: int, rb: int, weight: float) -> None:
        forest = self.forest
        other = rb if root == ra else ra
        total = forest.set_size(root)
        # the absorbed root still holds its pre-merge size
        size_other = forest.set_size(other)
        size_root = total - size_other
        means = self.means
        means[root] = (size_root * means[root] + size_other * means[other]) / total

    def describe(self) -> dict:
        return {
            "strategy": self.name,
            "q": self.q,
            "levels": self.levels,
            "channels": self.num_channels,
        }

    def adopt_state(self, previous: RegionMergeStrategy) -> None:
        if isinstance(previous, StatisticalRegionStrategy):
            self.means = previous.means


STRATEGIES: Dict[str, Type[RegionMergeStrategy]] = {
    SizeThresholdStrategy.name: SizeThresholdStrategy,
    StatisticalRegionStrategy.name: StatisticalRegionStrategy,
}

__all__ = [
    "NUM_LEVELS",
    "RegionMergeStrategy",
    "SizeThresholdStrategy",
    "StatisticalRegionStrategy",
    "STRATEGIES",
]
