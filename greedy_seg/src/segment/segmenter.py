"""Greedy graph segmentation over a sorted edge list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple, Union

import numpy as np

from greedy_seg.src.core.disjoint_set import DisjointSetForest
from greedy_seg.src.core.edges import EdgeList
from greedy_seg.src.core.errors import (
    IndexOutOfRangeError,
    InvalidParameterError,
    InvalidSizeError,
    PreconditionError,
)
from greedy_seg.src.utils.logger import get_logger

from .cleanup import merge_small_regions
from .labels import dense_labels, region_sizes, root_labels
from .strategies import STRATEGIES
from .strategy_base import RegionMergeStrategy

logger = get_logger(__name__)

EdgeSource = Union[EdgeList, Iterable[Tuple[int, int, float]]]


@dataclass
class SegmentationResult:
    """Forest and strategy state produced by one segmentation run.

    ``forest`` and ``strategy`` are shared with the owning
    :class:`GraphSegmenter` and are reset by its next run; copy labels out
    before segmenting again.
    """

    forest: DisjointSetForest
    strategy: RegionMergeStrategy
    merges: int = 0
    num_edges: int = 0
    cleanup_merges: int = 0

    @property
    def num_components(self) -> int:
        return self.forest.num_sets

    def labels(self) -> np.ndarray:
        return root_labels(self.forest)

    def dense_labels(self) -> np.ndarray:
        return dense_labels(self.forest)

    def sizes(self) -> Dict[int, int]:
        return region_sizes(self.forest)


def _as_edge_list(num_vertices: int, edges: EdgeSource) -> EdgeList:
    if not isinstance(edges, EdgeList):
        return EdgeList.from_edges(num_vertices, list(edges))
    if edges.num_vertices > num_vertices and len(edges):
        hi = max(int(edges.endpoints_a.max()), int(edges.endpoints_b.max()))
        if hi >= num_vertices:
            raise IndexOutOfRangeError(
                f"edge endpoint {hi} outside [0, {num_vertices})"
            )
    return edges


def segment_graph(
    forest: DisjointSetForest,
    edges: EdgeList,
    strategy: RegionMergeStrategy,
) -> int:
    """Run one greedy pass of ``strategy`` over ``edges`` on ``forest``.

    ``edges`` is sorted in place by ascending weight first. Returns the
    number of merges performed.
    """

    edges.sort()
    strategy.initialize(forest)
    logger.debug(f"SEGMENT sorted {len(edges)} edges, {strategy.describe()}")

    find = forest.find
    join = forest.join
    should_merge = strategy.should_merge
    on_merged = strategy.on_merged
    merges = 0
    for a, b, w in edges.triples():
        ra = find(a)
        rb = find(b)
        if ra == rb:
            continue
        if should_merge(ra, rb, w):
            join(ra, rb)
            root = find(ra)
            on_merged(root, ra, rb, w)
            merges += 1
    return merges


class GraphSegmenter:
    """Owns the forest of consecutive segmentation runs.

    The forest is reset between runs of the same vertex count and
    reallocated when the count changes. Strategies obtained from
    :meth:`strategy` inherit the per-vertex arrays of the previous strategy
    of the same name, so those are reused too. Results of earlier runs alias
    the same forest and arrays. Query methods raise
    :class:`PreconditionError` until :meth:`segment` has been called.
    """

    def __init__(self) -> None:
        self._forest: Optional[DisjointSetForest] = None
        self._edges: Optional[EdgeList] = None
        self._strategies: Dict[str, RegionMergeStrategy] = {}
        self.result: Optional[SegmentationResult] = None

    @property
    def forest(self) -> Optional[DisjointSetForest]:
        return self._forest

    def _require_result(self) -> SegmentationResult:
        if self.result is None:
            raise PreconditionError("no segmentation has been run yet")
        return self.result

    def strategy(self, name: str, *args: Any, **kwargs: Any) -> RegionMergeStrategy:
        """Build the registered strategy ``name``, reusing arrays of the last one."""
        try:
            cls = STRATEGIES[name]
        except KeyError as exc:
            raise InvalidParameterError(f"unknown strategy {name!r}") from exc
        strategy = cls(*args, **kwargs)
        previous = self._strategies.get(name)
        if previous is not None:
            strategy.adopt_state(previous)
        self._strategies[name] = strategy
        return strategy

    def prepare(self, num_vertices: int) -> DisjointSetForest:
        """Return a singleton forest of ``num_vertices`` elements."""
        if num_vertices <= 0:
            raise InvalidSizeError(f"num_vertices must be positive, got {num_vertices}")
        if self._forest is not None and self._forest.total_elements == num_vertices:
            self._forest.reset()
        else:
            self._forest = DisjointSetForest(num_vertices)
        return self._forest

    def segment(
        self,
        num_vertices: int,
        edges: EdgeSource,
        strategy: RegionMergeStrategy,
    ) -> SegmentationResult:
        """Partition ``num_vertices`` vertices using ``edges`` and ``strategy``."""
        self.result = None
        forest = self.prepare(num_vertices)
        edge_list = _as_edge_list(num_vertices, edges)
        merges = segment_graph(forest, edge_list, strategy)
        self._edges = edge_list
        self.result = SegmentationResult(
            forest=forest,
            strategy=strategy,
            merges=merges,
            num_edges=len(edge_list),
        )
        logger.info(
            f"SEGMENT {strategy.name}: {merges} merges over {len(edge_list)} edges, "
            f"{forest.num_sets} components"
        )
        return self.result

    def merge_small_regions(self, min_size: int, edges: Optional[EdgeList] = None) -> int:
        """Force-merge regions smaller than ``min_size`` along the last run's edges."""
        result = self._require_result()
        edge_list = self._edges if edges is None else _as_edge_list(
            result.forest.total_elements, edges
        )
        merged = merge_small_regions(result.forest, edge_list, min_size)
        result.cleanup_merges += merged
        return merged

    @property
    def num_components(self) -> int:
        return self._require_result().num_components

    def find(self, vertex: int) -> int:
        return self._require_result().forest.find(vertex)

    def size_of(self, vertex: int) -> int:
        forest = self._require_result().forest
        return forest.set_size(forest.find(vertex))

    def labels(self) -> np.ndarray:
        return self._require_result().labels()

    def dense_labels(self) -> np.ndarray:
        return self._require_result().dense_labels()


__all__ = ["GraphSegmenter", "SegmentationResult", "segment_graph"]
