"""Post-pass that absorbs undersized regions into a neighbour."""

from __future__ import annotations

from greedy_seg.src.core.disjoint_set import DisjointSetForest
from greedy_seg.src.core.edges import EdgeList
from greedy_seg.src.core.errors import InvalidSizeError
from greedy_seg.src.utils.logger import get_logger

logger = get_logger(__name__)


def merge_small_regions(forest: DisjointSetForest, edges: EdgeList, min_size: int) -> int:
    """Join across every edge touching a region of fewer than ``min_size`` vertices.

    Edges are visited once in their current order and the weight is ignored.
    Sizes grow as the pass proceeds, so a region that was small when the
    pass started can go on to absorb later small neighbours. A region of
    exactly ``min_size`` vertices is left alone.
    """

    if min_size <= 0:
        raise InvalidSizeError(f"min_size must be positive, got {min_size}")

    before = forest.num_sets
    if min_size > 1:
        find = forest.find
        size = forest.set_size
        for a, b, _ in edges.triples():
            ra = find(a)
            rb = find(b)
            if ra != rb and (size(ra) < min_size or size(rb) < min_size):
                forest.join(ra, rb)
    merged = before - forest.num_sets
    logger.info(f"CLEANUP min_size={min_size}: {merged} merges, {forest.num_sets} components")
    return merged


__all__ = ["merge_small_regions"]
