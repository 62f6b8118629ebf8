"""Label extraction from a finished forest."""

from __future__ import annotations

from typing import Dict

import numpy as np

from greedy_seg.src.core.disjoint_set import DisjointSetForest


def root_labels(forest: DisjointSetForest) -> np.ndarray:
    """Return ``find(v)`` for every vertex ``v``."""
    find = forest.find
    return np.fromiter(
        (find(v) for v in range(forest.total_elements)),
        dtype=np.intp,
        count=forest.total_elements,
    )


def dense_labels(forest: DisjointSetForest) -> np.ndarray:
    """Return labels ``0..k-1`` assigned in first-seen vertex order.

    Must be called after all merging is complete; later joins invalidate
    the mapping.
    """

    roots = root_labels(forest)
    mapping: Dict[int, int] = {}
    out = np.empty_like(roots)
    for v, root in enumerate(roots.tolist()):
        label = mapping.get(root)
        if label is None:
            label = len(mapping)
            mapping[root] = label
        out[v] = label
    return out


def region_sizes(forest: DisjointSetForest) -> Dict[int, int]:
    """Return a mapping of root id to component size."""
    sizes: Dict[int, int] = {}
    for root in set(root_labels(forest).tolist()):
        sizes[root] = forest.set_size(root)
    return sizes


__all__ = ["root_labels", "dense_labels", "region_sizes"]
