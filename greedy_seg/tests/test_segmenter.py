import numpy as np
import pytest

from greedy_seg.src.core.disjoint_set import DisjointSetForest
from greedy_seg.src.core.edges import EdgeList
from greedy_seg.src.core.errors import (
    IndexOutOfRangeError,
    InvalidParameterError,
    InvalidSizeError,
    PreconditionError,
)
from greedy_seg.src.segment.cleanup import merge_small_regions
from greedy_seg.src.segment.segmenter import GraphSegmenter
from greedy_seg.src.segment.strategies import SizeThresholdStrategy


def _line_edges() -> EdgeList:
    return EdgeList.from_edges(4, [(0, 1, 1.0), (1, 2, 5.0), (2, 3, 1.0)])


def _random_graph(seed: int, n: int = 60, m: int = 150) -> EdgeList:
    rng = np.random.default_rng(seed)
    a = rng.integers(0, n, size=m)
    b = rng.integers(0, n, size=m)
    w = rng.integers(0, 5, size=m).astype(float)
    return EdgeList.from_arrays(n, a, b, w)


def test_line_graph_splits_at_heavy_edge():
    segmenter = GraphSegmenter()
    result = segmenter.segment(4, _line_edges(), SizeThresholdStrategy(2.0))
    forest = result.forest
    assert forest.num_sets == 2
    assert forest.find(0) == forest.find(1)
    assert forest.find(2) == forest.find(3)
    assert forest.find(1) != forest.find(2)
    assert result.merges == 2
    assert segmenter.size_of(0) == 2


def test_cleanup_merges_regions_below_min_size():
    segmenter = GraphSegmenter()
    segmenter.segment(4, _line_edges(), SizeThresholdStrategy(2.0))
    assert segmenter.merge_small_regions(3) == 1
    assert segmenter.num_components == 1
    assert segmenter.result.cleanup_merges == 1


def test_cleanup_keeps_regions_at_min_size():
    segmenter = GraphSegmenter()
    segmenter.segment(4, _line_edges(), SizeThresholdStrategy(2.0))
    assert segmenter.merge_small_regions(2) == 0
    assert segmenter.num_components == 2


def test_edges_are_sorted_in_place():
    edges = EdgeList.from_edges(3, [(0, 1, 3.0), (1, 2, 1.0)])
    GraphSegmenter().segment(3, edges, SizeThresholdStrategy(10.0))
    assert edges.weights.tolist() == [1.0, 3.0]


def test_same_input_gives_same_partition():
    runs = []
    for _ in range(2):
        result = GraphSegmenter().segment(60, _random_graph(3), SizeThresholdStrategy(1.5))
        runs.append((result.labels().tolist(), sorted(result.sizes().items())))
    assert runs[0] == runs[1]


def test_partition_invariants_after_segmentation():
    result = GraphSegmenter().segment(60, _random_graph(11), SizeThresholdStrategy(2.0))
    labels = result.labels()
    assert labels.min() >= 0 and labels.max() < 60
    sizes = result.sizes()
    assert len(sizes) == result.num_components
    assert sum(sizes.values()) == 60


def test_forest_reused_for_same_vertex_count():
    segmenter = GraphSegmenter()
    first = segmenter.segment(4, _line_edges(), SizeThresholdStrategy(2.0)).forest
    second = segmenter.segment(4, _line_edges(), SizeThresholdStrategy(0.5)).forest
    assert first is second
    assert second.num_sets == 4
    third = segmenter.segment(5, EdgeList(5), SizeThresholdStrategy(1.0)).forest
    assert third is not first
    assert third.num_sets == 5


def test_plain_triples_are_accepted():
    result = GraphSegmenter().segment(3, [(0, 1, 0.0), (1, 1, 0.0)], SizeThresholdStrategy(1.0))
    assert result.num_components == 2
    assert result.merges == 1


def test_queries_before_run_raise():
    segmenter = GraphSegmenter()
    assert segmenter.forest is None
    with pytest.raises(PreconditionError):
        segmenter.labels()
    with pytest.raises(PreconditionError):
        segmenter.merge_small_regions(2)


def test_invalid_vertex_count():
    with pytest.raises(InvalidSizeError):
        GraphSegmenter().segment(0, [], SizeThresholdStrategy(1.0))


def test_edges_beyond_vertex_count_rejected():
    edges = EdgeList.from_edges(5, [(0, 4, 1.0)])
    with pytest.raises(IndexOutOfRangeError):
        GraphSegmenter().segment(3, edges, SizeThresholdStrategy(1.0))


def test_dense_labels_from_segmenter():
    segmenter = GraphSegmenter()
    segmenter.segment(4, _line_edges(), SizeThresholdStrategy(2.0))
    assert segmenter.dense_labels().tolist() == [0, 0, 1, 1]


def test_cleanup_rejects_non_positive_min_size():
    forest = DisjointSetForest(4)
    with pytest.raises(InvalidSizeError):
        merge_small_regions(forest, _line_edges(), 0)
    segmenter = GraphSegmenter()
    segmenter.segment(4, _line_edges(), SizeThresholdStrategy(2.0))
    with pytest.raises(InvalidSizeError):
        segmenter.merge_small_regions(-1)
    assert segmenter.num_components == 2


def test_strategy_lookup_reuses_state_arrays():
    segmenter = GraphSegmenter()
    first = segmenter.strategy("felzenszwalb", 2.0)
    segmenter.segment(4, _line_edges(), first)
    second = segmenter.strategy("felzenszwalb", 2.0)
    result = segmenter.segment(4, _line_edges(), second)
    assert second is not first
    assert second.thresholds is first.thresholds
    assert result.num_components == 2


def test_unknown_strategy_name():
    with pytest.raises(InvalidParameterError):
        GraphSegmenter().strategy("watershed")
