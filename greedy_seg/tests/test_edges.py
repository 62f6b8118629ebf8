import numpy as np
import pytest

from greedy_seg.src.core.edges import Edge, EdgeList
from greedy_seg.src.core.errors import (
    IndexOutOfRangeError,
    InvalidParameterError,
    InvalidSizeError,
)


def test_add_returns_edge_count():
    edges = EdgeList(4)
    assert edges.add(0, 1, 1.0) == 1
    assert edges.add(1, 2, 0.5) == 2
    assert len(edges) == 2
    assert edges[1] == Edge(1, 2, 0.5)
    assert edges[-1] == Edge(1, 2, 0.5)


@pytest.mark.parametrize("a, b", [(-1, 0), (0, 4), (4, 4)])
def test_add_rejects_out_of_range(a, b):
    edges = EdgeList(4)
    with pytest.raises(IndexOutOfRangeError):
        edges.add(a, b, 1.0)
    assert len(edges) == 0


def test_out_of_range_is_an_index_error():
    with pytest.raises(IndexError):
        EdgeList(2).add(0, 2, 1.0)


@pytest.mark.parametrize("weight", [-0.5, float("nan")])
def test_add_rejects_bad_weight(weight):
    with pytest.raises(InvalidParameterError):
        EdgeList(2).add(0, 1, weight)


def test_invalid_vertex_count():
    with pytest.raises(InvalidSizeError):
        EdgeList(0)


def test_sort_is_stable_for_equal_weights():
    edges = EdgeList.from_edges(5, [(0, 1, 2.0), (1, 2, 1.0), (2, 3, 1.0), (3, 4, 0.5)])
    edges.sort()
    assert [(e.a, e.b) for e in edges] == [(3, 4), (1, 2), (2, 3), (0, 1)]
    assert edges.is_sorted()


def test_buffer_grows_past_capacity():
    edges = EdgeList(50, capacity=2)
    for i in range(40):
        edges.add(i, i + 1, float(i))
    assert len(edges) == 40
    assert edges[39] == Edge(39, 40, 39.0)


def test_clear_keeps_vertex_count():
    edges = EdgeList.from_edges(3, [(0, 1, 1.0)])
    edges.clear()
    assert len(edges) == 0
    assert edges.num_vertices == 3
    assert list(edges) == []


def test_from_arrays_copies_and_validates():
    a = np.array([0, 1])
    b = np.array([1, 2])
    w = np.array([0.25, 0.75])
    edges = EdgeList.from_arrays(3, a, b, w)
    a[0] = 2
    assert list(edges.triples()) == [(0, 1, 0.25), (1, 2, 0.75)]


def test_from_arrays_length_mismatch():
    with pytest.raises(InvalidSizeError):
        EdgeList.from_arrays(3, [0, 1], [1], [0.5, 0.5])


def test_from_arrays_out_of_range():
    with pytest.raises(IndexOutOfRangeError):
        EdgeList.from_arrays(3, [0, 1], [1, 3], [0.5, 0.5])


def test_non_integer_vertex_count_rejected():
    with pytest.raises(InvalidSizeError):
        EdgeList(2.5)
