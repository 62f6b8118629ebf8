import numpy as np
import pytest

from greedy_seg.src.core.disjoint_set import DisjointSetForest
from greedy_seg.src.core.errors import InvalidSizeError
from greedy_seg.src.image.render import (
    boundary_mask,
    draw_segment_boundaries,
    label_image,
    mean_color_image,
)

LABELS = np.array([
    [0, 0, 1],
    [0, 0, 1],
    [2, 2, 2],
])


def test_boundary_mask():
    expected = np.array([
        [False, True, False],
        [True, True, True],
        [False, False, False],
    ])
    assert np.array_equal(boundary_mask(LABELS), expected)


def test_thick_boundary_marks_neighbour():
    mask = boundary_mask(LABELS, thickness=2)
    assert mask[0, 2] and mask[2, 0]


def test_draw_boundaries_does_not_touch_input():
    image = np.zeros((3, 3, 3), dtype=np.uint8)
    out = draw_segment_boundaries(image, LABELS, color=(255, 0, 0))
    assert image.sum() == 0
    assert out[0, 1].tolist() == [255, 0, 0]
    assert out[0, 0].tolist() == [0, 0, 0]


def test_draw_boundaries_shape_mismatch():
    with pytest.raises(InvalidSizeError):
        draw_segment_boundaries(np.zeros((2, 2, 3)), LABELS)


def test_mean_color_image():
    image = np.array([[0, 10, 100, 200]])
    labels = np.array([[0, 0, 1, 1]])
    assert mean_color_image(image, labels).tolist() == [[5.0, 5.0, 150.0, 150.0]]


def test_label_image_reshapes_dense_labels():
    forest = DisjointSetForest(4)
    forest.union(1, 3)
    assert label_image(forest, (2, 2)).tolist() == [[0, 1], [2, 1]]
    with pytest.raises(InvalidSizeError):
        label_image(forest, (3, 2))
