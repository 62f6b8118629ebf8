"""Turn segmentation labels back into images."""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from greedy_seg.src.core.disjoint_set import DisjointSetForest
from greedy_seg.src.core.errors import InvalidSizeError
from greedy_seg.src.segment.labels import dense_labels

from .graph_builder import as_channels


def label_image(forest: DisjointSetForest, shape: Tuple[int, int]) -> np.ndarray:
    """Return dense labels of ``forest`` laid out as an ``(H, W)`` image."""
    height, width = shape
    if height * width != forest.total_elements:
        raise InvalidSizeError(
            f"shape {shape} does not match a forest of {forest.total_elements} elements"
        )
    return dense_labels(forest).reshape(height, width)


def boundary_mask(labels: np.ndarray, thickness: int = 1) -> np.ndarray:
    """Return ``True`` where a pixel's right or bottom neighbour has another label.

    With ``thickness`` 2 the differing neighbour is marked as well.
    """
    labels = np.asarray(labels)
    mask = np.zeros(labels.shape, dtype=bool)
    right = labels[:, :-1] != labels[:, 1:]
    down = labels[:-1, :] != labels[1:, :]
    mask[:, :-1] |= right
    mask[:-1, :] |= down
    if thickness > 1:
        mask[:, 1:] |= right
        mask[1:, :] |= down
    return mask


def draw_segment_boundaries(
    image: np.ndarray,
    labels: np.ndarray,
    color: Sequence[int] = (255, 0, 0),
    thickness: int = 1,
) -> np.ndarray:
    """Return a copy of ``image`` with segment boundaries painted in ``color``."""
    out = np.array(image, copy=True)
    if out.shape[:2] != np.shape(labels):
        raise InvalidSizeError(f"labels {np.shape(labels)} do not match image {out.shape[:2]}")
    mask = boundary_mask(labels, thickness)
    if out.ndim == 2:
        out[mask] = color[0]
    else:
        out[mask] = np.asarray(color[: out.shape[2]], dtype=out.dtype)
    return out


def mean_color_image(image: np.ndarray, labels: np.ndarray) -> np.ndarray:
    """Replace every pixel by the mean colour of its region."""
    arr = as_channels(image)
    flat_labels = np.asarray(labels).ravel()
    if flat_labels.size != arr.shape[0] * arr.shape[1]:
        raise InvalidSizeError("labels do not match image size")
    counts = np.bincount(flat_labels)
    pixels = arr.reshape(-1, arr.shape[2])
    out = np.empty_like(pixels)
    for c in range(arr.shape[2]):
        sums = np.bincount(flat_labels, weights=pixels[:, c], minlength=len(counts))
        means = sums / np.maximum(counts, 1)
        out[:, c] = means[flat_labels]
    out = out.reshape(arr.shape)
    if np.ndim(image) == 2:
        out = out[:, :, 0]
    return out


__all__ = ["label_image", "boundary_mask", "draw_segment_boundaries", "mean_color_image"]
