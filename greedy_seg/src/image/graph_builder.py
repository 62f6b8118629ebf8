"""Build pixel adjacency graphs from numpy images."""

from __future__ import annotations

from typing import Callable, Dict, List, Tuple

import numpy as np

from greedy_seg.src.core.edges import EdgeList
from greedy_seg.src.core.errors import InvalidParameterError, InvalidSizeError

# neighbour offsets (dy, dx) in the order edges are emitted for each pixel
_OFFSETS_4: List[Tuple[int, int]] = [(0, 1), (1, 0)]
_OFFSETS_8: List[Tuple[int, int]] = _OFFSETS_4 + [(1, 1), (-1, 1)]


def _euclidean(diff: np.ndarray) -> np.ndarray:
    return np.sqrt(np.sum(diff * diff, axis=-1))


def _chebyshev(diff: np.ndarray) -> np.ndarray:
    return np.max(np.abs(diff), axis=-1)


METRICS: Dict[str, Callable[[np.ndarray], np.ndarray]] = {
    "euclidean": _euclidean,
    "chebyshev": _chebyshev,
}


def as_channels(image: np.ndarray) -> np.ndarray:
    """Return ``image`` as a float ``(H, W, C)`` array."""
    arr = np.asarray(image, dtype=np.float64)
    if arr.ndim == 2:
        arr = arr[:, :, None]
    if arr.ndim != 3:
        raise InvalidSizeError(f"expected an (H, W) or (H, W, C) image, got shape {arr.shape}")
    if arr.shape[0] == 0 or arr.shape[1] == 0 or arr.shape[2] == 0:
        raise InvalidSizeError(f"image is empty: shape {arr.shape}")
    return arr


def pixel_seeds(image: np.ndarray) -> np.ndarray:
    """Return one row of channel values per pixel, in vertex order."""
    arr = as_channels(image)
    return arr.reshape(-1, arr.shape[2]).copy()


def grid_edge_count(height: int, width: int, connectivity: int = 4) -> int:
    """Number of edges :func:`build_grid_graph` emits for a ``height x width`` image."""
    count = height * (width - 1) + (height - 1) * width
    if connectivity == 8:
        count += 2 * (height - 1) * (width - 1)
    return count


def build_grid_graph(
    image: np.ndarray,
    connectivity: int = 4,
    metric: str = "euclidean",
) -> EdgeList:
    """Return the pixel adjacency graph of ``image``.

    Pixel ``(y, x)`` is vertex ``y * width + x``. For every pixel in
    row-major order the right and bottom neighbours are emitted, followed by
    bottom-right and top-right when ``connectivity`` is 8. Edge weights are
    the ``metric`` distance between the two pixels' channel vectors.
    """

    if connectivity not in (4, 8):
        raise InvalidParameterError(f"connectivity must be 4 or 8, got {connectivity}")
    dist = METRICS.get(metric)
    if dist is None:
        raise InvalidParameterError(f"unknown metric {metric!r}, expected one of {sorted(METRICS)}")

    arr = as_channels(image)
    height, width = arr.shape[:2]
    offsets = _OFFSETS_8 if connectivity == 8 else _OFFSETS_4
    ids = np.arange(height * width, dtype=np.intp).reshape(height, width)

    k = len(offsets)
    a = np.broadcast_to(ids[:, :, None], (height, width, k))
    b = np.zeros((height, width, k), dtype=np.intp)
    w = np.zeros((height, width, k), dtype=np.float64)
    valid = np.zeros((height, width, k), dtype=bool)

    for i, (dy, dx) in enumerate(offsets):
        y0, y1 = max(0, -dy), height - max(0, dy)
        x0, x1 = 0, width - dx
        if y1 <= y0 or x1 <= x0:
            continue
        src = arr[y0:y1, x0:x1]
        dst = arr[y0 + dy : y1 + dy, x0 + dx : x1 + dx]
        valid[y0:y1, x0:x1, i] = True
        b[y0:y1, x0:x1, i] = ids[y0 + dy : y1 + dy, x0 + dx : x1 + dx]
        w[y0:y1, x0:x1, i] = dist(src - dst)

    return EdgeList.from_arrays(height * width, a[valid], b[valid], w[valid])


__all__ = [
    "METRICS",
    "as_channels",
    "pixel_seeds",
    "grid_edge_count",
    "build_grid_graph",
]
