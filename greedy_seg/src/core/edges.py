"""Weighted edge buffers consumed by the segmentation engine."""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

import numpy as np

from .errors import IndexOutOfRangeError, InvalidParameterError, InvalidSizeError

__all__ = ["Edge", "EdgeList"]


@dataclass(frozen=True)
class Edge:
    """Undirected edge between vertices ``a`` and ``b``."""

    a: int
    b: int
    weight: float


class EdgeList:
    """Growable buffer of edges over vertices ``0..num_vertices-1``.

    Endpoints are validated when edges enter the buffer, so everything
    handed to the engine is known to be in range.
    """

    def __init__(self, num_vertices: int, capacity: int = 0) -> None:
        try:
            num_vertices = operator.index(num_vertices)
        except TypeError as exc:
            raise InvalidSizeError(
                f"num_vertices must be an integer, got {num_vertices!r}"
            ) from exc
        if num_vertices <= 0:
            raise InvalidSizeError(f"num_vertices must be positive, got {num_vertices}")
        self.num_vertices = int(num_vertices)
        capacity = max(int(capacity), 0)
        self._a = np.empty(capacity, dtype=np.intp)
        self._b = np.empty(capacity, dtype=np.intp)
        self._w = np.empty(capacity, dtype=np.float64)
        self._count = 0

    @classmethod
    def from_arrays(
        cls,
        num_vertices: int,
        a: Sequence[int] | np.ndarray,
        b: Sequence[int] | np.ndarray,
        weights: Sequence[float] | np.ndarray,
    ) -> "EdgeList":
        """Build a list from parallel endpoint and weight arrays."""
        a_arr = np.asarray(a, dtype=np.intp).ravel()
        b_arr = np.asarray(b, dtype=np.intp).ravel()
        w_arr = np.asarray(weights, dtype=np.float64).ravel()
        if not (len(a_arr) == len(b_arr) == len(w_arr)):
            raise InvalidSizeError(
                f"edge arrays differ in length: {len(a_arr)}, {len(b_arr)}, {len(w_arr)}"
            )
        edges = cls(num_vertices)
        if len(a_arr):
            lo = min(a_arr.min(), b_arr.min())
            hi = max(a_arr.max(), b_arr.max())
            if lo < 0 or hi >= edges.num_vertices:
                raise IndexOutOfRangeError(
                    f"edge endpoint outside [0, {edges.num_vertices})"
                )
            if np.isnan(w_arr).any() or (w_arr < 0).any():
                raise InvalidParameterError("edge weights must be non-negative numbers")
        edges._a = a_arr.copy()
        edges._b = b_arr.copy()
        edges._w = w_arr.copy()
        edges._count = len(a_arr)
        return edges

    @classmethod
    def from_edges(cls, num_vertices: int, edges: Sequence[Tuple[int, int, float]]) -> "EdgeList":
        """Build a list from ``(a, b, weight)`` triples."""
        result = cls(num_vertices, capacity=len(edges))
        for a, b, w in edges:
            result.add(a, b, w)
        return result

    def add(self, a: int, b: int, weight: float) -> int:
        """Append an edge and return the new edge count."""
        if a < 0 or b < 0 or a >= self.num_vertices or b >= self.num_vertices:
            raise IndexOutOfRangeError(
                f"edge ({a}, {b}) outside [0, {self.num_vertices})"
            )
        if not weight >= 0:
            raise InvalidParameterError(f"edge weight must be non-negative, got {weight}")
        if self._count == len(self._a):
            self._grow()
        self._a[self._count] = a
        self._b[self._count] = b
        self._w[self._count] = weight
        self._count += 1
        return self._count

    def _grow(self) -> None:
        new_cap = max(16, 2 * len(self._a))
        self._a = np.resize(self._a, new_cap)
        self._b = np.resize(self._b, new_cap)
        self._w = np.resize(self._w, new_cap)

    def clear(self) -> None:
        """Drop all edges but keep the allocated capacity."""
        self._count = 0

    def sort(self) -> "EdgeList":
        """Sort edges by ascending weight in place; equal weights keep their order."""
        n = self._count
        order = np.argsort(self._w[:n], kind="stable")
        self._a[:n] = self._a[:n][order]
        self._b[:n] = self._b[:n][order]
        self._w[:n] = self._w[:n][order]
        return self

    def is_sorted(self) -> bool:
        w = self._w[: self._count]
        return bool(np.all(w[:-1] <= w[1:])) if len(w) > 1 else True

    @property
    def endpoints_a(self) -> np.ndarray:
        return self._a[: self._count]

    @property
    def endpoints_b(self) -> np.ndarray:
        return self._b[: self._count]

    @property
    def weights(self) -> np.ndarray:
        return self._w[: self._count]

    def triples(self) -> Iterator[Tuple[int, int, float]]:
        """Iterate ``(a, b, weight)`` as plain Python numbers."""
        n = self._count
        return zip(self._a[:n].tolist(), self._b[:n].tolist(), self._w[:n].tolist())

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Edge]:
        for a, b, w in self.triples():
            yield Edge(a, b, w)

    def __getitem__(self, index: int) -> Edge:
        if index < 0:
            index += self._count
        if not 0 <= index < self._count:
            raise IndexError(index)
        return Edge(int(self._a[index]), int(self._b[index]), float(self._w[index]))

    def __repr__(self) -> str:
        return f"EdgeList(num_vertices={self.num_vertices}, edges={self._count})"
