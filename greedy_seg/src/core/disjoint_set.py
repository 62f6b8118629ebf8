"""Disjoint-set forest with union-by-rank and single-node path compression."""

from __future__ import annotations

import operator

import numpy as np

from .errors import AllocationError, InvalidSizeError

__all__ = ["DisjointSetForest"]


class DisjointSetForest:
    """Partition of ``n`` elements into disjoint sets.

    Each element ``0..n-1`` carries a parent index, a rank and a size. The
    arrays are allocated once and :meth:`reset` restores the singleton state
    in place, so a forest can be reused across segmentation runs of the same
    vertex count.

    ``join`` expects roots. Callers holding arbitrary elements should use
    :meth:`union`, which resolves the roots first.
    """

    def __init__(self, n: int) -> None:
        try:
            n = operator.index(n)
        except TypeError as exc:
            raise InvalidSizeError(f"forest size must be an integer, got {n!r}") from exc
        if n <= 0:
            raise InvalidSizeError(f"forest needs at least one element, got {n}")
        try:
            self._parent = np.arange(n, dtype=np.intp)
            self._rank = np.zeros(n, dtype=np.intp)
            self._size = np.ones(n, dtype=np.intp)
        except MemoryError as exc:
            raise AllocationError(f"cannot allocate forest of {n} elements") from exc
        self._n = n
        self._count = n

    def __len__(self) -> int:
        return self._n

    def __repr__(self) -> str:
        return f"DisjointSetForest(n={self._n}, sets={self._count})"

    def reset(self) -> None:
        """Bring every element back to its own singleton set."""
        self._parent[:] = np.arange(self._n, dtype=np.intp)
        self._rank.fill(0)
        self._size.fill(1)
        self._count = self._n

    def find(self, x: int) -> int:
        """Return the root of ``x`` and point ``x`` directly at it.

        Only the queried element is re-pointed; intermediate nodes keep
        their parents.
        """
        parent = self._parent
        y = x
        while y != parent[y]:
            y = parent[y]
        parent[x] = y
        return int(y)

    def join(self, x: int, y: int) -> None:
        """Unite the sets rooted at ``x`` and ``y``.

        Both arguments must be roots. On equal rank ``x`` is attached under
        ``y``. The size slot of the absorbed root is left untouched.
        """
        if x == y:
            return
        rank = self._rank
        size = self._size
        if rank[x] > rank[y]:
            self._parent[y] = x
            size[x] += size[y]
        else:
            self._parent[x] = y
            size[y] += size[x]
            if rank[x] == rank[y]:
                rank[y] += 1
        self._count -= 1

    def union(self, a: int, b: int) -> bool:
        """Join the sets containing ``a`` and ``b``; return ``True`` if they differed."""
        ra = self.find(a)
        rb = self.find(b)
        if ra == rb:
            return False
        self.join(ra, rb)
        return True

    def connected(self, a: int, b: int) -> bool:
        return self.find(a) == self.find(b)

    def set_size(self, root: int) -> int:
        """Size of the set rooted at ``root``.

        For a former root that has been absorbed, this is the size it had at
        the moment it was joined.
        """
        return int(self._size[root])

    def rank(self, root: int) -> int:
        return int(self._rank[root])

    @property
    def num_sets(self) -> int:
        return self._count

    @property
    def total_elements(self) -> int:
        return self._n

    def is_root(self, x: int) -> bool:
        return int(self._parent[x]) == x

    def roots(self) -> np.ndarray:
        """Return the root of every element without mutating the forest."""
        parent = self._parent.copy()
        while True:
            grand = parent[parent]
            if np.array_equal(grand, parent):
                return parent
            parent = grand
