from __future__ import annotations

from typing import Optional

from greedy_seg.src.core.disjoint_set import DisjointSetForest
from greedy_seg.src.core.errors import PreconditionError


class RegionMergeStrategy:
    """Base class for greedy merge rules.

    A strategy keeps per-vertex state that is only meaningful at roots of the
    forest it was initialised with. The engine calls :meth:`should_merge`
    with two distinct roots and, after joining them, :meth:`on_merged` with
    the new root and the two former roots.
    """

    name = "base"

    def __init__(self) -> None:
        self._forest: Optional[DisjointSetForest] = None

    @property
    def forest(self) -> DisjointSetForest:
        if self._forest is None:
            raise PreconditionError(f"{self.name} strategy used before initialize()")
        return self._forest

    def initialize(self, forest: DisjointSetForest) -> None:
        """Bind ``forest`` and (re)set per-vertex state for a new run."""
        self._forest = forest

    def should_merge(self, ra: int, rb: int, weight: float) -> bool:
        """Return ``True`` if the components rooted at ``ra`` and ``rb`` should merge."""
        raise NotImplementedError

    def on_merged(self, root: int, ra: int, rb: int, weight: float) -> None:
        """Update state of ``root`` after ``ra`` and ``rb`` were joined."""
        raise NotImplementedError

    def describe(self) -> dict:
        """Return the strategy parameters for logging."""
        return {"strategy": self.name}

    def adopt_state(self, previous: "RegionMergeStrategy") -> None:
        """Take over the per-vertex arrays of ``previous`` so they can be reused."""
