from __future__ import annotations

"""Exception types raised by the segmentation core and its outer layers."""

__all__ = [
    "SegmentationError",
    "InvalidSizeError",
    "InvalidParameterError",
    "IndexOutOfRangeError",
    "AllocationError",
    "PreconditionError",
]


class SegmentationError(Exception):
    """Base class for all segmentation errors."""


class InvalidSizeError(SegmentationError, ValueError):
    """Raised when a vertex count, region size or array length is unusable."""


class InvalidParameterError(SegmentationError, ValueError):
    """Raised when a merge parameter or graph option is malformed."""


class IndexOutOfRangeError(SegmentationError, IndexError):
    """Raised when an edge endpoint lies outside ``[0, num_vertices)``."""


class AllocationError(SegmentationError, MemoryError):
    """Raised when backing storage for a forest or its state cannot be obtained."""


class PreconditionError(SegmentationError, RuntimeError):
    """Raised when the API is used out of order."""
