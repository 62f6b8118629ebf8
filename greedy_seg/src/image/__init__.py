"""Image front end: pixel graphs, pipelines and rendering."""

from .graph_builder import as_channels, build_grid_graph, grid_edge_count, pixel_seeds
from .pipeline import (
    ImageSegmentation,
    median_blur,
    segment_image,
    segment_image_felzenszwalb,
    segment_image_srm,
)
from .render import boundary_mask, draw_segment_boundaries, label_image, mean_color_image

__all__ = [
    "as_channels",
    "build_grid_graph",
    "grid_edge_count",
    "pixel_seeds",
    "ImageSegmentation",
    "median_blur",
    "segment_image",
    "segment_image_felzenszwalb",
    "segment_image_srm",
    "boundary_mask",
    "draw_segment_boundaries",
    "label_image",
    "mean_color_image",
]
