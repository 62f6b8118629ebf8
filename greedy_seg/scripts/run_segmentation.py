"""Entrypoint for segmenting an image from the command line."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import numpy as np
from skimage import io
from skimage.color import gray2rgb, rgba2rgb
from skimage.util import img_as_ubyte

from greedy_seg.src.core.errors import SegmentationError
from greedy_seg.src.image.pipeline import segment_image
from greedy_seg.src.image.render import draw_segment_boundaries
from greedy_seg.src.utils.config_loader import METHODS, load_segmentation_config
from greedy_seg.src.utils.logger import get_logger, set_level


def read_image(path: Path) -> np.ndarray:
    """Read ``path`` as an 8-bit RGB array."""
    image = io.imread(str(path))
    if image.ndim == 2:
        image = gray2rgb(image)
    elif image.shape[2] == 4:
        image = rgba2rgb(image)
    return img_as_ubyte(image)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Greedy graph-based image segmentation")
    parser.add_argument("image", type=Path, help="Input image")
    parser.add_argument("--config", type=Path, help="YAML or JSON parameter file")
    parser.add_argument("--method", choices=METHODS, help="Merge rule")
    parser.add_argument("--threshold", type=float, help="Size-threshold constant")
    parser.add_argument("--min-size", type=int, dest="min_size", help="Smallest region kept")
    parser.add_argument("--q", type=float, help="SRM coarseness (larger gives more regions)")
    parser.add_argument("--connectivity", type=int, choices=(4, 8), help="Pixel neighbourhood")
    parser.add_argument("--blur", type=int, help="Median blur window, 0 disables")
    parser.add_argument("--labels-out", type=Path, help="Write the dense label image here (.npy)")
    parser.add_argument("--boundaries-out", type=Path, help="Write the image with boundaries here")
    parser.add_argument("--log-file", help="Also log to this file")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = get_logger("greedy_seg.cli", file_path=args.log_file)
    if args.verbose:
        set_level(logging.DEBUG)

    try:
        config = load_segmentation_config(args.config).updated(
            method=args.method,
            threshold=args.threshold,
            min_size=args.min_size,
            q=args.q,
            connectivity=args.connectivity,
            blur=args.blur,
        )
        image = read_image(args.image)
        seg = segment_image(image, config)
    except (SegmentationError, OSError, ValueError) as exc:
        logger.error(f"segmentation of {args.image} failed: {exc}")
        return 1

    if args.labels_out:
        np.save(args.labels_out, seg.labels)
    if args.boundaries_out:
        io.imsave(str(args.boundaries_out), draw_segment_boundaries(image, seg.labels))

    print(f"Done! Number of components: {seg.num_components}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
