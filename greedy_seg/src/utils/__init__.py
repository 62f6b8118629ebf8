from .config_loader import SegmentationConfig, load_config, load_segmentation_config
from .logger import get_logger

__all__ = [
    "SegmentationConfig",
    "load_config",
    "load_segmentation_config",
    "get_logger",
]
