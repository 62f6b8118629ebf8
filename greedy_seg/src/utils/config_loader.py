"""Loads YAML/JSON configuration files and the default segmentation settings."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from greedy_seg.src.core.errors import InvalidParameterError, InvalidSizeError

METHODS = ("felzenszwalb", "srm")


def load_config(path: str) -> Dict[str, Any]:
    """Load a YAML or JSON configuration file."""
    path_p = Path(path)
    with open(path_p, "r", encoding="utf-8") as f:
        if path_p.suffix in {".yaml", ".yml"}:
            return yaml.safe_load(f) or {}
        if path_p.suffix == ".json":
            return json.load(f)
        raise ValueError("Unsupported config format")


def default_config_path() -> Path:
    return Path(__file__).resolve().parents[2] / "configs" / "segmentation.yaml"


@dataclass
class SegmentationConfig:
    """Parameters of an image segmentation run."""

    method: str = "felzenszwalb"
    threshold: float = 300.0
    min_size: int = 100
    connectivity: int = 4
    q: float = 40.0
    levels: int = 256
    blur: int = 3

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SegmentationConfig":
        """Build a config from ``data``, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (data or {}).items() if k in known})

    def updated(self, **overrides: Any) -> "SegmentationConfig":
        """Return a copy with every non-``None`` override applied."""
        values = asdict(self)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return SegmentationConfig(**values)

    def validate(self) -> "SegmentationConfig":
        if self.method not in METHODS:
            raise InvalidParameterError(f"method must be one of {METHODS}, got {self.method!r}")
        if not self.threshold > 0:
            raise InvalidParameterError(f"threshold must be > 0, got {self.threshold}")
        if self.min_size <= 0:
            raise InvalidSizeError(f"min_size must be positive, got {self.min_size}")
        if self.connectivity not in (4, 8):
            raise InvalidParameterError(f"connectivity must be 4 or 8, got {self.connectivity}")
        if not self.q > 0:
            raise InvalidParameterError(f"q must be > 0, got {self.q}")
        if self.levels <= 0:
            raise InvalidParameterError(f"levels must be > 0, got {self.levels}")
        if self.blur < 0:
            raise InvalidParameterError(f"blur must be >= 0, got {self.blur}")
        return self


def load_segmentation_config(path: Optional[str | Path] = None) -> SegmentationConfig:
    """Return defaults overlaid with the packaged config and then ``path``."""
    values: Dict[str, Any] = {}
    default_path = default_config_path()
    if default_path.exists():
        values.update(load_config(str(default_path)))
    if path is not None:
        values.update(load_config(str(path)))
    return SegmentationConfig.from_dict(values).validate()


__all__ = [
    "METHODS",
    "SegmentationConfig",
    "load_config",
    "load_segmentation_config",
    "default_config_path",
]
