"""Simple logging wrapper supporting optional file logging."""

from __future__ import annotations

import logging
from pathlib import Path

_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def get_logger(name: str, file_path: str | None = None, level: int = logging.INFO) -> logging.Logger:
    """Return configured logger, attaching ``file_path`` handler if provided."""

    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    if file_path and not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)
        f_handler = logging.FileHandler(file_path, encoding="utf-8")
        f_handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(f_handler)
    logger.setLevel(level)
    return logger


def set_level(level: int, prefix: str = "greedy_seg") -> None:
    """Set ``level`` on every logger already created under ``prefix``."""
    for name, obj in logging.Logger.manager.loggerDict.items():
        if name.startswith(prefix) and isinstance(obj, logging.Logger):
            obj.setLevel(level)
