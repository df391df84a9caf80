"""Utilities shared by ultipdf tools."""

from __future__ import annotations

import logging
import math
import time
from typing import Any


def get_logger(name: str, level: int | str | None = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
    if level is not None:
        logger.setLevel(level)
    return logger


def build_output_filename(prefix: str, *, timestamp_ms: int | None = None, suffix: str = ".pdf") -> str:
    """Construct the filename hint returned alongside a tool result."""

    safe_prefix = prefix.replace(" ", "_")
    if timestamp_ms is None:
        timestamp_ms = time.time_ns() // 1_000_000
    return f"{safe_prefix}_{timestamp_ms}{suffix}"


def size_in_kb(size: int) -> int:
    return math.floor(size / 1024 + 0.5)


def update_dict(target: dict[str, Any], **updates: Any) -> dict[str, Any]:
    target.update({k: v for k, v in updates.items() if v is not None})
    return target


def configure_logging(level: int | str) -> None:
    """Set the threshold shared by every ``ultipdf.*`` logger."""

    logging.getLogger("ultipdf").setLevel(level)


def json_number(value: float) -> float | int:
    """Render integral floats as ints so echoed options keep their JSON shape."""

    return int(value) if float(value).is_integer() else value
