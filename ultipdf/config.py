"""Runtime settings for ultipdf.

Settings are read once from ``ULTIPDF_*`` environment variables and passed to tools
through :class:`~ultipdf.tools.common.interfaces.ToolContext`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

ENV_PREFIX = "ULTIPDF_"

DEFAULT_PRODUCER = "Ultimate PDF API"


def _read_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{ENV_PREFIX}{name} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    """Service settings with production defaults."""

    max_payload_mb: float = 50.0
    request_timeout: float = 120.0
    producer: str = DEFAULT_PRODUCER
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = field(default=("*",))

    @property
    def max_payload_bytes(self) -> int:
        return int(self.max_payload_mb * 1024 * 1024)

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if env is None else env
        origins = env.get(ENV_PREFIX + "CORS_ORIGINS", "*")
        return cls(
            max_payload_mb=_read_float(env, "MAX_PAYLOAD_MB", cls.max_payload_mb),
            request_timeout=_read_float(env, "REQUEST_TIMEOUT", cls.request_timeout),
            producer=env.get(ENV_PREFIX + "PRODUCER") or DEFAULT_PRODUCER,
            log_level=(env.get(ENV_PREFIX + "LOG_LEVEL") or "INFO").upper(),
            cors_origins=tuple(origin.strip() for origin in origins.split(",") if origin.strip()) or ("*",),
        )


__all__ = ["Settings", "ENV_PREFIX", "DEFAULT_PRODUCER"]
