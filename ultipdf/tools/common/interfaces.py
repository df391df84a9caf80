"""Core interfaces and context objects shared by ultipdf tools."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from ...config import Settings
from ...exceptions import InvalidOptionError, MissingInputError
from .results import ToolResult


class ToolOptions:
    """Base class for the typed option records of each tool.

    Subclasses are dataclasses; :meth:`from_mapping` validates a JSON-shaped
    payload before any document is touched.
    """

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "ToolOptions":  # pragma: no cover - abstract
        raise NotImplementedError


def require(payload: Mapping[str, Any], key: str, message: str) -> Any:
    value = payload.get(key)
    if value is None or (isinstance(value, (str, bytes, bytearray, list, tuple)) and len(value) == 0):
        raise MissingInputError(message)
    return value


def optional_bool(payload: Mapping[str, Any], key: str, default: bool) -> bool:
    value = payload.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "1", "yes"}:
            return True
        if lowered in {"false", "0", "no"}:
            return False
    if isinstance(value, (int, float)):
        return bool(value)
    raise InvalidOptionError(f"'{key}' must be a boolean, got {value!r}")


def optional_number(payload: Mapping[str, Any], key: str, default: float) -> float:
    value = payload.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        raise InvalidOptionError(f"'{key}' must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidOptionError(f"'{key}' must be a number, got {value!r}") from exc


@dataclass
class ToolContext:
    """Holds shared execution state for a tool invocation."""

    options: ToolOptions
    settings: Settings = field(default_factory=Settings)


class BaseTool:
    """Base class for all pluggable ultipdf tools."""

    name: ClassVar[str]
    description: ClassVar[str] = ""
    options_class: ClassVar[type[ToolOptions]]

    def __init__(self, context: ToolContext) -> None:
        if not isinstance(context.options, self.options_class):
            raise TypeError(
                f"{type(self).__name__} expects {self.options_class.__name__}, "
                f"got {type(context.options).__name__}"
            )
        self.context = context

    @property
    def options(self) -> Any:
        return self.context.options

    def run(self) -> ToolResult:  # pragma: no cover - to be implemented by subclasses
        raise NotImplementedError


__all__ = [
    "ToolOptions",
    "ToolContext",
    "BaseTool",
    "require",
    "optional_bool",
    "optional_number",
]
