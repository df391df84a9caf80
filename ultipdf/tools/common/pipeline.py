"""Plugin registry and orchestration helpers for ultipdf tools."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping

from ...config import Settings
from ...core.utils import get_logger
from ...exceptions import UnknownOperationError
from .interfaces import BaseTool, ToolContext
from .results import ToolResult

LOGGER = get_logger("ultipdf.tools.pipeline")


class ToolRegistry:
    """Registry storing available tools under canonical names and synonyms."""

    def __init__(self) -> None:
        self._tools: Dict[str, type[BaseTool]] = {}
        self._aliases: Dict[str, str] = {}

    def register(self, name: str, tool_class: type[BaseTool], aliases: Iterable[str] = ()) -> None:
        key = name.lower()
        if key in self._aliases:
            raise ValueError(f"Tool '{name}' is already registered")
        self._tools[key] = tool_class
        self._aliases[key] = key
        for alias in aliases:
            alias_key = alias.lower()
            if alias_key in self._aliases:
                raise ValueError(f"Tool alias '{alias}' is already registered")
            self._aliases[alias_key] = key

    def canonical_name(self, name: object) -> str:
        key = str(name).strip().lower() if isinstance(name, str) else None
        if key is None or key not in self._aliases:
            raise UnknownOperationError(name, self.names())
        return self._aliases[key]

    def resolve(self, name: object) -> type[BaseTool]:
        return self._tools[self.canonical_name(name)]

    def create(self, name: object, context: ToolContext) -> BaseTool:
        return self.resolve(name)(context)

    def names(self) -> list[str]:
        return list(self._tools.keys())

    def aliases(self, name: str) -> list[str]:
        canonical = self.canonical_name(name)
        return [alias for alias, target in self._aliases.items() if target == canonical and alias != canonical]

    def get(self, name: str) -> type[BaseTool] | None:
        return self._tools.get(self._aliases.get(name.lower(), ""))


registry = ToolRegistry()


def register_tool(name: str, *aliases: str):
    def decorator(cls: type[BaseTool]) -> type[BaseTool]:
        registry.register(name, cls, aliases)
        return cls

    return decorator


def run_tool(
    name: object,
    payload: Mapping[str, Any],
    *,
    settings: Settings | None = None,
    tool_registry: ToolRegistry | None = None,
) -> ToolResult:
    """Resolve ``name``, validate ``payload`` into typed options and run the tool."""

    active = tool_registry or registry
    tool_class = active.resolve(name)
    options = tool_class.options_class.from_mapping(payload)
    context = ToolContext(options=options, settings=settings or Settings())
    LOGGER.debug("Running tool %s", tool_class.name)
    result = tool_class(context).run()
    return result


__all__ = ["ToolRegistry", "registry", "register_tool", "run_tool", "ToolContext", "BaseTool"]
