"""
Tool registry with dispatch table for MCP server.

Arguments are checked against the tool's declared input schema before the
handler runs, so handlers can index required fields directly.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .definitions import TOOL_DEFINITIONS_BY_NAME
from .types import HandlerFunc, ToolResult, ToolSpec

if TYPE_CHECKING:
    from ..session import CdpClient

logger = logging.getLogger("mcp.dia_browser.registry")

_JSON_TYPES: dict[str, tuple[type, ...]] = {
    "string": (str,),
    "boolean": (bool,),
    "number": (int, float),
    "integer": (int,),
    "object": (dict,),
    "array": (list,),
}


class ToolArgumentError(ValueError):
    """Tool arguments do not match the declared input schema."""


def validate_arguments(schema: dict[str, Any], arguments: dict[str, Any]) -> None:
    if not isinstance(arguments, dict):
        raise ToolArgumentError("Tool arguments must be an object")

    for name in schema.get("required") or []:
        if arguments.get(name) is None:
            raise ToolArgumentError(f"Missing required argument: {name}")

    properties = schema.get("properties") or {}
    for name, value in arguments.items():
        prop = properties.get(name)
        if not isinstance(prop, dict) or value is None:
            continue
        expected = _JSON_TYPES.get(str(prop.get("type")))
        if expected is None:
            continue
        # bool is an int subclass; JSON booleans are not numbers.
        if isinstance(value, bool) and bool not in expected:
            raise ToolArgumentError(f"Argument '{name}' must be of type {prop['type']}")
        if not isinstance(value, expected):
            raise ToolArgumentError(f"Argument '{name}' must be of type {prop['type']}")


class ToolRegistry:
    """Registry for tool handlers keyed by tool name."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolSpec] = {}

    def register(self, name: str, handler: HandlerFunc, definition: dict[str, Any] | None = None) -> None:
        definition = definition or TOOL_DEFINITIONS_BY_NAME.get(name)
        if definition is None:
            raise KeyError(f"No definition for tool: {name}")
        self._tools[name] = ToolSpec(name=name, definition=definition, handler=handler)

    def register_many(self, handlers: dict[str, HandlerFunc]) -> None:
        for name, handler in handlers.items():
            self.register(name, handler)

    def has(self, name: str) -> bool:
        return name in self._tools

    def definitions(self) -> list[dict[str, Any]]:
        return [spec.definition for spec in self._tools.values()]

    async def dispatch(self, name: str, client: CdpClient, arguments: dict[str, Any]) -> ToolResult:
        """Validate arguments and run the tool's handler.

        Raises:
            KeyError: unknown tool
            ToolArgumentError: arguments do not match the schema
        """
        spec = self._tools.get(name)
        if spec is None:
            raise KeyError(f"Unknown tool: {name}")
        validate_arguments(spec.definition.get("inputSchema") or {}, arguments)
        return await spec.handler(client, arguments)

    @property
    def tool_names(self) -> list[str]:
        return list(self._tools.keys())

    def __len__(self) -> int:
        return len(self._tools)


def create_default_registry() -> ToolRegistry:
    from .handlers import NAVIGATION_HANDLERS, PAGE_HANDLERS, TAB_HANDLERS

    registry = ToolRegistry()
    registry.register_many(TAB_HANDLERS)
    registry.register_many(NAVIGATION_HANDLERS)
    registry.register_many(PAGE_HANDLERS)
    return registry


__all__ = ["ToolArgumentError", "ToolRegistry", "create_default_registry", "validate_arguments"]
