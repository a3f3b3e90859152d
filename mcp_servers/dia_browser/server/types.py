"""
Type definitions for MCP server responses and handlers.
"""

from __future__ import annotations

import json as _json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..session import CdpClient


@dataclass(slots=True)
class ToolContent:
    """Single content item in tool response."""

    type: str
    text: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "text": self.text}


@dataclass(slots=True)
class ToolResult:
    """Result of a tool execution."""

    content: list[ToolContent] = field(default_factory=list)
    is_error: bool = False
    # Structured failure details for logs/tests; not part of the MCP wire format.
    data: Any | None = None

    @classmethod
    def text(cls, text: str) -> ToolResult:
        return cls(content=[ToolContent(type="text", text=text)])

    @classmethod
    def json(cls, data: Any) -> ToolResult:
        """Pretty-printed JSON text content."""
        return cls(content=[ToolContent(type="text", text=_json.dumps(data, indent=2, ensure_ascii=False))], data=data)

    @classmethod
    def error(
        cls,
        message: str,
        *,
        kind: str | None = None,
        tool: str | None = None,
        suggestion: str | None = None,
    ) -> ToolResult:
        payload: dict[str, Any] = {"ok": False, "error": message}
        if kind:
            payload["kind"] = kind
        if tool:
            payload["tool"] = tool
        if suggestion:
            payload["suggestion"] = suggestion
        return cls(content=[ToolContent(type="text", text=f"Error: {message}")], is_error=True, data=payload)

    @property
    def first_text(self) -> str:
        return next((c.text or "" for c in self.content if c.type == "text"), "")

    def to_content_list(self) -> list[dict[str, Any]]:
        """Convert to MCP content list format."""
        return [c.to_dict() for c in self.content]


HandlerFunc = Callable[["CdpClient", dict[str, Any]], Awaitable[ToolResult]]


@dataclass(slots=True, frozen=True)
class ToolSpec:
    """A registered tool: its catalog definition and its handler."""

    name: str
    definition: dict[str, Any]
    handler: HandlerFunc
