"""
Navigation tool handlers - reload and history.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ... import tools
from ..types import HandlerFunc, ToolResult

if TYPE_CHECKING:
    from ...session import CdpClient


async def handle_reload_tab(client: CdpClient, args: dict[str, Any]) -> ToolResult:
    return ToolResult.text(await tools.reload_tab(client, args.get("tab_id")))


async def handle_go_back(client: CdpClient, args: dict[str, Any]) -> ToolResult:
    return ToolResult.text(await tools.go_back(client, args.get("tab_id")))


async def handle_go_forward(client: CdpClient, args: dict[str, Any]) -> ToolResult:
    return ToolResult.text(await tools.go_forward(client, args.get("tab_id")))


NAVIGATION_HANDLERS: dict[str, HandlerFunc] = {
    "reload_tab": handle_reload_tab,
    "go_back": handle_go_back,
    "go_forward": handle_go_forward,
}
