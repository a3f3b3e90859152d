"""
Tab tool handlers - open, inspect, list, close and activate tabs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ... import tools
from ..types import HandlerFunc, ToolResult

if TYPE_CHECKING:
    from ...session import CdpClient


async def handle_open_url(client: CdpClient, args: dict[str, Any]) -> ToolResult:
    return ToolResult.text(await tools.open_url(client, args["url"], new_tab=args.get("new_tab", True)))


async def handle_get_current_tab(client: CdpClient, args: dict[str, Any]) -> ToolResult:
    return ToolResult.json(await tools.get_current_tab(client))


async def handle_list_tabs(client: CdpClient, args: dict[str, Any]) -> ToolResult:
    return ToolResult.json(await tools.list_tabs(client, window_id=args.get("window_id")))


async def handle_close_tab(client: CdpClient, args: dict[str, Any]) -> ToolResult:
    return ToolResult.text(await tools.close_tab(client, args["tab_id"]))


async def handle_switch_to_tab(client: CdpClient, args: dict[str, Any]) -> ToolResult:
    return ToolResult.text(await tools.switch_to_tab(client, args["tab_id"]))


TAB_HANDLERS: dict[str, HandlerFunc] = {
    "open_url": handle_open_url,
    "get_current_tab": handle_get_current_tab,
    "list_tabs": handle_list_tabs,
    "close_tab": handle_close_tab,
    "switch_to_tab": handle_switch_to_tab,
}
