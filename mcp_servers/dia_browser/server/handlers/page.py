"""
Page tool handlers - JavaScript evaluation and content extraction.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ... import tools
from ..types import HandlerFunc, ToolResult

if TYPE_CHECKING:
    from ...session import CdpClient


async def handle_execute_javascript(client: CdpClient, args: dict[str, Any]) -> ToolResult:
    return ToolResult.text(await tools.execute_javascript(client, args["code"], args.get("tab_id")))


async def handle_get_page_content(client: CdpClient, args: dict[str, Any]) -> ToolResult:
    return ToolResult.text(await tools.get_page_content(client, args.get("tab_id")))


PAGE_HANDLERS: dict[str, HandlerFunc] = {
    "execute_javascript": handle_execute_javascript,
    "get_page_content": handle_get_page_content,
}
