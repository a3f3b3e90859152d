"""
In-page evaluation tools.

Exceptions thrown by page code are part of the result text; only transport and
protocol failures make the call itself fail.
"""

from __future__ import annotations

from typing import Any

from ..session import CdpClient
from .base import exception_text, format_js_value, tab_not_found_ok
from .js_helpers import PAGE_CONTENT_SCRIPT


async def evaluate(client: CdpClient, target_id: str, expression: str) -> dict[str, Any]:
    """Run `Runtime.evaluate` by value, awaiting promises."""
    return await client.send(
        "Runtime.evaluate",
        {"expression": expression, "returnByValue": True, "awaitPromise": True},
        target_id,
    )


@tab_not_found_ok
async def execute_javascript(client: CdpClient, code: str, tab_id: str | None = None) -> str:
    target_id = await client.resolve_target_id(tab_id)
    result = await evaluate(client, target_id, code)

    details = result.get("exceptionDetails")
    if isinstance(details, dict):
        return f"JavaScript error: {exception_text(details)}"

    remote = result.get("result") or {}
    if "value" not in remote:
        return "JavaScript executed"
    return format_js_value(remote["value"])


@tab_not_found_ok
async def get_page_content(client: CdpClient, tab_id: str | None = None) -> str:
    target_id = await client.resolve_target_id(tab_id)
    result = await evaluate(client, target_id, PAGE_CONTENT_SCRIPT)

    details = result.get("exceptionDetails")
    if isinstance(details, dict):
        return f"Error getting page content: {exception_text(details)}"

    value = (result.get("result") or {}).get("value")
    return value if isinstance(value, str) and value else "No content found"
