"""Tool schema definitions."""

from __future__ import annotations

from typing import Any

_TAB_ID: dict[str, Any] = {"type": "string", "description": "ID of the tab"}

TOOL_DEFINITIONS: list[dict[str, Any]] = [
    {
        "name": "open_url",
        "description": "Open a URL in Dia Browser",
        "inputSchema": {
            "type": "object",
            "properties": {
                "url": {"type": "string", "description": "URL to open"},
                "new_tab": {"type": "boolean", "description": "Open in a new tab", "default": True},
            },
            "required": ["url"],
        },
    },
    {
        "name": "get_current_tab",
        "description": "Get information about the current active tab",
        "inputSchema": {"type": "object", "properties": {}},
    },
    {
        "name": "list_tabs",
        "description": "List all open tabs in Dia Browser",
        "inputSchema": {
            "type": "object",
            "properties": {
                "window_id": {"type": "number", "description": "Specific window ID to list tabs from"},
            },
        },
    },
    {
        "name": "close_tab",
        "description": "Close a specific tab",
        "inputSchema": {
            "type": "object",
            "properties": {"tab_id": {"type": "string", "description": "ID of the tab to close"}},
            "required": ["tab_id"],
        },
    },
    {
        "name": "switch_to_tab",
        "description": "Switch to a specific tab",
        "inputSchema": {
            "type": "object",
            "properties": {"tab_id": {"type": "string", "description": "ID of the tab to switch to"}},
            "required": ["tab_id"],
        },
    },
    {
        "name": "reload_tab",
        "description": "Reload a tab",
        "inputSchema": {
            "type": "object",
            "properties": {"tab_id": {"type": "string", "description": "ID of the tab to reload"}},
        },
    },
    {
        "name": "go_back",
        "description": "Navigate back in browser history",
        "inputSchema": {"type": "object", "properties": {"tab_id": _TAB_ID}},
    },
    {
        "name": "go_forward",
        "description": "Navigate forward in browser history",
        "inputSchema": {"type": "object", "properties": {"tab_id": _TAB_ID}},
    },
    {
        "name": "execute_javascript",
        "description": "Execute JavaScript in the current tab",
        "inputSchema": {
            "type": "object",
            "properties": {
                "code": {"type": "string", "description": "JavaScript code to execute"},
                "tab_id": _TAB_ID,
            },
            "required": ["code"],
        },
    },
    {
        "name": "get_page_content",
        "description": "Get the text content of the current page",
        "inputSchema": {"type": "object", "properties": {"tab_id": _TAB_ID}},
    },
]

TOOL_DEFINITIONS_BY_NAME: dict[str, dict[str, Any]] = {t["name"]: t for t in TOOL_DEFINITIONS}

__all__ = ["TOOL_DEFINITIONS", "TOOL_DEFINITIONS_BY_NAME"]
