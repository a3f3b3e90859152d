"""
MCP Server bridging tool calls to a Chromium-based browser via Chrome DevTools Protocol.

This module provides the entry point and the stdio JSON-RPC loop. Requests are
handled strictly one at a time: the next line is read only after the previous
call has produced its response. Tool dispatch lives in server/registry.py.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import os
import sys
from typing import Any

from .config import BrowserConfig
from .errors import CdpError
from .server.contract import initialize_result, select_protocol, tools_list
from .server.redaction import redact_jsonrpc_for_log, redact_tool_arguments
from .server.registry import ToolArgumentError, create_default_registry
from .server.types import ToolResult
from .session import CdpClient


def _log_level() -> int:
    level = logging.getLevelName((os.environ.get("MCP_LOG_LEVEL") or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


# stdout carries the protocol; logging.basicConfig writes to stderr.
logging.basicConfig(
    level=_log_level(),
    format="%(asctime)s %(levelname)s %(message)s",
)
logger = logging.getLogger("mcp.dia_browser")

__all__ = ["McpServer", "main"]


def _write_message(payload: dict[str, Any]) -> None:
    """Write JSON-RPC message to stdout."""
    data = json.dumps(payload, ensure_ascii=False)
    sys.stdout.buffer.write((data + "\n").encode())
    sys.stdout.buffer.flush()


def _read_message() -> dict[str, Any] | None:
    """Read one JSON-RPC message from stdin; None at EOF, {} for a blank line."""
    line = sys.stdin.buffer.readline()
    if not line:
        return None
    line = line.strip()
    if not line:
        return {}
    msg = json.loads(line.decode())
    if os.environ.get("MCP_TRACE") and isinstance(msg, dict):
        logger.info("recv %s", redact_jsonrpc_for_log(msg))
    return msg


def _error_response(request_id: Any, code: int, message: str) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "error": {"code": code, "message": message}}


class McpServer:
    """MCP Server with registry-based tool dispatch."""

    def __init__(self, config: BrowserConfig | None = None, client: CdpClient | None = None) -> None:
        self.config = config or BrowserConfig.from_env()
        self.client = client or CdpClient(self.config)
        self.registry = create_default_registry()

    def handle_initialize(self, request_id: Any, params: dict[str, Any] | None = None) -> None:
        requested = (params or {}).get("protocolVersion") if isinstance(params, dict) else None
        _write_message({"jsonrpc": "2.0", "id": request_id, "result": initialize_result(select_protocol(requested))})

    def handle_list_tools(self, request_id: Any) -> None:
        _write_message({"jsonrpc": "2.0", "id": request_id, "result": {"tools": tools_list()}})

    def _log_call(self, name: str, arguments: dict[str, Any]) -> None:
        """Log tool call with sanitized arguments."""
        safe_args = redact_tool_arguments(name, arguments) if isinstance(arguments, dict) else arguments
        logger.info("tool=%s args=%s", name, safe_args)

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> ToolResult:
        """Run a tool; every failure comes back as an error-flagged result."""
        self._log_call(name, arguments)
        try:
            if not name:
                return ToolResult.error("Missing tool name")
            if not self.registry.has(name):
                return ToolResult.error(f"Unknown tool: {name}", tool=name)
            return await self.registry.dispatch(name, self.client, arguments)
        except ToolArgumentError as e:
            logger.info("invalid_arguments tool=%s reason=%s", name, e)
            return ToolResult.error(str(e), kind="invalid_arguments", tool=name)
        except CdpError as e:
            logger.info("cdp_error tool=%s kind=%s", name, e.kind)
            return ToolResult.error(e.message, kind=e.kind, tool=name, suggestion=e.suggestion)
        except Exception as exc:
            logger.exception("tool_call_failed")
            return ToolResult.error(str(exc) or type(exc).__name__, tool=name)

    async def handle_call_tool(self, request_id: Any, name: str, arguments: dict[str, Any]) -> None:
        result = await self.call_tool(name, arguments)
        _write_message(
            {
                "jsonrpc": "2.0",
                "id": request_id,
                "result": {"content": result.to_content_list(), "isError": result.is_error},
            }
        )

    async def dispatch(self, message: Any) -> None:
        """Dispatch incoming JSON-RPC message to appropriate handler."""
        if not message:
            return
        if not isinstance(message, dict):
            _write_message(_error_response(None, -32600, "Invalid Request"))
            return

        method = message.get("method")
        request_id = message.get("id")
        params = message.get("params") or {}

        if isinstance(method, str) and method.startswith("notifications/"):
            return
        if method == "initialize":
            self.handle_initialize(request_id, params)
        elif method == "tools/list":
            self.handle_list_tools(request_id)
        elif method == "tools/call":
            name = params.get("name") if isinstance(params, dict) else None
            arguments = (params.get("arguments") if isinstance(params, dict) else None) or {}
            await self.handle_call_tool(request_id, name or "", arguments)
        elif method == "ping":
            _write_message({"jsonrpc": "2.0", "id": request_id, "result": {}})
        elif "id" in message:
            _write_message(_error_response(request_id, -32601, f"Method {method} not found"))

    async def serve(self) -> None:
        logger.info("Dia Browser Control MCP server running on stdio (cdp=%s)", self.config.http_base)
        while True:
            try:
                message = await asyncio.to_thread(_read_message)
            except (json.JSONDecodeError, UnicodeDecodeError) as exc:
                _write_message(_error_response(None, -32700, f"Parse error: {exc}"))
                continue
            if message is None:
                break
            await self.dispatch(message)


def main() -> None:
    """Main entry point for MCP server."""
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(McpServer().serve())


if __name__ == "__main__":
    main()
