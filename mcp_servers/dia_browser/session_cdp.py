"""Per-target CDP WebSocket execution.

Every command gets its own short-lived connection: connect, send one envelope,
wait for the reply carrying the same id, close. Nothing is multiplexed and
nothing is kept open between tool calls.
"""

from __future__ import annotations

import asyncio
import itertools
import json
import logging
from collections.abc import Callable
from typing import Any

from websockets.asyncio.client import connect as ws_connect

from .config import BrowserConfig
from .errors import CdpProtocolError, CdpTimeoutError, CdpTransportError

logger = logging.getLogger("mcp.dia_browser.cdp")

# Correlation ids are only compared within one connection, but a process-wide
# counter keeps them distinct in logs too.
_command_ids = itertools.count(1)


def next_command_id() -> int:
    return next(_command_ids)


class CdpCommandExecutor:
    """Send a single CDP command to a target and await its correlated reply."""

    def __init__(self, config: BrowserConfig, *, connect: Callable[..., Any] | None = None) -> None:
        self.config = config
        self._connect = connect or ws_connect

    async def send(self, method: str, params: dict[str, Any] | None, target_id: str) -> dict[str, Any]:
        url = self.config.websocket_url(target_id)
        command_id = next_command_id()
        envelope = {"id": command_id, "method": method, "params": params or {}}
        logger.debug("cdp_send id=%s method=%s target=%s", command_id, method, target_id)
        # The deadline covers connect, send and receive; closing happens after it.
        opened: list[Any] = []
        try:
            return await asyncio.wait_for(
                self._exchange(url, envelope, opened),
                timeout=self.config.command_timeout,
            )
        except (asyncio.TimeoutError, TimeoutError) as exc:
            logger.info("cdp_timeout id=%s method=%s target=%s", command_id, method, target_id)
            raise CdpTimeoutError("WebSocket command timeout") from exc
        finally:
            for ws in opened:
                await ws.close()

    async def _exchange(self, url: str, envelope: dict[str, Any], opened: list[Any]) -> dict[str, Any]:
        ws = await self._connect(
            url,
            open_timeout=None,
            ping_interval=None,
            close_timeout=1.0,
            max_size=None,
        )
        opened.append(ws)
        await ws.send(json.dumps(envelope))
        async for raw in ws:
            try:
                data = json.loads(raw)
            except json.JSONDecodeError as exc:
                raise CdpTransportError(f"Failed to parse WebSocket response: {exc}") from exc

            # Events and stale replies share the socket; only our id resolves the call.
            if not isinstance(data, dict) or data.get("id") != envelope["id"]:
                continue

            error = data.get("error")
            if error is not None:
                message = error.get("message") if isinstance(error, dict) else str(error)
                code = error.get("code") if isinstance(error, dict) else None
                raise CdpProtocolError(f"CDP error: {message}", code=code)

            result = data.get("result")
            return result if isinstance(result, dict) else {}

        raise CdpTransportError("WebSocket error: connection closed before a response was received")


__all__ = ["CdpCommandExecutor", "next_command_id"]
