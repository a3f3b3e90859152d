"""CDP client: transport selection, target resolution and error classification.

`CdpClient` is the single entry point tools use to talk to the browser:
- target-agnostic calls (list/new/close/activate) go over the HTTP surface;
- target-scoped calls (navigation, evaluation, history) go over a per-target socket.

Every failure leaving this module is a classified `CdpError`.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .config import BrowserConfig
from .errors import CdpProtocolError, NoActiveTargetError, TargetNotFoundError, classify_error
from .http_client import cdp_http_request
from .session_cdp import CdpCommandExecutor

logger = logging.getLogger("mcp.dia_browser.session")

PAGE_TARGET_TYPE = "page"


class Transport(enum.Enum):
    HTTP = "http"
    WEBSOCKET = "websocket"


def select_transport(target_id: str | None) -> Transport:
    """HTTP for target-agnostic calls, WebSocket when a target is named."""
    return Transport.WEBSOCKET if target_id else Transport.HTTP


@dataclass(frozen=True, slots=True)
class Target:
    """One entry of the browser's `/json` target listing."""

    id: str
    type: str
    url: str = ""
    title: str = ""
    websocket_url: str | None = None

    @classmethod
    def from_json(cls, raw: dict[str, Any]) -> Target:
        return cls(
            id=str(raw.get("id") or ""),
            type=str(raw.get("type") or ""),
            url=str(raw.get("url") or ""),
            title=str(raw.get("title") or ""),
            websocket_url=raw.get("webSocketDebuggerUrl"),
        )

    @property
    def is_page(self) -> bool:
        return self.type == PAGE_TARGET_TYPE

    def summary(self) -> dict[str, str]:
        return {"id": self.id, "url": self.url, "title": self.title}


class CdpClient:
    def __init__(
        self,
        config: BrowserConfig,
        *,
        http: Callable[..., Any] | None = None,
        executor: CdpCommandExecutor | None = None,
    ) -> None:
        self.config = config
        self._http = http or cdp_http_request
        self._executor = executor or CdpCommandExecutor(config)

    async def execute(
        self,
        method: str,
        params: dict[str, Any] | None = None,
        target_id: str | None = None,
    ) -> Any:
        """Run one CDP call, routed by whether a target is given.

        Without a target `method` is an HTTP endpoint path and `params` become
        query parameters; with a target it is a protocol method name.
        """
        if select_transport(target_id) is Transport.WEBSOCKET:
            return await self.send(method, params, str(target_id))
        return await self.http(method, params)

    async def http(self, endpoint: str, params: dict[str, Any] | None = None, method: str = "GET") -> Any:
        try:
            return await self._http(self.config, endpoint, params, method)
        except Exception as exc:
            err = classify_error(exc, self.config)
            logger.info("cdp_http_failed endpoint=%s kind=%s", endpoint, err.kind)
            raise err from exc

    async def send(self, method: str, params: dict[str, Any] | None, target_id: str) -> dict[str, Any]:
        try:
            return await self._executor.send(method, params, target_id)
        except Exception as exc:
            err = classify_error(exc, self.config)
            logger.info("cdp_ws_failed method=%s target=%s kind=%s", method, target_id, err.kind)
            raise err from exc

    async def list_targets(self) -> list[Target]:
        raw = await self.http("/json")
        if not isinstance(raw, list):
            raise CdpProtocolError("CDP error: unexpected target listing payload")
        return [Target.from_json(item) for item in raw if isinstance(item, dict)]

    async def list_pages(self) -> list[Target]:
        return [t for t in await self.list_targets() if t.is_page]

    async def active_page(self) -> Target:
        """First page-type target.

        CDP exposes no focus ordering, so this is the first page in listing order,
        which is not guaranteed to be the tab the user is looking at.
        """
        for target in await self.list_targets():
            if target.is_page:
                return target
        raise NoActiveTargetError("No active tab found")

    async def resolve_target_id(self, target_id: str | None) -> str:
        """Target for a socket command: the given id if listed, else the active page.

        An id missing from the `/json` listing raises `TargetNotFoundError` before
        any socket is opened; the handshake status for it varies (404 or 500).
        """
        if not target_id:
            return (await self.active_page()).id
        if not any(t.id == target_id for t in await self.list_targets()):
            raise TargetNotFoundError("Tab not found")
        return target_id


__all__ = ["PAGE_TARGET_TYPE", "CdpClient", "Target", "Transport", "select_transport"]
