from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest
from websockets.datastructures import Headers
from websockets.exceptions import InvalidStatus
from websockets.http11 import Response

from mcp_servers.dia_browser.config import BrowserConfig
from mcp_servers.dia_browser.http_client import HttpClientError
from mcp_servers.dia_browser.session import CdpClient


def handshake_404() -> InvalidStatus:
    """Handshake rejection for /devtools/page/<id>, as websockets raises it."""
    return InvalidStatus(Response(404, "Not Found", Headers(), b"No such target id"))


@dataclass
class FakeBrowser:
    """In-memory stand-in for both CDP surfaces (HTTP discovery + per-target socket)."""

    targets: list[dict[str, Any]] = field(default_factory=list)
    histories: dict[str, dict[str, Any]] = field(default_factory=dict)
    evaluations: dict[str, dict[str, Any]] = field(default_factory=dict)
    http_calls: list[tuple[str, dict[str, Any] | None, str]] = field(default_factory=list)
    ws_calls: list[tuple[str, dict[str, Any], str]] = field(default_factory=list)

    def _known(self, target_id: str) -> bool:
        return any(t.get("id") == target_id for t in self.targets)

    async def http(self, config: BrowserConfig, endpoint: str, params: dict[str, Any] | None, method: str) -> Any:
        self.http_calls.append((endpoint, params, method))
        if endpoint == "/json":
            return [dict(t) for t in self.targets]
        if endpoint.startswith("/json/new?"):
            url = endpoint.split("?", 1)[1]
            target = {"id": f"new{len(self.targets)}", "type": "page", "url": url, "title": ""}
            self.targets.append(target)
            return dict(target)
        for action in ("close", "activate"):
            prefix = f"/json/{action}/"
            if endpoint.startswith(prefix):
                target_id = endpoint[len(prefix) :]
                if not self._known(target_id):
                    raise HttpClientError(404, "Not Found")
                if action == "close":
                    self.targets = [t for t in self.targets if t.get("id") != target_id]
                    return "Target is closing"
                return "Target activated"
        raise HttpClientError(404, "Not Found")

    async def send(self, method: str, params: dict[str, Any] | None, target_id: str) -> dict[str, Any]:
        self.ws_calls.append((method, params or {}, target_id))
        if not self._known(target_id):
            raise handshake_404()
        if method == "Page.getNavigationHistory":
            return self.histories.get(target_id, {"currentIndex": 0, "entries": [{"id": 1, "url": "about:blank"}]})
        if method == "Page.navigateToHistoryEntry":
            history = self.histories[target_id]
            ids = [e["id"] for e in history["entries"]]
            history["currentIndex"] = ids.index(params["entryId"])
            return {}
        if method == "Runtime.evaluate":
            return self.evaluations.get(target_id, {"result": {"type": "undefined"}})
        return {}


@pytest.fixture
def browser() -> FakeBrowser:
    return FakeBrowser(
        targets=[
            {"id": "sw1", "type": "service_worker", "url": "chrome-extension://x/sw.js", "title": "sw"},
            {"id": "p1", "type": "page", "url": "https://a.example/", "title": "A"},
            {"id": "p2", "type": "page", "url": "https://b.example/", "title": "B"},
        ]
    )


@pytest.fixture
def client(browser: FakeBrowser) -> CdpClient:
    return CdpClient(BrowserConfig(), http=browser.http, executor=browser)  # type: ignore[arg-type]
