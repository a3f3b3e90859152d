from __future__ import annotations

import asyncio
import json
import socket
from http import HTTPStatus
from typing import Any

import pytest

from mcp_servers.dia_browser.config import BrowserConfig
from mcp_servers.dia_browser.errors import (
    BrowserUnreachableError,
    CdpError,
    CdpProtocolError,
    CdpTimeoutError,
    CdpTransportError,
    TargetNotFoundError,
)
from mcp_servers.dia_browser.main import McpServer
from mcp_servers.dia_browser.session import CdpClient
from mcp_servers.dia_browser.session_cdp import CdpCommandExecutor, next_command_id


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return int(s.getsockname()[1])


class FakeWebSocket:
    """Scripted socket. Callable messages receive the outstanding command id."""

    def __init__(self, messages: list[Any], *, hang: bool = False, close_delay: float = 0.0) -> None:
        self.messages = messages
        self.hang = hang
        self.close_delay = close_delay
        self.sent: list[dict[str, Any]] = []
        self.close_calls = 0

    async def send(self, data: str) -> None:
        self.sent.append(json.loads(data))

    def __aiter__(self):  # noqa: ANN204
        return self._iter()

    async def _iter(self):  # noqa: ANN202
        for msg in self.messages:
            if callable(msg):
                msg = msg(self.sent[-1]["id"])
            yield msg if isinstance(msg, str) else json.dumps(msg)
        if self.hang:
            await asyncio.Event().wait()

    async def close(self) -> None:
        self.close_calls += 1
        if self.close_delay:
            await asyncio.sleep(self.close_delay)


def _executor(ws: FakeWebSocket, timeout: float = 2.0) -> tuple[CdpCommandExecutor, list[str]]:
    urls: list[str] = []

    async def _connect(url: str, **kwargs: Any) -> FakeWebSocket:
        urls.append(url)
        return ws

    return CdpCommandExecutor(BrowserConfig(command_timeout=timeout), connect=_connect), urls


def test_send_ignores_non_matching_messages() -> None:
    ws = FakeWebSocket(
        [
            {"method": "Page.frameStartedLoading", "params": {"frameId": "F"}},
            lambda cid: {"id": cid + 1000, "result": {"frameId": "wrong"}},
            lambda cid: {"id": cid + 1, "error": {"message": "not ours"}},
            lambda cid: {"id": cid, "result": {"frameId": "F", "loaderId": "L"}},
            lambda cid: {"id": cid + 2, "result": {"late": True}},
        ]
    )
    executor, urls = _executor(ws)

    result = asyncio.run(executor.send("Page.navigate", {"url": "https://a.example/"}, "p1"))

    assert result == {"frameId": "F", "loaderId": "L"}
    assert urls == ["ws://localhost:9222/devtools/page/p1"]
    assert len(ws.sent) == 1
    assert ws.sent[0]["method"] == "Page.navigate"
    assert ws.sent[0]["params"] == {"url": "https://a.example/"}
    assert isinstance(ws.sent[0]["id"], int)
    assert ws.close_calls == 1


def test_send_always_includes_params_object() -> None:
    ws = FakeWebSocket([lambda cid: {"id": cid}])
    executor, _ = _executor(ws)
    assert asyncio.run(executor.send("Page.reload", None, "p1")) == {}
    assert ws.sent[0]["params"] == {}


def test_send_protocol_error_carries_browser_message() -> None:
    ws = FakeWebSocket([lambda cid: {"id": cid, "error": {"code": -32000, "message": "Cannot navigate to invalid URL"}}])
    executor, _ = _executor(ws)

    with pytest.raises(CdpProtocolError) as exc_info:
        asyncio.run(executor.send("Page.navigate", {"url": "nope"}, "p1"))

    assert exc_info.value.message == "CDP error: Cannot navigate to invalid URL"
    assert exc_info.value.code == -32000
    assert ws.close_calls == 1


def test_send_times_out_and_closes_once() -> None:
    ws = FakeWebSocket([{"method": "Network.dataReceived", "params": {}}, lambda cid: {"id": cid + 7}], hang=True)
    executor, _ = _executor(ws, timeout=0.05)

    with pytest.raises(CdpTimeoutError) as exc_info:
        asyncio.run(executor.send("Runtime.evaluate", {"expression": "new Promise(() => {})"}, "p1"))

    assert str(exc_info.value) == "WebSocket command timeout"
    assert ws.close_calls == 1


def test_slow_close_does_not_fail_answered_command() -> None:
    ws = FakeWebSocket([lambda cid: {"id": cid, "result": {"ok": True}}], close_delay=0.3)
    executor, _ = _executor(ws, timeout=0.1)

    assert asyncio.run(executor.send("Page.reload", {}, "p1")) == {"ok": True}
    assert ws.close_calls == 1


def test_send_malformed_reply_is_terminal() -> None:
    ws = FakeWebSocket(["{not json", lambda cid: {"id": cid, "result": {}}])
    executor, _ = _executor(ws)

    with pytest.raises(CdpTransportError) as exc_info:
        asyncio.run(executor.send("Page.reload", {}, "p1"))

    assert "Failed to parse WebSocket response" in exc_info.value.message
    assert ws.close_calls == 1


def test_send_peer_close_without_reply() -> None:
    ws = FakeWebSocket([{"method": "Inspector.detached", "params": {"reason": "target_closed"}}])
    executor, _ = _executor(ws)

    with pytest.raises(CdpTransportError):
        asyncio.run(executor.send("Page.reload", {}, "p1"))
    assert ws.close_calls == 1


def test_command_ids_are_distinct() -> None:
    ids = {next_command_id() for _ in range(100)}
    assert len(ids) == 100


def test_connect_refused_is_classified_by_client() -> None:
    async def _connect(url: str, **kwargs: Any) -> FakeWebSocket:
        raise ConnectionRefusedError(111, "Connection refused")

    config = BrowserConfig()
    client = CdpClient(config, executor=CdpCommandExecutor(config, connect=_connect))

    with pytest.raises(BrowserUnreachableError):
        asyncio.run(client.send("Page.reload", {}, "p1"))


def test_executor_against_real_websocket_server() -> None:
    from websockets.asyncio.server import serve

    async def handler(ws) -> None:  # noqa: ANN001
        cmd = json.loads(await ws.recv())
        await ws.send(json.dumps({"method": "Page.loadEventFired", "params": {"timestamp": 1.0}}))
        await ws.send(json.dumps({"id": cmd["id"], "result": {"method": cmd["method"], "params": cmd["params"]}}))
        await ws.wait_closed()

    def process_request(connection, request):  # noqa: ANN001, ANN202
        if request.path != "/devtools/page/p1":
            return connection.respond(HTTPStatus.NOT_FOUND, "No such target id\n")
        return None

    async def _main() -> dict[str, Any]:
        port = _free_port()
        async with serve(handler, "127.0.0.1", port, process_request=process_request):
            client = CdpClient(BrowserConfig(cdp_host="127.0.0.1", cdp_port=port, command_timeout=5.0))
            result = await client.send("Runtime.evaluate", {"expression": "1"}, "p1")
            with pytest.raises(TargetNotFoundError):
                await client.send("Page.reload", {}, "missing")
            return result

    result = asyncio.run(_main())
    assert result == {"method": "Runtime.evaluate", "params": {"expression": "1"}}


def test_unknown_target_rejected_with_500_handshake() -> None:
    from websockets.asyncio.server import serve

    async def handler(ws) -> None:  # noqa: ANN001
        cmd = json.loads(await ws.recv())
        await ws.send(json.dumps({"id": cmd["id"], "result": {"result": {"type": "number", "value": 2}}}))
        await ws.wait_closed()

    def process_request(connection, request):  # noqa: ANN001, ANN202
        if request.path != "/devtools/page/p1":
            return connection.respond(HTTPStatus.INTERNAL_SERVER_ERROR, "No such target id: gone\n")
        return None

    async def _listing(config, endpoint, params, method):  # noqa: ANN001, ANN202
        assert endpoint == "/json"
        return [{"id": "p1", "type": "page", "url": "https://a.example/", "title": "A"}]

    async def _main() -> list[Any]:
        port = _free_port()
        async with serve(handler, "127.0.0.1", port, process_request=process_request):
            config = BrowserConfig(cdp_host="127.0.0.1", cdp_port=port, command_timeout=5.0)
            client = CdpClient(config, http=_listing)
            server = McpServer(config, client)

            with pytest.raises(CdpError) as exc_info:
                await client.send("Page.reload", {}, "gone")
            assert exc_info.value.status == 500

            return [
                await server.call_tool("reload_tab", {"tab_id": "gone"}),
                await server.call_tool("go_back", {"tab_id": "gone"}),
                await server.call_tool("execute_javascript", {"code": "1", "tab_id": "gone"}),
                await server.call_tool("get_page_content", {"tab_id": "gone"}),
                await server.call_tool("execute_javascript", {"code": "1 + 1", "tab_id": "p1"}),
            ]

    *missing, known = asyncio.run(_main())
    for res in missing:
        assert not res.is_error
        assert res.first_text == "Tab not found"
    assert not known.is_error
    assert known.first_text == "2"
