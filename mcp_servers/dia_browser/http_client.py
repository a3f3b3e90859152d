from __future__ import annotations

import asyncio
import json
import urllib.parse
from typing import Any
from urllib.error import HTTPError
from urllib.request import Request, urlopen

from .config import BrowserConfig


class HttpClientError(Exception):
    """Non-success HTTP status from the CDP discovery endpoint."""

    def __init__(self, status: int, reason: str = "") -> None:
        super().__init__(f"HTTP {status}: {reason}".rstrip(": "))
        self.status = status
        self.reason = reason


def build_url(config: BrowserConfig, endpoint: str, params: dict[str, Any] | None = None) -> str:
    url = urllib.parse.urljoin(config.http_base + "/", endpoint.lstrip("/"))
    if params:
        query = urllib.parse.urlencode([(str(k), str(v)) for k, v in params.items()])
        url = f"{url}{'&' if '?' in url else '?'}{query}"
    return url


def _build_request(url: str, method: str) -> Request:
    return Request(url, method=method.upper(), headers={"User-Agent": "dia-browser-mcp/0.1"})


def _decode_body(body: bytes, content_type: str | None) -> Any:
    text = body.decode(errors="replace")
    if content_type and "application/json" in content_type.lower():
        return json.loads(text)
    return text


def http_request(
    config: BrowserConfig,
    endpoint: str,
    params: dict[str, Any] | None = None,
    method: str = "GET",
) -> Any:
    """Blocking one-shot request against the CDP HTTP surface.

    Returns parsed JSON when the response declares a JSON content type, text otherwise.
    Connection-level failures (``URLError``) propagate untouched for classification.
    Without ``config.http_timeout`` the socket default timeout applies.
    """
    req = _build_request(build_url(config, endpoint, params), method)
    kwargs: dict[str, Any] = {} if config.http_timeout is None else {"timeout": config.http_timeout}
    try:
        with urlopen(req, **kwargs) as resp:
            return _decode_body(resp.read(), resp.headers.get("Content-Type"))
    except HTTPError as exc:
        raise HttpClientError(exc.code, str(exc.reason or "")) from exc


async def cdp_http_request(
    config: BrowserConfig,
    endpoint: str,
    params: dict[str, Any] | None = None,
    method: str = "GET",
) -> Any:
    return await asyncio.to_thread(http_request, config, endpoint, params, method)
