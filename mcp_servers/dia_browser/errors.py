"""Failure taxonomy for CDP calls and the classifier that produces it.

Low-level failures (socket errors, urllib errors, websockets handshake errors,
timeouts) are rewritten into a small set of ``CdpError`` subclasses. The
classification is driven by exception types and status codes carried on the
exceptions, never by matching message text.
"""

from __future__ import annotations

import asyncio
import json
import socket
from typing import Any
from urllib.error import URLError

from websockets.exceptions import ConnectionClosed, InvalidHandshake, InvalidStatus, InvalidURI

from .config import BrowserConfig
from .http_client import HttpClientError


class CdpError(Exception):
    """Base for every classified CDP failure."""

    kind = "cdp_error"

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        code: int | None = None,
        suggestion: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.suggestion = suggestion

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"kind": self.kind, "message": self.message}
        if self.status is not None:
            out["status"] = self.status
        if self.code is not None:
            out["code"] = self.code
        return out


class BrowserUnreachableError(CdpError):
    kind = "browser_unreachable"


class CdpProtocolError(CdpError):
    kind = "protocol_error"


class TargetNotFoundError(CdpError):
    kind = "target_not_found"


class NoActiveTargetError(CdpError):
    kind = "no_active_target"


class CdpTimeoutError(CdpError):
    kind = "timeout"


class CdpTransportError(CdpError):
    kind = "transport_error"


def _is_unreachable(exc: BaseException) -> bool:
    # socket.gaierror: host not found; ConnectionRefusedError: nothing listening on the port.
    if isinstance(exc, URLError) and isinstance(exc.reason, BaseException):
        return _is_unreachable(exc.reason)
    return isinstance(exc, (ConnectionRefusedError, socket.gaierror))


def _from_status(status: int, reason: str) -> CdpError:
    if status == 404:
        return TargetNotFoundError("Tab not found", status=status)
    detail = f"HTTP {status}: {reason}" if reason else f"HTTP {status}"
    return CdpProtocolError(f"CDP error: {detail}", status=status)


def classify_error(exc: BaseException, config: BrowserConfig) -> CdpError:
    """Map any failure raised while executing a CDP command onto the taxonomy."""
    if isinstance(exc, CdpError):
        return exc

    if _is_unreachable(exc):
        return BrowserUnreachableError(
            config.remediation(),
            suggestion=f"Start {config.browser_name} with {config.debugging_flag}",
        )

    if isinstance(exc, HttpClientError):
        return _from_status(exc.status, exc.reason)

    if isinstance(exc, InvalidStatus):
        response = exc.response
        return _from_status(response.status_code, str(response.reason_phrase or ""))

    if isinstance(exc, URLError) and isinstance(exc.reason, TimeoutError):
        exc = exc.reason
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return CdpTimeoutError(f"CDP request timed out: {exc}" if str(exc) else "CDP request timed out")

    if isinstance(exc, json.JSONDecodeError):
        return CdpTransportError(f"Failed to parse CDP response: {exc}")

    if isinstance(exc, (ConnectionClosed, InvalidHandshake, InvalidURI)):
        return CdpTransportError(f"WebSocket error: {exc}")

    if isinstance(exc, (URLError, OSError)):
        return CdpTransportError(f"CDP error: {exc}")

    return CdpError(f"CDP error: {exc}")


__all__ = [
    "BrowserUnreachableError",
    "CdpError",
    "CdpProtocolError",
    "CdpTimeoutError",
    "CdpTransportError",
    "NoActiveTargetError",
    "TargetNotFoundError",
    "classify_error",
]
