"""Redaction utilities for logging.

Tool arguments and traced frames are logged; page URLs may carry tokens and
JavaScript bodies may carry anything, so both are reduced before logging.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

_SENSITIVE_SUBSTRINGS = (
    "token",
    "secret",
    "password",
    "passwd",
    "pwd",
    "authorization",
    "cookie",
    "session",
    "jwt",
    "bearer",
    "api-key",
    "api_key",
    "apikey",
)

# Avoid false-positives like "author" while still protecting the obvious key.
_SENSITIVE_EXACT = {"auth"}

# Argument keys whose values are summarized rather than logged.
_OPAQUE_ARGUMENTS = {"code"}


def is_sensitive_key(key: str) -> bool:
    k = (key or "").strip().lower()
    if not k:
        return False
    if k in _SENSITIVE_EXACT:
        return True
    return any(s in k for s in _SENSITIVE_SUBSTRINGS)


def _redacted_summary(value: Any) -> str:
    if isinstance(value, str):
        return f"<redacted str len={len(value)}>"
    if isinstance(value, (list, tuple)):
        return f"<redacted list len={len(value)}>"
    if isinstance(value, dict):
        return f"<redacted dict keys={len(value)}>"
    return "<redacted>"


def redact_url(url: str) -> str:
    """Drop userinfo and redact sensitive query values; other URLs come back unchanged."""
    if not isinstance(url, str) or not url:
        return url
    try:
        parts = urlsplit(url)
    except ValueError:
        return url

    changed = False
    netloc = parts.netloc
    query = parts.query

    if "@" in netloc:
        netloc = netloc.split("@", 1)[1]
        changed = True

    if query:
        pairs = parse_qsl(query, keep_blank_values=True)
        out_pairs = [(k, "<redacted>" if is_sensitive_key(k) and v else v) for k, v in pairs]
        if out_pairs != pairs:
            query = urlencode(out_pairs)
            changed = True

    if not changed:
        return url
    return urlunsplit((parts.scheme, netloc, parts.path, query, parts.fragment))


def redact_tool_arguments(tool: str, args: dict[str, Any]) -> dict[str, Any]:
    """Redact tool arguments for safe logging."""
    out: dict[str, Any] = {}
    for key, value in (args or {}).items():
        lk = str(key).lower()
        if lk == "url" and isinstance(value, str):
            out[key] = redact_url(value)
        elif lk in _OPAQUE_ARGUMENTS or is_sensitive_key(lk):
            out[key] = _redacted_summary(value)
        else:
            out[key] = value
    return out


def redact_jsonrpc_for_log(payload: dict[str, Any]) -> dict[str, Any]:
    """Copy of a JSON-RPC frame with tool-call arguments redacted."""
    msg = dict(payload) if isinstance(payload, dict) else {}
    params = msg.get("params")
    if msg.get("method") == "tools/call" and isinstance(params, dict):
        name = params.get("name")
        args = params.get("arguments")
        if isinstance(args, dict):
            params = dict(params)
            params["arguments"] = redact_tool_arguments(str(name or ""), args)
            msg["params"] = params
    return msg


__all__ = ["is_sensitive_key", "redact_jsonrpc_for_log", "redact_tool_arguments", "redact_url"]
