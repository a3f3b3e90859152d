"""
Shared helpers for tool operations.

Provides:
- tab_not_found_ok: report a missing target as a normal result
- format_js_value: render an evaluation result as text
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from ..errors import TargetNotFoundError

logger = logging.getLogger("mcp.dia_browser.tools")

TAB_NOT_FOUND = "Tab not found"

T = TypeVar("T")


def tab_not_found_ok(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T | str]]:
    """Decorator: a target that no longer exists is a reportable outcome, not a failure."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T | str:
        try:
            return await func(*args, **kwargs)
        except TargetNotFoundError:
            logger.info("target_not_found op=%s", func.__name__)
            return TAB_NOT_FOUND

    return wrapper


def format_js_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, ensure_ascii=False)


def exception_text(details: dict[str, Any]) -> str:
    """Human-readable text for a `Runtime.evaluate` exceptionDetails object."""
    text = str(details.get("text") or "Uncaught")
    exception = details.get("exception")
    description = exception.get("description") if isinstance(exception, dict) else None
    if isinstance(description, str) and description:
        first_line = description.splitlines()[0]
        if first_line and first_line not in text:
            return f"{text} {first_line}"
    return text
