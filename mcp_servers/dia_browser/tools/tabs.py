"""
Tab management tools.

Provides:
- open_url: Open a URL in a new tab or the current tab
- get_current_tab: Describe the current page target
- list_tabs: List page targets
- close_tab / switch_to_tab: Close or activate a target by ID
"""

from __future__ import annotations

import urllib.parse
from typing import Any

from ..session import CdpClient
from .base import tab_not_found_ok

# Characters Chrome expects to see verbatim in `/json/new?<url>`.
_URL_SAFE = ":/?#[]@!$&'()*+,;=%~"


async def open_url(client: CdpClient, url: str, new_tab: bool = True) -> str:
    if new_tab:
        # Chromium forks (Dia included) only accept PUT for target creation.
        await client.http(f"/json/new?{urllib.parse.quote(url, safe=_URL_SAFE)}", method="PUT")
        return f"Opened {url} in new tab"

    target = await client.active_page()
    await client.send("Page.navigate", {"url": url}, target.id)
    return f"Navigated to {url}"


async def get_current_tab(client: CdpClient) -> dict[str, Any]:
    target = await client.active_page()
    return {"url": target.url, "title": target.title, "id": target.id}


async def list_tabs(client: CdpClient, window_id: int | None = None) -> list[dict[str, str]]:
    # `/json` carries no window grouping; window_id is accepted for schema compatibility only.
    return [target.summary() for target in await client.list_pages()]


def _target_path(action: str, tab_id: str) -> str:
    return f"/json/{action}/{urllib.parse.quote(tab_id, safe='')}"


@tab_not_found_ok
async def close_tab(client: CdpClient, tab_id: str) -> str:
    await client.http(_target_path("close", tab_id))
    return "Tab closed"


@tab_not_found_ok
async def switch_to_tab(client: CdpClient, tab_id: str) -> str:
    await client.http(_target_path("activate", tab_id))
    return "Switched to tab"
