"""
Navigation tools for browser automation.

Provides:
- reload_tab: Reload a page
- go_back: Browser history back
- go_forward: Browser history forward

History steps read `Page.getNavigationHistory` first and only navigate when an
adjacent entry exists; running off either end of the history is reported, not raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..errors import CdpProtocolError
from ..session import CdpClient
from .base import tab_not_found_ok


@dataclass(frozen=True, slots=True)
class NavigationHistory:
    entries: list[dict[str, Any]]
    current_index: int

    @classmethod
    def from_result(cls, result: dict[str, Any]) -> NavigationHistory:
        entries = result.get("entries")
        index = result.get("currentIndex")
        if not isinstance(entries, list) or not isinstance(index, int):
            raise CdpProtocolError("CDP error: malformed navigation history")
        return cls(entries=entries, current_index=index)

    def adjacent_index(self, step: int) -> int | None:
        index = self.current_index + step
        if 0 <= index < len(self.entries):
            return index
        return None

    def adjacent_entry_id(self, step: int) -> int | None:
        index = self.adjacent_index(step)
        if index is None:
            return None
        return self.entries[index].get("id")


async def get_navigation_history(client: CdpClient, target_id: str) -> NavigationHistory:
    return NavigationHistory.from_result(await client.send("Page.getNavigationHistory", {}, target_id))


async def _step_history(client: CdpClient, target_id: str, step: int) -> bool:
    history = await get_navigation_history(client, target_id)
    entry_id = history.adjacent_entry_id(step)
    if entry_id is None:
        return False
    await client.send("Page.navigateToHistoryEntry", {"entryId": entry_id}, target_id)
    return True


@tab_not_found_ok
async def reload_tab(client: CdpClient, tab_id: str | None = None) -> str:
    target_id = await client.resolve_target_id(tab_id)
    await client.send("Page.reload", {}, target_id)
    return "Tab reloaded"


@tab_not_found_ok
async def go_back(client: CdpClient, tab_id: str | None = None) -> str:
    target_id = await client.resolve_target_id(tab_id)
    if await _step_history(client, target_id, -1):
        return "Navigated back"
    return "Cannot go back - at beginning of history"


@tab_not_found_ok
async def go_forward(client: CdpClient, tab_id: str | None = None) -> str:
    target_id = await client.resolve_target_id(tab_id)
    if await _step_history(client, target_id, 1):
        return "Navigated forward"
    return "Cannot go forward - at end of history"
