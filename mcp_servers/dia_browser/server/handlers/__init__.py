"""Tool handlers grouped by domain; each module exports a name -> handler table."""

from __future__ import annotations

from .navigation import NAVIGATION_HANDLERS
from .page import PAGE_HANDLERS
from .tabs import TAB_HANDLERS

__all__ = ["NAVIGATION_HANDLERS", "PAGE_HANDLERS", "TAB_HANDLERS"]
