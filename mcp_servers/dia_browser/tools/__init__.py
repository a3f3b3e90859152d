"""
Browser tools organized by domain.

- base: shared helpers (missing-target tolerance, value rendering)
- js_helpers: JavaScript evaluated in the page
- tabs: open, list, describe, close and activate targets
- navigation: reload and history stepping
- page: script evaluation and content extraction
"""

from .base import TAB_NOT_FOUND, format_js_value, tab_not_found_ok
from .navigation import NavigationHistory, get_navigation_history, go_back, go_forward, reload_tab
from .page import evaluate, execute_javascript, get_page_content
from .tabs import close_tab, get_current_tab, list_tabs, open_url, switch_to_tab

__all__ = [
    "TAB_NOT_FOUND",
    "NavigationHistory",
    "close_tab",
    "evaluate",
    "execute_javascript",
    "format_js_value",
    "get_current_tab",
    "get_navigation_history",
    "get_page_content",
    "go_back",
    "go_forward",
    "list_tabs",
    "open_url",
    "reload_tab",
    "switch_to_tab",
    "tab_not_found_ok",
]
