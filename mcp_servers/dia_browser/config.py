from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_BROWSER_NAME = "Dia Browser"
DEFAULT_BINARY_PATH = "/Applications/Dia.app/Contents/MacOS/Dia"


def _env_float(name: str, default: float) -> float:
    try:
        value = float(os.environ.get(name) or default)
    except ValueError:
        return default
    return value if value > 0 else default


def _env_optional_float(name: str) -> float | None:
    raw = (os.environ.get(name) or "").strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if value > 0 else None


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name) or default)
    except ValueError:
        return default


@dataclass
class BrowserConfig:
    cdp_host: str = "localhost"
    cdp_port: int = 9222
    command_timeout: float = 10.0
    # None keeps the socket default; discovery calls are not bounded unless configured.
    http_timeout: float | None = None
    browser_name: str = DEFAULT_BROWSER_NAME
    binary_path: str = DEFAULT_BINARY_PATH

    @classmethod
    def from_env(cls) -> BrowserConfig:
        host = (os.environ.get("MCP_BROWSER_HOST") or "").strip() or "localhost"
        return cls(
            cdp_host=host,
            cdp_port=_env_int("MCP_BROWSER_PORT", 9222),
            command_timeout=_env_float("MCP_CDP_TIMEOUT", 10.0),
            http_timeout=_env_optional_float("MCP_HTTP_TIMEOUT"),
            browser_name=(os.environ.get("MCP_BROWSER_NAME") or "").strip() or DEFAULT_BROWSER_NAME,
            binary_path=(os.environ.get("MCP_BROWSER_BINARY") or "").strip() or DEFAULT_BINARY_PATH,
        )

    @property
    def http_base(self) -> str:
        return f"http://{self.cdp_host}:{self.cdp_port}"

    def websocket_url(self, target_id: str) -> str:
        return f"ws://{self.cdp_host}:{self.cdp_port}/devtools/page/{target_id}"

    @property
    def debugging_flag(self) -> str:
        return f"--remote-debugging-port={self.cdp_port}"

    def remediation(self) -> str:
        """Actionable steps for a browser that is not reachable on the CDP port."""
        name = self.browser_name
        return (
            f"{name} is not running with remote debugging enabled.\n\n"
            "To enable remote debugging:\n"
            f"1. Close {name} completely\n"
            f"2. Launch {name} with: {self.binary_path} {self.debugging_flag}\n"
            f"3. Or add {self.debugging_flag} to your {name} startup flags\n\n"
            "Note: Remote debugging must be enabled for this extension to work."
        )
