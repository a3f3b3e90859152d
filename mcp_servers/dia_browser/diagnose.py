"""Connectivity check for the browser's remote debugging endpoint.

Run before wiring the MCP server into a host:

    python -m mcp_servers.dia_browser.diagnose [--port 9222]
"""

from __future__ import annotations

import argparse
import asyncio
from collections.abc import Callable
from typing import Any

from .config import BrowserConfig
from .errors import BrowserUnreachableError, CdpError
from .session import CdpClient


def _launch_script_hint(config: BrowserConfig) -> list[str]:
    return [
        "",
        "Alternatively, you can create a script:",
        'echo "#!/bin/bash" > ~/dia-debug.sh',
        f'echo "{config.binary_path} {config.debugging_flag}" >> ~/dia-debug.sh',
        "chmod +x ~/dia-debug.sh",
        "~/dia-debug.sh",
    ]


async def run_diagnostics(client: CdpClient, emit: Callable[[str], Any] = print) -> bool:
    """Query version info and the target list; report through `emit`. Returns True when healthy."""
    config = client.config
    emit("Testing Chrome DevTools Protocol connection...")
    emit(f"CDP URL: {config.http_base}")

    try:
        emit("")
        emit("1. Testing basic connectivity...")
        version = await client.http("/json/version")
        info = version if isinstance(version, dict) else {}
        emit("CDP connection successful!")
        emit(f"Browser: {info.get('Browser', 'unknown')}")
        emit(f"User-Agent: {info.get('User-Agent', 'unknown')}")
        emit(f"WebSocket URL: {info.get('webSocketDebuggerUrl', 'unknown')}")

        emit("")
        emit("2. Testing tab listing...")
        targets = await client.list_targets()
        pages = [t for t in targets if t.is_page]
        emit(f"Found {len(targets)} total targets")
        emit(f"Found {len(pages)} page tabs")
        if pages:
            emit("")
            emit("Active tabs:")
            for index, page in enumerate(pages, start=1):
                emit(f"  {index}. {page.title} - {page.url}")
                emit(f"     ID: {page.id}")
    except BrowserUnreachableError as exc:
        emit("")
        emit("CDP connection failed!")
        emit("")
        emit(exc.message)
        for line in _launch_script_hint(config):
            emit(line)
        return False
    except CdpError as exc:
        emit("")
        emit("CDP connection failed!")
        emit(f"Error: {exc.message}")
        return False

    emit("")
    emit(f"All checks passed! {config.browser_name} is properly configured for CDP.")
    return True


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Check the browser's remote debugging endpoint")
    parser.add_argument("--host", default=None, help="CDP host (default: MCP_BROWSER_HOST or localhost)")
    parser.add_argument("--port", type=int, default=None, help="CDP port (default: MCP_BROWSER_PORT or 9222)")
    args = parser.parse_args(argv)

    config = BrowserConfig.from_env()
    if args.host:
        config.cdp_host = args.host
    if args.port:
        config.cdp_port = args.port

    ok = asyncio.run(run_diagnostics(CdpClient(config)))
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
