#!/usr/bin/env python3
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

print(
    f"[mcp] browser={os.environ.get('MCP_BROWSER_NAME', 'Dia Browser')} | "
    f"host={os.environ.get('MCP_BROWSER_HOST', 'localhost')} | "
    f"port={os.environ.get('MCP_BROWSER_PORT', '9222')} | "
    f"timeout={os.environ.get('MCP_CDP_TIMEOUT', '10')}s",
    file=sys.stderr,
)

from mcp_servers.dia_browser.main import main  # noqa: E402

if __name__ == "__main__":
    main()
