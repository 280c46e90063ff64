#!/usr/bin/env python3
"""
Launch the Shopify tools server on stdio.

Exit status: 0 after Ctrl-C, 1 when startup or the server loop fails.
Log output is on stderr; this wrapper only reports the final failure.
"""

import sys

from shopify_mcp.mcp_server_fastmcp import main


def run() -> int:
    try:
        main()
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        print(f"shopify-mcp: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(run())
