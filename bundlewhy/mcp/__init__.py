"""
MCP server for BundleWhy.

Exposes bundle analysis tools to LLMs via the Model Context Protocol.

Tools:
    - bundlewhy_tree: Tree of modules importing a module
    - bundlewhy_find_chain: Importer chains between two modules
    - bundlewhy_modules: Search module names

Usage:
    Install: pip install mcp-server-bundlewhy
    Run: mcp-server-bundlewhy
"""

import asyncio

from bundlewhy.mcp.server import serve as _serve


def serve() -> None:
    """Entry point for the MCP server."""
    asyncio.run(_serve())


__all__ = ["serve"]
