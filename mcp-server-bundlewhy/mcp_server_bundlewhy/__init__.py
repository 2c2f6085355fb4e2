"""MCP server for BundleWhy - webpack bundle import analysis."""

from bundlewhy.mcp import serve


def main() -> None:
    """Entry point for mcp-server-bundlewhy."""
    serve()


__all__ = ["main", "serve"]
