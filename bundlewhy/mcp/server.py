"""MCP server implementation for BundleWhy."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from bundlewhy.core.exceptions import BundleWhyError
from bundlewhy.core.graph import (
    BuildOptions,
    MatchMode,
    ModuleGraph,
    build_graph,
    find_chains,
    find_module,
    find_modules,
    resolve_tree,
    trim_tree,
)
from bundlewhy.core.graph.pathfinding import DEFAULT_MAX_DEPTH
from bundlewhy.core.loader import load_stats
from bundlewhy.render import chains_to_json, tree_to_json

logger = logging.getLogger(__name__)

server = Server("bundlewhy")

_MAX_MODULE_RESULTS = 200

_STATS_FILE_PROPERTY = {
    "type": "string",
    "description": "Path to the webpack stats JSON file",
}
_CHUNK_PROPERTY = {
    "type": "string",
    "description": "Limit to chunks whose name matches this regex (optional)",
}
_SKIP_ASYNC_PROPERTY = {
    "type": "boolean",
    "description": "Ignore dynamic import() reasons (default: false)",
    "default": False,
}
_MATCH_PROPERTY = {
    "type": "string",
    "enum": [m.value for m in MatchMode],
    "description": "How module names are matched (default: first)",
    "default": "first",
}


def _load_graph(arguments: dict[str, Any]) -> ModuleGraph:
    """Load the stats file named in the tool arguments."""
    options = BuildOptions(
        chunk_pattern=arguments.get("chunk"),
        skip_async=bool(arguments.get("skip_async", False)),
    )
    return build_graph(load_stats(Path(arguments["stats_file"])), options)


@server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="bundlewhy_tree",
            description=(
                "Show the tree of modules that import a given module in a webpack bundle, "
                "with the chunk each importer lives in. Answers 'why is this module bundled?'."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "stats_file": _STATS_FILE_PROPERTY,
                    "module": {
                        "type": "string",
                        "description": "Substring of the module name, usually a file name",
                    },
                    "depth": {
                        "type": "integer",
                        "description": "How many importer levels to show (default: 3)",
                        "default": 3,
                    },
                    "chunk": _CHUNK_PROPERTY,
                    "trim_tree": {
                        "type": "string",
                        "description": "Trim leaves whose module name matches this regex",
                    },
                    "skip_modules": {
                        "type": "string",
                        "description": "Skip importers whose chunk matches this regex",
                    },
                    "skip_async": _SKIP_ASYNC_PROPERTY,
                    "match": _MATCH_PROPERTY,
                },
                "required": ["stats_file", "module"],
            },
        ),
        Tool(
            name="bundlewhy_find_chain",
            description=(
                "Find importer chains linking two modules: each module in a chain is "
                "imported by the next one. Useful for tracking unwanted coupling."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "stats_file": _STATS_FILE_PROPERTY,
                    "from": {
                        "type": "string",
                        "description": "Substring of the module the chain starts at",
                    },
                    "to": {
                        "type": "string",
                        "description": "Substring of the module the chain ends at",
                    },
                    "depth": {
                        "type": "integer",
                        "description": (
                            f"Maximum importer hops in a chain (default: {DEFAULT_MAX_DEPTH})"
                        ),
                        "default": DEFAULT_MAX_DEPTH,
                    },
                    "chunk": _CHUNK_PROPERTY,
                    "skip_async": _SKIP_ASYNC_PROPERTY,
                    "match": _MATCH_PROPERTY,
                },
                "required": ["stats_file", "from", "to"],
            },
        ),
        Tool(
            name="bundlewhy_modules",
            description="Search module names in a webpack stats file. Supports partial matching.",
            inputSchema={
                "type": "object",
                "properties": {
                    "stats_file": _STATS_FILE_PROPERTY,
                    "query": {
                        "type": "string",
                        "description": "Search query (partial name match)",
                    },
                },
                "required": ["stats_file", "query"],
            },
        ),
    ]


@server.call_tool()  # type: ignore[untyped-decorator]
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        if name == "bundlewhy_tree":
            result = handle_tree(arguments)
        elif name == "bundlewhy_find_chain":
            result = handle_find_chain(arguments)
        elif name == "bundlewhy_modules":
            result = handle_modules(arguments)
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except (BundleWhyError, re.error, ValueError, KeyError) as e:
        logger.warning("Tool %s failed: %s", name, e)
        return [TextContent(type="text", text=json.dumps({"error": str(e)}))]


def handle_tree(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handle bundlewhy_tree tool."""
    graph = _load_graph(arguments)
    mode = MatchMode(arguments.get("match", "first"))
    root = find_module(arguments["module"], graph.adjacency, mode)

    tree = resolve_tree(graph, root, int(arguments.get("depth", 3)), arguments.get("skip_modules"))
    tree = trim_tree(tree, arguments.get("trim_tree"), graph.chunks)
    return tree_to_json(root, tree)


def handle_find_chain(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handle bundlewhy_find_chain tool."""
    graph = _load_graph(arguments)
    mode = MatchMode(arguments.get("match", "first"))
    source = find_module(arguments["from"], graph.chunks, mode)
    target = find_module(arguments["to"], graph.chunks, mode)

    chains = find_chains(graph, source, target, int(arguments.get("depth", DEFAULT_MAX_DEPTH)))
    return chains_to_json(source, target, chains)


def handle_modules(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handle bundlewhy_modules tool."""
    graph = _load_graph(arguments)
    names = find_modules(arguments["query"], graph.chunks)

    return {
        "total": len(names),
        "results": [
            {"name": name, "chunk": graph.chunk_of(name)} for name in names[:_MAX_MODULE_RESULTS]
        ],
    }


async def serve() -> None:
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
