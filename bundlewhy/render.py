"""Rendering of importer trees and chains with rich markup."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from rich.markup import escape
from rich.tree import Tree

from bundlewhy.core.graph.base import ModuleGraph
from bundlewhy.core.graph.models import Branch, Chain, Leaf


@dataclass
class RenderOptions:
    """Display markers for rendered output."""

    highlight: re.Pattern[str] | None = None
    highlight_chunk: re.Pattern[str] | None = None
    show_request: bool = False


def highlight_module(name: str, root: str, pattern: re.Pattern[str] | None = None) -> str:
    """Bold for the traced module, bright yellow for pattern matches."""
    if name == root:
        return f"[bold]{escape(name)}[/]"
    if pattern and pattern.search(name):
        return f"[bright_yellow]{escape(name)}[/]"
    return escape(name)


def highlight_chunk(name: str, pattern: re.Pattern[str] | None = None) -> str:
    """Bright red for pattern matches, dim otherwise."""
    if pattern and pattern.search(name):
        return f"[bright_red]{escape(name)}[/]"
    return f"[dim]{escape(name)}[/]"


def render_tree(
    root: str, tree: Branch, graph: ModuleGraph, options: RenderOptions | None = None
) -> Tree:
    """Build a rich Tree for an importer tree rooted at ``root``."""
    options = options or RenderOptions()
    rendered = Tree(highlight_module(root, root, options.highlight))
    _add_children(rendered, root, tree, graph, options, root)
    return rendered


def _add_children(
    parent_node: Tree,
    parent: str,
    branch: Branch,
    graph: ModuleGraph,
    options: RenderOptions,
    root: str,
) -> None:
    importers = graph.get_importers(parent)
    for name, child in branch.children.items():
        record = importers.get(name)
        label = highlight_module(name, root, options.highlight)
        if options.show_request and record and record.user_request:
            label += f": [dim]{escape(record.user_request)}[/]"

        if isinstance(child, Leaf):
            label += f": {highlight_chunk(child.chunk_name, options.highlight_chunk)}"
            parent_node.add(label)
            continue

        if record:
            label += f": {highlight_chunk(record.chunk_name, options.highlight_chunk)}"
        _add_children(parent_node.add(label), name, child, graph, options, root)


def render_chain(chain: Chain, root: str, options: RenderOptions | None = None) -> str:
    """One markup line, each module imported by the next."""
    options = options or RenderOptions()
    return " [dim]<-[/] ".join(highlight_module(m, root, options.highlight) for m in chain)


def tree_to_json(root: str, tree: Branch) -> dict[str, Any]:
    """Convert an importer tree to a JSON-serializable dict."""
    return {"module": root, "depth": tree.depth, "importers": tree.to_dict()}


def chains_to_json(source: str, target: str, chains: list[Chain]) -> dict[str, Any]:
    """Convert found chains to a JSON-serializable dict."""
    return {
        "from": source,
        "to": target,
        "count": len(chains),
        "chains": [list(chain) for chain in chains],
    }
