"""Graph analysis: summary counts, entry modules, most-imported modules."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bundlewhy.core.graph.base import ModuleGraph


def get_entry_modules(graph: ModuleGraph) -> list[str]:
    """Modules with no importer set (nothing known imports them). O(V)."""
    return [name for name in graph.chunks if name not in graph]


def get_hot_modules(graph: ModuleGraph, top_k: int = 10) -> list[tuple[str, int]]:
    """Modules with the most importers. O(V log V)."""
    scored = [(name, len(importers)) for name, importers in graph.adjacency.items()]
    scored.sort(key=lambda x: -x[1])
    return scored[:top_k]


def graph_stats(graph: ModuleGraph) -> dict[str, int]:
    """Summary counts for a built graph."""
    return {
        "modules": graph.num_modules,
        "imported_modules": len(graph.adjacency),
        "edges": graph.num_edges,
        "chunks": len(set(graph.chunks.values())),
        "entry_modules": len(get_entry_modules(graph)),
        "skipped_dynamic": graph.skipped_dynamic,
    }
