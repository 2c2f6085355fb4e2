"""
Module graph data structures and algorithms.

This module provides in-memory operations over a bundler's module graph:

Data Structures:
    - ModuleGraph: Importer map plus module -> chunk map, built once per run
    - Branch/Leaf: Tagged tree of importers, leaves hold chunk names
    - Chain: A sequence of modules linked by importer relationships

Algorithms:
    - traversal: depth-limited importer tree (resolve_tree)
    - trimming: leaf removal with branch collapse (trim_tree)
    - pathfinding: exhaustive DFS chains, BFS shortest chain
    - lookup: substring resolution of module names
    - analysis: summary counts, entry modules, hot modules

Building:
    - build_graph(): Build a ModuleGraph from a StatsArtifact
"""

from bundlewhy.core.graph.base import (
    AdjacencyMap,
    BuildOptions,
    ChunkMap,
    ModuleGraph,
    build_graph,
)
from bundlewhy.core.graph.lookup import MatchMode, find_module, find_modules
from bundlewhy.core.graph.models import Branch, Chain, ImporterRecord, Leaf, TreeNode
from bundlewhy.core.graph.pathfinding import find_chains, shortest_chain
from bundlewhy.core.graph.traversal import resolve_tree
from bundlewhy.core.graph.trimming import trim_tree

__all__ = [
    "AdjacencyMap",
    "BuildOptions",
    "Branch",
    "Chain",
    "ChunkMap",
    "ImporterRecord",
    "Leaf",
    "MatchMode",
    "ModuleGraph",
    "TreeNode",
    "build_graph",
    "find_chains",
    "find_module",
    "find_modules",
    "resolve_tree",
    "shortest_chain",
    "trim_tree",
]
