"""
BundleWhy: explain why modules end up in a webpack bundle.

BundleWhy reads a webpack stats file (``webpack --json``) and lets you:
- Show the tree of modules that import a module, up to a depth
- Find importer chains linking two modules
- Trim and highlight trees to focus on the interesting paths

Usage:
    from pathlib import Path

    from bundlewhy.core import load_stats
    from bundlewhy.core.graph import build_graph, resolve_tree

    graph = build_graph(load_stats(Path("stats.json")))
    tree = resolve_tree(graph, "./src/utils.js", max_depth=3)
"""

__version__ = "0.1.0"
