"""Importer tree extraction using depth-limited DFS."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from bundlewhy.core.graph.models import Branch, Leaf, TreeNode

if TYPE_CHECKING:
    from bundlewhy.core.graph.base import ModuleGraph


def resolve_tree(
    graph: ModuleGraph,
    root: str,
    max_depth: int,
    skip_pattern: re.Pattern[str] | str | None = None,
) -> Branch:
    """Build the tree of transitive importers of ``root``.

    Top-level keys are direct importers. Each importer is expanded with one
    less unit of depth; ``max_depth=0`` gives an empty tree. Importers are
    left out when they have no importer set of their own, when they already
    appear on the current path, or when their chunk matches ``skip_pattern``
    (the whole subtree goes with them).

    Cycles are only guarded per path, so a module can show up on several
    independent branches.
    """
    if max_depth < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth}")
    if isinstance(skip_pattern, str):
        skip_pattern = re.compile(skip_pattern)

    def expand(module: str, depth: int, path: tuple[str, ...]) -> Branch:
        branch = Branch()
        depth -= 1
        if depth < 0:
            return branch

        for importer in graph.get_importers(module).values():
            name = importer.name
            if name not in graph:
                continue
            if name in path:
                continue
            chunk_name = graph.chunk_of(name) or ""
            if skip_pattern and skip_pattern.search(chunk_name):
                continue

            subtree = expand(name, depth, (*path, name))
            node: TreeNode = subtree if subtree.children else Leaf(chunk_name)
            branch.children[name] = node

        return branch

    if root not in graph:
        return Branch()
    return expand(root, max_depth, (root,))
