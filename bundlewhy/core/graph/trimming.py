"""Tree trimming: drop matching leaves and collapse emptied branches."""

from __future__ import annotations

import re

from bundlewhy.core.graph.base import ChunkMap
from bundlewhy.core.graph.models import Branch, Leaf, TreeNode


def trim_tree(
    tree: Branch,
    trim_pattern: re.Pattern[str] | str | None,
    chunk_map: ChunkMap,
) -> Branch:
    """Remove leaves whose module name matches ``trim_pattern``.

    A branch left without children becomes a leaf holding its chunk name,
    which may then match on a later pass. Passes repeat until nothing
    changes. Returns a new tree; ``tree`` is not modified.
    """
    if trim_pattern is None:
        return tree
    if isinstance(trim_pattern, str):
        trim_pattern = re.compile(trim_pattern)

    changed = True
    while changed:
        tree, changed = _trim_pass(tree, trim_pattern, chunk_map)
    return tree


def _trim_pass(
    branch: Branch, pattern: re.Pattern[str], chunk_map: ChunkMap
) -> tuple[Branch, bool]:
    """One bottom-up pass. Returns the trimmed branch and whether it changed."""
    result = Branch()
    changed = False

    for name, child in branch.children.items():
        if isinstance(child, Leaf):
            if pattern.search(name):
                changed = True
                continue
            result.children[name] = child
            continue

        subtree, sub_changed = _trim_pass(child, pattern, chunk_map)
        changed = changed or sub_changed
        node: TreeNode = subtree
        if not subtree.children:
            node = Leaf(chunk_map.get(name, ""))
            changed = True
        result.children[name] = node

    return result, changed
