"""Chain finding: exhaustive DFS over importers, BFS shortest chain."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from bundlewhy.core.graph.models import Chain

if TYPE_CHECKING:
    from bundlewhy.core.graph.base import ModuleGraph

DEFAULT_MAX_DEPTH = 20


def find_chains(
    graph: ModuleGraph,
    source: str,
    target: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[Chain]:
    """Find every importer chain from ``source`` up to ``target``.

    Each chain starts at ``source`` and every following module imports the
    one before it. Paths holding more than ``max_depth`` modules are not
    expanded. Modules never repeat within a chain, but distinct chains
    through the same modules are all reported.
    """
    chains: list[Chain] = []
    stack: list[tuple[str, list[str]]] = [(source, [source])]

    while stack:
        current, path = stack.pop()
        if current == target:
            chains.append(Chain(modules=path))
            continue
        if len(path) > max_depth:
            continue

        for importer in graph.get_importers(current):
            if importer not in path:
                stack.append((importer, [*path, importer]))

    return chains


def shortest_chain(
    graph: ModuleGraph,
    source: str,
    target: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Chain | None:
    """Find one shortest importer chain using BFS. O(V + E)."""
    if source == target:
        return Chain(modules=[source])

    queue: deque[str] = deque([source])
    parent: dict[str, str] = {}
    depth: dict[str, int] = {source: 1}

    while queue:
        current = queue.popleft()
        if depth[current] > max_depth:
            continue
        for importer in graph.get_importers(current):
            if importer in depth:
                continue
            depth[importer] = depth[current] + 1
            parent[importer] = current
            if importer == target:
                return _reconstruct(source, target, parent)
            queue.append(importer)

    return None


def _reconstruct(source: str, target: str, parent: dict[str, str]) -> Chain:
    """Reconstruct chain from BFS parent map."""
    modules = [target]
    current = target
    while current != source:
        current = parent[current]
        modules.append(current)
    modules.reverse()
    return Chain(modules=modules)
