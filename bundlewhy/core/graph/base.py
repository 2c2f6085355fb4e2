"""Module graph built from a stats artifact."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from bundlewhy.core.graph.models import ImporterRecord
from bundlewhy.core.models import StatsArtifact

logger = logging.getLogger(__name__)

AdjacencyMap = dict[str, dict[str, ImporterRecord]]
ChunkMap = dict[str, str]


@dataclass
class BuildOptions:
    """Options controlling which chunks and reasons enter the graph."""

    chunk_pattern: re.Pattern[str] | str | None = None
    skip_async: bool = False

    def chunk_regex(self) -> re.Pattern[str] | None:
        if self.chunk_pattern is None or isinstance(self.chunk_pattern, re.Pattern):
            return self.chunk_pattern
        return re.compile(self.chunk_pattern)


class ModuleGraph:
    """Importer graph: module name -> {importer name -> record}.

    Also maps every named module to the display name of its defining chunk.
    """

    __slots__ = ("_adjacency", "_chunks", "matched_chunks", "skipped_dynamic")

    def __init__(self) -> None:
        self._adjacency: AdjacencyMap = {}
        self._chunks: ChunkMap = {}
        self.matched_chunks: list[str] = []
        self.skipped_dynamic = 0

    def set_chunk(self, module_name: str, chunk_name: str) -> None:
        """Record the defining chunk. Later chunks overwrite earlier ones."""
        self._chunks[module_name] = chunk_name

    def set_importers(self, module_name: str, importers: dict[str, ImporterRecord]) -> None:
        """Replace the importer set of a module."""
        self._adjacency[module_name] = importers

    def get_importers(self, module_name: str) -> dict[str, ImporterRecord]:
        """Get direct importers. Empty for unknown modules."""
        return self._adjacency.get(module_name, {})

    def chunk_of(self, module_name: str) -> str | None:
        return self._chunks.get(module_name)

    def __contains__(self, module_name: object) -> bool:
        return module_name in self._adjacency

    @property
    def adjacency(self) -> AdjacencyMap:
        return self._adjacency

    @property
    def chunks(self) -> ChunkMap:
        return self._chunks

    @property
    def num_modules(self) -> int:
        return len(self._chunks)

    @property
    def num_edges(self) -> int:
        return sum(len(importers) for importers in self._adjacency.values())

    def __repr__(self) -> str:
        return f"ModuleGraph(modules={self.num_modules}, edges={self.num_edges})"


def build_graph(artifact: StatsArtifact, options: BuildOptions | None = None) -> ModuleGraph:
    """Build the importer graph and chunk map. O(modules + reasons)."""
    options = options or BuildOptions()
    chunk_regex = options.chunk_regex()
    graph = ModuleGraph()

    for chunk in artifact.chunks:
        if not chunk.files or not chunk.modules:
            continue

        chunk_name = chunk.display_name
        for module in chunk.modules:
            if module.name:
                graph.set_chunk(module.name, chunk_name)

        if chunk_regex and not chunk_regex.search(chunk_name):
            logger.debug("Skipping chunk %s (regex: %s)", chunk_name, chunk_regex.pattern)
            continue
        if chunk_regex:
            graph.matched_chunks.append(chunk_name)

        for module in chunk.modules:
            if not module.name or not module.reasons:
                continue

            importers: dict[str, ImporterRecord] = {}
            for reason in module.reasons:
                if options.skip_async and reason.is_dynamic:
                    graph.skipped_dynamic += 1
                    continue
                if not reason.module_name:
                    continue
                importers[reason.module_name] = ImporterRecord(
                    name=reason.module_name,
                    user_request=reason.user_request,
                    chunk_name=chunk_name,
                )
            graph.set_importers(module.name, importers)

    return graph
