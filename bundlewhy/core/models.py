"""Data models for bundler stats artifacts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Marker for bundle output files and lazy import() reasons.
_BUNDLE_FILE_MARKER = ".js"
_DYNAMIC_IMPORT_MARKER = "import()"


@dataclass
class Reason:
    """Why a module was included: the importing module and the request used."""

    module_name: str | None
    user_request: str | None = None
    type: str | None = None

    @property
    def is_dynamic(self) -> bool:
        return bool(self.type) and _DYNAMIC_IMPORT_MARKER in self.type

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Reason:
        """Create a Reason from a stats JSON object."""
        return cls(
            module_name=data.get("moduleName"),
            user_request=data.get("userRequest"),
            type=data.get("type"),
        )


@dataclass
class Module:
    """A compiled module and the reasons it was included."""

    name: str | None
    reasons: list[Reason] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Module:
        """Create a Module from a stats JSON object."""
        return cls(
            name=data.get("name"),
            reasons=[Reason.from_dict(r) for r in data.get("reasons") or []],
        )


@dataclass
class Chunk:
    """A bundler output unit."""

    id: str | int | None
    files: list[str] = field(default_factory=list)
    modules: list[Module] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        """First bundle file name, falling back to the chunk id."""
        for file in self.files:
            if _BUNDLE_FILE_MARKER in file:
                return file
        return str(self.id)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Chunk:
        """Create a Chunk from a stats JSON object."""
        return cls(
            id=data.get("id"),
            files=list(data.get("files") or []),
            modules=[Module.from_dict(m) for m in data.get("modules") or []],
        )


@dataclass
class StatsArtifact:
    """A parsed stats document. Only the chunk list is used."""

    chunks: list[Chunk] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> StatsArtifact:
        """Create an artifact from parsed JSON.

        A document without ``chunks`` yields an empty artifact.
        """
        if not data:
            return cls()
        return cls(chunks=[Chunk.from_dict(c) for c in data.get("chunks") or []])

    @property
    def num_modules(self) -> int:
        return sum(len(c.modules) for c in self.chunks)
