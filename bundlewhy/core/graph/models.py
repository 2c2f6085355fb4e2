"""Data models for graph operations."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class ImporterRecord:
    """One importer of a module, as recorded by a stats reason."""

    name: str
    user_request: str | None
    chunk_name: str


@dataclass(frozen=True)
class Leaf:
    """Terminal tree entry: the chunk that defines the module."""

    chunk_name: str


@dataclass
class Branch:
    """A tree level mapping importer names to sub-trees or leaves."""

    children: dict[str, TreeNode] = field(default_factory=dict)

    @property
    def depth(self) -> int:
        """Number of levels below this branch."""
        return max(
            (1 + (c.depth if isinstance(c, Branch) else 0) for c in self.children.values()),
            default=0,
        )

    def paths(self) -> Iterator[list[str]]:
        """Yield every root-to-leaf path of module names."""
        for name, child in self.children.items():
            if isinstance(child, Branch) and child.children:
                for rest in child.paths():
                    yield [name, *rest]
            else:
                yield [name]

    def to_dict(self) -> dict[str, object]:
        """Nested ``{name: {...} | chunk_name}`` mapping."""
        return {
            name: child.to_dict() if isinstance(child, Branch) else child.chunk_name
            for name, child in self.children.items()
        }

    def __len__(self) -> int:
        """Total entries in the tree."""
        return sum(
            1 + (len(c) if isinstance(c, Branch) else 0) for c in self.children.values()
        )

    def __bool__(self) -> bool:
        return bool(self.children)


TreeNode = Union[Leaf, Branch]


@dataclass
class Chain:
    """Modules linked by importer relationships, from source to target."""

    modules: list[str]

    def __len__(self) -> int:
        return len(self.modules)

    def __iter__(self) -> Iterator[str]:
        return iter(self.modules)

    def __repr__(self) -> str:
        names = " <- ".join(self.modules)
        return f"Chain({names})"
