"""Resolve partial module names to known module names."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from bundlewhy.core.exceptions import AmbiguousModuleError, UnknownModuleError


class MatchMode(Enum):
    """How a query selects a module name."""

    FIRST = "first"
    EXACT = "exact"
    UNIQUE = "unique"


def find_modules(query: str, names: Iterable[str]) -> list[str]:
    """All names containing ``query``, in iteration order."""
    return [name for name in names if query in name]


def find_module(query: str, names: Iterable[str], mode: MatchMode = MatchMode.FIRST) -> str:
    """Resolve ``query`` to a single module name.

    ``FIRST`` picks the first name in insertion order that contains the
    query, which is not necessarily the shortest or an exact match.

    Raises:
        UnknownModuleError: Nothing matches.
        AmbiguousModuleError: ``UNIQUE`` mode and several names match.
    """
    names = list(names)

    if mode is MatchMode.EXACT:
        if query in names:
            return query
        raise UnknownModuleError(query, len(names))

    matches = find_modules(query, names)
    if not matches:
        raise UnknownModuleError(query, len(names))
    if mode is MatchMode.UNIQUE and len(matches) > 1:
        raise AmbiguousModuleError(query, matches)
    return matches[0]
