"""Canonical role vocabulary and matching."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .matcher import (
    DEFAULT_FUZZY_THRESHOLD,
    RoleSynonymMatcher,
    fuzzy_match_roles,
    match_roles,
)
from .strategies import ContainmentStrategy, EditDistanceStrategy, RoleMatch
from .table import (
    RoleEntry,
    RoleSynonymTable,
    default_synonym_table,
    load_synonym_table,
    normalize_text,
)


@runtime_checkable
class ExactStrategy(Protocol):
    """Unranked matching contract."""

    def match(self, query: str, table: RoleSynonymTable) -> frozenset[str]:
        """Return every role slug matching the query."""


@runtime_checkable
class RankedStrategy(Protocol):
    """Ranked matching contract."""

    def rank(self, query: str, table: RoleSynonymTable, threshold: int) -> list[RoleMatch]:
        """Return matches within ``threshold``, best first."""


__all__ = [
    "ContainmentStrategy",
    "DEFAULT_FUZZY_THRESHOLD",
    "EditDistanceStrategy",
    "ExactStrategy",
    "RankedStrategy",
    "RoleEntry",
    "RoleMatch",
    "RoleSynonymMatcher",
    "RoleSynonymTable",
    "default_synonym_table",
    "fuzzy_match_roles",
    "load_synonym_table",
    "match_roles",
    "normalize_text",
]
