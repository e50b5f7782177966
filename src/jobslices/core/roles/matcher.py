"""Role synonym matching."""

from __future__ import annotations

from typing import Any

import structlog

from .strategies import ContainmentStrategy, EditDistanceStrategy, RoleMatch
from .table import RoleSynonymTable, default_synonym_table, normalize_text

DEFAULT_FUZZY_THRESHOLD = 2


class RoleSynonymMatcher:
    """Map free text to canonical role slugs.

    ``match_roles`` is the unranked containment entry point used by the query
    parser; ``fuzzy_match_roles`` is the only ranked one.
    """

    def __init__(
        self,
        table: RoleSynonymTable | None = None,
        *,
        exact: Any | None = None,
        fuzzy: Any | None = None,
        fuzzy_threshold: int = DEFAULT_FUZZY_THRESHOLD,
    ) -> None:
        self._table = table or default_synonym_table()
        self._exact = exact or ContainmentStrategy()
        self._fuzzy = fuzzy or EditDistanceStrategy()
        self._fuzzy_threshold = fuzzy_threshold
        self._logger = structlog.get_logger(__name__)

    @property
    def table(self) -> RoleSynonymTable:
        return self._table

    @property
    def fuzzy_threshold(self) -> int:
        return self._fuzzy_threshold

    def match_roles(self, text: str) -> frozenset[str]:
        if not text or not text.strip():
            return frozenset()
        return self._exact.match(text, self._table)

    def fuzzy_match_roles(self, text: str, threshold: int | None = None) -> list[RoleMatch]:
        if not text or not text.strip():
            return []
        limit = self._fuzzy_threshold if threshold is None else threshold
        return self._fuzzy.rank(text, self._table, limit)

    def best_role_for_slug(self, slug: str) -> str | None:
        """Recover a canonical role from a possibly legacy or misspelt URL segment."""
        candidate = slug.strip().lower()
        if not candidate:
            return None
        if candidate in self._table:
            return candidate

        normalized = normalize_text(candidate)
        for entry in self._table:
            if any(normalize_text(synonym) == normalized for synonym in entry.synonyms):
                return entry.slug

        ranked = self.fuzzy_match_roles(normalized)
        if ranked:
            self._logger.debug(
                "roles.fuzzy_recovered",
                segment=slug,
                role_slug=ranked[0].role_slug,
                distance=ranked[0].distance,
            )
            return ranked[0].role_slug
        return None


_DEFAULT_MATCHER: RoleSynonymMatcher | None = None


def _default_matcher() -> RoleSynonymMatcher:
    global _DEFAULT_MATCHER
    if _DEFAULT_MATCHER is None:
        _DEFAULT_MATCHER = RoleSynonymMatcher()
    return _DEFAULT_MATCHER


def match_roles(text: str) -> frozenset[str]:
    return _default_matcher().match_roles(text)


def fuzzy_match_roles(text: str, threshold: int = DEFAULT_FUZZY_THRESHOLD) -> list[RoleMatch]:
    return _default_matcher().fuzzy_match_roles(text, threshold)


__all__ = [
    "DEFAULT_FUZZY_THRESHOLD",
    "RoleMatch",
    "RoleSynonymMatcher",
    "fuzzy_match_roles",
    "match_roles",
]
