"""Matching strategies used by the role matcher."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from rapidfuzz.distance import Levenshtein

from .table import RoleEntry, RoleSynonymTable, normalize_text, tokenize


@dataclass(frozen=True, slots=True)
class RoleMatch:
    """Fuzzy match result; lower distance is better."""

    role_slug: str
    distance: int


@dataclass(frozen=True, slots=True)
class _Span:
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start

    def strictly_inside(self, other: "_Span") -> bool:
        return other.start <= self.start and self.end <= other.end and len(other) > len(self)


class ContainmentStrategy:
    """Unranked containment matching on whole-token boundaries.

    A role matches when its slug or a synonym occurs in the query, or the query
    occurs in it. A role whose hits all sit strictly inside a longer hit of
    another role is dropped, so ``"ml engineer"`` does not also yield the
    generic ``"engineer"`` role.
    """

    name = "containment"

    def match(self, query: str, table: RoleSynonymTable) -> frozenset[str]:
        query_tokens = tokenize(query)
        if not query_tokens:
            return frozenset()

        forward: dict[str, list[_Span]] = {}
        reverse: set[str] = set()
        for entry in table:
            spans = list(self._forward_spans(query_tokens, entry))
            if spans:
                forward[entry.slug] = spans
            if any(_find(phrase, query_tokens) is not None for phrase in entry.phrases()):
                reverse.add(entry.slug)

        matched = set(reverse)
        for slug, spans in forward.items():
            if slug in reverse or not self._shadowed(slug, spans, forward):
                matched.add(slug)
        return frozenset(matched)

    @staticmethod
    def _forward_spans(query_tokens: Sequence[str], entry: RoleEntry) -> Iterable[_Span]:
        for phrase in entry.phrases():
            start = _find(query_tokens, phrase)
            if start is not None:
                yield _Span(start, start + len(phrase))

    @staticmethod
    def _shadowed(slug: str, spans: list[_Span], forward: dict[str, list[_Span]]) -> bool:
        others = [span for other, found in forward.items() if other != slug for span in found]
        return all(any(span.strictly_inside(other) for other in others) for span in spans)


class EditDistanceStrategy:
    """Ranked Levenshtein matching against slug labels and synonyms."""

    name = "edit_distance"

    def rank(self, query: str, table: RoleSynonymTable, threshold: int) -> list[RoleMatch]:
        normalized = normalize_text(query)
        if not normalized or threshold < 0:
            return []
        matches: list[RoleMatch] = []
        for entry in table:
            best = min(
                Levenshtein.distance(normalized, candidate)
                for candidate in self._candidates(entry)
            )
            if best <= threshold:
                matches.append(RoleMatch(entry.slug, best))
        matches.sort(key=lambda item: (item.distance, item.role_slug))
        return matches

    @staticmethod
    def _candidates(entry: RoleEntry) -> Iterable[str]:
        yield " ".join(entry.slug_tokens)
        for tokens in entry.synonym_tokens:
            yield " ".join(tokens)


def _find(haystack: Sequence[str], needle: Sequence[str]) -> int | None:
    """Index where ``needle`` occurs contiguously in ``haystack``."""
    size = len(needle)
    if size == 0 or size > len(haystack):
        return None
    for index in range(len(haystack) - size + 1):
        if tuple(haystack[index : index + size]) == tuple(needle):
            return index
    return None


__all__ = ["ContainmentStrategy", "EditDistanceStrategy", "RoleMatch"]
