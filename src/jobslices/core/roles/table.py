"""Process-wide, read-only role synonym table."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping

import yaml

_STRIP_PATTERN = re.compile(r"[^a-z0-9+/.&# ]+")
_SPACE_PATTERN = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Lower-case, turn hyphens/underscores into spaces, drop other punctuation."""
    lowered = text.lower().replace("-", " ").replace("_", " ")
    lowered = _STRIP_PATTERN.sub(" ", lowered)
    return _SPACE_PATTERN.sub(" ", lowered).strip()


def tokenize(text: str) -> tuple[str, ...]:
    tokens = (token.strip(".") for token in normalize_text(text).split(" "))
    return tuple(token for token in tokens if token)


@dataclass(frozen=True, slots=True)
class RoleEntry:
    """One canonical role with its synonyms pre-tokenized."""

    slug: str
    category: str
    synonyms: tuple[str, ...]
    slug_tokens: tuple[str, ...]
    synonym_tokens: tuple[tuple[str, ...], ...]

    @property
    def label(self) -> str:
        return self.slug.replace("-", " ")

    def phrases(self) -> Iterator[tuple[str, ...]]:
        yield self.slug_tokens
        yield from self.synonym_tokens


class RoleSynonymTable:
    """Canonical role slug -> synonyms, organized by category.

    Built once and shared by reference; every exposed mapping is read-only.
    """

    def __init__(self, categories: Mapping[str, Mapping[str, Any]]):
        entries: dict[str, RoleEntry] = {}
        by_category: dict[str, tuple[str, ...]] = {}
        for category, roles in categories.items():
            if not isinstance(roles, Mapping):
                raise ValueError(f"Category {category!r} must map role slugs to synonym lists")
            slugs: list[str] = []
            for slug, synonyms in roles.items():
                if slug in entries:
                    raise ValueError(f"Role {slug!r} is defined in more than one category")
                if not isinstance(synonyms, list) or not all(isinstance(s, str) for s in synonyms):
                    raise ValueError(f"Synonyms for {slug!r} must be a list of strings")
                unique = tuple(dict.fromkeys(s.strip().lower() for s in synonyms if s.strip()))
                entries[slug] = RoleEntry(
                    slug=slug,
                    category=str(category),
                    synonyms=unique,
                    slug_tokens=tokenize(slug),
                    synonym_tokens=tuple(tokenize(s) for s in unique if tokenize(s)),
                )
                slugs.append(slug)
            by_category[str(category)] = tuple(slugs)
        self._entries = MappingProxyType(entries)
        self._categories = MappingProxyType(by_category)

    def __contains__(self, slug: object) -> bool:
        return slug in self._entries

    def __iter__(self) -> Iterator[RoleEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def categories(self) -> Mapping[str, tuple[str, ...]]:
        return self._categories

    def get(self, slug: str) -> RoleEntry | None:
        return self._entries.get(slug)

    def synonyms_for(self, slug: str) -> tuple[str, ...]:
        entry = self._entries.get(slug)
        return entry.synonyms if entry else ()

    def role_slugs(self) -> tuple[str, ...]:
        return tuple(self._entries)


def load_synonym_table(path: str | Path | None = None) -> RoleSynonymTable:
    """Load a synonym table from YAML; defaults to the packaged table."""
    if path is None:
        source = resources.files("jobslices") / "data" / "role_synonyms.yaml"
        raw = yaml.safe_load(source.read_text(encoding="utf-8"))
    else:
        with Path(path).open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle)
    if not isinstance(raw, dict):
        raise ValueError("Synonym table must be a mapping of categories")
    return RoleSynonymTable(raw)


@lru_cache(maxsize=1)
def default_synonym_table() -> RoleSynonymTable:
    return load_synonym_table()


__all__ = [
    "RoleEntry",
    "RoleSynonymTable",
    "default_synonym_table",
    "load_synonym_table",
    "normalize_text",
    "tokenize",
]
