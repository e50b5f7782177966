"""Free-text search box parsing into a partial StructuredFilter."""

from __future__ import annotations

import re
from typing import Any

import structlog

from ..schemas import StructuredFilter
from .roles import RoleSynonymMatcher

SALARY_FLOOR_MINIMUM = 100_000

COUNTRY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("us", ("us", "usa", "united states", "america")),
    ("gb", ("uk", "gb", "united kingdom", "britain", "england")),
    ("ca", ("canada", "ca")),
    ("de", ("germany", "de", "berlin")),
    ("ie", ("ireland", "ie")),
    ("ch", ("switzerland", "ch")),
    ("sg", ("singapore", "sg")),
    ("au", ("australia", "au")),
    ("nz", ("new zealand", "nz")),
)

SENIORITY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("entry", ("entry", "junior", "jr", "associate")),
    ("mid", ("mid", "midlevel", "mid-level")),
    ("senior", ("senior", "sr")),
    ("lead", ("lead", "staff", "principal", "staff+")),
    ("executive", ("director", "vp", "c-suite", "cto", "chief", "head of")),
)

_SALARY_PATTERN = re.compile(r"\$?\s*(\d{2,3})\s*k")
_ONSITE = re.compile(r"\bon[-\s]?site\b")
_HYBRID = re.compile(r"\bhybrid\b")
_REMOTE = re.compile(r"\bremote\b|\banywhere\b")
_CONTRACT = re.compile(r"\bcontract\b|\bfreelance\b")

# tested in order; a later match overwrites an earlier one
REGION_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("apac", re.compile(r"\bapac\b")),
    ("emea", re.compile(r"\bemea\b")),
    ("us-only", re.compile(r"\b(?:us only|us-only)\b")),
    ("global", re.compile(r"\bglobal\b|\banywhere\b")),
)


def _keyword_pattern(keyword: str) -> re.Pattern[str]:
    return re.compile(rf"(?<![a-z0-9]){re.escape(keyword)}(?![a-z0-9])")


def _compile_table(
    table: tuple[tuple[str, tuple[str, ...]], ...]
) -> tuple[tuple[str, tuple[re.Pattern[str], ...]], ...]:
    return tuple((key, tuple(_keyword_pattern(kw) for kw in keywords)) for key, keywords in table)


_COUNTRY_PATTERNS = _compile_table(COUNTRY_KEYWORDS)
_SENIORITY_PATTERNS = _compile_table(SENIORITY_KEYWORDS)


class QueryFilterParser:
    """Extract salary, arrangement, region, country, role, seniority and contract hints."""

    def __init__(self, matcher: RoleSynonymMatcher | None = None) -> None:
        self._matcher = matcher or RoleSynonymMatcher()
        self._logger = structlog.get_logger(__name__)

    def parse(self, text: str) -> StructuredFilter:
        if not text or not text.strip():
            return StructuredFilter()

        lowered = text.lower()
        fields: dict[str, Any] = {}

        floor = self._salary_floor(lowered)
        if floor is not None:
            fields["min_annual"] = floor

        if _ONSITE.search(lowered):
            fields["remote_mode"] = "onsite"
        elif _HYBRID.search(lowered):
            fields["remote_mode"] = "hybrid"
        elif _REMOTE.search(lowered):
            fields["remote_only"] = True
            fields["remote_mode"] = "remote"

        for region, pattern in REGION_PATTERNS:
            if pattern.search(lowered):
                fields["remote_region"] = region

        country = _first_key(_COUNTRY_PATTERNS, lowered)
        if country:
            fields["country_code"] = country.upper()

        roles = self._matcher.match_roles(lowered)
        if roles:
            fields["role_slugs"] = roles

        seniority = _first_key(_SENIORITY_PATTERNS, lowered)
        if seniority:
            fields["seniority"] = seniority

        if _CONTRACT.search(lowered):
            fields["employment_types"] = frozenset({"contract"})

        parsed = StructuredFilter(**fields)
        self._logger.debug("query.parsed", text=text, filters=parsed.to_json_dict())
        return parsed

    @staticmethod
    def _salary_floor(text: str) -> int | None:
        amounts = [int(match.group(1)) * 1000 for match in _SALARY_PATTERN.finditer(text)]
        if not amounts:
            return None
        highest = max(amounts)
        return highest if highest >= SALARY_FLOOR_MINIMUM else None


def _first_key(
    table: tuple[tuple[str, tuple[re.Pattern[str], ...]], ...], text: str
) -> str | None:
    for key, patterns in table:
        if any(pattern.search(text) for pattern in patterns):
            return key
    return None


_DEFAULT_PARSER: QueryFilterParser | None = None


def parse_free_text(text: str) -> StructuredFilter:
    """Parse with a process-wide parser over the packaged synonym table."""
    global _DEFAULT_PARSER
    if _DEFAULT_PARSER is None:
        _DEFAULT_PARSER = QueryFilterParser()
    return _DEFAULT_PARSER.parse(text)


__all__ = [
    "COUNTRY_KEYWORDS",
    "QueryFilterParser",
    "REGION_PATTERNS",
    "SENIORITY_KEYWORDS",
    "parse_free_text",
]
