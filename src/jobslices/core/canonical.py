"""Forward canonicalization: one path per filter combination.

Segment order is fixed: band, optional ``remote``, optional role, optional
country slug, optional city. Two filters that differ only in how they were
assembled always produce the same path.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from ..schemas import CanonicalSlice, StructuredFilter

# highest floor first
SALARY_BANDS: tuple[tuple[int, str], ...] = (
    (400_000, "400k-plus"),
    (300_000, "300k-plus"),
    (200_000, "200k-plus"),
    (100_000, "100k-plus"),
)
BASELINE_BAND = "100k-plus"
BAND_FLOORS: Mapping[str, int] = MappingProxyType({slug: floor for floor, slug in SALARY_BANDS})

_COUNTRY_SLUGS = {
    "US": ("united-states", "United States"),
    "CA": ("canada", "Canada"),
    "GB": ("united-kingdom", "United Kingdom"),
    "DE": ("germany", "Germany"),
    "CH": ("switzerland", "Switzerland"),
    "FR": ("france", "France"),
    "IE": ("ireland", "Ireland"),
    "ES": ("spain", "Spain"),
    "IT": ("italy", "Italy"),
    "NL": ("netherlands", "Netherlands"),
    "SE": ("sweden", "Sweden"),
    "NO": ("norway", "Norway"),
    "DK": ("denmark", "Denmark"),
    "FI": ("finland", "Finland"),
    "AU": ("australia", "Australia"),
    "NZ": ("new-zealand", "New Zealand"),
}


class CountryTable:
    """ISO country code <-> URL slug translation."""

    def __init__(self, entries: Mapping[str, tuple[str, str]] | None = None):
        source = entries if entries is not None else _COUNTRY_SLUGS
        self._code_to_slug = MappingProxyType({code.upper(): slug for code, (slug, _) in source.items()})
        self._code_to_name = MappingProxyType({code.upper(): name for code, (_, name) in source.items()})
        self._slug_to_code = MappingProxyType({slug: code for code, slug in self._code_to_slug.items()})

    def code_to_slug(self, code: str | None) -> str | None:
        if not code:
            return None
        return self._code_to_slug.get(code.upper())

    def slug_to_code(self, slug: str | None) -> str | None:
        if not slug:
            return None
        return self._slug_to_code.get(slug.lower())

    def name_for(self, code: str | None) -> str:
        if not code:
            return ""
        return self._code_to_name.get(code.upper(), code.upper())

    def is_known_slug(self, slug: str | None) -> bool:
        return bool(slug) and slug.lower() in self._slug_to_code


DEFAULT_COUNTRIES = CountryTable()


def band_slug(min_annual: int | None) -> str:
    """Highest band the floor reaches after rounding to the nearest thousand."""
    if not min_annual:
        return BASELINE_BAND
    rounded = (min_annual + 500) // 1000 * 1000
    for floor, slug in SALARY_BANDS:
        if rounded >= floor:
            return slug
    return BASELINE_BAND


class SliceCanonicalizer:
    """Build canonical paths and seed slices from filters."""

    def __init__(self, countries: CountryTable | None = None) -> None:
        self._countries = countries or DEFAULT_COUNTRIES

    @property
    def countries(self) -> CountryTable:
        return self._countries

    def canonical_path(self, filters: StructuredFilter) -> str:
        parts = ["jobs", band_slug(filters.min_annual)]
        if filters.remote_only:
            parts.append("remote")
        if filters.role_slugs:
            parts.append(min(filters.role_slugs))
        if filters.country_code:
            parts.append(self.country_segment(filters.country_code))
        if filters.city_slug:
            parts.append(filters.city_slug.lower())
        return "/" + "/".join(parts)

    def country_segment(self, code: str) -> str:
        return self._countries.code_to_slug(code) or code.lower()

    def seed_slice(
        self,
        filters: StructuredFilter,
        job_count: int = 0,
        type: str | None = None,
    ) -> CanonicalSlice:
        return CanonicalSlice(
            slug=self.canonical_path(filters).lstrip("/"),
            filters=filters,
            job_count=job_count,
            type=type,
        )


_DEFAULT_CANONICALIZER = SliceCanonicalizer()


def canonical_path(filters: StructuredFilter) -> str:
    return _DEFAULT_CANONICALIZER.canonical_path(filters)


def seed_slice(
    filters: StructuredFilter,
    job_count: int = 0,
    type: str | None = None,
) -> CanonicalSlice:
    return _DEFAULT_CANONICALIZER.seed_slice(filters, job_count=job_count, type=type)


__all__ = [
    "BAND_FLOORS",
    "BASELINE_BAND",
    "CountryTable",
    "DEFAULT_COUNTRIES",
    "SALARY_BANDS",
    "SliceCanonicalizer",
    "band_slug",
    "canonical_path",
    "seed_slice",
]
