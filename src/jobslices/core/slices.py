"""Reverse canonicalization: URL segments back to a stored slice.

The slice table accreted rows under several historical slug conventions, so
resolution does not invert :func:`canonical_path` directly. Instead an ordered
list of candidate strategies proposes slugs, one ``find_first`` lookup runs
against the store, and the row matching the earliest candidate wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterable, Sequence

import structlog

from ..errors import SliceNotFoundError
from ..schemas import StructuredFilter
from .canonical import BAND_FLOORS, BASELINE_BAND, SliceCanonicalizer
from .roles import RoleSynonymMatcher

if TYPE_CHECKING:
    from ..adapters import SliceStore

_JOBS_SUFFIX = "-jobs"


@dataclass(frozen=True, slots=True)
class SlugParts:
    """Loose interpretation of the requested segments."""

    segments: tuple[str, ...]
    band: str | None = None
    remote: bool = False
    role: str | None = None
    country: str | None = None
    city: str | None = None


@dataclass(frozen=True, slots=True)
class ResolvedSlice:
    filter: StructuredFilter
    slug: str
    canonical_path: str


@dataclass(frozen=True, slots=True)
class _Context:
    parts: SlugParts
    band: str
    roles: tuple[str, ...]
    countries: tuple[str, ...]


CandidateStrategy = Callable[[_Context], Iterable[str]]


def normalize_segments(segments: Sequence[str] | str) -> tuple[str, ...]:
    """Lower-case, split on slashes, drop empties and a leading ``jobs``."""
    if isinstance(segments, str):
        segments = [segments]
    pieces = [
        piece.strip().lower()
        for segment in segments
        for piece in str(segment).split("/")
        if piece.strip()
    ]
    if pieces and pieces[0] == "jobs":
        pieces = pieces[1:]
    return tuple(pieces)


def _split_band_tail(segment: str) -> tuple[str, str | None] | None:
    """``100k-plus``, ``100k-plus-jobs`` or ``100k-plus-<role>-jobs``."""
    core = segment[: -len(_JOBS_SUFFIX)] if segment.endswith(_JOBS_SUFFIX) else segment
    for band in BAND_FLOORS:
        if core == band:
            return band, None
        if core.startswith(band + "-"):
            return band, core[len(band) + 1 :] or None
    return None


def parse_slug_parts(
    segments: Sequence[str],
    *,
    is_country: Callable[[str], bool],
    is_role: Callable[[str], bool],
) -> SlugParts:
    band: str | None = None
    remote = False
    role: str | None = None
    country: str | None = None
    city: str | None = None

    for segment in segments:
        if segment == "remote":
            remote = True
            continue
        band_tail = _split_band_tail(segment)
        if band_tail is not None and band is None:
            band, tail_role = band_tail
            if tail_role and role is None:
                role = tail_role
            continue
        if country is None and is_country(segment):
            country = segment
            continue
        if country is not None:
            if city is None and not (role is None and is_role(segment)):
                city = segment
                continue
        if role is None:
            role = segment

    return SlugParts(
        segments=tuple(segments),
        band=band,
        remote=remote,
        role=role,
        country=country,
        city=city,
    )


def _join(*parts: str | None) -> str:
    return "/".join(["jobs", *(part for part in parts if part)])


def _literal(ctx: _Context) -> Iterable[str]:
    yield _join(*ctx.parts.segments)


def _band_first(ctx: _Context) -> Iterable[str]:
    remote = "remote" if ctx.parts.remote else None
    for role in ctx.roles or (None,):
        for country in ctx.countries or (None,):
            yield _join(ctx.band, remote, role, country, ctx.parts.city)


def _role_first(ctx: _Context) -> Iterable[str]:
    if ctx.parts.city or ctx.parts.remote:
        return
    for role in ctx.roles:
        for country in ctx.countries or (None,):
            yield _join(role, country, ctx.band)


def _country_first(ctx: _Context) -> Iterable[str]:
    if ctx.parts.city or ctx.parts.remote:
        return
    for country in ctx.countries:
        yield _join(country, ctx.band)
        for role in ctx.roles:
            yield _join(country, f"{ctx.band}-{role}{_JOBS_SUFFIX}")


def _nested_city(ctx: _Context) -> Iterable[str]:
    city = ctx.parts.city
    if not city or ctx.parts.remote:
        return
    for country in ctx.countries:
        if ctx.roles:
            for role in ctx.roles:
                yield _join(role, country, city, ctx.band)
                yield _join(ctx.band, role, country, city)
                yield _join(country, city, f"{ctx.band}-{role}{_JOBS_SUFFIX}")
        else:
            yield _join(country, city, ctx.band)
            yield _join(ctx.band, country, city)
            yield _join(country, city, f"{ctx.band}{_JOBS_SUFFIX}")


def _remote_prefixed(ctx: _Context) -> Iterable[str]:
    if not ctx.parts.remote or ctx.countries or ctx.parts.city:
        return
    if ctx.roles:
        for role in ctx.roles:
            yield _join(role, "remote", ctx.band)
            yield _join("remote", role, ctx.band)
            yield _join("remote", ctx.band, role)
            yield _join("remote", f"{ctx.band}-{role}{_JOBS_SUFFIX}")
    else:
        yield _join("remote", ctx.band)
        yield _join(ctx.band, "remote")
        yield _join("remote", f"{ctx.band}{_JOBS_SUFFIX}")


DEFAULT_STRATEGIES: tuple[tuple[str, CandidateStrategy], ...] = (
    ("literal", _literal),
    ("band_first", _band_first),
    ("role_first", _role_first),
    ("country_first", _country_first),
    ("nested_city", _nested_city),
    ("remote_prefixed", _remote_prefixed),
)


class SliceResolver:
    """Resolve requested URL segments to a stored canonical slice."""

    def __init__(
        self,
        store: SliceStore,
        *,
        canonicalizer: SliceCanonicalizer | None = None,
        matcher: RoleSynonymMatcher | None = None,
        strategies: Sequence[tuple[str, CandidateStrategy]] | None = None,
    ) -> None:
        self._store = store
        self._canonicalizer = canonicalizer or SliceCanonicalizer()
        self._matcher = matcher or RoleSynonymMatcher()
        self._strategies = tuple(strategies or DEFAULT_STRATEGIES)
        self._logger = structlog.get_logger(__name__)

    def parse(self, segments: Sequence[str] | str) -> SlugParts:
        countries = self._canonicalizer.countries
        return parse_slug_parts(
            normalize_segments(segments),
            is_country=lambda seg: countries.is_known_slug(seg)
            or (len(seg) == 2 and seg.isalpha()),
            is_role=lambda seg: seg in self._matcher.table,
        )

    def candidates(self, segments: Sequence[str] | str) -> list[str]:
        """Ordered, de-duplicated slug candidates for the requested segments."""
        parts = self.parse(segments)
        if not parts.segments:
            return []
        ctx = _Context(
            parts=parts,
            band=parts.band or BASELINE_BAND,
            roles=self._role_variants(parts.role),
            countries=self._country_variants(parts.country),
        )
        ordered: dict[str, None] = {}
        for _, strategy in self._strategies:
            for candidate in strategy(ctx):
                ordered.setdefault(candidate, None)
        return list(ordered)

    async def resolve(self, segments: Sequence[str] | str) -> ResolvedSlice:
        normalized = normalize_segments(segments)
        candidates = self.candidates(normalized)
        row = await self._store.find_first(candidates) if candidates else None
        if row is None:
            self._logger.warning(
                "slice.not_found",
                segments=list(normalized),
                candidates=candidates,
            )
            raise SliceNotFoundError(normalized, candidates)

        path = self._canonicalizer.canonical_path(row.filters)
        self._logger.debug("slice.resolved", slug=row.slug, canonical_path=path)
        return ResolvedSlice(filter=row.filters, slug=row.slug, canonical_path=path)

    def _role_variants(self, role: str | None) -> tuple[str, ...]:
        if not role:
            return ()
        recovered = self._matcher.best_role_for_slug(role)
        return tuple(dict.fromkeys(item for item in (role, recovered) if item))

    def _country_variants(self, country: str | None) -> tuple[str, ...]:
        if not country:
            return ()
        table = self._canonicalizer.countries
        code = table.slug_to_code(country) or country.upper()
        slug = table.code_to_slug(code)
        return tuple(dict.fromkeys(item for item in (slug, code.lower(), country) if item))


def redirect_target(requested_segments: Sequence[str] | str, resolved: ResolvedSlice) -> str | None:
    """Canonical path to redirect to, or ``None`` when the request already is canonical."""
    requested = "/" + _join(*normalize_segments(requested_segments))
    if requested == resolved.canonical_path:
        return None
    return resolved.canonical_path


async def resolve_slice(url_segments: Sequence[str] | str, store: SliceStore) -> ResolvedSlice:
    return await SliceResolver(store).resolve(url_segments)


__all__ = [
    "DEFAULT_STRATEGIES",
    "ResolvedSlice",
    "SliceResolver",
    "SlugParts",
    "normalize_segments",
    "parse_slug_parts",
    "redirect_target",
    "resolve_slice",
]
