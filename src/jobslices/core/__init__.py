"""Filter normalization and canonical slice resolution components."""

from __future__ import annotations

# NOTE: keep imports explicit for export clarity.
from .canonical import (
    CountryTable,
    SliceCanonicalizer,
    band_slug,
    canonical_path,
    seed_slice,
)
from .predicates import AllOf, AnyOf, Field, Not, OrderTerm, evaluate
from .query_parser import QueryFilterParser, parse_free_text
from .roles import RoleMatch, RoleSynonymMatcher, fuzzy_match_roles, match_roles
from .salary_text import SalaryParseResult, SalaryTextParser, parse_salary_text
from .slices import ResolvedSlice, SliceResolver, redirect_target, resolve_slice
from .where import WhereBuilder

__all__ = [
    "AllOf",
    "AnyOf",
    "CountryTable",
    "Field",
    "Not",
    "OrderTerm",
    "QueryFilterParser",
    "ResolvedSlice",
    "RoleMatch",
    "RoleSynonymMatcher",
    "SalaryParseResult",
    "SalaryTextParser",
    "SliceCanonicalizer",
    "SliceResolver",
    "WhereBuilder",
    "band_slug",
    "canonical_path",
    "evaluate",
    "fuzzy_match_roles",
    "match_roles",
    "parse_free_text",
    "parse_salary_text",
    "redirect_target",
    "resolve_slice",
    "seed_slice",
]
