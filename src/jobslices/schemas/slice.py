from __future__ import annotations

import json
import math
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .filters import StructuredFilter

_logger = structlog.get_logger(__name__)

# stored key -> StructuredFilter field; legacy single-value keys first so the plural wins
_STRING_SET_KEYS = (
    ("roleSlug", "role_slugs"),
    ("roleSlugs", "role_slugs"),
    ("skillSlug", "skill_slugs"),
    ("skillSlugs", "skill_slugs"),
    ("employmentTypes", "employment_types"),
)
_NUMBER_KEYS = (
    ("minAnnual", "min_annual"),
    ("maxAnnual", "max_annual"),
    ("maxJobAgeDays", "max_job_age_days"),
)
_STRING_KEYS = (
    ("countryCode", "country_code"),
    ("citySlug", "city_slug"),
    ("remoteRegion", "remote_region"),
    ("companySlug", "company_slug"),
    ("seniority", "seniority"),
    ("experienceLevel", "experience_level"),
    ("industry", "industry"),
)
_BOOL_KEYS = (
    ("remoteOnly", "remote_only"),
    ("isHundredKLocal", "hundred_k_local"),
    ("hundredKLocal", "hundred_k_local"),
    ("excludeInternships", "exclude_internships"),
)


class CanonicalSlice(BaseModel):
    """Precomputed (slug, filter, cached count) row."""

    slug: str
    filters: StructuredFilter = Field(default_factory=StructuredFilter)
    job_count: int = 0
    type: str | None = None

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("slug", mode="after")
    @classmethod
    def _strip_slashes(cls, value: str) -> str:
        return value.strip().strip("/")

    @field_validator("filters", mode="before")
    @classmethod
    def _coerce_filters(cls, value: Any) -> Any:
        if isinstance(value, StructuredFilter):
            return value
        return parse_slice_filters(value)

    @property
    def path(self) -> str:
        return "/" + self.slug


def parse_slice_filters(raw: Any) -> StructuredFilter:
    """Read stored filter JSON leniently.

    Stored rows predate the current schema: they may use a single ``roleSlug``,
    carry non-finite numbers, or hold garbage. Anything unusable is dropped
    rather than failing the page.
    """
    if raw is None or raw == "":
        return StructuredFilter()
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            _logger.warning("slice.invalid_filters_json", error=str(exc))
            return StructuredFilter()
    if not isinstance(raw, dict):
        return StructuredFilter()

    fields: dict[str, Any] = {}
    for key, name in _STRING_SET_KEYS:
        value = _as_string_list(raw.get(key, raw.get(name)))
        if value:
            fields[name] = value
    for key, name in _NUMBER_KEYS:
        value = raw.get(key, raw.get(name))
        if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
            if float(value).is_integer() and value >= 0:
                fields[name] = int(value)
    for key, name in _STRING_KEYS:
        value = raw.get(key, raw.get(name))
        if isinstance(value, str) and value.strip():
            fields[name] = value.strip()
    for key, name in _BOOL_KEYS:
        value = raw.get(key, raw.get(name))
        if isinstance(value, bool):
            fields[name] = value

    remote_mode = raw.get("remoteMode", raw.get("remote_mode"))
    if remote_mode in ("remote", "hybrid", "onsite"):
        fields["remote_mode"] = remote_mode
    sort_by = raw.get("sortBy", raw.get("sort_by"))
    if sort_by in ("salary", "date"):
        fields["sort_by"] = sort_by
    if fields.get("max_job_age_days") == 0:
        fields.pop("max_job_age_days")

    return StructuredFilter(**fields)


def _as_string_list(value: Any) -> list[str] | None:
    if not value:
        return None
    if isinstance(value, str):
        return [value.strip()] if value.strip() else None
    if isinstance(value, list):
        out = [item.strip() for item in value if isinstance(item, str) and item.strip()]
        return out or None
    return None
