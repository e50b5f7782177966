"""Structured, immutable filter shared by every entry point."""

from __future__ import annotations

import math
from typing import Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from ..errors import FilterValidationError

RemoteMode = Literal["remote", "hybrid", "onsite"]
SortBy = Literal["salary", "date"]


class StructuredFilter(BaseModel):
    """Filter over job records; ``None`` always means unconstrained."""

    role_slugs: frozenset[str] | None = None
    skill_slugs: frozenset[str] | None = None
    min_annual: int | None = Field(default=None, ge=0)
    max_annual: int | None = Field(default=None, ge=0)
    country_code: str | None = None
    city_slug: str | None = None
    remote_only: bool | None = None
    remote_mode: RemoteMode | None = None
    remote_region: str | None = None
    seniority: str | None = None
    employment_types: frozenset[str] | None = None
    company_slug: str | None = None
    hundred_k_local: bool | None = None
    experience_level: str | None = None
    industry: str | None = None
    max_job_age_days: int | None = Field(default=None, gt=0)
    sort_by: SortBy | None = None
    exclude_internships: bool | None = None

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_validator("role_slugs", "skill_slugs", "employment_types", mode="before")
    @classmethod
    def _normalize_sets(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple, set, frozenset)):
            return value
        cleaned = {item.strip() for item in value if isinstance(item, str) and item.strip()}
        return frozenset(cleaned) or None

    @field_validator("min_annual", "max_annual", "max_job_age_days", mode="before")
    @classmethod
    def _reject_non_integral(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, bool):
            raise ValueError("boolean is not a valid amount")
        if isinstance(value, float):
            if math.isnan(value) or math.isinf(value):
                raise ValueError("amount must be a finite number")
            if not value.is_integer():
                raise ValueError("amount must be integral")
            return int(value)
        return value

    @field_validator("country_code", mode="after")
    @classmethod
    def _upper_country(cls, value: str | None) -> str | None:
        return value.strip().upper() or None if value else None

    @field_validator("city_slug", "company_slug", mode="after")
    @classmethod
    def _lower_slug(cls, value: str | None) -> str | None:
        return value.strip().lower() or None if value else None

    @field_serializer("role_slugs", "skill_slugs", "employment_types")
    def _serialize_sets(self, value: frozenset[str] | None) -> list[str] | None:
        return sorted(value) if value is not None else None

    def to_json_dict(self) -> dict[str, Any]:
        """Serialized form stored alongside a slice (camelCase, unset fields dropped)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def is_empty(self) -> bool:
        return not self.to_json_dict()


def build_filter(raw: Mapping[str, Any] | None = None, /, **fields: Any) -> StructuredFilter:
    """Validate untrusted input into a StructuredFilter.

    Accepts snake_case or camelCase keys. Any failure surfaces as
    :class:`FilterValidationError` before a predicate is ever built.
    """
    payload: dict[str, Any] = dict(raw or {})
    payload.update(fields)
    try:
        return StructuredFilter.model_validate(payload)
    except ValidationError as exc:
        messages = [
            f"{'.'.join(str(part) for part in error['loc']) or 'filter'}: {error['msg']}"
            for error in exc.errors()
        ]
        raise FilterValidationError(messages, raw=payload) from exc


__all__ = ["RemoteMode", "SortBy", "StructuredFilter", "build_filter"]
