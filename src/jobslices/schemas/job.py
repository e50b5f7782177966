from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class JobRecord(BaseModel):
    """Read-only view of a job row owned by the ingestion pipeline."""

    id: str
    title: str = ""
    role_slug: str | None = None
    skills: list[str] = Field(default_factory=list)
    min_annual: int | None = None
    max_annual: int | None = None
    currency: str | None = None
    country_code: str | None = None
    city_slug: str | None = None
    remote: bool = False
    remote_mode: Literal["remote", "hybrid", "onsite"] | None = None
    remote_region: str | None = None
    posted_at: datetime | None = None
    created_at: datetime | None = None
    is_expired: bool = False
    is_hundred_k_local: bool = False
    company_slug: str | None = None
    seniority: str | None = None
    employment_type: str | None = None
    experience_level: str | None = None
    industry: str | None = None

    model_config = ConfigDict(extra="allow", frozen=True)

    @field_validator("posted_at", "created_at", mode="after")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
