"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator


class CoreConfig(BaseModel):
    baseline_annual: int | None = Field(default=None, gt=0)
    max_display_age_days: int | None = Field(default=None, gt=0)
    default_page_size: int | None = Field(default=None, gt=0)
    max_page_size: int | None = Field(default=None, gt=0)

    @model_validator(mode="after")
    def _page_sizes_consistent(self) -> "CoreConfig":
        if (
            self.default_page_size is not None
            and self.max_page_size is not None
            and self.default_page_size > self.max_page_size
        ):
            raise ValueError("default_page_size must not exceed max_page_size")
        return self


class MatchingConfig(BaseModel):
    fuzzy_threshold: int | None = Field(default=None, ge=0)
    synonyms_path: str | None = None


class AppConfig(BaseModel):
    core: CoreConfig = Field(default_factory=CoreConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        core_settings = self.core.model_dump(exclude_none=True)
        if core_settings:
            settings["core"] = core_settings
        matching_settings = self.matching.model_dump(exclude_none=True)
        if matching_settings:
            settings["matching"] = matching_settings
        return settings


def load_config(raw: Any) -> AppConfig:
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    return AppConfig.model_validate(raw)
