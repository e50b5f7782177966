from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from jobslices.adapters import InMemoryRecordStore, InMemorySliceStore
from jobslices.config import ConfigManager
from jobslices.container import create_container
from jobslices.schemas.config import AppConfig, load_config


def test_create_container_with_overrides():
    container = create_container(
        settings={
            "core": {
                "baseline_annual": 120_000,
                "max_display_age_days": 30,
                "default_page_size": 10,
                "max_page_size": 50,
            },
            "matching": {"fuzzy_threshold": 1},
        }
    )

    builder = container.where_builder()
    matcher = container.role_matcher()
    service = container.query_service()

    assert builder.baseline_annual == 120_000
    assert builder._max_age_days == 30
    assert matcher.fuzzy_threshold == 1
    assert container.query_parser()._matcher is matcher
    assert service._default_page_size == 10
    assert service._max_page_size == 50
    assert service._where is builder


def test_container_defaults_share_synonym_table():
    container = create_container()

    assert container.role_matcher().table is container.synonym_table()
    assert container.slice_resolver()._matcher is container.role_matcher()


def test_container_injects_stores():
    records = InMemoryRecordStore()
    slices = InMemorySliceStore()

    container = create_container(record_store=records, slice_store=slices)

    assert container.query_service()._store is records
    assert container.slice_resolver()._store is slices


def test_container_loads_custom_synonyms(tmp_path: Path):
    path = tmp_path / "roles.yaml"
    path.write_text("kitchen:\n  line-cook: [cook]\n", encoding="utf-8")

    container = create_container(settings={"matching": {"synonyms_path": str(path)}})

    assert container.role_matcher().match_roles("head cook") == frozenset({"line-cook"})


def test_load_config_validation():
    app_config = load_config({"core": {"baseline_annual": 100_000}, "matching": {"fuzzy_threshold": 3}})

    assert isinstance(app_config, AppConfig)
    settings = app_config.to_settings()
    assert settings == {"core": {"baseline_annual": 100_000}, "matching": {"fuzzy_threshold": 3}}


def test_load_config_rejects_inconsistent_page_sizes():
    with pytest.raises(ValidationError):
        load_config({"core": {"default_page_size": 200, "max_page_size": 100}})


def test_load_config_rejects_non_mapping():
    with pytest.raises(ValidationError):
        load_config(["core"])


def test_config_manager_loads_named_yaml(tmp_path: Path):
    (tmp_path / "prod.yaml").write_text("core:\n  max_display_age_days: 60\n", encoding="utf-8")

    manager = ConfigManager(tmp_path)

    assert manager.load("prod") == {"core": {"max_display_age_days": 60}}
    assert manager.load_app_config("prod").core.max_display_age_days == 60


def test_config_manager_keeps_explicit_suffix(tmp_path: Path):
    (tmp_path / "local.yml").write_text("matching:\n  fuzzy_threshold: 3\n", encoding="utf-8")

    config = ConfigManager(tmp_path).load_app_config("local.yml")

    assert config.matching.fuzzy_threshold == 3
