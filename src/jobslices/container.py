"""Dependency injection container for the filter and slice engine."""

from __future__ import annotations

from typing import Any

from dependency_injector import containers, providers

from .adapters import InMemoryRecordStore, InMemorySliceStore, RecordStore, SliceStore
from .core import (
    QueryFilterParser,
    RoleSynonymMatcher,
    SalaryTextParser,
    SliceCanonicalizer,
    SliceResolver,
    WhereBuilder,
)
from .core.roles import default_synonym_table, load_synonym_table
from .service import JobQueryService


class JobSlicesContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    synonym_table = providers.Singleton(default_synonym_table)

    role_matcher = providers.Singleton(RoleSynonymMatcher, table=synonym_table)
    salary_parser = providers.Singleton(SalaryTextParser)
    query_parser = providers.Singleton(QueryFilterParser, matcher=role_matcher)
    where_builder = providers.Singleton(WhereBuilder)
    canonicalizer = providers.Singleton(SliceCanonicalizer)

    record_store = providers.Singleton(InMemoryRecordStore)
    slice_store = providers.Singleton(InMemorySliceStore)

    slice_resolver = providers.Factory(
        SliceResolver,
        store=slice_store,
        canonicalizer=canonicalizer,
        matcher=role_matcher,
    )

    query_service = providers.Factory(
        JobQueryService,
        store=record_store,
        where_builder=where_builder,
    )


def create_container(
    *,
    settings: dict[str, Any] | None = None,
    record_store: RecordStore | None = None,
    slice_store: SliceStore | None = None,
) -> JobSlicesContainer:
    """Instantiate container with optional overrides."""

    container = JobSlicesContainer()

    if record_store is not None:
        container.record_store.override(providers.Object(record_store))
    if slice_store is not None:
        container.slice_store.override(providers.Object(slice_store))

    if not settings:
        return container

    matching_settings = settings.get("matching", {}) if isinstance(settings, dict) else {}

    if "synonyms_path" in matching_settings:
        container.synonym_table.override(
            providers.Singleton(load_synonym_table, matching_settings["synonyms_path"])
        )

    if "fuzzy_threshold" in matching_settings:
        container.role_matcher.override(
            providers.Singleton(
                RoleSynonymMatcher,
                table=container.synonym_table,
                fuzzy_threshold=int(matching_settings["fuzzy_threshold"]),
            )
        )

    core_settings = settings.get("core", {}) if isinstance(settings, dict) else {}

    builder_kwargs = {
        key: core_settings[key]
        for key in ("baseline_annual", "max_display_age_days")
        if key in core_settings
    }
    if builder_kwargs:
        container.where_builder.override(providers.Singleton(WhereBuilder, **builder_kwargs))

    service_kwargs = {
        key: core_settings[key]
        for key in ("default_page_size", "max_page_size")
        if key in core_settings
    }
    if service_kwargs:
        container.query_service.override(
            providers.Factory(
                JobQueryService,
                store=container.record_store,
                where_builder=container.where_builder,
                **service_kwargs,
            )
        )

    return container
