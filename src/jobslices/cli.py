"""Typer CLI entrypoint for the filter and slice engine."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, List, Optional

import typer
from pydantic import ValidationError

from . import __version__
from .adapters import InMemoryRecordStore, InMemorySliceStore
from .config import ConfigManager
from .container import JobSlicesContainer, create_container
from .core import redirect_target
from .core.predicates import to_dict
from .errors import FilterValidationError, RecordLoadError, SliceNotFoundError
from .logging import configure_logging
from .schemas import StructuredFilter, build_filter

app = typer.Typer(help="Job filter normalization and canonical slice CLI.")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def _root(
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit."
    ),
) -> None:
    """Job filter normalization and canonical slice CLI."""


def _echo(payload: Any) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2, default=str))


def _load_settings(config: Optional[Path]) -> dict[str, Any]:
    if not config:
        return {}
    try:
        return ConfigManager(config.parent).load_app_config(config.name).to_settings()
    except ValidationError as exc:
        raise typer.BadParameter(f"Invalid config: {exc}", param_hint="config") from exc


def _container(
    config: Optional[Path],
    log_level: str,
    *,
    records: Optional[Path] = None,
    slices: Optional[Path] = None,
) -> JobSlicesContainer:
    configure_logging(log_level)
    settings = _load_settings(config)
    try:
        record_store = InMemoryRecordStore.from_jsonl(records) if records else None
        slice_store = InMemorySliceStore.from_jsonl(slices) if slices else None
    except RecordLoadError as exc:
        raise typer.BadParameter("; ".join(exc.errors)) from exc
    return create_container(settings=settings, record_store=record_store, slice_store=slice_store)


def _parse_filter_option(raw: Optional[str]) -> StructuredFilter:
    if not raw:
        return StructuredFilter()
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"Filters must be a JSON object ({exc})", param_hint="filters") from exc
    if not isinstance(payload, dict):
        raise typer.BadParameter("Filters must be a JSON object", param_hint="filters")
    try:
        return build_filter(payload)
    except FilterValidationError as exc:
        raise typer.BadParameter("; ".join(exc.errors), param_hint="filters") from exc


@app.command("parse-text")
def parse_text(
    text: str = typer.Argument(..., help="Free-text search query."),
    config: Optional[Path] = typer.Option(
        None, exists=True, readable=True, dir_okay=False, help="YAML config path."
    ),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Parse a search box query into structured filters."""
    container = _container(config, log_level)
    parsed = container.query_parser().parse(text)
    _echo(
        {
            "filters": parsed.to_json_dict(),
            "canonical_path": container.canonicalizer().canonical_path(parsed),
        }
    )


@app.command("parse-salary")
def parse_salary(
    fragments: List[str] = typer.Argument(..., help="Salary text fragments."),
    currency: Optional[str] = typer.Option(None, help="Currency hint, e.g. 'USD' or '€'."),
    config: Optional[Path] = typer.Option(
        None, exists=True, readable=True, dir_okay=False, help="YAML config path."
    ),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Parse free-form salary text into annual figures."""
    container = _container(config, log_level)
    _echo(container.salary_parser().parse(fragments, currency).to_dict())


@app.command("match-roles")
def match_roles(
    text: str = typer.Argument(..., help="Role text to match."),
    fuzzy: bool = typer.Option(False, "--fuzzy", help="Use ranked edit-distance matching."),
    threshold: Optional[int] = typer.Option(None, min=0, help="Maximum edit distance for --fuzzy."),
    config: Optional[Path] = typer.Option(
        None, exists=True, readable=True, dir_okay=False, help="YAML config path."
    ),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Map free text to canonical role slugs."""
    matcher = _container(config, log_level).role_matcher()
    if fuzzy:
        ranked = matcher.fuzzy_match_roles(text, threshold)
        _echo([{"role_slug": item.role_slug, "distance": item.distance} for item in ranked])
    else:
        _echo(sorted(matcher.match_roles(text)))


@app.command()
def canonical(
    filters: Optional[str] = typer.Option(None, help="Filter JSON object (camelCase or snake_case)."),
    text: Optional[str] = typer.Option(None, help="Free-text query to parse first."),
    config: Optional[Path] = typer.Option(
        None, exists=True, readable=True, dir_okay=False, help="YAML config path."
    ),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Print the canonical path for a filter."""
    container = _container(config, log_level)
    parsed = container.query_parser().parse(text) if text else _parse_filter_option(filters)
    typer.echo(container.canonicalizer().canonical_path(parsed))


@app.command()
def resolve(
    segments: List[str] = typer.Argument(..., help="URL segments after /jobs/."),
    slices: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Slice table JSONL path."),
    config: Optional[Path] = typer.Option(
        None, exists=True, readable=True, dir_okay=False, help="YAML config path."
    ),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Resolve URL segments to a stored slice."""
    container = _container(config, log_level, slices=slices)
    resolver = container.slice_resolver()
    try:
        resolved = asyncio.run(resolver.resolve(segments))
    except SliceNotFoundError as exc:
        _echo({"error": "not_found", "candidates": exc.candidates})
        raise typer.Exit(code=1) from exc
    _echo(
        {
            "slug": resolved.slug,
            "filters": resolved.filter.to_json_dict(),
            "canonical_path": resolved.canonical_path,
            "redirect": redirect_target(segments, resolved),
        }
    )


@app.command()
def query(
    records: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Job records JSONL path."),
    filters: Optional[str] = typer.Option(None, help="Filter JSON object (camelCase or snake_case)."),
    text: Optional[str] = typer.Option(None, help="Free-text query to parse first."),
    page: int = typer.Option(1, help="Page number (1-based)."),
    page_size: Optional[int] = typer.Option(None, help="Page size."),
    config: Optional[Path] = typer.Option(
        None, exists=True, readable=True, dir_okay=False, help="YAML config path."
    ),
    explain: bool = typer.Option(False, "--explain", help="Include the compiled predicate and ordering."),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Run a paginated query against a JSONL record fixture."""
    container = _container(config, log_level, records=records)
    parsed = container.query_parser().parse(text) if text else _parse_filter_option(filters)
    service = container.query_service()
    try:
        result = asyncio.run(service.query(parsed, page=page, page_size=page_size))
    except FilterValidationError as exc:
        raise typer.BadParameter("; ".join(exc.errors)) from exc
    payload = result.to_dict()
    if explain:
        builder = container.where_builder()
        payload["where"] = to_dict(builder.build(parsed))
        payload["order_by"] = [
            {"field": term.field, "direction": term.direction} for term in builder.order_by(parsed)
        ]
    _echo(payload)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
