from __future__ import annotations

import json
from pathlib import Path

import pytest

from jobslices.adapters import InMemoryRecordStore, InMemorySliceStore
from jobslices.errors import RecordLoadError


def test_record_loader_raises_on_invalid_json(tmp_path: Path):
    path = tmp_path / "jobs.jsonl"
    path.write_text('{"id": "job-1", "title": "Engineer"}\n{invalid}', encoding="utf-8")

    with pytest.raises(RecordLoadError) as exc:
        InMemoryRecordStore.from_jsonl(path)
    assert "invalid JSON" in str(exc.value)
    assert [record.id for record in exc.value.partial] == ["job-1"]


def test_record_loader_reports_schema_errors_per_line(tmp_path: Path):
    path = tmp_path / "jobs.jsonl"
    rows = [
        {"id": "job-1", "min_annual": 120000},
        {"title": "missing id"},
        ["not", "an", "object"],
        {"id": "job-4", "min_annual": "lots"},
    ]
    path.write_text("\n".join(json.dumps(row) for row in rows), encoding="utf-8")

    with pytest.raises(RecordLoadError) as exc:
        InMemoryRecordStore.from_jsonl(path)

    errors = exc.value.errors
    assert len(errors) == 3
    assert errors[0].startswith("line 2:")
    assert "expected a JSON object" in errors[1]
    assert errors[2].startswith("line 4:")


def test_record_loader_skips_blank_lines(tmp_path: Path):
    path = tmp_path / "jobs.jsonl"
    path.write_text('\n{"id": "job-1"}\n\n{"id": "job-2"}\n', encoding="utf-8")

    store = InMemoryRecordStore.from_jsonl(path)

    assert len(store) == 2


def test_slice_loader_reads_stored_filter_json(tmp_path: Path):
    path = tmp_path / "slices.jsonl"
    rows = [
        {
            "slug": "/jobs/200k-plus/data-engineer/united-states",
            "filters": json.dumps({"roleSlug": "data-engineer", "countryCode": "US", "minAnnual": 200000}),
            "job_count": 14,
        },
        {"slug": "jobs/100k-plus", "filters": None},
    ]
    path.write_text("\n".join(json.dumps(row) for row in rows), encoding="utf-8")

    store = InMemorySliceStore.from_jsonl(path)

    assert len(store) == 2
    assert "jobs/200k-plus/data-engineer/united-states" in store
    first = store.all()[0]
    assert first.filters.role_slugs == frozenset({"data-engineer"})
    assert first.job_count == 14
