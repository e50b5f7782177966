from __future__ import annotations

import json

from jobslices.schemas import CanonicalSlice, JobRecord, parse_slice_filters


def test_parse_slice_filters_accepts_legacy_single_role():
    filters = parse_slice_filters({"roleSlug": "data-engineer", "isHundredKLocal": True, "minAnnual": 100000})

    assert filters.role_slugs == frozenset({"data-engineer"})
    assert filters.hundred_k_local is True
    assert filters.min_annual == 100_000


def test_parse_slice_filters_plural_key_wins_over_legacy():
    filters = parse_slice_filters({"roleSlug": "old-role", "roleSlugs": ["new-role"]})

    assert filters.role_slugs == frozenset({"new-role"})


def test_parse_slice_filters_drops_unusable_numbers():
    raw = '{"minAnnual": 1e999, "maxAnnual": -10, "maxJobAgeDays": 7.5, "countryCode": "de"}'

    filters = parse_slice_filters(raw)

    assert filters.min_annual is None
    assert filters.max_annual is None
    assert filters.max_job_age_days is None
    assert filters.country_code == "DE"


def test_parse_slice_filters_tolerates_garbage():
    assert parse_slice_filters("{not json").is_empty()
    assert parse_slice_filters(["a"]).is_empty()
    assert parse_slice_filters(None).is_empty()
    assert parse_slice_filters({"remoteMode": "moon", "sortBy": "date"}).to_json_dict() == {"sortBy": "date"}


def test_canonical_slice_path_and_filters_coercion():
    item = CanonicalSlice(
        slug="/jobs/100k-plus/remote/",
        filters=json.dumps({"remoteOnly": True}),
        job_count=3,
        type="remote",
    )

    assert item.slug == "jobs/100k-plus/remote"
    assert item.path == "/jobs/100k-plus/remote"
    assert item.filters.remote_only is True


def test_job_record_assumes_utc_and_keeps_extra_fields():
    record = JobRecord(id="job-1", posted_at="2026-02-01T10:00:00", source="greenhouse")

    assert record.posted_at.tzinfo is not None
    assert record.posted_at.utcoffset().total_seconds() == 0
    assert record.model_extra == {"source": "greenhouse"}
