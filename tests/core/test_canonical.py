from __future__ import annotations

import pytest

from jobslices.core.canonical import (
    CountryTable,
    SliceCanonicalizer,
    band_slug,
    canonical_path,
    seed_slice,
)
from jobslices.schemas import StructuredFilter, build_filter


@pytest.mark.parametrize(
    ("floor", "band"),
    [
        (None, "100k-plus"),
        (0, "100k-plus"),
        (100_000, "100k-plus"),
        (150_000, "100k-plus"),
        (199_400, "100k-plus"),
        (199_600, "200k-plus"),
        (250_000, "200k-plus"),
        (300_000, "300k-plus"),
        (1_000_000, "400k-plus"),
    ],
)
def test_band_slug_maps_floor_down_to_band(floor, band):
    assert band_slug(floor) == band


def test_full_canonical_path_segment_order():
    filters = StructuredFilter(
        min_annual=200_000,
        remote_only=True,
        role_slugs={"data-engineer"},
        country_code="US",
        city_slug="Chicago",
    )

    assert canonical_path(filters) == "/jobs/200k-plus/remote/data-engineer/united-states/chicago"


def test_empty_filter_is_baseline_band():
    assert canonical_path(StructuredFilter()) == "/jobs/100k-plus"


def test_role_is_lexicographically_smallest():
    filters = StructuredFilter(role_slugs={"frontend-engineer", "backend-engineer", "qa-engineer"})

    assert canonical_path(filters) == "/jobs/100k-plus/backend-engineer"


def test_unknown_country_falls_back_to_lowercase_code():
    assert canonical_path(StructuredFilter(country_code="BR")) == "/jobs/100k-plus/br"


def test_canonical_path_is_order_independent():
    first = build_filter(
        {"countryCode": "gb", "roleSlugs": ["product-manager", "product-designer"], "minAnnual": 300_000}
    )
    second = build_filter(
        min_annual=300_000,
        role_slugs=["product-designer", "product-manager"],
        country_code="GB",
    )
    third = StructuredFilter(min_annual=300_000).model_copy(
        update={"country_code": "GB", "role_slugs": frozenset({"product-manager", "product-designer"})}
    )

    assert canonical_path(first) == canonical_path(second) == canonical_path(third)
    assert canonical_path(first) == "/jobs/300k-plus/product-designer/united-kingdom"


@pytest.mark.parametrize(
    "filters",
    [
        StructuredFilter(),
        StructuredFilter(min_annual=200_000, role_slugs={"data-engineer"}, country_code="US"),
        StructuredFilter(min_annual=100_000, remote_only=True, role_slugs={"software-engineer"}),
        StructuredFilter(min_annual=400_000, country_code="DE", city_slug="berlin"),
        StructuredFilter(role_slugs={"recruiter"}, country_code="SG"),
    ],
)
def test_seeded_slice_path_matches_canonical_path(filters: StructuredFilter):
    seeded = seed_slice(filters, job_count=12, type="role-country")

    assert seeded.path == canonical_path(seeded.filters)
    assert not seeded.slug.startswith("/")
    assert seeded.job_count == 12


def test_country_table_round_trip_and_custom_entries():
    table = CountryTable({"BR": ("brazil", "Brazil")})
    canonicalizer = SliceCanonicalizer(table)

    assert table.code_to_slug("br") == "brazil"
    assert table.slug_to_code("Brazil") == "BR"
    assert table.name_for("xx") == "XX"
    assert canonicalizer.canonical_path(StructuredFilter(country_code="BR")) == "/jobs/100k-plus/brazil"
    assert canonicalizer.canonical_path(StructuredFilter(country_code="US")) == "/jobs/100k-plus/us"
