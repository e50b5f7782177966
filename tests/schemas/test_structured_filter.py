from __future__ import annotations

import pytest
from pydantic import ValidationError

from jobslices.errors import FilterValidationError
from jobslices.schemas import StructuredFilter, build_filter


def test_structured_filter_defaults_are_unconstrained():
    filters = StructuredFilter()

    assert filters.role_slugs is None
    assert filters.min_annual is None
    assert filters.hundred_k_local is None
    assert filters.is_empty()


def test_build_filter_accepts_camel_and_snake_case():
    filters = build_filter(
        {"roleSlugs": ["data-engineer"], "minAnnual": 150000.0, "countryCode": "us"},
        city_slug="New-York",
    )

    assert filters.role_slugs == frozenset({"data-engineer"})
    assert filters.min_annual == 150_000
    assert isinstance(filters.min_annual, int)
    assert filters.country_code == "US"
    assert filters.city_slug == "new-york"


@pytest.mark.parametrize(
    "payload",
    [
        {"minAnnual": float("nan")},
        {"minAnnual": float("inf")},
        {"minAnnual": 100000.5},
        {"minAnnual": True},
        {"minAnnual": -5},
        {"remoteMode": "space"},
        {"sortBy": "relevance"},
        {"maxJobAgeDays": 0},
        {"unknownField": 1},
    ],
)
def test_build_filter_rejects_malformed_input(payload):
    with pytest.raises(FilterValidationError) as exc:
        build_filter(payload)

    assert exc.value.errors
    assert isinstance(exc.value.__cause__, ValidationError)


def test_empty_sets_normalize_to_none():
    filters = build_filter(roleSlugs=[], skillSlugs=["", "  "], employmentTypes=["contract"])

    assert filters.role_slugs is None
    assert filters.skill_slugs is None
    assert filters.employment_types == frozenset({"contract"})


def test_filter_is_immutable():
    filters = StructuredFilter(min_annual=100_000)

    with pytest.raises(ValidationError):
        filters.min_annual = 200_000  # type: ignore[misc]


def test_to_json_dict_sorts_sets_and_drops_unset():
    filters = StructuredFilter(role_slugs={"qa-engineer", "data-engineer"}, remote_only=True)

    assert filters.to_json_dict() == {"roleSlugs": ["data-engineer", "qa-engineer"], "remoteOnly": True}


def test_filters_built_in_different_orders_are_equal():
    first = build_filter({"minAnnual": 200000, "roleSlugs": ["b", "a"]})
    second = build_filter({"roleSlugs": ["a", "b"], "minAnnual": 200000})

    assert first == second
    assert hash(first) == hash(second)
