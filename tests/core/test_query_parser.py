from __future__ import annotations

import pytest

from jobslices.core.query_parser import QueryFilterParser, parse_free_text


def test_senior_ml_engineer_scenario():
    parsed = parse_free_text("Senior ML Engineer $180k remote EU")

    assert parsed.role_slugs == frozenset({"machine-learning-engineer"})
    assert parsed.min_annual == 180_000
    assert parsed.remote_only is True
    assert parsed.remote_mode == "remote"
    assert parsed.remote_region is None
    assert parsed.country_code is None


def test_salary_below_baseline_is_discarded():
    parsed = parse_free_text("$92k")

    assert parsed.min_annual is None
    assert parsed.is_empty()


def test_highest_salary_token_wins():
    parsed = parse_free_text("between 120k and $150k")

    assert parsed.min_annual == 150_000


@pytest.mark.parametrize(
    ("text", "mode", "remote_only"),
    [
        ("remote or hybrid or on-site", "onsite", None),
        ("hybrid, remote is fine", "hybrid", None),
        ("work from anywhere", "remote", True),
        ("onsite in berlin", "onsite", None),
    ],
)
def test_arrangement_precedence(text: str, mode: str, remote_only: bool | None):
    parsed = parse_free_text(text)

    assert parsed.remote_mode == mode
    assert parsed.remote_only is remote_only


@pytest.mark.parametrize(
    ("text", "region"),
    [
        ("remote apac", "apac"),
        ("remote apac emea", "emea"),
        ("emea us-only", "us-only"),
        ("emea anywhere", "global"),
        ("global apac", "global"),
    ],
)
def test_region_last_assignment_wins(text: str, region: str):
    assert parse_free_text(text).remote_region == region


def test_country_first_table_entry_wins():
    assert parse_free_text("data engineer usa").country_code == "US"
    assert parse_free_text("jobs in germany or the uk").country_code == "GB"
    assert parse_free_text("new zealand product manager").country_code == "NZ"


def test_country_keywords_match_whole_words_only():
    parsed = parse_free_text("because desire")

    assert parsed.country_code is None


def test_seniority_and_contract_detection():
    parsed = parse_free_text("staff backend engineer contract")

    assert parsed.seniority == "lead"
    assert parsed.employment_types == frozenset({"contract"})
    assert "backend-engineer" in parsed.role_slugs


def test_senior_swe_sets_role_and_seniority():
    parsed = QueryFilterParser().parse("senior swe")

    assert parsed.seniority == "senior"
    assert "software-engineer" in parsed.role_slugs


def test_unset_fields_stay_unset():
    parsed = parse_free_text("freelance")

    assert parsed.to_json_dict() == {"employmentTypes": ["contract"]}


def test_empty_text_yields_empty_filter():
    assert parse_free_text("").is_empty()
