from __future__ import annotations

from pathlib import Path

import pytest

from jobslices.core.roles import (
    ContainmentStrategy,
    EditDistanceStrategy,
    ExactStrategy,
    RankedStrategy,
    RoleSynonymMatcher,
    RoleSynonymTable,
    default_synonym_table,
    fuzzy_match_roles,
    load_synonym_table,
    match_roles,
)


def test_senior_swe_maps_to_software_engineer():
    assert "software-engineer" in match_roles("senior swe")


def test_longer_synonym_shadows_generic_engineer():
    assert match_roles("Senior ML Engineer $180k remote EU") == frozenset({"machine-learning-engineer"})


def test_short_synonyms_require_whole_tokens():
    assert "sales-engineer" not in match_roles("senior")
    assert "backend-engineer" not in match_roles("best fit")


def test_query_contained_in_synonym_matches():
    assert "chief-technology-officer" in match_roles("vp")
    assert "vice-president" in match_roles("vp")


def test_hyphenated_slug_matches_as_phrase():
    assert "data-engineer" in match_roles("looking for a data engineer role")


def test_blank_query_matches_nothing():
    assert match_roles("   ") == frozenset()
    assert fuzzy_match_roles("", 3) == []


def test_fuzzy_match_is_sorted_by_distance():
    ranked = fuzzy_match_roles("sofware engineer", 2)

    assert ranked[0].role_slug == "software-engineer"
    assert ranked[0].distance == 1
    distances = [item.distance for item in ranked]
    assert distances == sorted(distances)
    assert all(item.distance <= 2 for item in ranked)


def test_fuzzy_ties_break_on_slug():
    ranked = fuzzy_match_roles("pm", 0)

    slugs = [item.role_slug for item in ranked]
    assert slugs == sorted(slugs)
    assert {"product-manager", "program-manager", "project-manager"} <= set(slugs)


def test_best_role_for_slug_recovers_legacy_segments():
    matcher = RoleSynonymMatcher()

    assert matcher.best_role_for_slug("data-engineer") == "data-engineer"
    assert matcher.best_role_for_slug("ml-engineer") == "machine-learning-engineer"
    assert matcher.best_role_for_slug("dta-engineer") == "data-engineer"
    assert matcher.best_role_for_slug("xyzzy-qqqqqq") is None


def test_strategies_satisfy_protocols():
    assert isinstance(ContainmentStrategy(), ExactStrategy)
    assert isinstance(EditDistanceStrategy(), RankedStrategy)


def test_default_table_is_shared_and_read_only():
    table = default_synonym_table()

    assert default_synonym_table() is table
    assert "software-engineer" in table.categories["engineering"]
    with pytest.raises(TypeError):
        table.categories["engineering"] = ()  # type: ignore[index]
    assert isinstance(table.synonyms_for("software-engineer"), tuple)


def test_table_rejects_duplicate_roles():
    with pytest.raises(ValueError):
        RoleSynonymTable(
            {
                "engineering": {"software-engineer": ["swe"]},
                "other": {"software-engineer": ["dev"]},
            }
        )


def test_custom_table_from_yaml(tmp_path: Path):
    path = tmp_path / "roles.yaml"
    path.write_text(
        "kitchen:\n  line-cook: [cook, chef de partie]\n  pastry-chef: [pastry, baker]\n",
        encoding="utf-8",
    )
    table = load_synonym_table(path)
    matcher = RoleSynonymMatcher(table)

    assert len(table) == 2
    assert matcher.match_roles("Chef de Partie wanted") == frozenset({"line-cook"})
    assert matcher.fuzzy_match_roles("bakr", 1)[0].role_slug == "pastry-chef"
