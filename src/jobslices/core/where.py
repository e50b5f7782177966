"""Eligibility gate and predicate builder for job queries."""

from __future__ import annotations

from typing import Any

import pendulum

from ..schemas import StructuredFilter
from .predicates import AllOf, AnyOf, Field, Not, OrderTerm, Predicate

DEFAULT_BASELINE_ANNUAL = 100_000
DEFAULT_MAX_DISPLAY_AGE_DAYS = 45


class WhereBuilder:
    """Turn a StructuredFilter into a predicate tree and an ordering.

    Two anchors are always present: the freshness window and, when a salary
    floor or local-eligibility request is given, the salary eligibility gate.
    Every other filter field adds one independent AND clause.
    """

    def __init__(
        self,
        *,
        baseline_annual: int = DEFAULT_BASELINE_ANNUAL,
        max_display_age_days: int = DEFAULT_MAX_DISPLAY_AGE_DAYS,
        now_provider: Any | None = None,
    ) -> None:
        self._baseline = baseline_annual
        self._max_age_days = max_display_age_days
        self._now_provider = now_provider or pendulum.now

    @property
    def baseline_annual(self) -> int:
        return self._baseline

    def build(self, filters: StructuredFilter) -> AllOf:
        now = self._now()
        clauses: list[Predicate] = [self._freshness(now)]

        salary = self._salary_gate(filters)
        if salary is not None:
            clauses.append(salary)

        if filters.role_slugs:
            clauses.append(
                AnyOf(tuple(Field("role_slug", "contains", slug) for slug in sorted(filters.role_slugs)))
            )
        if filters.skill_slugs:
            clauses.append(
                AnyOf(tuple(Field("skills", "contains", slug) for slug in sorted(filters.skill_slugs)))
            )
        if filters.country_code:
            clauses.append(Field("country_code", "eq", filters.country_code.upper()))
        if filters.city_slug:
            clauses.append(Field("city_slug", "eq", filters.city_slug))
        if filters.remote_only:
            clauses.append(Field("remote", "eq", True))
        if filters.remote_mode:
            clauses.append(Field("remote_mode", "eq", filters.remote_mode))
        if filters.remote_region:
            clauses.append(Field("remote_region", "eq", filters.remote_region))
        if filters.seniority:
            clauses.append(Field("seniority", "eq", filters.seniority))
        if filters.company_slug:
            clauses.append(Field("company_slug", "eq", filters.company_slug))
        if filters.industry:
            clauses.append(Field("industry", "eq", filters.industry))
        if filters.experience_level:
            clauses.append(Field("experience_level", "eq", filters.experience_level))

        if filters.max_annual is not None and filters.max_annual > 0:
            clauses.append(Field("max_annual", "lte", filters.max_annual))
        if filters.max_job_age_days:
            cutoff = now.subtract(days=filters.max_job_age_days)
            clauses.append(Field("posted_at", "gte", cutoff))

        if filters.employment_types:
            clauses.append(Field("employment_type", "in", filters.employment_types))
        elif filters.exclude_internships is not False:
            clauses.append(
                Not(
                    AnyOf(
                        (
                            Field("title", "contains", "Intern"),
                            Field("title", "contains", "intern"),
                        )
                    )
                )
            )

        return AllOf(tuple(clauses))

    def order_by(self, filters: StructuredFilter) -> tuple[OrderTerm, ...]:
        if filters.sort_by == "date":
            return (
                OrderTerm("posted_at"),
                OrderTerm("created_at"),
                OrderTerm("max_annual"),
                OrderTerm("min_annual"),
            )
        if filters.min_annual is not None and filters.min_annual > self._baseline:
            salary_terms = (OrderTerm("min_annual"), OrderTerm("max_annual"))
        else:
            salary_terms = (OrderTerm("max_annual"), OrderTerm("min_annual"))
        return salary_terms + (OrderTerm("posted_at"), OrderTerm("created_at"))

    def _now(self) -> pendulum.DateTime:
        return pendulum.instance(self._now_provider())

    def _freshness(self, now: pendulum.DateTime) -> AllOf:
        threshold = now.subtract(days=self._max_age_days)
        return AllOf(
            (
                Field("is_expired", "eq", False),
                AnyOf(
                    (
                        Field("posted_at", "gte", threshold),
                        AllOf(
                            (
                                Field("posted_at", "is_null", True),
                                Field("created_at", "gte", threshold),
                            )
                        ),
                    )
                ),
            )
        )

    def _salary_gate(self, filters: StructuredFilter) -> Predicate | None:
        floor = filters.min_annual
        if floor is not None and floor > 0:
            at_least = Field("min_annual", "gte", floor)
            if floor <= self._baseline and filters.hundred_k_local is not False:
                return AnyOf((at_least, Field("is_hundred_k_local", "eq", True)))
            return at_least
        if filters.hundred_k_local is True:
            return Field("is_hundred_k_local", "eq", True)
        return None


__all__ = ["DEFAULT_BASELINE_ANNUAL", "DEFAULT_MAX_DISPLAY_AGE_DAYS", "WhereBuilder"]
