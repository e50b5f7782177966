"""Storage adapters for job records and canonical slices."""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from ..core.predicates import OrderTerm, Predicate
from ..schemas import CanonicalSlice, JobRecord
from .memory import InMemoryRecordStore, InMemorySliceStore


@runtime_checkable
class RecordStore(Protocol):
    """Read-only job record store contract.

    Implementations translate the predicate tree into their own query language
    (or evaluate it in memory). ``count`` and ``fetch`` are independent calls;
    callers accept that a concurrent write can make them disagree slightly.
    """

    async def count(self, where: Predicate) -> int:
        """Return the number of records matching ``where``."""

    async def fetch(
        self,
        where: Predicate,
        *,
        order_by: Sequence[OrderTerm] = (),
        offset: int = 0,
        limit: int | None = None,
    ) -> list[JobRecord]:
        """Return one page of matching records in the requested order."""


@runtime_checkable
class SliceStore(Protocol):
    """Precomputed slice table contract."""

    async def find_first(self, slugs: Sequence[str]) -> CanonicalSlice | None:
        """Return the row for the earliest slug in ``slugs`` that exists."""


__all__ = ["InMemoryRecordStore", "InMemorySliceStore", "RecordStore", "SliceStore"]
