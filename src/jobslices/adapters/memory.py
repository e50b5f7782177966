"""In-memory record and slice stores backed by JSONL fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, Sequence

from pydantic import ValidationError

from ..core.predicates import OrderTerm, Predicate, evaluate, sort_records
from ..errors import RecordLoadError
from ..schemas import CanonicalSlice, JobRecord


def _load_jsonl(path: Path, model: type) -> tuple[list, list[str]]:
    items: list = []
    errors: list[str] = []
    with path.open("r", encoding="utf-8") as handle:
        for idx, line in enumerate(handle, start=1):
            raw = line.strip()
            if not raw:
                continue
            try:
                record = json.loads(raw)
            except json.JSONDecodeError as exc:
                errors.append(f"line {idx}: invalid JSON ({exc})")
                continue
            if not isinstance(record, dict):
                errors.append(f"line {idx}: expected a JSON object")
                continue
            try:
                items.append(model.model_validate(record))
            except ValidationError as exc:
                errors.append(f"line {idx}: schema validation failed ({exc.errors()})")
    return items, errors


class InMemoryRecordStore:
    """Record store evaluating predicates against a list of JobRecords."""

    def __init__(self, records: Iterable[JobRecord] = ()):
        self._records = list(records)

    @classmethod
    def from_jsonl(cls, path: str | Path) -> "InMemoryRecordStore":
        records, errors = _load_jsonl(Path(path), JobRecord)
        if errors:
            raise RecordLoadError(errors, records)
        return cls(records)

    def __len__(self) -> int:
        return len(self._records)

    def add(self, record: JobRecord) -> None:
        self._records.append(record)

    async def count(self, where: Predicate) -> int:
        return sum(1 for record in self._records if evaluate(where, record))

    async def fetch(
        self,
        where: Predicate,
        *,
        order_by: Sequence[OrderTerm] = (),
        offset: int = 0,
        limit: int | None = None,
    ) -> list[JobRecord]:
        matched = [record for record in self._records if evaluate(where, record)]
        ordered = sort_records(matched, order_by)
        end = None if limit is None else offset + limit
        return ordered[offset:end]


class InMemorySliceStore:
    """Slice table keyed by slug."""

    def __init__(self, slices: Iterable[CanonicalSlice] = ()):
        self._slices: dict[str, CanonicalSlice] = {}
        for item in slices:
            self.add(item)

    @classmethod
    def from_jsonl(cls, path: str | Path) -> "InMemorySliceStore":
        slices, errors = _load_jsonl(Path(path), CanonicalSlice)
        if errors:
            raise RecordLoadError(errors, slices)
        return cls(slices)

    def __len__(self) -> int:
        return len(self._slices)

    def __contains__(self, slug: object) -> bool:
        return isinstance(slug, str) and slug.strip("/") in self._slices

    def add(self, item: CanonicalSlice) -> None:
        self._slices[item.slug] = item

    def all(self) -> list[CanonicalSlice]:
        return list(self._slices.values())

    async def find_first(self, slugs: Sequence[str]) -> CanonicalSlice | None:
        for slug in slugs:
            found = self._slices.get(slug.strip("/"))
            if found is not None:
                return found
        return None


__all__ = ["InMemoryRecordStore", "InMemorySliceStore"]
