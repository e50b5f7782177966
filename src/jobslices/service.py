"""Paginated job query orchestration."""

from __future__ import annotations

import asyncio
import math
import re
from dataclasses import dataclass
from typing import Any

import structlog

from .adapters import RecordStore
from .core.where import WhereBuilder
from .errors import FilterValidationError
from .schemas import JobRecord, StructuredFilter

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass(slots=True)
class QueryResult:
    """One page of records plus pagination totals."""

    records: list[JobRecord]
    total: int
    page: int
    page_size: int
    total_pages: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "records": [record.model_dump(mode="json") for record in self.records],
            "total": self.total,
            "page": self.page,
            "page_size": self.page_size,
            "total_pages": self.total_pages,
        }


class JobQueryService:
    """Build the predicate for a filter and fetch one page from the record store."""

    def __init__(
        self,
        store: RecordStore,
        where_builder: WhereBuilder | None = None,
        *,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
    ) -> None:
        self._store = store
        self._where = where_builder or WhereBuilder()
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size
        self._logger = structlog.get_logger(__name__)

    async def query(
        self,
        filters: StructuredFilter,
        page: Any = 1,
        page_size: Any = None,
    ) -> QueryResult:
        page_number = max(1, self._as_int("page", page, default=1))
        size = self._as_int("page_size", page_size, default=self._default_page_size)
        size = min(max(size, 1), self._max_page_size)

        where = self._where.build(filters)
        order_by = self._where.order_by(filters)

        # count and page are not read in one transaction
        total, records = await asyncio.gather(
            self._store.count(where),
            self._store.fetch(
                where,
                order_by=order_by,
                offset=(page_number - 1) * size,
                limit=size,
            ),
        )
        total_pages = 1 if total == 0 else math.ceil(total / size)

        self._logger.info(
            "query.executed",
            filters=filters.to_json_dict(),
            total=total,
            page=page_number,
            page_size=size,
            returned=len(records),
        )
        return QueryResult(
            records=list(records),
            total=total,
            page=page_number,
            page_size=size,
            total_pages=total_pages,
        )

    @staticmethod
    def _as_int(name: str, value: Any, *, default: int) -> int:
        if value is None:
            return default
        if isinstance(value, bool):
            raise FilterValidationError([f"{name}: boolean is not a valid integer"], raw=value)
        if isinstance(value, float):
            if not math.isfinite(value) or not value.is_integer():
                raise FilterValidationError([f"{name}: must be an integer"], raw=value)
            return int(value)
        if isinstance(value, int):
            return value
        if isinstance(value, str) and re.fullmatch(r"-?[0-9]+", value.strip()):
            return int(value.strip())
        raise FilterValidationError([f"{name}: must be an integer"], raw=value)


__all__ = ["DEFAULT_PAGE_SIZE", "JobQueryService", "MAX_PAGE_SIZE", "QueryResult"]
