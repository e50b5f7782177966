"""Pydantic schema definitions for filters, job records and slices."""

from __future__ import annotations

from .filters import RemoteMode, SortBy, StructuredFilter, build_filter
from .job import JobRecord
from .slice import CanonicalSlice, parse_slice_filters

__all__ = [
    "CanonicalSlice",
    "JobRecord",
    "RemoteMode",
    "SortBy",
    "StructuredFilter",
    "build_filter",
    "parse_slice_filters",
]
