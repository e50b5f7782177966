"""Error types raised by the filter and slice engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence


class FilterValidationError(ValueError):
    """Raised when filter input cannot be turned into a StructuredFilter."""

    def __init__(self, errors: list[str], raw: Any = None):
        super().__init__("Filter validation failed")
        self.errors = errors
        self.raw = raw

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Filter validation failed: {self.errors}"


class SliceNotFoundError(LookupError):
    """Raised when no candidate slug resolves to a stored slice."""

    def __init__(self, segments: Sequence[str], candidates: Sequence[str]):
        super().__init__("Slice not found")
        self.segments = list(segments)
        self.candidates = list(candidates)

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Slice not found for /{'/'.join(self.segments)}; tried {self.candidates}"


class RecordLoadError(ValueError):
    """Raised when a JSONL fixture contains invalid records."""

    def __init__(self, errors: list[str], partial: list[Any]):
        super().__init__("Record loading failed")
        self.errors = errors
        self.partial = partial

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Record loading failed: {self.errors}"


@dataclass(frozen=True, slots=True)
class ParseAmbiguityWarning:
    """Low-confidence salary parse, kept for data-quality review."""

    reason: str
    detail: str = ""


__all__ = [
    "FilterValidationError",
    "ParseAmbiguityWarning",
    "RecordLoadError",
    "SliceNotFoundError",
]
