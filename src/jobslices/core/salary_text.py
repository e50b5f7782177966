"""Heuristic salary text parsing into annual figures.

Scraped salary strings arrive as loose fragments (``"$120,000 - $150,000"``,
``"€6k per month"``, ``"85/hour"``). The parser does not attempt a grammar:

* currency comes from the first table entry whose symbol or code appears in
  the hint, otherwise in the joined text;
* every numeric token (``\\d[\\d,]*k?``) is collected and sorted ascending, the
  smallest becomes the minimum and the next one the maximum;
* a pay interval keyword decides the annualisation factor (year by default).

Taking the two smallest numbers as the range is a known limitation. Parses
that lean on it are flagged with :class:`ParseAmbiguityWarning` entries.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Literal, Sequence

import structlog

from ..errors import ParseAmbiguityWarning

Interval = Literal["year", "month", "hour"]

# table order is priority: the first code whose marker appears wins
CURRENCY_SYMBOLS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("USD", ("$", "US$", "USD")),
    ("EUR", ("€", "EUR")),
    ("GBP", ("£", "GBP")),
    ("CAD", ("C$", "CAD")),
    ("AUD", ("A$", "AUD")),
    ("NZD", ("NZ$", "NZD")),
    ("CHF", ("CHF",)),
    ("SEK", ("SEK", "kr")),
    ("NOK", ("NOK", "kr")),
    ("DKK", ("DKK", "kr")),
    ("JPY", ("¥", "JPY")),
    ("SGD", ("S$", "SGD")),
    ("INR", ("₹", "INR")),
)

INTERVAL_KEYWORDS: tuple[tuple[str, Interval], ...] = (
    ("year", "year"),
    ("yearly", "year"),
    ("annually", "year"),
    ("annum", "year"),
    ("month", "month"),
    ("monthly", "month"),
    ("hour", "hour"),
    ("hourly", "hour"),
)

ANNUAL_FACTORS: dict[Interval, int] = {"year": 1, "month": 12, "hour": 2080}

_NUMBER_PATTERN = re.compile(r"\b\d[\d,]*k?\b", re.IGNORECASE)
_PER_YEAR = re.compile(r"per\s+year|p\.a\.|per\s+annum")
_PER_MONTH = re.compile(r"per\s+month")
_PER_HOUR = re.compile(r"per\s+hour")


@dataclass(frozen=True, slots=True)
class SalaryParseResult:
    """Normalized annual salary figures; every field is independently nullable."""

    min_annual: int | None
    max_annual: int | None
    currency: str | None
    interval: Interval | None = None
    ambiguities: tuple[ParseAmbiguityWarning, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, object]:
        return {
            "min_annual": self.min_annual,
            "max_annual": self.max_annual,
            "currency": self.currency,
            "interval": self.interval,
            "ambiguities": [
                {"reason": item.reason, "detail": item.detail} for item in self.ambiguities
            ],
        }


class SalaryTextParser:
    """Turn free-form salary fragments into annual figures plus currency."""

    def __init__(self) -> None:
        self._logger = structlog.get_logger(__name__)

    def parse(
        self,
        fragments: Sequence[str] | str,
        currency_hint: str | None = None,
    ) -> SalaryParseResult:
        if isinstance(fragments, str):
            fragments = [fragments]
        pieces = [piece for piece in fragments if piece]
        if not pieces and not currency_hint:
            return SalaryParseResult(None, None, None)

        combined = " • ".join(pieces).lower()
        currency = self.detect_currency(combined, currency_hint)
        numbers = self.extract_numbers(combined)
        if not numbers:
            return SalaryParseResult(None, None, currency)

        interval = self.detect_interval(combined)
        ambiguities: list[ParseAmbiguityWarning] = []
        if interval is None:
            ambiguities.append(
                ParseAmbiguityWarning("no_interval", "no pay interval keyword; assumed yearly")
            )
            interval = "year"
        if len(numbers) == 1:
            ambiguities.append(
                ParseAmbiguityWarning("single_amount", "only one amount; used as min and max")
            )
        elif len(numbers) > 2:
            ambiguities.append(
                ParseAmbiguityWarning(
                    "extra_amounts",
                    f"{len(numbers)} amounts found; kept the two smallest",
                )
            )

        low = numbers[0]
        high = numbers[1] if len(numbers) > 1 else numbers[0]
        factor = ANNUAL_FACTORS[interval]
        result = SalaryParseResult(
            min_annual=low * factor,
            max_annual=high * factor,
            currency=currency,
            interval=interval,
            ambiguities=tuple(ambiguities),
        )
        if ambiguities:
            self._logger.warning(
                "salary.parse_ambiguous",
                fragments=pieces,
                reasons=[item.reason for item in ambiguities],
                min_annual=result.min_annual,
                max_annual=result.max_annual,
            )
        return result

    @staticmethod
    def detect_currency(text: str, hint: str | None = None) -> str | None:
        for source in (hint, text):
            if not source:
                continue
            lowered = source.lower()
            for code, symbols in CURRENCY_SYMBOLS:
                if any(symbol.lower() in lowered for symbol in symbols):
                    return code
        return None

    @staticmethod
    def extract_numbers(text: str) -> list[int]:
        numbers: list[int] = []
        for token in _NUMBER_PATTERN.findall(text):
            raw = token.replace(",", "")
            multiplier = 1
            if raw.lower().endswith("k"):
                multiplier = 1000
                raw = raw[:-1]
            if not raw:
                continue
            value = int(raw) * multiplier
            if value > 0:
                numbers.append(value)
        return sorted(numbers)

    @staticmethod
    def detect_interval(text: str) -> Interval | None:
        for keyword, interval in INTERVAL_KEYWORDS:
            if keyword in text:
                return interval
        if _PER_YEAR.search(text):
            return "year"
        if _PER_MONTH.search(text):
            return "month"
        if _PER_HOUR.search(text):
            return "hour"
        return None


_DEFAULT_PARSER = SalaryTextParser()


def parse_salary_text(
    fragments: Iterable[str] | str,
    currency_hint: str | None = None,
) -> SalaryParseResult:
    """Module-level entry point backed by a shared parser."""
    if not isinstance(fragments, str):
        fragments = list(fragments)
    return _DEFAULT_PARSER.parse(fragments, currency_hint)


__all__ = [
    "ANNUAL_FACTORS",
    "CURRENCY_SYMBOLS",
    "Interval",
    "SalaryParseResult",
    "SalaryTextParser",
    "parse_salary_text",
]
