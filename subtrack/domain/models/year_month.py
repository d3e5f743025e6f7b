"""Calendar month value object used for subscription periods."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date

from ..errors import ValidationError

_WIRE_FORMAT = re.compile(r"^(\d{2})-(\d{4})$")


def month_ordinal(year: int, month: int) -> int:
    """Encode a calendar month as ``year * 12 + month``; the year is unbounded."""
    if isinstance(year, bool) or not isinstance(year, int):
        raise ValidationError(f"year must be an integer, got {year!r}")
    if isinstance(month, bool) or not isinstance(month, int):
        raise ValidationError(f"month must be an integer, got {month!r}")
    if not 1 <= month <= 12:
        raise ValidationError(f"month must be between 1 and 12, got {month}")
    return year * 12 + month


@dataclass(frozen=True, slots=True)
class YearMonth:
    """
    A calendar month without day-of-month precision.

    Attributes:
        year: Four digit calendar year (1 through 9999, to fit ``MM-YYYY``)
        month: Month number, 1 through 12
    """

    year: int
    month: int

    def __post_init__(self) -> None:
        month_ordinal(self.year, self.month)
        if not 1 <= self.year <= 9999:
            raise ValidationError(f"year must be between 1 and 9999, got {self.year}")

    @property
    def ordinal(self) -> int:
        """Single integer that orders months across year boundaries."""
        return month_ordinal(self.year, self.month)

    @classmethod
    def parse(cls, value: str) -> "YearMonth":
        """Parse the ``MM-YYYY`` representation used by the HTTP API."""
        match = _WIRE_FORMAT.match(value.strip()) if isinstance(value, str) else None
        if match is None:
            raise ValidationError(f"invalid month {value!r}, expected MM-YYYY")
        return cls(year=int(match.group(2)), month=int(match.group(1)))

    @classmethod
    def from_date(cls, value: date) -> "YearMonth":
        return cls(year=value.year, month=value.month)

    def format(self) -> str:
        return f"{self.month:02d}-{self.year:04d}"

    def __str__(self) -> str:
        return self.format()

    def __lt__(self, other: "YearMonth") -> bool:
        if not isinstance(other, YearMonth):
            return NotImplemented
        return self.ordinal < other.ordinal

    def __le__(self, other: "YearMonth") -> bool:
        if not isinstance(other, YearMonth):
            return NotImplemented
        return self.ordinal <= other.ordinal

    def __gt__(self, other: "YearMonth") -> bool:
        if not isinstance(other, YearMonth):
            return NotImplemented
        return self.ordinal > other.ordinal

    def __ge__(self, other: "YearMonth") -> bool:
        if not isinstance(other, YearMonth):
            return NotImplemented
        return self.ordinal >= other.ordinal
