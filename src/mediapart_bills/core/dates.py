#!/usr/bin/env python3
"""
FinancialDate Primitive Type

Immutable calendar-date wrapper with consistent formatting.
Dates are plain calendar days: no time of day, no timezone shift.
"""

from dataclasses import dataclass
from datetime import date, datetime

# Day-first format used on Mediapart billing pages
FRENCH_DATE_FORMAT = "%d/%m/%Y"


@dataclass(frozen=True)
class FinancialDate:
    """Immutable calendar date wrapper with consistent formatting."""

    date: date

    @classmethod
    def from_string(cls, date_str: str, date_format: str = "%Y-%m-%d") -> "FinancialDate":
        """
        Parse from string in specified format.

        Args:
            date_str: Date string to parse
            date_format: Date format (default: ISO format "%Y-%m-%d")

        Returns:
            FinancialDate object

        Raises:
            ValueError: If the string does not match the format or is not a real date
        """
        return cls(date=datetime.strptime(date_str, date_format).date())

    @classmethod
    def from_french_string(cls, date_str: str) -> "FinancialDate":
        """Parse a DD/MM/YYYY date."""
        return cls.from_string(date_str, date_format=FRENCH_DATE_FORMAT)

    @classmethod
    def today(cls) -> "FinancialDate":
        """Get today's date."""
        return cls(date=date.today())

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DD."""
        return self.date.isoformat()

    def to_french_string(self) -> str:
        """Format as DD/MM/YYYY."""
        return self.date.strftime(FRENCH_DATE_FORMAT)

    def age_days(self, other: "FinancialDate | None" = None) -> int:
        """
        Calculate days between this date and another (or today).

        Args:
            other: Other date to compare to (default: today)

        Returns:
            Number of days difference
        """
        if other is None:
            other = FinancialDate.today()
        return (other.date - self.date).days

    def __str__(self) -> str:
        return self.to_iso_string()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FinancialDate):
            return NotImplemented
        return self.date == other.date

    def __hash__(self) -> int:
        return hash(self.date)

    def __lt__(self, other: "FinancialDate") -> bool:
        return self.date < other.date

    def __le__(self, other: "FinancialDate") -> bool:
        return self.date <= other.date

    def __gt__(self, other: "FinancialDate") -> bool:
        return self.date > other.date

    def __ge__(self, other: "FinancialDate") -> bool:
        return self.date >= other.date

    def __repr__(self) -> str:
        return f"FinancialDate(date={self.date!r})"
