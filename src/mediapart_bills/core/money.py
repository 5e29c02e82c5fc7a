#!/usr/bin/env python3
"""
Money Primitive Type

Immutable amount wrapper that uses integer cents internally.
Prevents floating-point errors and provides type-safe amount operations.
The currency token travels separately (see BillingRecord.currency).
"""

from dataclasses import dataclass

from .currency import (
    cents_to_amount,
    cents_to_decimal_str,
    parse_decimal_to_cents,
)


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in cents.

    Examples:
        >>> price = Money.from_decimal_string("9,99")
        >>> price.to_cents()
        999
        >>> str(price)
        '9.99'
        >>> price.to_amount()
        9.99
    """

    cents: int

    @classmethod
    def from_cents(cls, cents: int) -> "Money":
        """Create Money from cents."""
        return cls(cents=cents)

    @classmethod
    def from_decimal_string(cls, amount_str: str, decimal_separator: str = ",") -> "Money":
        """
        Parse from a locale-formatted amount string like '9,99' or '1 234,56'.

        Raises:
            ValueError: If the string is not a valid amount
        """
        return cls(cents=parse_decimal_to_cents(amount_str, decimal_separator))

    def to_cents(self) -> int:
        """Get value in cents."""
        return self.cents

    def to_amount(self) -> float:
        """Get value as a decimal number (JSON export only)."""
        return cents_to_amount(self.cents)

    def is_negative(self) -> bool:
        return self.cents < 0

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects."""
        return Money(cents=self.cents + other.cents)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two Money objects."""
        return Money(cents=self.cents - other.cents)

    def __lt__(self, other: "Money") -> bool:
        return self.cents < other.cents

    def __le__(self, other: "Money") -> bool:
        return self.cents <= other.cents

    def __gt__(self, other: "Money") -> bool:
        return self.cents > other.cents

    def __ge__(self, other: "Money") -> bool:
        return self.cents >= other.cents

    def __str__(self) -> str:
        """Format as a plain decimal string."""
        return cents_to_decimal_str(self.cents)

    def __repr__(self) -> str:
        return f"Money(cents={self.cents})"
