#!/usr/bin/env python3
"""
Currency Parsing and Formatting Utilities

Locale-aware amount handling for the bills scraper.
All amounts are held as integer cents to avoid floating-point errors.

Amount formats seen on French billing pages:
- Decimal comma: "9,99"
- Thousands separated by space, non-breaking space or dot: "1 234,56", "1.234,56"
- Whole amounts without decimals: "12"

Key Principles:
- Never use floating-point arithmetic for currency calculations
- Parse with integer arithmetic only
- Convert to a decimal number only at the JSON export boundary
"""

import re

# Characters used as thousands separators on French pages
THOUSANDS_SEPARATORS = (" ", "\xa0", "\u202f", ".")

_AMOUNT_PATTERN = re.compile(r"^(\d+)(?:,(\d{1,2}))?$")


def parse_decimal_to_cents(amount_str: str, decimal_separator: str = ",") -> int:
    """
    Parse a locale-formatted amount string into integer cents.

    Args:
        amount_str: Amount like "9,99", "1 234,56" or "12"
        decimal_separator: Decimal separator used by the source (default: ",")

    Returns:
        Amount in integer cents

    Raises:
        ValueError: If the string is not a non-negative amount

    Example:
        parse_decimal_to_cents("9,99") -> 999
    """
    if amount_str is None:
        raise ValueError("Amount string is required")

    clean_str = amount_str.strip()
    if decimal_separator != ",":
        # Normalise to the comma form the pattern expects
        clean_str = clean_str.replace(",", "").replace(decimal_separator, ",")
    for separator in THOUSANDS_SEPARATORS:
        if separator != decimal_separator:
            clean_str = clean_str.replace(separator, "")

    match = _AMOUNT_PATTERN.match(clean_str)
    if not match:
        raise ValueError(f"Invalid amount format: {amount_str!r}")

    units = int(match.group(1))
    cents_str = match.group(2) or "0"
    # Pad cents to 2 digits (e.g., "5" becomes "50")
    if len(cents_str) == 1:
        cents_str = cents_str + "0"
    return units * 100 + int(cents_str)


def cents_to_decimal_str(cents: int, decimal_separator: str = ".") -> str:
    """
    Convert cents to a decimal string using pure integer arithmetic.

    Example:
        cents_to_decimal_str(999) -> "9.99"
        cents_to_decimal_str(999, ",") -> "9,99"
    """
    is_negative = cents < 0
    abs_cents = abs(int(cents))

    units = abs_cents // 100
    remainder = abs_cents % 100

    sign = "-" if is_negative else ""
    return f"{sign}{units}{decimal_separator}{remainder:02d}"


def cents_to_amount(cents: int) -> float:
    """
    Convert cents to a decimal number for JSON export.

    Only used when serialising records for downstream consumers that expect a
    plain number; never use the result for arithmetic.

    Example:
        cents_to_amount(999) -> 9.99
    """
    return float(cents_to_decimal_str(cents))


def amount_to_cents(amount: float | int | str) -> int:
    """
    Convert an exported decimal amount back to integer cents.

    Inverse of cents_to_amount(); goes through the string form so that
    9.99 becomes 999 and not 998.

    Example:
        amount_to_cents(9.99) -> 999
    """
    if isinstance(amount, str):
        return parse_decimal_to_cents(amount, decimal_separator=".")
    return parse_decimal_to_cents(f"{amount:.2f}", decimal_separator=".")
