#!/usr/bin/env python3
"""
Bill Field Parser Module

Extracts the billed period, amount and currency from the visible text of one
bill line. The site's markup has changed several times, so line text is matched
against an ordered tuple of shapes and the first shape that matches wins.
"""

import logging
import re
from dataclasses import dataclass

from ..core.dates import FinancialDate
from ..core.money import Money
from .errors import UnparseableLine

logger = logging.getLogger(__name__)

DATE = r"(\d\d/\d\d/\d\d\d\d)"
# Decimal comma required; thousands separated by space, NBSP, narrow NBSP or dot
AMOUNT = r"(\d{1,3}(?:[ \xa0\u202f.]\d{3})+,\d\d|\d+,\d\d)"
# Amount and currency separated by ordinary or non-breaking whitespace
CURRENCY = r"[\s\xa0]+(\S+)"


@dataclass(frozen=True)
class LineShape:
    """One known layout of a free-text bill line."""

    name: str
    pattern: re.Pattern
    start_group: int
    end_group: int
    amount_group: int
    currency_group: int


# The billed period is the last date pair before the amount
PERIOD_THEN_AMOUNT = LineShape(
    name="period_then_amount",
    pattern=re.compile(r".*" + DATE + r".*?" + DATE + r".*?(?<![\d,])" + AMOUNT + CURRENCY, re.DOTALL),
    start_group=1,
    end_group=2,
    amount_group=3,
    currency_group=4,
)

AMOUNT_THEN_PERIOD = LineShape(
    name="amount_then_period",
    pattern=re.compile(r"(?<![\d/,])" + AMOUNT + CURRENCY + r".*?" + DATE + r".*?" + DATE, re.DOTALL),
    start_group=3,
    end_group=4,
    amount_group=1,
    currency_group=2,
)

LINE_SHAPES: tuple[LineShape, ...] = (PERIOD_THEN_AMOUNT, AMOUNT_THEN_PERIOD)

# Last date pair of the cell text
PERIOD_PATTERN = re.compile(r".*" + DATE + r".*?" + DATE, re.DOTALL)
AMOUNT_PATTERN = re.compile(r"^\s*" + AMOUNT + CURRENCY)


@dataclass(frozen=True)
class BillFields:
    """Billing fields read from one line: period, amount and currency."""

    start_date: FinancialDate
    end_date: FinancialDate
    amount: Money
    currency: str


def parse_date(date_str: str) -> FinancialDate:
    """
    Parse a DD/MM/YYYY token as a calendar date.

    Raises:
        UnparseableLine: If the token is not a real date (e.g. 31/02/2020)
    """
    try:
        return FinancialDate.from_french_string(date_str)
    except ValueError as e:
        raise UnparseableLine(f"Invalid date {date_str!r}: {e}") from e


def _build_period(start_str: str, end_str: str) -> tuple[FinancialDate, FinancialDate]:
    start_date = parse_date(start_str)
    end_date = parse_date(end_str)
    if start_date > end_date:
        raise UnparseableLine(f"Billed period starts after it ends: {start_date} > {end_date}")
    return start_date, end_date


def _build_amount(amount_str: str, currency: str) -> tuple[Money, str]:
    try:
        amount = Money.from_decimal_string(amount_str)
    except ValueError as e:
        raise UnparseableLine(str(e)) from e
    if amount.is_negative():
        raise UnparseableLine(f"Negative amount: {amount_str!r}")
    if not currency:
        raise UnparseableLine(f"Missing currency after amount {amount_str!r}")
    return amount, currency


def parse_line(text: str, shapes: tuple[LineShape, ...] = LINE_SHAPES) -> BillFields:
    """
    Parse the visible text of a bill line into period, amount and currency.

    Args:
        text: Trimmed text of one candidate line
        shapes: Ordered line shapes to try

    Returns:
        BillFields for the first matching shape

    Raises:
        UnparseableLine: If no shape matches or a matched value is invalid

    Example:
        parse_line("du 01/01/2020 au 31/01/2020 9,99 €")
        -> BillFields(2020-01-01, 2020-01-31, Money(cents=999), "€")
    """
    for shape in shapes:
        match = shape.pattern.search(text)
        if not match:
            continue

        logger.debug("Line matched shape %s: %r", shape.name, text)
        start_date, end_date = _build_period(match.group(shape.start_group), match.group(shape.end_group))
        amount, currency = _build_amount(match.group(shape.amount_group), match.group(shape.currency_group))
        return BillFields(start_date=start_date, end_date=end_date, amount=amount, currency=currency)

    raise UnparseableLine(f"No known line shape matches {text!r}")


def parse_period(text: str) -> tuple[FinancialDate, FinancialDate]:
    """
    Parse the billed period from a table cell holding two DD/MM/YYYY dates.

    Raises:
        UnparseableLine: If two dates cannot be found or they are invalid
    """
    match = PERIOD_PATTERN.search(text)
    if not match:
        raise UnparseableLine(f"No billed period in {text!r}")
    return _build_period(match.group(1), match.group(2))


def parse_amount(text: str) -> tuple[Money, str]:
    """
    Parse an amount cell such as "9,99\xa0€".

    Raises:
        UnparseableLine: If the cell does not start with an amount and a currency
    """
    match = AMOUNT_PATTERN.match(text)
    if not match:
        raise UnparseableLine(f"No amount and currency in {text!r}")
    return _build_amount(match.group(1), match.group(2))


def parse_row(period_text: str, amount_text: str) -> BillFields:
    """Parse a table row whose period and amount live in separate cells."""
    start_date, end_date = parse_period(period_text)
    amount, currency = parse_amount(amount_text)
    return BillFields(start_date=start_date, end_date=end_date, amount=amount, currency=currency)
