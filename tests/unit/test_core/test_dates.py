#!/usr/bin/env python3
"""Tests for FinancialDate primitive type."""

from datetime import date

import pytest

from mediapart_bills.core.dates import FinancialDate


class TestFinancialDateConstruction:
    """Test FinancialDate construction."""

    @pytest.mark.parametrize(
        "constructor,expected_date",
        [
            (lambda: FinancialDate(date=date(2020, 1, 31)), date(2020, 1, 31)),
            (lambda: FinancialDate.from_string("2020-01-31"), date(2020, 1, 31)),
            (lambda: FinancialDate.from_string("31/01/2020", date_format="%d/%m/%Y"), date(2020, 1, 31)),
            (lambda: FinancialDate.from_french_string("31/01/2020"), date(2020, 1, 31)),
        ],
        ids=["from_date", "from_string", "from_string_custom_format", "from_french_string"],
    )
    def test_financial_date_construction(self, constructor, expected_date):
        fd = constructor()
        assert fd.date == expected_date

    def test_french_string_is_day_first(self):
        """01/02/2020 is the first of February, not the second of January."""
        assert FinancialDate.from_french_string("01/02/2020").date == date(2020, 2, 1)

    def test_impossible_date_rejected(self):
        with pytest.raises(ValueError):
            FinancialDate.from_french_string("31/02/2020")

    def test_today(self):
        assert FinancialDate.today().date == date.today()


class TestFinancialDateFormatting:
    """Test FinancialDate formatting."""

    def test_to_iso_string(self):
        fd = FinancialDate(date=date(2020, 1, 5))
        assert fd.to_iso_string() == "2020-01-05"
        assert str(fd) == "2020-01-05"

    def test_to_french_string(self):
        fd = FinancialDate(date=date(2020, 1, 5))
        assert fd.to_french_string() == "05/01/2020"

    def test_french_round_trip_is_stable(self):
        """Re-parsing the day-first form of a parsed date yields the same date."""
        fd = FinancialDate.from_french_string("29/02/2020")
        again = FinancialDate.from_french_string(fd.to_french_string())
        assert again == fd
        assert FinancialDate.from_string(again.to_iso_string()) == fd


class TestFinancialDateComparison:
    """Test FinancialDate comparison."""

    def test_ordering(self):
        d1 = FinancialDate(date=date(2020, 1, 1))
        d2 = FinancialDate(date=date(2020, 1, 31))
        assert d1 < d2
        assert d1 <= d1
        assert d2 > d1
        assert d2 >= d2

    def test_hashable(self):
        assert len({FinancialDate(date=date(2020, 1, 1)), FinancialDate(date=date(2020, 1, 1))}) == 1

    def test_age_days_with_another_date(self):
        old = FinancialDate(date=date(2020, 1, 1))
        new = FinancialDate(date=date(2020, 1, 31))
        assert old.age_days(new) == 30
