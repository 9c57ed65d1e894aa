"""
Unit tests for tolerant date parsing.
"""

from datetime import datetime

import pytest

from zosale.domain.dates import parse_bound, parse_day_month_year, parse_expiry, parse_generic


class TestParseGeneric:
    def test_iso_date(self) -> None:
        assert parse_generic("2024-01-01") == datetime(2024, 1, 1)

    def test_ambiguous_date_is_month_first_by_default(self) -> None:
        assert parse_generic("02/10/2026") == datetime(2026, 2, 10)

    def test_ambiguous_date_day_first(self) -> None:
        assert parse_generic("02/10/2026", dayfirst=True) == datetime(2026, 10, 2)

    def test_iso_date_ignores_day_first(self) -> None:
        assert parse_generic("2026-03-01", dayfirst=True) == datetime(2026, 3, 1)
        assert parse_generic("2026-10-05T08:30:00", dayfirst=True) == datetime(2026, 10, 5, 8, 30)

    def test_partial_date_does_not_depend_on_today(self) -> None:
        assert parse_generic("2027") == datetime(2027, 1, 1)
        assert parse_generic("March 2027") == datetime(2027, 3, 1)

    def test_aware_datetime_normalised_to_naive_utc(self) -> None:
        assert parse_generic("2026-10-02T03:00:00+03:00") == datetime(2026, 10, 2, 0, 0)

    @pytest.mark.parametrize("text", ["", "   ", "not-a-date", "TBD"])
    def test_rejects_non_dates(self, text: str) -> None:
        with pytest.raises(ValueError):
            parse_generic(text)


class TestParseDayMonthYear:
    def test_splits_day_month_year(self) -> None:
        assert parse_day_month_year("02/10/2026") == datetime(2026, 10, 2)

    @pytest.mark.parametrize("text", ["2026-10-02", "31/02/2026", "aa/bb/cccc", "1/2"])
    def test_invalid_returns_none(self, text: str) -> None:
        assert parse_day_month_year(text) is None


class TestParseExpiry:
    def test_generic_parse_first(self) -> None:
        assert parse_expiry("2026-03-15") == datetime(2026, 3, 15)

    def test_unparseable_returns_none(self) -> None:
        assert parse_expiry("not-a-date") is None
        assert parse_expiry("") is None
        assert parse_expiry(None) is None

    def test_day_first_values(self) -> None:
        assert parse_expiry("25/12/2026") == datetime(2026, 12, 25)


class TestParseBound:
    def test_blank_bound_is_none(self) -> None:
        assert parse_bound(None) is None
        assert parse_bound("") is None
        assert parse_bound("  ") is None

    def test_valid_bound(self) -> None:
        assert parse_bound("2027-01-01") == datetime(2027, 1, 1)

    def test_malformed_bound_raises(self) -> None:
        with pytest.raises(ValueError):
            parse_bound("someday")

    def test_iso_bound_with_day_first_locale(self) -> None:
        assert parse_bound("2026-03-01", dayfirst=True) == datetime(2026, 3, 1)
        assert parse_bound("01/03/2026", dayfirst=True) == datetime(2026, 3, 1)

    def test_partial_bound_resolves_to_first_of_january(self) -> None:
        assert parse_bound("2027") == datetime(2027, 1, 1)
