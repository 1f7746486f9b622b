"""Tests for calendar age calculation."""

from datetime import date, datetime

import pytest

from custody_core.age import Age, age_of, is_under_age, parse_date


class TestParseDate:
    """Tests for parse_date."""

    def test_parses_iso_date_string(self):
        """Should parse YYYY-MM-DD strings."""
        assert parse_date("2010-06-15") == date(2010, 6, 15)

    def test_parses_iso_datetime_string(self):
        """Should take the date part of an ISO datetime."""
        assert parse_date("2010-06-15T08:30:00") == date(2010, 6, 15)

    def test_passes_dates_through(self):
        """Should return date objects unchanged and truncate datetimes."""
        assert parse_date(date(2020, 1, 2)) == date(2020, 1, 2)
        assert parse_date(datetime(2020, 1, 2, 23, 59)) == date(2020, 1, 2)

    @pytest.mark.parametrize("value", [None, "", "   ", "not a date", "2024-13-01", 20240101])
    def test_missing_or_bad_input_is_none(self, value):
        """Missing or unparseable input should degrade to None."""
        assert parse_date(value) is None


class TestAgeOf:
    """Tests for age_of."""

    def test_day_before_birthday(self):
        """The day before a birthday is 11 whole months past the last one."""
        assert age_of("2010-06-15", "2024-06-14") == (13, 11)

    def test_on_birthday(self):
        """On the birthday the age rolls over with zero months."""
        assert age_of("2010-06-15", "2024-06-15") == (14, 0)

    def test_returns_named_tuple(self):
        """Result should expose years and months by name."""
        age = age_of("2010-06-15", "2024-09-20")
        assert isinstance(age, Age)
        assert age.years == 14
        assert age.months == 3

    def test_month_borrow_across_year_boundary(self):
        """A January as-of date before the birth month borrows a year."""
        assert age_of("2010-11-20", "2024-01-10") == (13, 1)

    def test_same_day(self):
        """A child born on the as-of date is 0 years, 0 months."""
        assert age_of("2024-03-01", "2024-03-01") == (0, 0)

    def test_accepts_date_objects(self):
        """Should accept date objects as well as strings."""
        assert age_of(date(2000, 2, 29), date(2024, 2, 28)) == (23, 11)

    def test_as_of_before_dob_is_zero(self):
        """An as-of date before the date of birth should give 0/0."""
        assert age_of("2024-06-15", "2020-01-01") == (0, 0)

    @pytest.mark.parametrize(
        "dob, as_of",
        [("", "2024-01-01"), ("2010-01-01", ""), (None, None), ("garbage", "2024-01-01")],
    )
    def test_missing_dates_are_zero(self, dob, as_of):
        """Missing or unparseable dates should give 0/0."""
        assert age_of(dob, as_of) == (0, 0)


class TestIsUnderAge:
    """Tests for is_under_age."""

    def test_under_threshold(self):
        """Age 12 is under 13."""
        assert is_under_age("2012-01-01", "2024-06-01", 13) is True

    def test_at_threshold(self):
        """Age exactly 13 is not under 13."""
        assert is_under_age("2011-06-01", "2024-06-01", 13) is False

    def test_missing_dates_count_as_age_zero(self):
        """Missing dates give age 0, which is under any positive threshold."""
        assert is_under_age("", "2024-06-01", 18) is True
