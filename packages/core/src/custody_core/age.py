"""Calendar age calculation.

Ages are whole calendar years and months between a date of birth and an
as-of date. Missing or unparseable dates are absent data and give an age of
zero rather than an error.
"""

from datetime import date, datetime
from typing import NamedTuple, Optional, Union

import structlog

logger = structlog.get_logger()

DateInput = Union[date, datetime, str, None]


class Age(NamedTuple):
    """Whole years and remaining whole months."""

    years: int
    months: int


ZERO_AGE = Age(0, 0)


def parse_date(value: DateInput) -> Optional[date]:
    """Parse an ISO calendar date, returning None for missing or bad input.

    Accepts ``date`` and ``datetime`` objects as well as ``YYYY-MM-DD`` and
    ISO 8601 datetime strings.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        logger.debug("date_unsupported_type", raw_type=type(value).__name__)
        return None

    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        logger.debug("date_unparseable", raw_value=value)
        return None


def age_of(dob: DateInput, as_of: DateInput) -> Age:
    """
    Calculate age in whole years and months.

    Years are counted as whole calendar years between the two dates. The
    month remainder drops by one when the as-of day of month is before the
    birth day of month, borrowing a year when it goes negative.

    Args:
        dob: Date of birth
        as_of: Date the age is measured at

    Returns:
        Age(years, months), or Age(0, 0) when either date is missing,
        unparseable or as_of precedes dob
    """
    dob_date = parse_date(dob)
    as_of_date = parse_date(as_of)
    if dob_date is None or as_of_date is None:
        return ZERO_AGE

    years = as_of_date.year - dob_date.year
    months = as_of_date.month - dob_date.month

    if as_of_date.day < dob_date.day:
        months -= 1
    if months < 0:
        years -= 1
        months += 12

    if years < 0:
        return ZERO_AGE
    return Age(years, months)


def is_under_age(dob: DateInput, as_of: DateInput, threshold_years: int) -> bool:
    """True if the whole-year age is below ``threshold_years``."""
    return age_of(dob, as_of).years < threshold_years


__all__ = ["Age", "ZERO_AGE", "DateInput", "parse_date", "age_of", "is_under_age"]
