"""Case-level general information."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from custody_core.age import parse_date


class GeneralInfo(BaseModel):
    """Dates that apply to the whole case.

    The calculation as-of date drives every child's age and therefore the
    age-dependent defaults. It defaults to today.
    """

    model_config = {"frozen": True}

    case_date: Optional[date] = None
    calculation_as_of_date: Optional[date] = Field(default_factory=date.today)
    case_year_end: Optional[date] = None

    @field_validator("case_date", "calculation_as_of_date", "case_year_end", mode="before")
    @classmethod
    def parse_case_dates(cls, v):
        """Degrade missing or unparseable dates to None."""
        return parse_date(v)


__all__ = ["GeneralInfo"]
