"""Tests for child record models."""

from datetime import date
from decimal import Decimal

import pytest

from custody_core.models import (
    ChildRecord,
    DependentCare,
    GeneralInfo,
    Overnights,
    Parent,
    RelationshipType,
    YesNo,
)


class TestEnums:
    """Tests for the string enums."""

    def test_string_values(self):
        """Enums compare equal to their form values."""
        assert RelationshipType.THIS == "THIS"
        assert YesNo.NO == "NO"
        assert Parent.P2 == "P2"

    def test_other_parent(self):
        """Parent.other flips the parent."""
        assert Parent.P1.other == Parent.P2
        assert Parent.P2.other == Parent.P1


class TestOvernights:
    """Tests for the Overnights invariants."""

    def test_default_is_even_split(self):
        """The default split is 50/50 over 366 days."""
        overnights = Overnights()

        assert (overnights.p1_days, overnights.p2_days) == (183, 183)
        assert overnights.total_days == 366
        assert overnights.is_even_split is True

    def test_uneven_split_uses_365_days(self):
        """Any other split is measured against 365 days."""
        overnights = Overnights(p1_percent=60, p2_percent=40, p1_days=219, p2_days=146)

        assert overnights.total_days == 365
        assert overnights.percent_for(Parent.P2) == 40
        assert overnights.days_for(Parent.P1) == 219

    @pytest.mark.parametrize(
        "values",
        [
            {"p1_percent": 60, "p2_percent": 50, "p1_days": 219, "p2_days": 146},
            {"p1_percent": 60, "p2_percent": 40, "p1_days": 219, "p2_days": 147},
            {"p1_percent": 50, "p2_percent": 50, "p1_days": 182, "p2_days": 183},
            {"p1_percent": 60, "p2_percent": 40, "p1_days": 183, "p2_days": 183},
            {"p1_percent": 101, "p2_percent": -1, "p1_days": 365, "p2_days": 0},
        ],
    )
    def test_inconsistent_split_rejected(self, values):
        """Splits that do not add up cannot be constructed."""
        with pytest.raises(ValueError):
            Overnights(**values)

    def test_frozen(self):
        """Overnights cannot be mutated in place."""
        overnights = Overnights()
        with pytest.raises(ValueError):
            overnights.p1_percent = 60

    def test_total_days_in_dump(self):
        """The year length is serialized with the split."""
        assert Overnights().model_dump()["total_days"] == 366


class TestDependentCare:
    """Tests for amount coercion."""

    def test_coerces_text_and_numbers(self):
        """Text and numbers become Decimal."""
        care = DependentCare(paid_by_p1="1000.50", paid_by_p2=250, p1_fsa_benefits=12.5)

        assert care.paid_by_p1 == Decimal("1000.50")
        assert care.paid_by_p2 == Decimal("250")
        assert care.p1_fsa_benefits == Decimal("12.5")

    @pytest.mark.parametrize("value", [None, "", "  ", "abc", "NaN", float("inf"), "1e30", "-1e12"])
    def test_absent_amounts_are_zero(self, value):
        """Missing or malformed amounts are treated as 0."""
        assert DependentCare(paid_by_p1=value).paid_by_p1 == Decimal("0")

    def test_per_parent_accessors(self):
        """paid_by and fsa_benefits select by parent."""
        care = DependentCare(paid_by_p2="30", p2_fsa_benefits="5")

        assert care.paid_by(Parent.P2) == Decimal("30")
        assert care.paid_by(Parent.P1) == Decimal("0")
        assert care.fsa_benefits(Parent.P2) == Decimal("5")


class TestChildRecord:
    """Tests for ChildRecord."""

    def test_defaults(self):
        """A blank record has an id and default blocks."""
        child = ChildRecord()

        assert child.id
        assert child.relationship_type == RelationshipType.THIS
        assert child.full_time_student == YesNo.NO
        assert child.date_of_birth is None
        assert child.validation.overnights_error == ""

    def test_ids_are_unique(self):
        """Each record gets its own id."""
        assert ChildRecord().id != ChildRecord().id

    def test_date_parsing(self):
        """ISO dates are parsed and bad dates degrade to None."""
        assert ChildRecord(date_of_birth="2015-03-02").date_of_birth == date(2015, 3, 2)
        assert ChildRecord(date_of_birth="03/02/2015").date_of_birth is None

    def test_label(self):
        """The label combines relationship and name."""
        assert ChildRecord(relationship_type="OTHER", name="Blake").label == "OTHER: Blake"

    def test_round_trips_through_dump(self):
        """A dumped record validates back to an equal record."""
        child = ChildRecord(name="Avery", dependent_care=DependentCare(paid_by_p1="10"))
        assert ChildRecord.model_validate(child.model_dump()) == child


class TestGeneralInfo:
    """Tests for GeneralInfo."""

    def test_as_of_defaults_to_today(self):
        """The calculation as-of date defaults to today."""
        assert GeneralInfo().calculation_as_of_date == date.today()

    def test_blank_dates(self):
        """Blank dates are None."""
        info = GeneralInfo(case_date="", calculation_as_of_date="")
        assert info.case_date is None
        assert info.calculation_as_of_date is None
