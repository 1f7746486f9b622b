"""Child record models for a child-support case.

This module provides the immutable data structures a case is built from:
- The overnights custody split between the two parents
- Child support and dependent care facts for a child
- Age values derived from the date of birth
- The child record that ties them together

Records are frozen. Every edit produces a new record through
``model_copy(update=...)`` or ``model_validate``, so derived fields can be
recomputed and audited in isolation.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional
from uuid import uuid4

import structlog
from pydantic import BaseModel, Field, computed_field, field_validator, model_validator

from custody_core.age import parse_date

logger = structlog.get_logger()

DAYS_IN_YEAR = 365
DAYS_IN_SHARED_YEAR = 366
HALF_SHARED_YEAR_DAYS = 183

# Entered amounts at or above this magnitude are treated as absent.
MAX_AMOUNT = Decimal("1e12")


class RelationshipType(str, Enum):
    """Which relationship a child belongs to.

    THIS children are shared with the case's primary relationship; OTHER
    children come from a different relationship.
    """

    THIS = "THIS"
    OTHER = "OTHER"


class YesNo(str, Enum):
    """Yes/no answer as entered on the case forms."""

    YES = "YES"
    NO = "NO"


class Parent(str, Enum):
    """The two parents in a case."""

    P1 = "P1"
    P2 = "P2"

    @property
    def other(self) -> "Parent":
        """Return the opposite parent."""
        return Parent.P2 if self is Parent.P1 else Parent.P1


def _coerce_decimal(v: Any) -> Decimal:
    """Coerce a user-entered amount to Decimal, treating absent data as 0."""
    if v is None or isinstance(v, bool):
        return Decimal("0")
    if isinstance(v, Decimal):
        result = v
    elif isinstance(v, (int, float)):
        result = Decimal(str(v))
    elif isinstance(v, str):
        if not v.strip():
            return Decimal("0")
        try:
            result = Decimal(v.strip())
        except InvalidOperation:
            logger.warning("amount_unparseable", raw_value=v)
            return Decimal("0")
    else:
        logger.warning("amount_unsupported_type", raw_type=type(v).__name__)
        return Decimal("0")

    if not result.is_finite():
        logger.warning("amount_not_finite", raw_value=str(v))
        return Decimal("0")
    if abs(result) >= MAX_AMOUNT:
        logger.warning("amount_out_of_range", raw_value=str(v))
        return Decimal("0")
    return result


class Overnights(BaseModel):
    """Custody-night split between the two parents.

    The split is expressed both as whole percents and as whole days. The
    two pairs always agree: percents sum to 100 and days sum to the
    year length. The year length is 366 only for an exact 50/50 split
    (183/183 days) and 365 otherwise.
    """

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {"p1_percent": 60, "p2_percent": 40, "p1_days": 219, "p2_days": 146}
            ]
        },
    }

    p1_percent: int = Field(default=50, ge=0, le=100, description="P1 share of overnights (%)")
    p2_percent: int = Field(default=50, ge=0, le=100, description="P2 share of overnights (%)")
    p1_days: int = Field(
        default=HALF_SHARED_YEAR_DAYS,
        ge=0,
        le=DAYS_IN_SHARED_YEAR,
        description="Overnights with P1 per year",
    )
    p2_days: int = Field(
        default=HALF_SHARED_YEAR_DAYS,
        ge=0,
        le=DAYS_IN_SHARED_YEAR,
        description="Overnights with P2 per year",
    )

    @computed_field
    @property
    def total_days(self) -> int:
        """Year length the day pair is measured against."""
        if self.p1_percent == 50 and self.p2_percent == 50:
            return DAYS_IN_SHARED_YEAR
        return DAYS_IN_YEAR

    @property
    def is_even_split(self) -> bool:
        """True for the exact 50/50 split."""
        return self.total_days == DAYS_IN_SHARED_YEAR

    def percent_for(self, parent: Parent) -> int:
        """Overnights percent held by ``parent``."""
        return self.p1_percent if parent is Parent.P1 else self.p2_percent

    def days_for(self, parent: Parent) -> int:
        """Overnights days held by ``parent``."""
        return self.p1_days if parent is Parent.P1 else self.p2_days

    @model_validator(mode="after")
    def check_split_is_consistent(self) -> "Overnights":
        """Reject splits whose percents or days do not add up."""
        if self.p1_percent + self.p2_percent != 100:
            raise ValueError(
                f"Percents must sum to 100, got {self.p1_percent} + {self.p2_percent}"
            )
        if self.p1_days + self.p2_days != self.total_days:
            raise ValueError(
                f"Days must sum to {self.total_days}, got {self.p1_days} + {self.p2_days}"
            )
        return self


class ChildSupport(BaseModel):
    """Child support facts for a child."""

    model_config = {"frozen": True}

    eligible: YesNo = Field(default=YesNo.YES, description="Eligible for child support")
    reason_if_over_18: str = Field(
        default="",
        description="Free-text reason a child over 18 remains eligible",
    )
    custodial_parent: Parent = Field(default=Parent.P1, description="Custodial parent")


class DependentCare(BaseModel):
    """Dependent care costs and credit eligibility for a child.

    Amounts are stored as Decimal. Missing, unparseable or implausibly large
    amounts are treated as absent data and stored as 0.
    """

    model_config = {"frozen": True}

    dependent_of: Parent = Field(default=Parent.P1, description="Parent claiming the child")
    form_8332: bool = Field(
        default=False,
        description="Custodial parent released the claim with Form 8332",
    )
    eligible_child_care_credit_under_13: YesNo = Field(
        default=YesNo.YES,
        description="Child is under 13 for the child and dependent care credit",
    )
    meets_qualifying_criteria_if_overridden: bool = Field(
        default=False,
        description="Qualifies for the care credit despite the age default",
    )
    percent_of_year_eligible: Decimal = Field(
        default=Decimal("100"),
        description="Share of the year the child was care-credit eligible (%)",
    )
    paid_by_p1: Decimal = Field(default=Decimal("0"), description="Care costs paid by P1")
    paid_by_p2: Decimal = Field(default=Decimal("0"), description="Care costs paid by P2")
    p1_fsa_benefits: Decimal = Field(
        default=Decimal("0"),
        description="P1 dependent care FSA reimbursements",
    )
    p2_fsa_benefits: Decimal = Field(
        default=Decimal("0"),
        description="P2 dependent care FSA reimbursements",
    )
    eligible_child_tax_credit: bool = True
    eligible_other_dependent_tax_credit: bool = False
    eligible_eic: bool = True

    @field_validator(
        "percent_of_year_eligible",
        "paid_by_p1",
        "paid_by_p2",
        "p1_fsa_benefits",
        "p2_fsa_benefits",
        mode="before",
    )
    @classmethod
    def coerce_amount_to_decimal(cls, v):
        """Coerce entered amounts to Decimal."""
        return _coerce_decimal(v)

    def paid_by(self, parent: Parent) -> Decimal:
        """Care costs paid by ``parent``."""
        return self.paid_by_p1 if parent is Parent.P1 else self.paid_by_p2

    def fsa_benefits(self, parent: Parent) -> Decimal:
        """FSA benefits received by ``parent``."""
        return self.p1_fsa_benefits if parent is Parent.P1 else self.p2_fsa_benefits


class ChildComputed(BaseModel):
    """Values derived from the child's facts."""

    model_config = {"frozen": True}

    age_years: int = Field(default=0, ge=0)
    age_months: int = Field(default=0, ge=0, le=11)
    calculation_as_of_date: Optional[date] = Field(
        default=None,
        description="Date the age was computed against",
    )

    @field_validator("calculation_as_of_date", mode="before")
    @classmethod
    def parse_as_of_date(cls, v):
        """Degrade missing or unparseable dates to None."""
        return parse_date(v)


class ChildValidation(BaseModel):
    """Validation messages surfaced on the child form."""

    model_config = {"frozen": True}

    overnights_error: str = ""


class ChildRecord(BaseModel):
    """A child in the case, as a draft or as a finalized record."""

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "relationship_type": "THIS",
                    "name": "Avery",
                    "date_of_birth": "2015-03-02",
                    "overnights": {
                        "p1_percent": 60,
                        "p2_percent": 40,
                        "p1_days": 219,
                        "p2_days": 146,
                    },
                }
            ]
        },
    }

    id: str = Field(default_factory=lambda: uuid4().hex)
    relationship_type: RelationshipType = RelationshipType.THIS
    name: str = ""
    date_of_birth: Optional[date] = None
    full_time_student: YesNo = YesNo.NO
    overnights: Overnights = Field(default_factory=Overnights)
    child_support: ChildSupport = Field(default_factory=ChildSupport)
    dependent_care: DependentCare = Field(default_factory=DependentCare)
    computed: ChildComputed = Field(default_factory=ChildComputed)
    validation: ChildValidation = Field(default_factory=ChildValidation)

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def parse_date_of_birth(cls, v):
        """Degrade missing or unparseable dates to None."""
        return parse_date(v)

    @property
    def is_this_relationship(self) -> bool:
        """True for children of the case's primary relationship."""
        return self.relationship_type is RelationshipType.THIS

    @property
    def label(self) -> str:
        """Display label, e.g. ``THIS: Avery``."""
        return f"{self.relationship_type.value}: {self.name or '-'}"


__all__ = [
    "DAYS_IN_YEAR",
    "DAYS_IN_SHARED_YEAR",
    "HALF_SHARED_YEAR_DAYS",
    "MAX_AMOUNT",
    "RelationshipType",
    "YesNo",
    "Parent",
    "Overnights",
    "ChildSupport",
    "DependentCare",
    "ChildComputed",
    "ChildValidation",
    "ChildRecord",
]
