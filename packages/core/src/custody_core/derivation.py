"""Age-dependent defaults for child records.

Recomputes the fields of a child record that follow from its date of
birth, the case as-of date and the overnights split. The overnights split
itself is never changed here; only ``apply_overnights_edit`` changes it.
"""

from typing import Optional

import structlog

from .age import DateInput, age_of, parse_date
from .models import ChildRecord, Parent, YesNo

logger = structlog.get_logger()

CHILD_SUPPORT_AGE_LIMIT = 18
CHILD_CARE_CREDIT_AGE_LIMIT = 13


def default_custodial_parent(p1_percent: Optional[int]) -> Parent:
    """
    Default custodial parent for an overnights split.

    P1 only when P1 holds strictly more than 50% of overnights. An exact
    50/50 split resolves to P2.
    """
    return Parent.P1 if (p1_percent or 0) > 50 else Parent.P2


def derive_defaults(child: ChildRecord, as_of: DateInput = None) -> ChildRecord:
    """
    Recompute a child record's derived defaults.

    Steps, in order:
    1. Age against the effective as-of date: ``as_of`` if given, else the
       date stored on the record, else none (age 0/0).
    2. With both a date of birth and an as-of date: child support
       eligibility becomes YES under 18 (never demoted to NO), and the
       under-13 care credit flag is YES under 13 and NO otherwise.
    3. Custodial parent and dependent-of default to the parent with more
       than 50% of overnights (ties go to P2).

    Args:
        child: The record to derive from
        as_of: Case calculation as-of date

    Returns:
        A new ChildRecord with derived fields updated
    """
    effective_as_of = parse_date(as_of) or child.computed.calculation_as_of_date
    age = age_of(child.date_of_birth, effective_as_of)

    computed = child.computed.model_copy(
        update={
            "age_years": age.years,
            "age_months": age.months,
            "calculation_as_of_date": effective_as_of,
        }
    )

    support_updates: dict = {}
    care_updates: dict = {}

    if child.date_of_birth is not None and effective_as_of is not None:
        if age.years < CHILD_SUPPORT_AGE_LIMIT:
            support_updates["eligible"] = YesNo.YES
        care_updates["eligible_child_care_credit_under_13"] = (
            YesNo.YES if age.years < CHILD_CARE_CREDIT_AGE_LIMIT else YesNo.NO
        )

    custodial = default_custodial_parent(child.overnights.p1_percent)
    support_updates["custodial_parent"] = custodial
    care_updates["dependent_of"] = custodial

    derived = child.model_copy(
        update={
            "computed": computed,
            "child_support": child.child_support.model_copy(update=support_updates),
            "dependent_care": child.dependent_care.model_copy(update=care_updates),
        }
    )

    logger.debug(
        "child_defaults_derived",
        child_id=child.id,
        as_of=effective_as_of.isoformat() if effective_as_of else None,
        age_years=age.years,
        age_months=age.months,
        support_eligible=derived.child_support.eligible.value,
        care_credit_under_13=derived.dependent_care.eligible_child_care_credit_under_13.value,
        custodial_parent=custodial.value,
    )
    return derived


__all__ = [
    "CHILD_SUPPORT_AGE_LIMIT",
    "CHILD_CARE_CREDIT_AGE_LIMIT",
    "default_custodial_parent",
    "derive_defaults",
]
