"""Data models for custody-core.

This package provides the immutable structures the rule core works on:
- Child records and their overnights split (child.py)
- Case-level general information (case.py)
- Summary rows, totals and calculation audit steps (summary.py)
"""

from custody_core.models.child import (
    # Constants
    DAYS_IN_YEAR,
    DAYS_IN_SHARED_YEAR,
    HALF_SHARED_YEAR_DAYS,
    MAX_AMOUNT,
    # Enumerations
    RelationshipType,
    YesNo,
    Parent,
    # Child record
    Overnights,
    ChildSupport,
    DependentCare,
    ChildComputed,
    ChildValidation,
    ChildRecord,
)
from custody_core.models.case import GeneralInfo
from custody_core.models.summary import (
    NotApplicable,
    NOT_APPLICABLE,
    SummaryCell,
    SUMMARY_COLUMNS,
    MONEY_COLUMNS,
    COLUMN_LABELS,
    CalculationStep,
    SummaryRow,
    TotalsRow,
    SummaryTable,
)

__all__ = [
    # Constants
    "DAYS_IN_YEAR",
    "DAYS_IN_SHARED_YEAR",
    "HALF_SHARED_YEAR_DAYS",
    "MAX_AMOUNT",
    # Enumerations
    "RelationshipType",
    "YesNo",
    "Parent",
    # Child record
    "Overnights",
    "ChildSupport",
    "DependentCare",
    "ChildComputed",
    "ChildValidation",
    "ChildRecord",
    # Case
    "GeneralInfo",
    # Summary
    "NotApplicable",
    "NOT_APPLICABLE",
    "SummaryCell",
    "SUMMARY_COLUMNS",
    "MONEY_COLUMNS",
    "COLUMN_LABELS",
    "CalculationStep",
    "SummaryRow",
    "TotalsRow",
    "SummaryTable",
]
