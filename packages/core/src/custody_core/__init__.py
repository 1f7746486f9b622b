"""Custody Core - Child support and tax credit summary rules."""

__version__ = "0.1.0"

from .age import Age, age_of
from .derivation import default_custodial_parent, derive_defaults
from .exceptions import CustodyCoreError, DraftStateError, ValidationError
from .models import ChildRecord, Overnights, Parent, RelationshipType, SummaryRow, TotalsRow
from .overnights import OvernightsEditResult, OvernightsField, apply_overnights_edit
from .session import CaseSession
from .summary import SummaryCalculator, build_summary, build_summary_table, totals

__all__ = [
    "Age",
    "age_of",
    "default_custodial_parent",
    "derive_defaults",
    "CustodyCoreError",
    "DraftStateError",
    "ValidationError",
    "ChildRecord",
    "Overnights",
    "Parent",
    "RelationshipType",
    "SummaryRow",
    "TotalsRow",
    "OvernightsEditResult",
    "OvernightsField",
    "apply_overnights_edit",
    "CaseSession",
    "SummaryCalculator",
    "build_summary",
    "build_summary_table",
    "totals",
]
