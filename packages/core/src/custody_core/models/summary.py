"""Summary table models.

Summary rows are derived from finalized child records for one parent at a
time. They are never stored; recompute them whenever the children change.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field

from custody_core.models.child import Parent, RelationshipType


def _utc_now() -> datetime:
    """Return current UTC datetime with timezone info."""
    return datetime.now(timezone.utc)


class NotApplicable(str, Enum):
    """Marker for a summary cell that does not apply to the child.

    Counts as 0 in totals but renders distinctly from 0.
    """

    NA = "-"

    def __str__(self) -> str:
        return self.value


NOT_APPLICABLE = NotApplicable.NA

SummaryCell = Union[NotApplicable, int, Decimal]

SUMMARY_COLUMNS: tuple[str, ...] = (
    "child_support",
    "ccc",
    "cc_costs",
    "dependent_care_benefits",
    "ctc",
    "other_dependent_ctc",
    "eic",
)

MONEY_COLUMNS: frozenset[str] = frozenset({"cc_costs", "dependent_care_benefits"})

COLUMN_LABELS: dict[str, str] = {
    "child_support": "Child support",
    "ccc": "CCC",
    "cc_costs": "CC Costs",
    "dependent_care_benefits": "Dependent care benefits",
    "ctc": "CTC",
    "other_dependent_ctc": "Other dependent-CTC",
    "eic": "EIC",
}


class CalculationStep(BaseModel):
    """Audit entry for one evaluated summary cell."""

    timestamp: datetime = Field(default_factory=_utc_now)
    child_id: str
    parent: Parent
    step: str
    input_value: str
    output_value: str
    rule: str


class SummaryRow(BaseModel):
    """Seven summary cells for one child and one parent."""

    model_config = {"frozen": True}

    child_id: str
    relationship_type: RelationshipType
    child_name: str
    child_label: str
    parent: Parent

    child_support: SummaryCell
    ccc: SummaryCell
    cc_costs: SummaryCell
    dependent_care_benefits: SummaryCell
    ctc: SummaryCell
    other_dependent_ctc: SummaryCell
    eic: SummaryCell

    def cells(self) -> dict[str, SummaryCell]:
        """Cells keyed by column, in column order."""
        return {column: getattr(self, column) for column in SUMMARY_COLUMNS}


class TotalsRow(BaseModel):
    """Column sums of a parent's summary rows."""

    model_config = {"frozen": True}

    parent: Optional[Parent] = None
    child_support: Decimal = Decimal("0")
    ccc: Decimal = Decimal("0")
    cc_costs: Decimal = Decimal("0")
    dependent_care_benefits: Decimal = Decimal("0")
    ctc: Decimal = Decimal("0")
    other_dependent_ctc: Decimal = Decimal("0")
    eic: Decimal = Decimal("0")

    def cells(self) -> dict[str, Decimal]:
        """Totals keyed by column, in column order."""
        return {column: getattr(self, column) for column in SUMMARY_COLUMNS}


class SummaryTable(BaseModel):
    """A parent's summary rows together with their totals."""

    model_config = {"frozen": True}

    parent: Parent
    rows: list[SummaryRow] = Field(default_factory=list)
    totals: TotalsRow

    @property
    def header(self) -> str:
        """Table heading, e.g. ``Summary P1``."""
        return f"Summary {self.parent.value}"

    @property
    def is_empty(self) -> bool:
        """True when the case has no children."""
        return not self.rows


__all__ = [
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
