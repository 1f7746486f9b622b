"""Per-parent summary of child support and tax credit attributes.

For each child and parent, seven cells are evaluated strictly in order.
Later cells read the values of earlier cells, not only the child record:

1. child_support            THIS: overnights% > 50 and support eligible; OTHER: n/a
2. ccc                      THIS: same as child_support; OTHER: 0
3. cc_costs                 paid * % of year eligible, only when child_support is 1
4. dependent_care_benefits  FSA benefits, only when child_support is 1
5. ctc                      THIS: cc_costs positive; OTHER: paid and dependent of parent
6. other_dependent_ctc      OTHER only: over 18, paid and dependent of parent
7. eic                      THIS: child_support and EIC eligible; OTHER: paid,
                            dependent of parent and EIC eligible

Every evaluated cell is recorded in the calculator's audit log.
"""

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, Overflow
from typing import Any, Callable, Iterable, Optional

import structlog

from .models import (
    MONEY_COLUMNS,
    NOT_APPLICABLE,
    SUMMARY_COLUMNS,
    CalculationStep,
    ChildRecord,
    NotApplicable,
    Parent,
    SummaryCell,
    SummaryRow,
    SummaryTable,
    TotalsRow,
    YesNo,
)

logger = structlog.get_logger()

CENTS = Decimal("0.01")
ZERO_MONEY = Decimal("0.00")


def round_money(value: Decimal) -> Decimal:
    """Round to two decimal places, halves up."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def _money_cell(compute: Callable[[], Decimal], child_id: str, step: str) -> Decimal:
    """
    Evaluate a money cell, flooring non-positive values at 0.00.

    Amounts too large for Decimal arithmetic count as absent data and give
    0.00 rather than failing the summary.
    """
    try:
        value = compute()
        return round_money(value) if value > 0 else ZERO_MONEY
    except (InvalidOperation, Overflow):
        logger.warning("summary_amount_out_of_range", child_id=child_id, step=step)
        return ZERO_MONEY


def is_over_18(child: ChildRecord) -> bool:
    """True when the child is past their 18th birthday by at least a month."""
    years = child.computed.age_years
    months = child.computed.age_months
    return years > 18 or (years == 18 and months > 0)


class SummaryCalculator:
    """
    Evaluate summary rows for children of a case.

    Each cell is evaluated from the child record and the cells before it.
    All evaluations are logged for audit.
    """

    def __init__(self):
        """Initialize the calculator with an empty audit log."""
        self._audit_log: list[CalculationStep] = []

    @property
    def audit_log(self) -> list[CalculationStep]:
        """Audit entries for the most recent calculation."""
        return list(self._audit_log)

    def reset(self) -> None:
        """Clear the audit log."""
        self._audit_log = []

    def _log_step(
        self,
        child: ChildRecord,
        parent: Parent,
        step: str,
        input_value: str,
        output_value: SummaryCell,
        rule: str,
    ) -> None:
        """Add an entry to the audit log."""
        entry = CalculationStep(
            child_id=child.id,
            parent=parent,
            step=step,
            input_value=input_value,
            output_value=str(output_value),
            rule=rule,
        )
        self._audit_log.append(entry)
        logger.debug(
            "summary_calculation_step",
            child_id=child.id,
            parent=parent.value,
            step=step,
            input=input_value,
            output=str(output_value),
        )

    def _child_support(self, child: ChildRecord, parent: Parent) -> SummaryCell:
        """Child support flag: more than 50% of overnights and eligible."""
        if not child.is_this_relationship:
            cell: SummaryCell = NOT_APPLICABLE
            self._log_step(child, parent, "child_support", "relationship=OTHER", cell,
                           "Not applicable to other-relationship children")
            return cell

        percent = child.overnights.percent_for(parent)
        eligible = child.child_support.eligible
        cell = 1 if percent > 50 and eligible is YesNo.YES else 0
        self._log_step(
            child, parent, "child_support",
            f"overnights_percent={percent}, eligible={eligible.value}",
            cell,
            "overnights% > 50 and child support eligible",
        )
        return cell

    def _ccc(self, child: ChildRecord, parent: Parent, child_support: SummaryCell) -> SummaryCell:
        """Child care credit flag, mirroring child support for THIS children."""
        if not child.is_this_relationship:
            cell: SummaryCell = 0
            self._log_step(child, parent, "ccc", "relationship=OTHER", cell,
                           "Other-relationship children never qualify")
            return cell

        cell = 1 if child_support == 1 else 0
        self._log_step(child, parent, "ccc", f"child_support={child_support}", cell,
                       "Same as child support")
        return cell

    def _cc_costs(self, child: ChildRecord, parent: Parent, child_support: SummaryCell) -> SummaryCell:
        """Care costs for the eligible share of the year, only when child support is 1."""
        if not child.is_this_relationship or child_support != 1:
            cell: SummaryCell = NOT_APPLICABLE
            self._log_step(
                child, parent, "cc_costs",
                f"relationship={child.relationship_type.value}, child_support={child_support}",
                cell,
                "Only when child support is 1",
            )
            return cell

        paid = child.dependent_care.paid_by(parent)
        percent = child.dependent_care.percent_of_year_eligible
        cell = _money_cell(lambda: paid * percent / Decimal("100"), child.id, "cc_costs")
        self._log_step(
            child, parent, "cc_costs",
            f"paid={paid} * percent_of_year_eligible={percent} / 100",
            cell,
            "Care costs for the eligible part of the year",
        )
        return cell

    def _dependent_care_benefits(
        self, child: ChildRecord, parent: Parent, child_support: SummaryCell
    ) -> SummaryCell:
        """FSA dependent care benefits, only when child support is 1."""
        if not child.is_this_relationship or child_support != 1:
            cell: SummaryCell = NOT_APPLICABLE
            self._log_step(
                child, parent, "dependent_care_benefits",
                f"relationship={child.relationship_type.value}, child_support={child_support}",
                cell,
                "Only when child support is 1",
            )
            return cell

        fsa = child.dependent_care.fsa_benefits(parent)
        cell = _money_cell(lambda: fsa, child.id, "dependent_care_benefits")
        self._log_step(child, parent, "dependent_care_benefits", f"fsa_benefits={fsa}", cell,
                       "FSA dependent care benefits")
        return cell

    def _paid_and_dependent(self, child: ChildRecord, parent: Parent) -> bool:
        """True when the parent paid care costs and claims the child."""
        return (
            child.dependent_care.paid_by(parent) > 0
            and child.dependent_care.dependent_of is parent
        )

    def _ctc(self, child: ChildRecord, parent: Parent, cc_costs: SummaryCell) -> SummaryCell:
        """Child tax credit: THIS needs positive care costs, OTHER needs paid costs and the claim."""
        if child.is_this_relationship:
            positive = not isinstance(cc_costs, NotApplicable) and cc_costs > 0
            cell: SummaryCell = 1 if positive else 0
            self._log_step(child, parent, "ctc", f"cc_costs={cc_costs}", cell,
                           "Positive care costs")
            return cell

        cell = 1 if self._paid_and_dependent(child, parent) else 0
        self._log_step(
            child, parent, "ctc",
            f"paid={child.dependent_care.paid_by(parent)}, "
            f"dependent_of={child.dependent_care.dependent_of.value}",
            cell,
            "Paid care costs and claims the child",
        )
        return cell

    def _other_dependent_ctc(self, child: ChildRecord, parent: Parent) -> SummaryCell:
        """Other dependent credit for OTHER children over 18 that the parent pays for and claims."""
        if child.is_this_relationship:
            cell: SummaryCell = 0
            self._log_step(child, parent, "other_dependent_ctc", "relationship=THIS", cell,
                           "Only for other-relationship children")
            return cell

        over_18 = is_over_18(child)
        cell = 1 if over_18 and self._paid_and_dependent(child, parent) else 0
        self._log_step(
            child, parent, "other_dependent_ctc",
            f"age={child.computed.age_years}y{child.computed.age_months}m, "
            f"paid={child.dependent_care.paid_by(parent)}, "
            f"dependent_of={child.dependent_care.dependent_of.value}",
            cell,
            "Over 18, paid care costs and claims the child",
        )
        return cell

    def _eic(self, child: ChildRecord, parent: Parent, child_support: SummaryCell) -> SummaryCell:
        """Earned income credit: THIS follows child support, OTHER needs paid costs and the claim."""
        eligible_eic = child.dependent_care.eligible_eic

        if child.is_this_relationship:
            cell: SummaryCell = 1 if child_support == 1 and eligible_eic else 0
            self._log_step(
                child, parent, "eic",
                f"child_support={child_support}, eligible_eic={eligible_eic}",
                cell,
                "Child support and EIC eligible",
            )
            return cell

        cell = 1 if self._paid_and_dependent(child, parent) and eligible_eic else 0
        self._log_step(
            child, parent, "eic",
            f"paid={child.dependent_care.paid_by(parent)}, "
            f"dependent_of={child.dependent_care.dependent_of.value}, "
            f"eligible_eic={eligible_eic}",
            cell,
            "Paid care costs, claims the child and EIC eligible",
        )
        return cell

    def calculate_row(self, child: ChildRecord, parent: Parent) -> SummaryRow:
        """
        Evaluate the seven summary cells for one child and parent.

        Args:
            child: Finalized child record
            parent: Parent the row is for

        Returns:
            SummaryRow with all seven cells
        """
        child_support = self._child_support(child, parent)
        ccc = self._ccc(child, parent, child_support)
        cc_costs = self._cc_costs(child, parent, child_support)
        dependent_care_benefits = self._dependent_care_benefits(child, parent, child_support)
        ctc = self._ctc(child, parent, cc_costs)
        other_dependent_ctc = self._other_dependent_ctc(child, parent)
        eic = self._eic(child, parent, child_support)

        return SummaryRow(
            child_id=child.id,
            relationship_type=child.relationship_type,
            child_name=child.name or "-",
            child_label=child.label,
            parent=parent,
            child_support=child_support,
            ccc=ccc,
            cc_costs=cc_costs,
            dependent_care_benefits=dependent_care_benefits,
            ctc=ctc,
            other_dependent_ctc=other_dependent_ctc,
            eic=eic,
        )

    def calculate(self, children: Iterable[ChildRecord], parent: Parent) -> list[SummaryRow]:
        """
        Evaluate summary rows for every child, in order.

        The audit log is reset first, so it covers this call only.
        """
        self.reset()
        rows = [self.calculate_row(child, parent) for child in children]
        logger.info("summary_built", parent=parent.value, rows=len(rows))
        return rows


def build_summary(
    children: Iterable[ChildRecord],
    parent: Parent,
    calculator: Optional[SummaryCalculator] = None,
) -> list[SummaryRow]:
    """Summary rows for ``parent``, one per child."""
    return (calculator or SummaryCalculator()).calculate(children, parent)


def _numeric(value: Any) -> Decimal:
    """Numeric value of a cell for totals; anything else counts as 0."""
    if isinstance(value, bool) or isinstance(value, NotApplicable):
        return Decimal("0")
    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal("0")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value)) if math.isfinite(value) else Decimal("0")
    return Decimal("0")


def totals(rows: Iterable[SummaryRow], parent: Optional[Parent] = None) -> TotalsRow:
    """
    Sum each summary column across rows.

    Not-applicable and non-numeric cells count as 0. An empty list gives
    all-zero totals.
    """
    rows = list(rows)
    sums = {column: Decimal("0") for column in SUMMARY_COLUMNS}
    for row in rows:
        for column, value in row.cells().items():
            sums[column] += _numeric(value)

    if parent is None and rows:
        parent = rows[0].parent
    return TotalsRow(parent=parent, **sums)


def build_summary_table(
    children: Iterable[ChildRecord],
    parent: Parent,
    calculator: Optional[SummaryCalculator] = None,
) -> SummaryTable:
    """Summary rows for ``parent`` together with their totals."""
    rows = build_summary(children, parent, calculator)
    return SummaryTable(parent=parent, rows=rows, totals=totals(rows, parent))


def format_cell(value: SummaryCell) -> str:
    """Render a summary cell; not-applicable renders as ``-``."""
    if isinstance(value, NotApplicable):
        return value.value
    if isinstance(value, Decimal):
        return f"{round_money(value):.2f}"
    return str(value)


def format_total(total: Decimal, column: str) -> str:
    """Render a column total: money to 2 decimals, counts as integers."""
    if column in MONEY_COLUMNS:
        return f"{round_money(total):.2f}"
    return format(round_money(total).normalize(), "f")


__all__ = [
    "SummaryCalculator",
    "round_money",
    "is_over_18",
    "build_summary",
    "totals",
    "build_summary_table",
    "format_cell",
    "format_total",
]
