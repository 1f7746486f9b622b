"""Caller-owned case session.

A ``CaseSession`` holds one case's general information, its finalized
children (one collection per relationship type) and at most one draft
child record being edited. Every draft edit replaces the draft with a new
immutable record; finalized records are deep copies and are never changed.
"""

from typing import Any, Optional, Union
from uuid import uuid4

import structlog

from .config import CustodyCoreConfig, load_config
from .derivation import derive_defaults
from .exceptions import DraftStateError
from .models import (
    ChildRecord,
    ChildSupport,
    ChildValidation,
    DependentCare,
    GeneralInfo,
    Overnights,
    Parent,
    RelationshipType,
    SummaryTable,
)
from .overnights import OvernightsEditResult, OvernightsField, apply_overnights_edit
from .summary import SummaryCalculator, build_summary_table

logger = structlog.get_logger()

# Fields that are derived or have their own edit entry point.
_PROTECTED_ROOTS = frozenset({"id", "overnights", "computed", "validation"})


class CaseSession:
    """
    Editing session for one child-support case.

    The session enforces the draft lifecycle: start a draft, edit it field
    by field, then save (finalize) or cancel it. Only one draft may be
    active at a time.
    """

    def __init__(
        self,
        general_info: Optional[GeneralInfo] = None,
        config: Optional[CustodyCoreConfig] = None,
        case_id: Optional[str] = None,
    ):
        """
        Initialize an empty case.

        Args:
            general_info: Case dates (defaults to as-of today)
            config: Settings (defaults loaded from the environment)
            case_id: Identifier used in log context

        Raises:
            ConfigurationError: If settings from the environment are invalid
        """
        self.case_id = case_id or uuid4().hex
        self.config = config or load_config()
        self.general_info = general_info or GeneralInfo()
        self._children: dict[RelationshipType, list[ChildRecord]] = {
            RelationshipType.THIS: [],
            RelationshipType.OTHER: [],
        }
        self._draft: Optional[ChildRecord] = None
        self._log = logger.bind(case_id=self.case_id)

    # ------------------------------------------------------------------
    # Case information
    # ------------------------------------------------------------------

    @property
    def as_of(self):
        """The case calculation as-of date."""
        return self.general_info.calculation_as_of_date

    def set_general_info(self, field: str, value: Any) -> GeneralInfo:
        """
        Update one case date.

        Changing the calculation as-of date re-derives the active draft.

        Raises:
            ValueError: If ``field`` is not a general info field
        """
        if field not in GeneralInfo.model_fields:
            raise ValueError(f"Unknown general info field: {field}")

        data = self.general_info.model_dump()
        data[field] = value
        self.general_info = GeneralInfo.model_validate(data)
        self._log.info("general_info_updated", field=field, value=str(value))

        if field == "calculation_as_of_date" and self._draft is not None:
            self._draft = derive_defaults(self._draft, self.as_of)
        return self.general_info

    # ------------------------------------------------------------------
    # Draft lifecycle
    # ------------------------------------------------------------------

    @property
    def draft(self) -> Optional[ChildRecord]:
        """The active draft, if any."""
        return self._draft

    @property
    def has_active_draft(self) -> bool:
        """True while a draft is being edited."""
        return self._draft is not None

    def _require_draft(self, operation: str) -> ChildRecord:
        if self._draft is None:
            raise DraftStateError(
                "No draft child record is active",
                operation=operation,
            )
        return self._draft

    def new_draft_record(self, relationship_type: Union[RelationshipType, str]) -> ChildRecord:
        """Build a draft child record from the configured defaults."""
        defaults = self.config.drafts
        overnights = apply_overnights_edit(
            Overnights(), OvernightsField.P1_PERCENT, defaults.p1_percent
        ).unwrap()

        record = ChildRecord(
            relationship_type=RelationshipType(relationship_type),
            overnights=overnights,
            child_support=ChildSupport(eligible=defaults.support_eligible),
            dependent_care=DependentCare(
                percent_of_year_eligible=defaults.percent_of_year_eligible,
                eligible_child_tax_credit=defaults.eligible_child_tax_credit,
                eligible_other_dependent_tax_credit=defaults.eligible_other_dependent_tax_credit,
                eligible_eic=defaults.eligible_eic,
            ),
        )
        return derive_defaults(record, self.as_of)

    def start_draft(self, relationship_type: Union[RelationshipType, str]) -> ChildRecord:
        """
        Start editing a new child.

        Raises:
            DraftStateError: If a draft is already active
        """
        if self._draft is not None:
            raise DraftStateError(
                "A draft child record is already active",
                operation="start_draft",
                draft_id=self._draft.id,
            )
        self._draft = self.new_draft_record(relationship_type)
        self._log.info(
            "draft_started",
            draft_id=self._draft.id,
            relationship_type=self._draft.relationship_type.value,
        )
        return self._draft

    def update_draft(self, path: str, value: Any) -> ChildRecord:
        """
        Set one draft field by dotted path, e.g. ``dependent_care.paid_by_p1``.

        The new value is validated through the model. Date of birth changes
        re-derive the age-dependent defaults.

        Raises:
            DraftStateError: If no draft is active
            ValueError: If the path is unknown or protected
        """
        draft = self._require_draft("update_draft")
        keys = path.split(".")
        if keys[0] in _PROTECTED_ROOTS:
            raise ValueError(f"Field cannot be set directly: {path}")

        data = draft.model_dump()
        target = data
        for key in keys[:-1]:
            if not isinstance(target.get(key), dict):
                raise ValueError(f"Unknown child field: {path}")
            target = target[key]
        if keys[-1] not in target:
            raise ValueError(f"Unknown child field: {path}")
        target[keys[-1]] = value

        updated = ChildRecord.model_validate(data)
        if path == "date_of_birth":
            updated = derive_defaults(updated, self.as_of)

        self._draft = updated
        self._log.debug("draft_updated", draft_id=updated.id, path=path)
        return updated

    def edit_overnights(
        self,
        field: Union[OvernightsField, str],
        raw_value: Any,
    ) -> OvernightsEditResult:
        """
        Apply an overnights edit to the draft.

        On success the draft gets the reconciled split, its overnights error
        is cleared and defaults are re-derived. On failure the split is kept
        and the message is stored on the draft.

        Raises:
            DraftStateError: If no draft is active
        """
        draft = self._require_draft("edit_overnights")
        result = apply_overnights_edit(draft.overnights, field, raw_value)

        if result.ok:
            updated = draft.model_copy(
                update={"overnights": result.value, "validation": ChildValidation()}
            )
            self._draft = derive_defaults(updated, self.as_of)
        else:
            self._draft = draft.model_copy(
                update={"validation": ChildValidation(overnights_error=result.message or "")}
            )
        return result

    def recompute_defaults(self) -> ChildRecord:
        """
        Re-derive the draft's defaults against the case as-of date.

        Raises:
            DraftStateError: If no draft is active
        """
        draft = self._require_draft("recompute_defaults")
        self._draft = derive_defaults(draft, self.as_of)
        return self._draft

    def cancel_draft(self) -> None:
        """Discard the active draft, if any."""
        if self._draft is not None:
            self._log.info("draft_cancelled", draft_id=self._draft.id)
        self._draft = None

    def save_draft(self) -> ChildRecord:
        """
        Finalize the draft into its relationship collection.

        The stored record is a deep copy of the draft.

        Raises:
            DraftStateError: If no draft is active
        """
        draft = self._require_draft("save_draft")
        stored = draft.model_copy(deep=True)
        self._children[stored.relationship_type].append(stored)
        self._draft = None
        self._log.info(
            "draft_saved",
            child_id=stored.id,
            relationship_type=stored.relationship_type.value,
        )
        return stored

    # ------------------------------------------------------------------
    # Finalized children and summaries
    # ------------------------------------------------------------------

    @property
    def children_this_relationship(self) -> list[ChildRecord]:
        """Finalized children of the case's primary relationship."""
        return list(self._children[RelationshipType.THIS])

    @property
    def children_other_relationship(self) -> list[ChildRecord]:
        """Finalized children of other relationships."""
        return list(self._children[RelationshipType.OTHER])

    @property
    def all_children(self) -> list[ChildRecord]:
        """All finalized children, THIS relationship first."""
        return self.children_this_relationship + self.children_other_relationship

    def summary(
        self,
        parent: Union[Parent, str],
        calculator: Optional[SummaryCalculator] = None,
    ) -> SummaryTable:
        """Summary table for one parent over all finalized children."""
        return build_summary_table(self.all_children, Parent(parent), calculator)

    def summaries(self) -> dict[Parent, SummaryTable]:
        """Summary tables for both parents."""
        return {parent: self.summary(parent) for parent in Parent}


__all__ = ["CaseSession"]
