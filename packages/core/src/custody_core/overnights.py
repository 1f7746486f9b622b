"""Overnights reconciliation.

Keeps a custody split consistent while the user edits one of its four
fields. Each edit is a pure transition: the edited field is applied, the
remaining three fields are derived from it, and a new ``Overnights`` is
returned. Invalid input never changes the split.

Rounding is asymmetric: P1 is derived with round-half-up and P2 is its
complement, so percents always sum to 100 and days always sum to the year
length. A day edit can land on a percent pair that does not reproduce the
edited day count exactly.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional, Union

import structlog
from pydantic import BaseModel, Field

from .exceptions import ValidationError
from .models import (
    DAYS_IN_SHARED_YEAR,
    DAYS_IN_YEAR,
    HALF_SHARED_YEAR_DAYS,
    Overnights,
)

logger = structlog.get_logger()


class OvernightsField(str, Enum):
    """The overnights field a user edited."""

    P1_DAYS = "P1_DAYS"
    P2_DAYS = "P2_DAYS"
    P1_PERCENT = "P1_PERCENT"
    P2_PERCENT = "P2_PERCENT"

    @property
    def is_percent(self) -> bool:
        """True for the two percent fields."""
        return self in (OvernightsField.P1_PERCENT, OvernightsField.P2_PERCENT)


class OvernightsEditResult(BaseModel):
    """Outcome of an overnights edit.

    On success ``value`` is the reconciled split. On failure ``value`` is
    the unchanged prior split and ``message`` describes the violation.
    """

    model_config = {"frozen": True}

    ok: bool
    value: Overnights
    message: Optional[str] = None
    error_details: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def success(cls, value: Overnights) -> "OvernightsEditResult":
        """Create a successful result."""
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, prev: Overnights, error: ValidationError) -> "OvernightsEditResult":
        """Create a rejected result that keeps the prior split."""
        return cls(ok=False, value=prev, message=error.message, error_details=dict(error.details))

    def unwrap(self) -> Overnights:
        """Return the reconciled split or raise the validation error.

        Raises:
            ValidationError: If the edit was rejected
        """
        if self.ok:
            return self.value
        details = dict(self.error_details)
        raise ValidationError(
            self.message or "Invalid overnights input.",
            field=details.pop("field", None),
            value=details.pop("value", None),
            constraint=details.pop("constraint", None),
            details=details,
        )


def total_days_for_percents(p1_percent: int, p2_percent: int) -> int:
    """Year length implied by a percent pair (366 only for 50/50)."""
    if p1_percent == 50 and p2_percent == 50:
        return DAYS_IN_SHARED_YEAR
    return DAYS_IN_YEAR


def total_days_for_days(p1_days: int, p2_days: int) -> int:
    """Year length implied by a day pair (366 only for 183/183)."""
    if p1_days == HALF_SHARED_YEAR_DAYS and p2_days == HALF_SHARED_YEAR_DAYS:
        return DAYS_IN_SHARED_YEAR
    return DAYS_IN_YEAR


def _round_half_up(numerator: int, denominator: int) -> int:
    """Round ``numerator / denominator`` to the nearest integer, halves up."""
    quotient = Decimal(numerator) / Decimal(denominator)
    return int(quotient.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _coerce_number(raw: Any) -> Optional[Decimal]:
    """Coerce raw form input to a Decimal, or None if it is not a number."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float, Decimal)):
        return Decimal(raw)
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            return Decimal(text)
        except InvalidOperation:
            return None
    return None


def _validate_whole_number(raw: Any, field: OvernightsField, noun: str) -> Decimal:
    number = _coerce_number(raw)
    if number is None or not number.is_finite():
        raise ValidationError(
            f"{noun} must be a number.",
            field=field.value,
            value=raw,
            constraint="finite number",
        )
    if number != number.to_integral_value():
        raise ValidationError(
            f"{noun} must be a whole number.",
            field=field.value,
            value=raw,
            constraint="whole number",
        )
    return number


def validate_percent_input(raw: Any, field: OvernightsField) -> int:
    """
    Validate a percent edit.

    Args:
        raw: Entered value, possibly text
        field: The percent field being edited

    Returns:
        The percent as an int

    Raises:
        ValidationError: If the value is not a whole number in [0, 100]
    """
    value = _validate_whole_number(raw, field, "Percent")
    if value < 0 or value > 100:
        raise ValidationError(
            "Percent must be between 0 and 100.",
            field=field.value,
            value=raw,
            constraint="0 <= percent <= 100",
        )
    return int(value)


def validate_days_input(raw: Any, field: OvernightsField, total_days: int) -> int:
    """
    Validate a day edit against the current year length.

    Args:
        raw: Entered value, possibly text
        field: The day field being edited
        total_days: Year length of the current split (365 or 366)

    Returns:
        The day count as an int

    Raises:
        ValidationError: If the value is not a whole number in [0, total_days]
    """
    value = _validate_whole_number(raw, field, "Days")
    if value < 0:
        raise ValidationError(
            "Days cannot be negative.",
            field=field.value,
            value=raw,
            constraint="days >= 0",
        )
    if value > total_days:
        raise ValidationError(
            f"Days cannot exceed {total_days}.",
            field=field.value,
            value=raw,
            constraint=f"days <= {total_days}",
        )
    return int(value)


def _apply_percent_edit(field: OvernightsField, value: int) -> Overnights:
    if field is OvernightsField.P1_PERCENT:
        p1_percent = value
        p2_percent = 100 - value
    else:
        p2_percent = value
        p1_percent = 100 - value

    total_days = total_days_for_percents(p1_percent, p2_percent)
    p1_days = _round_half_up(p1_percent * total_days, 100)
    p2_days = total_days - p1_days

    return Overnights(
        p1_percent=p1_percent,
        p2_percent=p2_percent,
        p1_days=p1_days,
        p2_days=p2_days,
    )


def _apply_days_edit(field: OvernightsField, value: int, total_days: int) -> Overnights:
    if field is OvernightsField.P1_DAYS:
        p1_days = value
        p2_days = total_days - value
    else:
        p2_days = value
        p1_days = total_days - value

    p1_percent = _round_half_up(p1_days * 100, total_days)
    p2_percent = 100 - p1_percent

    # A 50/50 result always uses the 366-day convention.
    if p1_percent == 50 and p2_percent == 50:
        return Overnights(
            p1_percent=50,
            p2_percent=50,
            p1_days=HALF_SHARED_YEAR_DAYS,
            p2_days=HALF_SHARED_YEAR_DAYS,
        )

    # Leaving 183/183 keeps the percents computed on 366 days and moves the
    # days onto a 365-day year.
    if total_days == DAYS_IN_SHARED_YEAR:
        edited_days = min(value, DAYS_IN_YEAR)
        if field is OvernightsField.P1_DAYS:
            p1_days, p2_days = edited_days, DAYS_IN_YEAR - edited_days
        else:
            p1_days, p2_days = DAYS_IN_YEAR - edited_days, edited_days

    return Overnights(
        p1_percent=p1_percent,
        p2_percent=p2_percent,
        p1_days=p1_days,
        p2_days=p2_days,
    )


def apply_overnights_edit(
    prev: Overnights,
    field: Union[OvernightsField, str],
    raw_value: Any,
) -> OvernightsEditResult:
    """
    Apply a single-field edit to an overnights split.

    Percent edits set the edited side and its complement, pick the year
    length from the resulting percents, then derive P1 days and give P2 the
    remainder. Day edits take the year length from the current days, set the
    edited side and its complement, then derive the P1 percent and give P2
    the remainder; a 50/50 result snaps to 183/183.

    Args:
        prev: Current split
        field: Which field was edited
        raw_value: New value as entered (text is coerced to a number)

    Returns:
        OvernightsEditResult with the new split, or the unchanged split and
        a validation message
    """
    edited = OvernightsField(field)

    try:
        if edited.is_percent:
            value = validate_percent_input(raw_value, edited)
            result = _apply_percent_edit(edited, value)
        else:
            total_days = total_days_for_days(prev.p1_days, prev.p2_days)
            value = validate_days_input(raw_value, edited, total_days)
            result = _apply_days_edit(edited, value, total_days)
    except ValidationError as e:
        logger.info(
            "overnights_edit_rejected",
            field=edited.value,
            raw_value=str(raw_value),
            reason=e.message,
        )
        return OvernightsEditResult.failure(prev, e)

    logger.debug(
        "overnights_edit_applied",
        field=edited.value,
        p1_percent=result.p1_percent,
        p2_percent=result.p2_percent,
        p1_days=result.p1_days,
        p2_days=result.p2_days,
    )
    return OvernightsEditResult.success(result)


__all__ = [
    "OvernightsField",
    "OvernightsEditResult",
    "total_days_for_percents",
    "total_days_for_days",
    "validate_percent_input",
    "validate_days_input",
    "apply_overnights_edit",
]
