"""Custom exceptions for the custody core.

This module provides a hierarchy of exception classes for consistent error
handling across the child record editing and summary pipeline. All
exceptions inherit from CustodyCoreError, making it easy to catch all
application-specific errors.

Example:
    try:
        overnights = apply_overnights_edit(prev, field, raw).unwrap()
    except ValidationError as e:
        if e.recoverable:
            # Keep the prior split and show the message to the user
            show_message(e.message)
        else:
            raise
    except CustodyCoreError as e:
        logger.error(f"Operation failed: {e}")
"""

from typing import Any, Optional


class CustodyCoreError(Exception):
    """Base exception for all custody core errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
        recoverable: Whether the error is potentially recoverable.

    Example:
        >>> raise CustodyCoreError("Something went wrong", details={"code": 500})
        CustodyCoreError: Something went wrong
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize CustodyCoreError.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context about the error.
            recoverable: Whether the error can be fixed by the caller.
                Defaults to False.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message

    def __repr__(self) -> str:
        """Return detailed representation of the error."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"details={self.details!r}, "
            f"recoverable={self.recoverable!r})"
        )


class ValidationError(CustodyCoreError):
    """Error raised when user-entered overnights input is rejected.

    Raised for non-numeric, non-integer or out-of-range day and percent
    edits. The prior overnights split is always retained.

    Attributes:
        field: The overnights field that was edited.
        value: The rejected raw value.
        constraint: The validation constraint that was violated.

    Example:
        >>> raise ValidationError(
        ...     "Percent must be between 0 and 100.",
        ...     field="P1_PERCENT",
        ...     value=120,
        ...     constraint="0 <= percent <= 100",
        ... )
        ValidationError: Percent must be between 0 and 100.
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        """Initialize ValidationError.

        Args:
            message: Human-readable error description.
            field: The name of the field that failed validation.
            value: The rejected value.
            constraint: Description of the validation rule violated.
            details: Optional dictionary with additional context.
            recoverable: Whether the error can be fixed by user correction.
                Defaults to True.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.field = field
        self.value = value
        self.constraint = constraint

        if field:
            self.details["field"] = field
        if value is not None:
            self.details["value"] = value
        if constraint:
            self.details["constraint"] = constraint


class DraftStateError(CustodyCoreError):
    """Error raised when a case session's draft lifecycle is misused.

    A case holds at most one active draft child record. Starting a second
    draft, or editing/saving when none is active, raises this error.

    Attributes:
        operation: The session operation that was attempted.
        draft_id: The active draft id, if any.

    Example:
        >>> raise DraftStateError(
        ...     "A draft child record is already active",
        ...     operation="start_draft",
        ...     draft_id="c1",
        ... )
        DraftStateError: A draft child record is already active
    """

    def __init__(
        self,
        message: str,
        *,
        operation: Optional[str] = None,
        draft_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize DraftStateError.

        Args:
            message: Human-readable error description.
            operation: Name of the session operation being attempted.
            draft_id: Identifier of the active draft, if one exists.
            details: Optional dictionary with additional context.
            recoverable: Defaults to False; the caller must fix its sequencing.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.operation = operation
        self.draft_id = draft_id

        if operation:
            self.details["operation"] = operation
        if draft_id:
            self.details["draft_id"] = draft_id


class ConfigurationError(CustodyCoreError):
    """Error raised when configuration is invalid or missing.

    Attributes:
        config_key: The configuration key that is problematic.
        expected: Description of the expected value or format.
        actual: The actual value found (if any).

    Example:
        >>> raise ConfigurationError(
        ...     "Invalid log level",
        ...     config_key="CUSTODY_LOG_LEVEL",
        ...     expected="DEBUG, INFO, WARNING, ERROR or CRITICAL",
        ... )
        ConfigurationError: Invalid log level
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize ConfigurationError.

        Args:
            message: Human-readable error description.
            config_key: The name of the configuration key that is problematic.
            expected: Description of what value was expected.
            actual: The actual value found.
            details: Optional dictionary with additional context.
            recoverable: Defaults to False since configuration errors
                require the settings to be corrected.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.config_key = config_key
        self.expected = expected
        self.actual = actual

        if config_key:
            self.details["config_key"] = config_key
        if expected:
            self.details["expected"] = expected
        if actual is not None:
            self.details["actual"] = actual


__all__ = [
    "CustodyCoreError",
    "ValidationError",
    "DraftStateError",
    "ConfigurationError",
]
