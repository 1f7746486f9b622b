"""Tests for the exception hierarchy."""

import pytest

from custody_core.exceptions import (
    ConfigurationError,
    CustodyCoreError,
    DraftStateError,
    ValidationError,
)


class TestCustodyCoreError:
    """Tests for the base exception."""

    def test_message_and_defaults(self):
        """The base error stores message, empty details and is not recoverable."""
        error = CustodyCoreError("Something went wrong")

        assert str(error) == "Something went wrong"
        assert error.details == {}
        assert error.recoverable is False

    def test_repr(self):
        """repr includes the class name and fields."""
        error = CustodyCoreError("boom", details={"code": 1})
        assert repr(error) == (
            "CustodyCoreError(message='boom', details={'code': 1}, recoverable=False)"
        )


class TestSubclasses:
    """Tests for the specific error types."""

    def test_validation_error_details(self):
        """ValidationError records field, value and constraint."""
        error = ValidationError(
            "Percent must be between 0 and 100.",
            field="P1_PERCENT",
            value=120,
            constraint="0 <= percent <= 100",
        )

        assert error.recoverable is True
        assert error.details == {
            "field": "P1_PERCENT",
            "value": 120,
            "constraint": "0 <= percent <= 100",
        }

    def test_draft_state_error_details(self):
        """DraftStateError records the operation and draft id."""
        error = DraftStateError("busy", operation="start_draft", draft_id="c1")

        assert error.details == {"operation": "start_draft", "draft_id": "c1"}
        assert error.recoverable is False

    def test_configuration_error_details(self):
        """ConfigurationError records key, expectation and actual value."""
        error = ConfigurationError("bad", config_key="log_level", expected="INFO", actual="x")
        assert error.details == {"config_key": "log_level", "expected": "INFO", "actual": "x"}

    @pytest.mark.parametrize("cls", [ValidationError, DraftStateError, ConfigurationError])
    def test_all_catchable_as_base(self, cls):
        """Every error is a CustodyCoreError."""
        with pytest.raises(CustodyCoreError):
            raise cls("failure")
