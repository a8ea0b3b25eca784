"""
Unit tests for the Result types module.
"""

from state_proof_toolkit.shared.results import (
    ErrorSeverity,
    ProcessingError,
    Result,
)


def _rejection(message: str = "Proof rejected") -> ProcessingError:
    return ProcessingError(
        source="account_proof",
        message=message,
        severity=ErrorSeverity.ERROR,
        context={"kind": "invalid_proof"},
    )


class TestProcessingError:
    """Tests for ProcessingError dataclass."""

    def test_defaults(self):
        error = ProcessingError(
            source="storage_proof",
            message="Proof rejected",
            severity=ErrorSeverity.CRITICAL,
        )
        assert error.context == {}
        assert error.exception is None

    def test_keeps_original_exception(self):
        original = ValueError("bad slot")
        error = ProcessingError(
            source="storage_proof",
            message="Invalid input: bad slot",
            severity=ErrorSeverity.ERROR,
            exception=original,
        )
        assert error.exception is original


class TestResult:
    """Tests for Result[T]."""

    def test_ok_carries_data(self):
        result = Result.ok({"exists": True})
        assert result.success is True
        assert result.data == {"exists": True}
        assert result.errors == []

    def test_ok_with_none_is_still_success(self):
        """A key proven absent is a successful result carrying None."""
        result = Result.ok(None)
        assert result.success is True
        assert result.data is None

    def test_fail_carries_one_error(self):
        result = Result.fail(_rejection())
        assert result.success is False
        assert result.data is None
        assert result.errors[0].context["kind"] == "invalid_proof"

    def test_get_error_messages(self):
        assert Result.fail(_rejection("node 2")).get_error_messages() == [
            "node 2"
        ]
        assert Result.ok(1).get_error_messages() == []
