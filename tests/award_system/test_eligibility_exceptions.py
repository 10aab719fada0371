"""
Tests for the award eligibility exception hierarchy.
"""

from award_system.eligibility_exceptions import (
    EligibilityComputationException,
    EligibilityException,
    ExceptionSeverity,
    InvalidRankingDataException,
    RecoveryStrategy,
    UnknownAwardCategoryException,
    UnknownGradeBandException,
    wrap_exception,
)


class TestEligibilityExceptions:

    def test_base_exception_message_includes_context(self):
        error = EligibilityException("Something failed", error_code="ELIG_TEST", context_dict={"division_id": 2})

        text = str(error)
        assert "[ELIG_TEST] Something failed" in text
        assert "division_id: 2" in text

    def test_to_dict(self):
        error = InvalidRankingDataException("Bad row", team_id=7, table="skills")

        data = error.to_dict()

        assert data["error_code"] == "ELIG_DATA_003"
        assert data["severity"] == ExceptionSeverity.WARNING.value
        assert data["recovery_strategy"] == RecoveryStrategy.SKIP.value
        assert data["context"]["team_id"] == 7
        assert data["original_error"] is None

    def test_unknown_category_lists_valid_categories(self):
        error = UnknownAwardCategoryException("Think Award")

        assert error.message == "Unknown award category: 'Think Award'"
        assert "Excellence Award" in error.context_dict["valid_categories"]

    def test_wrap_exception(self):
        original = KeyError("rank")

        wrapped = wrap_exception(
            original,
            "Division failed",
            exception_class=EligibilityComputationException,
            event_id=51234,
            division_id=1,
            category="Excellence Award"
        )

        assert isinstance(wrapped, EligibilityComputationException)
        assert wrapped.original_exception is original
        assert wrapped.context_dict["event_id"] == 51234
        assert wrapped.error_code == "ELIG_COMPUTE_004"
        assert "Original Error: KeyError" in str(wrapped)

    def test_wrap_exception_default_class_keeps_context(self):
        wrapped = wrap_exception(ValueError("boom"), "Eligibility failed", division_id=3)

        assert type(wrapped) is EligibilityException
        assert wrapped.context_dict == {"division_id": 3}
        assert isinstance(wrapped.original_exception, ValueError)

    def test_wrap_exception_merges_extra_context_into_subclass(self):
        wrapped = wrap_exception(
            KeyError("team"),
            "Bad skills row",
            exception_class=InvalidRankingDataException,
            team_id=12,
            event_id=51234,
            context_dict={"row": 4}
        )

        assert wrapped.error_code == "ELIG_DATA_003"
        assert wrapped.context_dict["team_id"] == 12
        assert wrapped.context_dict["event_id"] == 51234
        assert wrapped.context_dict["row"] == 4
        assert wrapped.context_dict["table"] is None

    def test_wrap_exception_with_category_exception(self):
        wrapped = wrap_exception(LookupError("title"), "No category", exception_class=UnknownAwardCategoryException)

        assert wrapped.message == "No category"
        assert wrapped.context_dict["invalid_category"] is None

    def test_unknown_grade_band(self):
        error = UnknownGradeBandException("Elementary")

        assert error.message == "Unknown grade band: 'Elementary'"
        assert error.recovery_strategy == RecoveryStrategy.ABORT
