"""Tests for analysis data models."""

import pytest

from ai_code_reviewer.models.analysis import (
    AnalysisIssue,
    AnalysisRequest,
    AnalysisResult,
    ScoreBand,
)
from ai_code_reviewer.models.language import Language
from ai_code_reviewer.models.state import (
    AnalysisError,
    ErrorKind,
    Failed,
    Idle,
    InFlight,
    RequestStatus,
    Success,
    Validating,
)


def make_result(score: int = 80) -> AnalysisResult:
    return AnalysisResult(
        score=score,
        summary="Readable.",
        issues=(AnalysisIssue(line=2, issue="Shadowed name.", suggestion="Rename it."),),
        optimized_code="print('hi')",
    )


class TestAnalysisRequest:
    """Test AnalysisRequest dataclass."""

    def test_code_kept_verbatim(self) -> None:
        """Test the request does not trim code."""
        request = AnalysisRequest(language=Language.PYTHON, code="  x = 1\n")
        assert request.code == "  x = 1\n"

    def test_line_count(self) -> None:
        """Test line counting."""
        test_cases = [
            ("x = 1", 1),
            ("a\nb", 2),
            ("a\nb\n", 2),
            ("a\n\nb", 3),
        ]
        for code, expected in test_cases:
            assert AnalysisRequest(language=Language.GO, code=code).line_count == expected

    def test_frozen_immutable(self) -> None:
        """Test that a dispatched request cannot be altered."""
        request = AnalysisRequest(language=Language.PYTHON, code="x")
        with pytest.raises(AttributeError):
            request.code = "y"  # type: ignore[misc]


class TestAnalysisResult:
    """Test AnalysisResult dataclass."""

    @pytest.mark.parametrize(
        ("score", "band"),
        [
            (100, ScoreBand.GOOD),
            (86, ScoreBand.GOOD),
            (85, ScoreBand.FAIR),
            (61, ScoreBand.FAIR),
            (60, ScoreBand.POOR),
            (0, ScoreBand.POOR),
        ],
    )
    def test_score_band(self, score: int, band: ScoreBand) -> None:
        """Test band thresholds."""
        assert make_result(score).score_band == band

    def test_issue_count(self) -> None:
        """Test issue_count property."""
        assert make_result().issue_count == 1

    def test_to_dict_uses_wire_shape(self) -> None:
        """Test serialisation to the response shape."""
        assert make_result().to_dict() == {
            "score": 80,
            "summary": "Readable.",
            "issues": [{"line": 2, "issue": "Shadowed name.", "suggestion": "Rename it."}],
            "optimizedCode": "print('hi')",
        }

    def test_frozen_immutable(self) -> None:
        """Test that results are replaced, never mutated."""
        result = make_result()
        with pytest.raises(AttributeError):
            result.score = 10  # type: ignore[misc]


class TestRequestState:
    """Test lifecycle state values."""

    def test_status_tags(self) -> None:
        """Test each state carries its tag."""
        assert Idle().status == RequestStatus.IDLE
        assert Validating().status == RequestStatus.VALIDATING
        assert InFlight().status == RequestStatus.IN_FLIGHT
        assert Success(make_result()).status == RequestStatus.SUCCESS
        assert Failed(AnalysisError(ErrorKind.EMPTY_INPUT)).status == RequestStatus.FAILED

    def test_states_compare_by_value(self) -> None:
        """Test equality of state values."""
        assert Idle() == Idle()
        assert Success(make_result()) == Success(make_result())
        assert Success(make_result(10)) != Success(make_result(20))

    def test_status_cannot_be_overridden(self) -> None:
        """Test that the tag is not a constructor argument."""
        with pytest.raises(TypeError):
            Idle(status=RequestStatus.SUCCESS)  # type: ignore[call-arg]

    @pytest.mark.parametrize("kind", list(ErrorKind))
    def test_every_error_kind_has_user_message(self, kind: ErrorKind) -> None:
        """Test that every failure can be rendered."""
        assert AnalysisError(kind=kind).user_message
