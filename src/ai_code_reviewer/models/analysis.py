"""Data models for code review requests and results."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from .language import Language


@dataclass(frozen=True)
class AnalysisRequest:
    """A single review request, immutable once dispatched."""

    language: Language
    code: str  # Verbatim; never trimmed or re-encoded

    @property
    def line_count(self) -> int:
        """Number of lines in the submitted code."""
        return len(self.code.splitlines())


@dataclass(frozen=True)
class AnalysisIssue:
    """An issue reported by the reviewer."""

    line: int  # 1-based; 0 when the issue is not tied to a line
    issue: str
    suggestion: str


class ScoreBand(StrEnum):
    """Coarse quality band for a score."""

    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


@dataclass(frozen=True)
class AnalysisResult:
    """Validated review produced from model output."""

    score: int  # 0 to 100
    summary: str
    issues: tuple[AnalysisIssue, ...]
    optimized_code: str

    @property
    def issue_count(self) -> int:
        """Number of issues found."""
        return len(self.issues)

    @property
    def score_band(self) -> ScoreBand:
        """Band used when rendering the score."""
        if self.score > 85:
            return ScoreBand.GOOD
        if self.score > 60:
            return ScoreBand.FAIR
        return ScoreBand.POOR

    def to_dict(self) -> dict[str, Any]:
        """Return the result in its wire shape."""
        return {
            "score": self.score,
            "summary": self.summary,
            "issues": [
                {"line": i.line, "issue": i.issue, "suggestion": i.suggestion}
                for i in self.issues
            ],
            "optimizedCode": self.optimized_code,
        }
