"""Data models and transfer objects."""

from .analysis import AnalysisIssue, AnalysisRequest, AnalysisResult, ScoreBand
from .language import DEFAULT_LANGUAGE, Language
from .schema import (
    REQUIRED_FIELDS,
    REQUIRED_ISSUE_FIELDS,
    AnalysisResponse,
    IssueResponse,
    response_schema,
)
from .state import (
    AnalysisError,
    ErrorKind,
    Failed,
    Idle,
    InFlight,
    RequestState,
    RequestStatus,
    Success,
    Validating,
)

__all__ = [
    # Language
    "DEFAULT_LANGUAGE",
    "Language",
    # Analysis models
    "AnalysisIssue",
    "AnalysisRequest",
    "AnalysisResult",
    "ScoreBand",
    # Response schema
    "REQUIRED_FIELDS",
    "REQUIRED_ISSUE_FIELDS",
    "AnalysisResponse",
    "IssueResponse",
    "response_schema",
    # Lifecycle states
    "AnalysisError",
    "ErrorKind",
    "Failed",
    "Idle",
    "InFlight",
    "RequestState",
    "RequestStatus",
    "Success",
    "Validating",
]
