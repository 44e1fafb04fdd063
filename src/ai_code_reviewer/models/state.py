"""Request lifecycle states.

The controller's state is a single tagged union so that combinations such
as "loading with a stale result" or "failed with a result" cannot exist.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from .analysis import AnalysisResult


class RequestStatus(StrEnum):
    """Tag identifying each lifecycle state."""

    IDLE = "idle"
    VALIDATING = "validating"
    IN_FLIGHT = "in_flight"
    SUCCESS = "success"
    FAILED = "failed"


class ErrorKind(StrEnum):
    """Terminal failure categories."""

    EMPTY_INPUT = "empty_input"
    TRANSPORT_FAILURE = "transport_failure"
    SCHEMA_VIOLATION = "schema_violation"
    UNKNOWN_FAILURE = "unknown_failure"


_USER_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.EMPTY_INPUT: "Please enter some code to analyze.",
    ErrorKind.TRANSPORT_FAILURE: (
        "An error occurred while analyzing the code. "
        "Please check your API key and try again."
    ),
    ErrorKind.SCHEMA_VIOLATION: (
        "The model returned a response that could not be understood. Please try again."
    ),
    ErrorKind.UNKNOWN_FAILURE: "An unexpected error occurred while analyzing the code.",
}


@dataclass(frozen=True)
class AnalysisError:
    """Why an analysis failed."""

    kind: ErrorKind
    message: str = ""  # Diagnostic detail, not shown to users

    @property
    def user_message(self) -> str:
        """Message suitable for display."""
        return _USER_MESSAGES[self.kind]


@dataclass(frozen=True)
class Idle:
    status: RequestStatus = field(default=RequestStatus.IDLE, init=False)


@dataclass(frozen=True)
class Validating:
    status: RequestStatus = field(default=RequestStatus.VALIDATING, init=False)


@dataclass(frozen=True)
class InFlight:
    status: RequestStatus = field(default=RequestStatus.IN_FLIGHT, init=False)


@dataclass(frozen=True)
class Success:
    result: AnalysisResult
    status: RequestStatus = field(default=RequestStatus.SUCCESS, init=False)


@dataclass(frozen=True)
class Failed:
    error: AnalysisError
    status: RequestStatus = field(default=RequestStatus.FAILED, init=False)


RequestState = Idle | Validating | InFlight | Success | Failed

BUSY_STATUSES = frozenset({RequestStatus.VALIDATING, RequestStatus.IN_FLIGHT})
