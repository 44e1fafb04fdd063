"""Exception hierarchy for the code reviewer.

Adapters raise ``TransportError`` when a model call does not complete and
the response parser raises ``SchemaViolationError`` for untrusted output
that does not satisfy the schema. The lifecycle controller converts both
into ``Failed`` states; neither is meant to reach the presentation layer.
"""


class ReviewerError(Exception):
    """Base exception for all reviewer errors."""


class TransportError(ReviewerError):
    """The model call did not complete (network, auth, rate limit, timeout).

    Attributes:
        status_code: HTTP status returned by the provider, if any.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SchemaViolationError(ReviewerError):
    """Model output failed to parse or did not satisfy the response schema."""


class ConfigurationError(ReviewerError, ValueError):
    """Configuration is missing or inconsistent."""
