"""Validation of untrusted model output.

Model providers may be asked for schema-constrained output, but the text
that comes back is still treated as untrusted. Every response goes through
``parse_analysis_response``, which either yields a complete
``AnalysisResult`` or raises ``SchemaViolationError``.
"""

from __future__ import annotations

import structlog
from pydantic import ValidationError

from ai_code_reviewer.errors import SchemaViolationError
from ai_code_reviewer.models.analysis import AnalysisIssue, AnalysisResult
from ai_code_reviewer.models.schema import AnalysisResponse

log = structlog.get_logger()


def _strip_code_fence(text: str) -> str:
    """Remove a Markdown code fence wrapping the whole payload."""
    if not text.startswith("```"):
        return text

    lines = text.split("\n")
    end = len(lines)
    for i in range(len(lines) - 1, 0, -1):
        closing = lines[i].strip()
        if closing.startswith("```") and not closing.strip("`"):
            end = i
            break
    return "\n".join(lines[1:end]).strip()


def parse_analysis_response(raw: str) -> AnalysisResult:
    """Parse and validate raw model output.

    Args:
        raw: Response text returned by the model client

    Returns:
        Validated analysis result, issues in response order

    Raises:
        SchemaViolationError: If the text is not JSON, a required field is
            missing or has the wrong type, text fields are blank, or
            ``score`` falls outside 0-100
    """
    if not isinstance(raw, str):
        raise SchemaViolationError(f"Expected response text, got {type(raw).__name__}")

    text = _strip_code_fence(raw.strip())
    if not text:
        raise SchemaViolationError("Empty response from model")

    try:
        response = AnalysisResponse.model_validate_json(text)
    except ValidationError as e:
        errors = e.errors()
        if errors and errors[0]["type"] == "json_invalid":
            log.warning("response_json_parse_error", response_preview=text[:200])
            raise SchemaViolationError(f"Invalid JSON in model response: {errors[0]['msg']}") from e
        log.warning(
            "response_validation_error",
            error_count=len(errors),
            fields=[".".join(str(p) for p in err["loc"]) for err in errors],
        )
        raise SchemaViolationError(f"Model response failed validation: {e}") from e

    return AnalysisResult(
        score=response.score,
        summary=response.summary,
        issues=tuple(
            AnalysisIssue(line=item.line, issue=item.issue, suggestion=item.suggestion)
            for item in response.issues
        ),
        optimized_code=response.optimized_code,
    )
