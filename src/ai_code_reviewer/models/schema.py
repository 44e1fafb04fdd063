"""Response schema the model must satisfy.

``AnalysisResponse`` is the single definition of the output contract. The
JSON Schema sent to model providers and named in the prompt is generated
from it, and the response parser validates against it, so a field change
here reaches every consumer at once.
"""

from __future__ import annotations

import copy
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator


class IssueResponse(BaseModel):
    """A single issue as emitted by the model."""

    model_config = ConfigDict(title="Issue")

    line: StrictInt = Field(ge=0, description="The line number where the issue occurs.")
    issue: StrictStr = Field(description="A short description of the issue.")
    suggestion: StrictStr = Field(
        description="A concrete suggestion for how to fix the issue.",
    )

    @field_validator("issue", "suggestion")
    @classmethod
    def require_text(cls, v: str) -> str:
        """Reject empty or whitespace-only text."""
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class AnalysisResponse(BaseModel):
    """The complete review as emitted by the model."""

    model_config = ConfigDict(title="CodeAnalysis")

    score: StrictInt = Field(
        ge=0,
        le=100,
        description="Overall code quality score from 0 to 100.",
    )
    summary: StrictStr = Field(
        description="A brief summary of the code quality and key findings.",
    )
    issues: list[IssueResponse] = Field(description="A list of issues found in the code.")
    optimized_code: StrictStr = Field(
        alias="optimizedCode",
        description="An improved and optimized version of the entire code snippet.",
    )

    @field_validator("summary")
    @classmethod
    def require_summary(cls, v: str) -> str:
        """Reject an empty or whitespace-only summary."""
        if not v.strip():
            raise ValueError("must not be blank")
        return v


def _inline_refs(node: Any, defs: dict[str, Any]) -> Any:
    """Replace ``$ref`` pointers with the referenced definitions."""
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str) and ref.startswith("#/$defs/"):
            return _inline_refs(copy.deepcopy(defs[ref.split("/")[-1]]), defs)
        return {k: _inline_refs(v, defs) for k, v in node.items() if k != "$defs"}
    if isinstance(node, list):
        return [_inline_refs(v, defs) for v in node]
    return node


def response_schema() -> dict[str, Any]:
    """Return the self-contained JSON Schema for ``AnalysisResponse``.

    Nested definitions are inlined because not every provider resolves
    ``$ref`` in structured-output schemas.
    """
    schema = AnalysisResponse.model_json_schema(by_alias=True)
    result: dict[str, Any] = _inline_refs(schema, schema.get("$defs", {}))
    return result


REQUIRED_FIELDS: tuple[str, ...] = tuple(response_schema()["required"])
REQUIRED_ISSUE_FIELDS: tuple[str, ...] = tuple(
    response_schema()["properties"]["issues"]["items"]["required"]
)
