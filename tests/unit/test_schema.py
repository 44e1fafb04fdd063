"""Tests for the response schema definition."""

import pytest
from pydantic import ValidationError

from ai_code_reviewer.models.schema import (
    REQUIRED_FIELDS,
    REQUIRED_ISSUE_FIELDS,
    AnalysisResponse,
    response_schema,
)


class TestResponseSchema:
    """Test the generated JSON Schema."""

    def test_required_fields(self) -> None:
        """Test the top-level required fields use wire names."""
        assert set(REQUIRED_FIELDS) == {"score", "summary", "issues", "optimizedCode"}

    def test_required_issue_fields(self) -> None:
        """Test the required fields of each issue."""
        assert set(REQUIRED_ISSUE_FIELDS) == {"line", "issue", "suggestion"}

    def test_schema_is_self_contained(self) -> None:
        """Test that nested definitions are inlined."""
        schema = response_schema()
        assert "$defs" not in schema
        assert "$ref" not in str(schema)
        assert schema["properties"]["issues"]["items"]["type"] == "object"

    def test_primitive_types(self) -> None:
        """Test the declared primitive kinds."""
        props = response_schema()["properties"]
        assert props["score"]["type"] == "integer"
        assert props["score"]["minimum"] == 0
        assert props["score"]["maximum"] == 100
        assert props["summary"]["type"] == "string"
        assert props["issues"]["type"] == "array"
        assert props["optimizedCode"]["type"] == "string"
        issue_props = props["issues"]["items"]["properties"]
        assert issue_props["line"]["type"] == "integer"
        assert issue_props["issue"]["type"] == "string"
        assert issue_props["suggestion"]["type"] == "string"

    def test_fields_are_described(self) -> None:
        """Test that every property carries a description for the model."""
        props = response_schema()["properties"]
        assert all(p.get("description") for p in props.values())
        assert all(p.get("description") for p in props["issues"]["items"]["properties"].values())

    def test_schema_returns_fresh_copy(self) -> None:
        """Test that callers cannot mutate the shared contract."""
        schema = response_schema()
        schema["properties"].clear()
        assert response_schema()["properties"]


class TestAnalysisResponseModel:
    """Test the pydantic model directly."""

    def test_rejects_python_field_name(self) -> None:
        """Test that only the wire name optimizedCode is accepted."""
        with pytest.raises(ValidationError):
            AnalysisResponse.model_validate(
                {"score": 70, "summary": "Fine.", "issues": [], "optimized_code": "pass"}
            )

    def test_dump_uses_wire_names(self) -> None:
        """Test that serialisation by alias uses optimizedCode."""
        response = AnalysisResponse.model_validate(
            {"score": 70, "summary": "Fine.", "issues": [], "optimizedCode": "pass"}
        )
        assert "optimizedCode" in response.model_dump(by_alias=True)
