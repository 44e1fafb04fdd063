"""Shared test fixtures for AI Code Reviewer."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Iterator
from typing import Any

import pytest

from ai_code_reviewer.utils.metrics import MetricsRegistry

SAMPLE_CODE = "def add(a,b):\n  return a+b"

SAMPLE_RESPONSE: dict[str, Any] = {
    "score": 92,
    "summary": "Clean simple function.",
    "issues": [],
    "optimizedCode": "def add(a: int, b: int) -> int:\n    return a + b",
}


class StubModelClient:
    """Model client returning a canned response or raising a canned error.

    Set ``gate`` to an ``asyncio.Event`` to hold ``generate`` until it is set.
    """

    def __init__(
        self,
        response: str = "",
        error: BaseException | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self.response = response
        self.error = error
        self.gate = gate
        self.calls: list[tuple[str, dict[str, Any]]] = []

    @property
    def model_name(self) -> str:
        return "stub-model"

    async def generate(self, prompt: str, schema: dict[str, Any]) -> str:
        self.calls.append((prompt, schema))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture(autouse=True)
def fresh_metrics() -> Iterator[MetricsRegistry]:
    """Give every test its own metrics registry."""
    MetricsRegistry.reset()
    yield MetricsRegistry.get_instance()
    MetricsRegistry.reset()


@pytest.fixture
def sample_code() -> str:
    """The snippet used in the round-trip scenario."""
    return SAMPLE_CODE


@pytest.fixture
def sample_response() -> dict[str, Any]:
    """A well-formed model response."""
    return json.loads(json.dumps(SAMPLE_RESPONSE))


@pytest.fixture
def sample_response_text(sample_response: dict[str, Any]) -> str:
    """A well-formed model response as raw text."""
    return json.dumps(sample_response)


@pytest.fixture
def response_with_issues() -> dict[str, Any]:
    """A well-formed model response containing issues."""
    return {
        "score": 55,
        "summary": "Works, but lacks validation and has a naming problem.",
        "issues": [
            {"line": 1, "issue": "Missing type hints.", "suggestion": "Annotate a and b."},
            {"line": 2, "issue": "Cryptic indentation.", "suggestion": "Use 4 spaces."},
            {"line": 0, "issue": "No docstring.", "suggestion": "Document the function."},
        ],
        "optimizedCode": 'def add(a: int, b: int) -> int:\n    """Add."""\n    return a + b',
    }


@pytest.fixture
def make_client() -> type[StubModelClient]:
    """Factory for stub model clients."""
    return StubModelClient
