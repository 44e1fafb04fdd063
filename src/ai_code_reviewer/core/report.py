"""Markdown rendering of review outcomes."""

from __future__ import annotations

import json

from ai_code_reviewer.core.prompt_builder import code_fence
from ai_code_reviewer.models.analysis import AnalysisResult, ScoreBand
from ai_code_reviewer.models.language import Language
from ai_code_reviewer.models.state import AnalysisError, Failed, RequestState, Success

_BAND_MARKERS = {
    ScoreBand.GOOD: "🟢",
    ScoreBand.FAIR: "🟡",
    ScoreBand.POOR: "🔴",
}


def _table_cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ").strip()


def format_report(result: AnalysisResult, language: Language) -> str:
    """Render a successful review as Markdown."""
    lines = [
        "# Code Review",
        "",
        f"**Overall Score:** {_BAND_MARKERS[result.score_band]} {result.score}/100",
        "",
        "## Summary",
        "",
        result.summary,
        "",
    ]

    if result.issues:
        lines += [
            "## Issues Found",
            "",
            "| Line | Issue | Suggestion |",
            "|-----:|-------|------------|",
        ]
        for item in result.issues:
            line = str(item.line) if item.line else "-"
            lines.append(
                f"| {line} | {_table_cell(item.issue)} | {_table_cell(item.suggestion)} |"
            )
        lines.append("")

    fence = code_fence(result.optimized_code)
    lines += [
        "## Optimized Code",
        "",
        f"{fence}{language.value}",
        result.optimized_code,
        fence,
    ]
    return "\n".join(lines)


def format_error(error: AnalysisError) -> str:
    """Render a failure as a single user-facing line."""
    return f"Error: {error.user_message}"


def render_state(state: RequestState, language: Language, output_format: str = "text") -> str:
    """Render a terminal state in ``text`` (Markdown) or ``json`` form.

    Raises:
        ValueError: If the state is not terminal
    """
    if isinstance(state, Success):
        if output_format == "json":
            return json.dumps(state.result.to_dict(), indent=2)
        return format_report(state.result, language)

    if isinstance(state, Failed):
        error = state.error
        if output_format == "json":
            return json.dumps(
                {"error": str(error.kind), "message": error.user_message, "detail": error.message},
                indent=2,
            )
        return format_error(error)

    raise ValueError(f"Cannot render non-terminal state: {state.status}")
