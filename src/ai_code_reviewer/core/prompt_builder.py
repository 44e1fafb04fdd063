"""Prompt construction for code review requests."""

from __future__ import annotations

import re

from ai_code_reviewer.models.language import Language
from ai_code_reviewer.models.schema import REQUIRED_FIELDS, REQUIRED_ISSUE_FIELDS

_BACKTICK_RUN = re.compile(r"`+")


def code_fence(text: str) -> str:
    """Return a backtick fence longer than any backtick run inside ``text``."""
    longest = max((len(run) for run in _BACKTICK_RUN.findall(text)), default=0)
    return "`" * max(3, longest + 1)


def build_review_prompt(language: Language, code: str) -> str:
    """Render the review instruction for a code snippet.

    The code is embedded verbatim inside a fenced block tagged with the
    language identifier. Nothing is stripped or re-indented, so the line
    numbers the model reports refer to the code exactly as submitted.

    Args:
        language: Language of the snippet
        code: Source code, already checked to be non-blank

    Returns:
        Prompt text
    """
    fields = ", ".join(f'"{name}"' for name in REQUIRED_FIELDS)
    issue_fields = ", ".join(f'"{name}"' for name in REQUIRED_ISSUE_FIELDS)

    header = (
        f"You are an expert code reviewer. Analyze the following {language.label} code "
        "for errors, code smells, performance issues, and best practice violations. "
        "Provide:\n"
        "1. An overall code quality score from 0 to 100.\n"
        "2. A list of specific issues found, including the line number, a description "
        "of the issue, and a suggested fix.\n"
        "3. An optimized version of the entire code block.\n"
        "4. A summary of the findings in plain English.\n"
        "\n"
        f"Respond with a single JSON object with the fields {fields}. "
        f"Each entry in \"issues\" must have the fields {issue_fields}. "
        "Line numbers are 1-based and count lines of the code block below; "
        "use 0 when an issue does not belong to a specific line. "
        "Do not include any text outside the JSON object.\n"
        "\n"
        "Code to review:\n"
    )
    fence = code_fence(code)
    return f"{header}{fence}{language.value}\n{code}\n{fence}\n"
