"""Core business logic components.

- AnalysisController: Request lifecycle state machine
- build_review_prompt: Prompt construction
- parse_analysis_response: Validation of model output
- ReviewSession: Code/language selection with upload-driven detection
- format_report / render_state: Markdown and JSON rendering
"""

from ai_code_reviewer.core.controller import AnalysisController
from ai_code_reviewer.core.language_detection import (
    EXTENSION_LANGUAGES,
    detect_language,
    resolve_upload_language,
)
from ai_code_reviewer.core.prompt_builder import build_review_prompt
from ai_code_reviewer.core.report import format_error, format_report, render_state
from ai_code_reviewer.core.response_parser import parse_analysis_response
from ai_code_reviewer.core.session import ReviewSession

__all__ = [
    "EXTENSION_LANGUAGES",
    "AnalysisController",
    "ReviewSession",
    "build_review_prompt",
    "detect_language",
    "format_error",
    "format_report",
    "parse_analysis_response",
    "render_state",
    "resolve_upload_language",
]
