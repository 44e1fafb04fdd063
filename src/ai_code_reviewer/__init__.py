"""AI Code Reviewer - schema-constrained LLM code review."""

from ai_code_reviewer._version import __version__

__all__ = ["__version__"]
