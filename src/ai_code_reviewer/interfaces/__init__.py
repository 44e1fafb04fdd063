"""Protocol definitions for pluggable adapters."""

from .llm import ModelClient

__all__ = ["ModelClient"]
