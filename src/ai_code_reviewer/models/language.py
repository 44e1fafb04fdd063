"""Supported source languages."""

from __future__ import annotations

from enum import StrEnum


class Language(StrEnum):
    """Languages accepted for review.

    Values are the identifiers used in prompts and on the wire; ``label``
    is the human-readable name.
    """

    JAVASCRIPT = "javascript"
    PYTHON = "python"
    TYPESCRIPT = "typescript"
    JAVA = "java"
    CSHARP = "csharp"
    CPP = "cpp"
    GO = "go"
    RUST = "rust"

    @property
    def label(self) -> str:
        """Display name for the language."""
        return _LABELS[self]

    @classmethod
    def parse(cls, value: Language | str) -> Language:
        """Resolve a member, wire value, or display label (case-insensitive).

        Raises:
            ValueError: If the value names no supported language
        """
        if isinstance(value, Language):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Unsupported language: {value!r}")

        key = value.strip().lower()
        for language in cls:
            if key in (language.value, language.label.lower()):
                return language
        raise ValueError(f"Unsupported language: {value!r}")


_LABELS: dict[Language, str] = {
    Language.JAVASCRIPT: "JavaScript",
    Language.PYTHON: "Python",
    Language.TYPESCRIPT: "TypeScript",
    Language.JAVA: "Java",
    Language.CSHARP: "C#",
    Language.CPP: "C++",
    Language.GO: "Go",
    Language.RUST: "Rust",
}

DEFAULT_LANGUAGE = Language.JAVASCRIPT
