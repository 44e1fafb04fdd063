"""Language inference from uploaded file names."""

from __future__ import annotations

from pathlib import PurePath

import structlog

from ai_code_reviewer.models.language import Language
from ai_code_reviewer.utils.logging import LogEventNames

log = structlog.get_logger()

EXTENSION_LANGUAGES: dict[str, Language] = {
    "js": Language.JAVASCRIPT,
    "py": Language.PYTHON,
    "ts": Language.TYPESCRIPT,
    "java": Language.JAVA,
    "cs": Language.CSHARP,
    "cpp": Language.CPP,
    "go": Language.GO,
    "rs": Language.RUST,
}


def detect_language(filename: str) -> Language | None:
    """Map a file name to a language by its final extension.

    Args:
        filename: File name or path, e.g. ``"src/solution.rs"``

    Returns:
        The language, or None if the extension is not recognized
    """
    name = PurePath(filename).name
    suffix = name.rsplit(".", 1)[1].lower() if "." in name else ""
    language = EXTENSION_LANGUAGES.get(suffix)
    if language is None:
        log.debug(LogEventNames.LANGUAGE_NOT_DETECTED, extension=suffix or None)
    else:
        log.debug(LogEventNames.LANGUAGE_DETECTED, extension=suffix, language=str(language))
    return language


def resolve_upload_language(filename: str, current: Language) -> Language:
    """Language to select after uploading ``filename``.

    A recognized extension overrides the current selection; anything else
    leaves it unchanged.
    """
    return detect_language(filename) or current
