"""Security utilities for secret redaction and URL validation.

Redaction is applied to log output only. Code submitted for review is sent
to the model verbatim, since rewriting it would shift the line numbers the
model reports.
"""

from __future__ import annotations

import ipaddress
import re
from typing import TYPE_CHECKING
from urllib.parse import urlparse

import structlog

if TYPE_CHECKING:
    from collections.abc import Sequence

log = structlog.get_logger()


class SecurityError(Exception):
    """Base exception for security-related errors."""


class RedactionError(SecurityError):
    """Raised when secret redaction fails."""


# Allowed hosts for Ollama (SSRF prevention)
ALLOWED_OLLAMA_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})


class SecretRedactor:
    """Detects and redacts credentials from text.

    Fails closed: a pattern that cannot be compiled or applied raises
    ``RedactionError`` instead of letting the text through.

    Usage:
        redactor = SecretRedactor()
        safe_text = redactor.redact(potentially_sensitive_text)
    """

    DEFAULT_PATTERNS: tuple[tuple[str, str], ...] = (
        (
            r"(?i)(api[_-]?key|secret|token|password|credential)\s*[=:]\s*[\"']?[\w-]{16,}",
            "Generic secret",
        ),
        (r"sk-ant-[\w-]{20,}", "Anthropic API key"),
        (r"sk-proj-[a-zA-Z0-9_-]{20,}", "OpenAI project API key"),
        (r"sk-[a-zA-Z0-9]{48}", "OpenAI legacy API key"),
        (r"AIza[0-9A-Za-z\-_]{35}", "Google API key"),
        (r"gh[pousr]_[a-zA-Z0-9]{36}", "GitHub token"),
        (r"AKIA[0-9A-Z]{16}", "AWS access key ID"),
        (r"(?i)bearer\s+[\w.~+/-]{20,}=*", "Bearer token"),
    )

    def __init__(
        self,
        placeholder: str = "[REDACTED]",
        custom_patterns: Sequence[tuple[str, str]] | None = None,
    ) -> None:
        """Initialize the SecretRedactor.

        Args:
            placeholder: String to replace detected secrets with.
            custom_patterns: Additional (pattern, name) tuples to detect.

        Raises:
            RedactionError: If any pattern fails to compile.
        """
        self.placeholder = placeholder
        self._pattern_names: dict[re.Pattern[str], str] = {}

        all_patterns = list(self.DEFAULT_PATTERNS)
        if custom_patterns:
            all_patterns.extend(custom_patterns)

        for pattern_str, name in all_patterns:
            try:
                self._pattern_names[re.compile(pattern_str)] = name
            except re.error as e:
                log.error("pattern_compilation_failed", pattern=pattern_str, error=str(e))
                raise RedactionError(
                    f"Failed to compile secret pattern '{pattern_str}': {e}"
                ) from e

    @property
    def patterns(self) -> list[re.Pattern[str]]:
        """Return the list of compiled patterns."""
        return list(self._pattern_names)

    def redact(self, text: str) -> str:
        """Replace every detected secret in ``text`` with the placeholder.

        Raises:
            RedactionError: If redaction fails for any reason.
        """
        if not text:
            return text

        try:
            result = text
            for pattern in self._pattern_names:
                result = pattern.sub(self.placeholder, result)
            return result
        except Exception as e:
            raise RedactionError(f"Redaction failed: {e}") from e

    def has_secrets(self, text: str) -> bool:
        """Check if text contains any secrets."""
        if not text:
            return False
        return any(pattern.search(text) for pattern in self._pattern_names)


def validate_ollama_url(url: str, allow_remote: bool = False) -> bool:
    """Validate that an Ollama URL is safe (SSRF prevention).

    Only loopback hosts are accepted unless ``allow_remote`` is set.

    Args:
        url: The Ollama base URL to validate.
        allow_remote: If True, allow non-localhost hosts.

    Returns:
        True if the URL is valid and allowed, False otherwise.
    """
    if not url:
        return False

    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        return False

    host = parsed.hostname
    if not host:
        return False

    if host in ALLOWED_OLLAMA_HOSTS:
        return True

    try:
        if ipaddress.ip_address(host).is_loopback:
            return True
    except ValueError:
        pass  # Not an IP address

    return allow_remote
