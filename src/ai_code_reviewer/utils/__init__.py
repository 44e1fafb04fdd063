"""Utility functions and helpers.

- security: Secret redaction, URL validation
- logging: Structured logging with secret sanitization
- metrics: Application metrics collection
"""

from ai_code_reviewer.utils.logging import (
    LogEventNames,
    LogFormat,
    LogLevel,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    unbind_context,
)
from ai_code_reviewer.utils.metrics import (
    Counter,
    Gauge,
    Histogram,
    MetricsRegistry,
    Timer,
    get_metrics,
)
from ai_code_reviewer.utils.security import (
    RedactionError,
    SecretRedactor,
    SecurityError,
    validate_ollama_url,
)

__all__ = [
    # Metrics
    "Counter",
    "Gauge",
    "Histogram",
    "MetricsRegistry",
    "Timer",
    "get_metrics",
    # Logging
    "LogEventNames",
    "LogFormat",
    "LogLevel",
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "unbind_context",
    # Security
    "RedactionError",
    "SecretRedactor",
    "SecurityError",
    "validate_ollama_url",
]
