"""Configuration loading and validation."""

from .loader import load_config
from .schema import (
    AnthropicConfig,
    FileLoggingConfig,
    LLMConfig,
    LoggingConfig,
    OllamaConfig,
    ReviewConfig,
    ReviewerConfig,
)

__all__ = [
    # Loader
    "load_config",
    # Root config
    "ReviewerConfig",
    # Sections
    "LLMConfig",
    "LoggingConfig",
    "FileLoggingConfig",
    "ReviewConfig",
    # Provider-specific configs
    "AnthropicConfig",
    "OllamaConfig",
]
