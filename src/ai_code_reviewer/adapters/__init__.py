"""Concrete implementations of provider interfaces."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..errors import ConfigurationError
from .llm import AnthropicAdapter, OllamaAdapter

if TYPE_CHECKING:
    from ..config.schema import LLMConfig
    from ..interfaces.llm import ModelClient


def create_model_client(config: LLMConfig) -> ModelClient:
    """Create a model client based on configuration.

    Args:
        config: Model provider configuration

    Returns:
        Model client instance

    Raises:
        ConfigurationError: If the provider is unsupported or not configured
    """
    provider = config.provider

    if provider == "anthropic":
        if not config.anthropic:
            raise ConfigurationError(
                "Anthropic configuration required when provider is 'anthropic'"
            )
        return AnthropicAdapter(config.anthropic)

    if provider == "ollama":
        if not config.ollama:
            raise ConfigurationError("Ollama configuration required when provider is 'ollama'")
        return OllamaAdapter(config.ollama)

    raise ConfigurationError(f"Unsupported LLM provider: {provider}")


__all__ = [
    "AnthropicAdapter",
    "OllamaAdapter",
    "create_model_client",
]
