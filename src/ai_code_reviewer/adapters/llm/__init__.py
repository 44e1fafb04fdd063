"""Model client adapters."""

from .anthropic import AnthropicAdapter
from .ollama import OllamaAdapter

__all__ = ["AnthropicAdapter", "OllamaAdapter"]
