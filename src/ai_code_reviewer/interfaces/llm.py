"""Abstract interface for model client integrations."""

from typing import Any, Protocol


class ModelClient(Protocol):
    """Contract for generative model adapters.

    Adapters (Anthropic, Ollama, test stubs) perform exactly one request
    per call: no implicit retries and no streaming.
    """

    async def generate(self, prompt: str, schema: dict[str, Any]) -> str:
        """
        Send a prompt and return the raw response text.

        Adapters should use ``schema`` to constrain the response format at
        the transport level where the provider supports it. The returned
        text is still untrusted and may not match the schema.

        Args:
            prompt: Complete instruction text
            schema: JSON Schema the response should satisfy

        Returns:
            Raw response text

        Raises:
            TransportError: If the request did not complete
        """
        ...

    @property
    def model_name(self) -> str:
        """
        Return the model identifier being used.

        Examples:
            - "claude-3-5-sonnet-20241022"
            - "llama3.1:8b"
        """
        ...
