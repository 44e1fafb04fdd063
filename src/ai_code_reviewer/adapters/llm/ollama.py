"""Ollama model client.

Uses Ollama's structured outputs: the review schema is passed as the
``format`` of a non-streaming ``/api/generate`` request.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from ...config.schema import OllamaConfig
from ...errors import TransportError
from ...utils.logging import LogEventNames

log = structlog.get_logger()


class OllamaAdapter:
    """Ollama model client implementing the ModelClient protocol."""

    def __init__(self, config: OllamaConfig, client: httpx.AsyncClient | None = None) -> None:
        """Initialize the Ollama adapter.

        Args:
            config: Ollama-specific configuration.
            client: HTTP client to use. If None, one is created per request.
        """
        self._config = config
        self._client = client

    @property
    def model_name(self) -> str:
        """Return the model identifier being used."""
        return self._config.model

    @property
    def endpoint(self) -> str:
        return f"{self._config.base_url.rstrip('/')}/api/generate"

    async def generate(self, prompt: str, schema: dict[str, Any]) -> str:
        """Send one review request and return the raw response text.

        Raises:
            TransportError: On connection failure, timeout, non-2xx status,
                or a reply without a ``response`` field.
        """
        payload = {
            "model": self._config.model,
            "prompt": prompt,
            "format": schema,
            "stream": False,
            "options": {"temperature": 0},
        }

        log.debug(LogEventNames.LLM_REQUEST_START, provider="ollama", model=self.model_name)

        try:
            if self._client is not None:
                response = await self._client.post(
                    self.endpoint, json=payload, timeout=self._config.timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self._config.timeout) as client:
                    response = await client.post(self.endpoint, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            log.error(LogEventNames.LLM_REQUEST_ERROR, provider="ollama", status_code=status)
            raise TransportError(f"Ollama returned HTTP {status}", status_code=status) from e
        except httpx.HTTPError as e:
            log.error(LogEventNames.LLM_REQUEST_ERROR, provider="ollama", error=str(e))
            raise TransportError(f"Ollama request failed: {e}") from e
        except ValueError as e:
            raise TransportError(f"Ollama returned a non-JSON envelope: {e}") from e

        text = data.get("response") if isinstance(data, dict) else None
        if not isinstance(text, str):
            raise TransportError("Ollama reply has no response text")

        log.debug(LogEventNames.LLM_REQUEST_COMPLETE, provider="ollama", response_length=len(text))
        return text
