"""Pydantic models for configuration schema."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..models.language import DEFAULT_LANGUAGE, Language


class AnthropicConfig(BaseModel):
    """Anthropic-specific configuration."""

    api_key: str
    model: str = "claude-3-5-sonnet-20241022"
    max_tokens: int = Field(8192, ge=1)
    temperature: float = Field(0.2, ge=0.0, le=1.0)


class OllamaConfig(BaseModel):
    """Ollama-specific configuration."""

    base_url: str = "http://localhost:11434"
    model: str = "llama3.1:8b"
    timeout: int = Field(120, ge=1)
    allow_remote_host: bool = False

    @model_validator(mode="after")
    def check_remote_host(self) -> "OllamaConfig":
        """Validate Ollama URL and check for SSRF prevention."""
        from urllib.parse import urlparse

        from ..utils.security import validate_ollama_url

        if not validate_ollama_url(self.base_url, allow_remote=self.allow_remote_host):
            host = urlparse(self.base_url).hostname
            if not self.allow_remote_host:
                raise ValueError(
                    f"Ollama host {host} not allowed. "
                    f"Set allow_remote_host=true to use non-localhost hosts."
                )
            raise ValueError(f"Invalid Ollama URL: {self.base_url}")
        return self


class LLMConfig(BaseModel):
    """Model provider configuration."""

    provider: Literal["anthropic", "ollama"]
    anthropic: AnthropicConfig | None = None
    ollama: OllamaConfig | None = None


class ReviewConfig(BaseModel):
    """Review defaults."""

    default_language: Language = DEFAULT_LANGUAGE


class FileLoggingConfig(BaseModel):
    """File logging configuration."""

    enabled: bool = False
    path: Path = Path("/var/log/ai-code-reviewer/reviewer.log")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "console"] = "console"
    file: FileLoggingConfig = FileLoggingConfig()


class ReviewerConfig(BaseSettings):
    """Root configuration for AI Code Reviewer."""

    llm: LLMConfig
    review: ReviewConfig = ReviewConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
    )
