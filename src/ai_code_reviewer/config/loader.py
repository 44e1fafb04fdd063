"""Configuration loader with YAML parsing and environment variable substitution."""

import os
import re
from pathlib import Path

import yaml

from .schema import ReviewerConfig


def substitute_env_vars(text: str) -> str:
    """
    Replace ${VAR_NAME} patterns with environment variable values.

    Args:
        text: Text containing ${VAR_NAME} patterns

    Returns:
        Text with environment variables substituted

    Raises:
        ValueError: If a referenced environment variable is not found
    """

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        value = os.environ.get(var_name)
        if value is None:
            raise ValueError(f"Environment variable {var_name} not found")
        return value

    return re.sub(r"\$\{([^}]+)\}", replacer, text)


def load_config(path: Path) -> ReviewerConfig:
    """
    Load configuration from YAML file with environment variable substitution.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated ReviewerConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If environment variables are missing or config is invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    raw_yaml = path.read_text()
    config_dict = yaml.safe_load(substitute_env_vars(raw_yaml))
    if not isinstance(config_dict, dict):
        raise ValueError(f"Configuration file is empty or not a mapping: {path}")

    # pydantic's ValidationError subclasses ValueError
    config = ReviewerConfig.model_validate(config_dict)
    validate_config(config)

    return config


def validate_config(config: ReviewerConfig) -> None:
    """
    Ensure the selected model provider has its configuration section.

    Args:
        config: Configuration to validate

    Raises:
        ValueError: If provider-specific config is missing
    """
    if config.llm.provider == "anthropic" and config.llm.anthropic is None:
        raise ValueError("Anthropic provider selected but anthropic config missing")
    elif config.llm.provider == "ollama" and config.llm.ollama is None:
        raise ValueError("Ollama provider selected but ollama config missing")
