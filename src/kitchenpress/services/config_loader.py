"""Configuration loading from YAML files."""

from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import ValidationError as PydanticValidationError

from kitchenpress.core.config import PromptConfig
from kitchenpress.utils.exceptions import ConfigurationError


def load_yaml(file_path: Path) -> Dict[str, Any]:
    """Load YAML file.

    Args:
        file_path: Path to YAML file

    Returns:
        Parsed YAML data

    Raises:
        ConfigurationError: If file doesn't exist or is invalid
    """
    if not file_path.exists():
        raise ConfigurationError(f"Configuration file not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
            if data is None:
                return {}
            return data
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {file_path}: {e}") from e


def load_prompt_config(
    prompt_name: str, config_dir: Path = Path("config/prompts")
) -> PromptConfig:
    """Load prompt configuration from YAML.

    Args:
        prompt_name: Name of prompt file (without .yaml extension)
        config_dir: Prompt directory path

    Returns:
        PromptConfig object
    """
    prompt_path = config_dir / f"{prompt_name}.yaml"

    data = load_yaml(prompt_path)

    try:
        return PromptConfig(**data)
    except (PydanticValidationError, TypeError) as e:
        raise ConfigurationError(
            f"Invalid prompt configuration: {prompt_name}: {e}"
        ) from e
