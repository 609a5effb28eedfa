"""Configuration loader for validator settings.

Settings live under a ``validator`` section of a YAML file:

    validator:
      max_depth: 50
      skip_falsy_values: false
"""

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import ValidatorConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "FIELDCHECK_CONFIG"


def load_config(config_path: Path | str | None = None) -> ValidatorConfig:
    """Load validator configuration from a YAML file.

    Args:
        config_path: Optional path to the config file. If not provided, the
            ``FIELDCHECK_CONFIG`` environment variable is consulted. With
            neither set, default settings are returned.

    Returns:
        ValidatorConfig with the loaded settings

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the config file can't be parsed or is invalid
    """
    if config_path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if not env_path:
            logger.debug("No validator config file given, using defaults")
            return ValidatorConfig()
        config_path = env_path

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Validator config file not found at {config_path}")

    logger.debug(f"Loading validator config from: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML config file {config_path}: {e}") from e

    if not raw_config:
        logger.info("Empty validator config file, using defaults")
        return ValidatorConfig()

    if not isinstance(raw_config, dict):
        raise ValueError(f"Invalid validator config in {config_path}: expected a mapping")

    section = raw_config.get("validator") or {}
    try:
        return ValidatorConfig.model_validate(section)
    except ValidationError as e:
        raise ValueError(f"Invalid validator config: {e}") from e
