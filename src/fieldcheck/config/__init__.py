"""Validator configuration: settings model and YAML loader."""

from .loader import CONFIG_ENV_VAR, load_config
from .models import ValidatorConfig

__all__ = ["CONFIG_ENV_VAR", "ValidatorConfig", "load_config"]
