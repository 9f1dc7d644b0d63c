"""Configuration module for researchbot."""

from researchbot.config.loader import get_config_path, load_config
from researchbot.config.schema import Config

__all__ = ["Config", "get_config_path", "load_config"]
