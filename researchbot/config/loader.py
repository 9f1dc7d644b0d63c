"""Configuration loading utilities."""

import json
from pathlib import Path
from typing import Any

from loguru import logger

from researchbot.config.schema import Config


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".researchbot" / "config.json"


def load_config(config_path: Path | None = None, **overrides: Any) -> Config:
    """
    Load configuration from file, environment and defaults.

    A missing or unreadable file falls back to environment and defaults.
    Out-of-range values raise pydantic.ValidationError.

    Args:
        config_path: Optional path to config file. Uses default if not provided.
        **overrides: Values that win over every other source, e.g. a CLI flag.
            ``None`` values are ignored.

    Returns:
        Loaded configuration object.
    """
    path = config_path or get_config_path()
    data: dict[str, Any] = {}

    if path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                loaded = json.load(f)
            if not isinstance(loaded, dict):
                raise ValueError("top-level value must be an object")
            data = _migrate_config(loaded)
        except (OSError, ValueError) as e:
            logger.warning("Failed to load config from {}: {}. Using environment and defaults.", path, e)
            data = {}

    data.update({key: value for key, value in overrides.items() if value is not None})
    return Config(**data)


def _migrate_config(data: dict) -> dict:
    """Migrate old config formats to current."""
    # Legacy short names -> current field names
    renames = {
        "model": "ollama_model",
        "ollama_host": "ollama_api_base_url",
        "max_results": "max_search_results",
    }
    for old, new in renames.items():
        if old in data:
            value = data.pop(old)
            data.setdefault(new, value)

    return data
