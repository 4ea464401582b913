"""YAML configuration loader for fixturekit.yaml.

The file is optional. When present at the repository root it may set any
FixtureConfig field:

    backend: spec
    deep: true
    detect_cycles: false

Precedence: environment variables > fixturekit.yaml > defaults.

Key functions:
- load_config: Load, merge with the environment and validate
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from fixturekit.config import FixtureConfig
from fixturekit.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "fixturekit.yaml"

# Fields allowed at the top level of fixturekit.yaml, with their types
_FIELD_TYPES: dict[str, type] = {
    "backend": str,
    "deep": bool,
    "detect_cycles": bool,
}


def load_config(repo_path: Path, *, use_env: bool = True) -> FixtureConfig:
    """Load fixturekit.yaml from ``repo_path`` if it exists.

    Args:
        repo_path: Directory that may contain fixturekit.yaml.
        use_env: Apply FIXTUREKIT_* environment variables on top of the file.

    Returns:
        Validated FixtureConfig.

    Raises:
        ConfigurationError: If the file cannot be read or parsed, contains
            unknown fields or wrong types, or the merged config is invalid.
    """
    config = FixtureConfig()
    config_file = repo_path / CONFIG_FILENAME
    if config_file.exists():
        try:
            content = config_file.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError([f"Failed to read {config_file}: {e}"]) from e
        config = _build_config(_parse_yaml(content))
        logger.debug("loaded %s", config_file)

    if use_env:
        config = FixtureConfig.from_env(config, validate=False)

    errors = config.validate()
    if errors:
        raise ConfigurationError(errors)
    return config


def _parse_yaml(content: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError([f"Invalid YAML syntax in {CONFIG_FILENAME}: {e}"]) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            [f"{CONFIG_FILENAME} must be a YAML mapping, got {type(data).__name__}"]
        )
    return data


def _build_config(data: dict[str, Any]) -> FixtureConfig:
    errors: list[str] = []
    for key, value in data.items():
        expected = _FIELD_TYPES.get(key)
        if expected is None:
            errors.append(f"Unknown field '{key}' in {CONFIG_FILENAME}")
        elif not isinstance(value, expected):
            errors.append(
                f"{key} must be a {expected.__name__}, got {type(value).__name__}"
            )
    if errors:
        raise ConfigurationError(errors)
    return FixtureConfig(**data)
