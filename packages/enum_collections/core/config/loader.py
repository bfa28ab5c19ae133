"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from enum_collections.core.config.models import CollectionsConfig
from enum_collections.core.utils.logging import configure_logging as _configure_root_logging

logger = logging.getLogger(__name__)

# Searched in order when no explicit path is given
_DEFAULT_CONFIG_PATHS = (
    Path("enum_collections.yaml"),
    Path("enum_collections.yml"),
    Path("enum_collections.json"),
)
_config_cache: CollectionsConfig | None = None


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Args:
        file_path: Path to config file

    Returns:
        Format string: "json" or "yaml"

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("enum_collections.json")
        'json'
        >>> detect_format("enum_collections.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"]:
        return "yaml"
    else:
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return raw configuration dictionary.

    Format is auto-detected from the file extension.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Raw configuration dictionary

    Raises:
        FileNotFoundError: If config file does not exist
        ValueError: If format is not supported or file content is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)

    if fmt == "json":
        try:
            with path.open("r", encoding="utf-8") as f:
                content = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    else:
        try:
            with path.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
        # safe_load returns None for empty files
        if content is None:
            content = {}

    if not isinstance(content, dict):
        raise ValueError(f"Config root in {path} must be a mapping, got {type(content).__name__}")
    return content


def _find_default_path() -> Path | None:
    for candidate in _DEFAULT_CONFIG_PATHS:
        if candidate.exists():
            return candidate
    return None


def load_collections_config(path: str | Path | None = None) -> CollectionsConfig:
    """Load and validate library configuration.

    With no explicit path, the first of ``enum_collections.yaml``,
    ``enum_collections.yml`` and ``enum_collections.json`` found in the
    working directory is used, falling back to defaults when none exists.
    The default-path result is cached until ``clear_config_cache()``.

    Args:
        path: Explicit path to a config file (.json, .yaml, or .yml)

    Returns:
        Validated CollectionsConfig instance with defaults for missing values

    Raises:
        FileNotFoundError: If an explicit path does not exist
        ValidationError: If config is invalid
    """
    global _config_cache

    if path is not None:
        return CollectionsConfig.model_validate(load_config(path))

    if _config_cache is not None:
        return _config_cache

    default_path = _find_default_path()
    if default_path is not None:
        logger.debug("Loading collections config from %s", default_path)
        config = CollectionsConfig.model_validate(load_config(default_path))
    else:
        config = CollectionsConfig()

    _config_cache = config
    return config


def clear_config_cache() -> None:
    """Forget the cached default config so the next load re-reads it."""
    global _config_cache
    _config_cache = None


def configure_logging(config: CollectionsConfig | None = None) -> None:
    """Configure Python logging from collections config.

    Args:
        config: CollectionsConfig instance (loads default if None)
    """
    if config is None:
        config = load_collections_config()

    _configure_root_logging(
        level=config.logging.level,
        format_string=config.logging.format,
        filename=config.logging.filename,
        structured=config.logging.structured,
    )
