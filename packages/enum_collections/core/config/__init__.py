"""Configuration management for enum-collections."""

from enum_collections.core.config.loader import (
    clear_config_cache,
    configure_logging,
    detect_format,
    load_collections_config,
    load_config,
)
from enum_collections.core.config.models import CollectionsConfig, LoggingConfig

__all__ = [
    # Loaders
    "load_config",
    "load_collections_config",
    "clear_config_cache",
    "detect_format",
    "configure_logging",
    # Models
    "CollectionsConfig",
    "LoggingConfig",
]
