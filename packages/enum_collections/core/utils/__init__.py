"""Shared utilities for enum-collections."""

from enum_collections.core.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
