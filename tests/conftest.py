"""Shared pytest fixtures for enum-collections tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from enum import Enum, auto
from pathlib import Path

import pytest

from enum_collections.core.config import clear_config_cache
from enum_collections.core.enumerated import enumerated
from enum_collections.core.memory import TrackingAllocator, set_default_allocator

# ============================================================================
# Key Types
# ============================================================================


@enumerated
class Letter(Enum):
    A = auto()
    B = auto()


@enumerated
class Weekday(Enum):
    MONDAY = "mon"
    TUESDAY = "tue"
    WEDNESDAY = "wed"
    THURSDAY = "thu"
    FRIDAY = "fri"
    SATURDAY = "sat"
    SUNDAY = "sun"


@pytest.fixture
def letter() -> type[Letter]:
    """Two-variant key type: A (position 0), B (position 1)."""
    return Letter


@pytest.fixture
def weekday() -> type[Weekday]:
    """Seven-variant key type with string values."""
    return Weekday


# ============================================================================
# Memory Fixtures
# ============================================================================


@pytest.fixture
def tracking_allocator() -> TrackingAllocator:
    """Provide a fresh TrackingAllocator with an empty ledger."""
    return TrackingAllocator()


# ============================================================================
# Isolation
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[Path]:
    """Run each test in an empty directory with no cached config or allocator."""
    monkeypatch.chdir(tmp_path)
    clear_config_cache()
    set_default_allocator(None)
    yield tmp_path
    clear_config_cache()
    set_default_allocator(None)


@pytest.fixture(autouse=True)
def restore_root_logging() -> Iterator[None]:
    """Undo configure_logging calls made by a test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
