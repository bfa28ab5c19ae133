"""Allocator factory: selects and constructs the configured backend.

Usage::

    from enum_collections.core.memory.factory import create_allocator
    from enum_collections.core.memory.models import AllocatorConfig

    allocator = create_allocator(AllocatorConfig(backend="tracking"))
"""

from __future__ import annotations

from enum_collections.core.memory.impl_numpy import NumpyAllocator
from enum_collections.core.memory.impl_tracking import TrackingAllocator
from enum_collections.core.memory.models import AllocatorConfig, MemoryConfigError
from enum_collections.core.memory.protocols import Allocator

_default_allocator: Allocator | None = None


def create_allocator(config: AllocatorConfig) -> Allocator:
    """Construct an allocator from *config*.

    Args:
        config: Backend selection.

    Returns:
        A fresh ``Allocator`` implementation.

    Raises:
        MemoryConfigError: If the backend is unknown.
    """
    if config.backend == "numpy":
        return NumpyAllocator()

    if config.backend == "tracking":
        return TrackingAllocator(fail_after=config.fail_after)

    raise MemoryConfigError(
        f"Unknown allocator backend: {config.backend!r}. Supported backends: 'numpy', 'tracking'."
    )


def default_allocator() -> Allocator:
    """Return the process-wide allocator, building it from config on first use."""
    global _default_allocator

    if _default_allocator is None:
        # Lazy import: config models depend on this package
        from enum_collections.core.config.loader import load_collections_config

        _default_allocator = create_allocator(load_collections_config().allocator)

    return _default_allocator


def set_default_allocator(allocator: Allocator | None) -> None:
    """Replace the process-wide allocator. ``None`` rebuilds it from config on next use."""
    global _default_allocator
    _default_allocator = allocator
