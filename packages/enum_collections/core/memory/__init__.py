"""Backing-buffer memory layer for dense containers.

Provides:
- ``Layout``: size/alignment description computed once per buffer
- ``Allocator`` protocol with numpy and tracking implementations
- ``SlotBuffer``: owning handle with a single, guaranteed release path

Example:
    >>> from enum_collections.core.memory import SlotBuffer, TrackingAllocator
    >>> allocator = TrackingAllocator()
    >>> with SlotBuffer(3, int, allocator) as buffer:
    ...     buffer[0] = 7
    >>> allocator.live_count
    0
"""

from enum_collections.core.memory.buffer import SlotBuffer
from enum_collections.core.memory.factory import (
    create_allocator,
    default_allocator,
    set_default_allocator,
)
from enum_collections.core.memory.impl_numpy import NumpyAllocator
from enum_collections.core.memory.impl_tracking import TrackingAllocator
from enum_collections.core.memory.models import (
    AllocationError,
    AllocationEvent,
    AllocatorConfig,
    BufferReleasedError,
    DoubleReleaseError,
    Layout,
    LayoutError,
    LayoutMismatchError,
    MemoryConfigError,
    SlotValueError,
)
from enum_collections.core.memory.protocols import Allocator

__all__ = [
    # Models
    "Layout",
    "AllocatorConfig",
    "AllocationEvent",
    # Protocol
    "Allocator",
    # Implementations
    "NumpyAllocator",
    "TrackingAllocator",
    # Factory
    "create_allocator",
    "default_allocator",
    "set_default_allocator",
    # Ownership
    "SlotBuffer",
    # Errors
    "AllocationError",
    "BufferReleasedError",
    "DoubleReleaseError",
    "LayoutError",
    "LayoutMismatchError",
    "MemoryConfigError",
    "SlotValueError",
]
