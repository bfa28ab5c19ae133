"""Protocol for backing-buffer allocators.

All implementations must:
- Return a one-dimensional array matching the requested layout
- Raise AllocationError instead of returning a partial buffer
- Accept on release exactly the layout used at acquisition
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np

from enum_collections.core.memory.models import Layout


@runtime_checkable
class Allocator(Protocol):
    """Acquires and releases fixed-size buffers.

    Lifecycle::

        buffer = allocator.allocate(layout)
        try:
            ...
        finally:
            allocator.deallocate(buffer, layout)
    """

    def allocate(self, layout: Layout) -> np.ndarray:
        """Acquire an uninitialized buffer of ``layout.count`` slots.

        Args:
            layout: Size and alignment description

        Returns:
            One-dimensional array of ``layout.count`` slots of ``layout.dtype``

        Raises:
            AllocationError: If the buffer cannot be acquired
        """
        ...

    def deallocate(self, buffer: np.ndarray, layout: Layout) -> None:
        """Release a buffer previously returned by ``allocate``.

        Args:
            buffer: Buffer to release
            layout: The layout the buffer was acquired with

        Raises:
            LayoutMismatchError: If ``layout`` does not describe ``buffer``
        """
        ...
