"""Allocator backed by ``numpy.empty``."""

from __future__ import annotations

import logging

import numpy as np

from enum_collections.core.memory.models import AllocationError, Layout, LayoutMismatchError

logger = logging.getLogger(__name__)


class NumpyAllocator:
    """
    Default allocator for dense containers.

    Buffers are numpy arrays; numpy sizes and aligns them for the dtype.
    Releasing an object buffer clears its slots so the stored values are
    dropped immediately rather than when the array itself is collected.
    Not thread-safe.
    """

    def __init__(self) -> None:
        self._live = 0

    @property
    def live_count(self) -> int:
        """Number of buffers allocated and not yet released."""
        return self._live

    def allocate(self, layout: Layout) -> np.ndarray:
        """Acquire an uninitialized buffer for ``layout``."""
        try:
            buffer = np.empty(layout.count, dtype=layout.dtype)
        except MemoryError as e:
            raise AllocationError(layout, str(e) or "out of memory") from e

        self._live += 1
        logger.debug("Allocated buffer %#x: %s", id(buffer), layout)
        return buffer

    def deallocate(self, buffer: np.ndarray, layout: Layout) -> None:
        """Release ``buffer`` after checking it against ``layout``."""
        actual = Layout.of(buffer)
        if actual != layout:
            raise LayoutMismatchError(expected=actual, actual=layout)

        if buffer.dtype.hasobject:
            buffer.fill(None)

        self._live -= 1
        logger.debug("Released buffer %#x: %s", id(buffer), layout)
