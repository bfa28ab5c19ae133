"""Instrumented allocator that audits every acquisition and release.

Keeps a ledger of live buffers together with the layout each was acquired
with, so a release under any other layout (or a second release) fails
loudly instead of corrupting state. Intended for tests and diagnostics.
"""

from __future__ import annotations

import logging

import numpy as np

from enum_collections.core.memory.models import (
    AllocationError,
    AllocationEvent,
    DoubleReleaseError,
    Layout,
    LayoutMismatchError,
)

logger = logging.getLogger(__name__)


class TrackingAllocator:
    """
    Allocator with a live-buffer ledger.

    Not thread-safe (use per-test instance).

    Example:
        >>> allocator = TrackingAllocator()
        >>> with EnumTable(Letter, int, allocator=allocator):
        ...     assert allocator.live_count == 1
        >>> allocator.live_count
        0
    """

    def __init__(self, fail_after: int | None = None) -> None:
        """Initialize the ledger.

        Args:
            fail_after: Number of allocations that succeed before every further
                allocation raises AllocationError. None never fails.
        """
        self._fail_after = fail_after
        # Live buffers are held here, so their ids cannot be reused while tracked
        self._live: dict[int, tuple[np.ndarray, Layout]] = {}
        self._events: list[AllocationEvent] = []
        self.allocations = 0
        self.releases = 0

    @property
    def live_count(self) -> int:
        """Number of buffers allocated and not yet released."""
        return len(self._live)

    @property
    def events(self) -> list[AllocationEvent]:
        """Ledger of every successful allocation and release, oldest first."""
        return list(self._events)

    def layout_of(self, buffer: np.ndarray) -> Layout | None:
        """Return the acquisition layout of a live buffer, or None."""
        entry = self._live.get(id(buffer))
        if entry is None or entry[0] is not buffer:
            return None
        return entry[1]

    def allocate(self, layout: Layout) -> np.ndarray:
        """Acquire a buffer and record it as live.

        Raises:
            AllocationError: Once ``fail_after`` allocations have succeeded
        """
        if self._fail_after is not None and self.allocations >= self._fail_after:
            logger.debug("Refusing allocation %d: %s", self.allocations + 1, layout)
            raise AllocationError(layout, f"allocation limit of {self._fail_after} reached")

        try:
            buffer = np.empty(layout.count, dtype=layout.dtype)
        except MemoryError as e:
            raise AllocationError(layout, str(e) or "out of memory") from e

        self._live[id(buffer)] = (buffer, layout)
        self._events.append(AllocationEvent(kind="allocate", buffer_id=id(buffer), layout=layout))
        self.allocations += 1
        return buffer

    def deallocate(self, buffer: np.ndarray, layout: Layout) -> None:
        """Release a live buffer.

        Raises:
            DoubleReleaseError: If the buffer is not live
            LayoutMismatchError: If ``layout`` differs from the acquisition layout
        """
        expected = self.layout_of(buffer)
        if expected is None:
            raise DoubleReleaseError(f"Buffer {id(buffer):#x} is not live ({layout})")
        if expected != layout:
            raise LayoutMismatchError(expected=expected, actual=layout)

        if buffer.dtype.hasobject:
            buffer.fill(None)

        del self._live[id(buffer)]
        self._events.append(AllocationEvent(kind="release", buffer_id=id(buffer), layout=layout))
        self.releases += 1
