"""Owning handle for a dense container's backing buffer.

``SlotBuffer`` is the only place a raw buffer is touched. It computes the
layout once, acquires the buffer, fills every slot from a default factory,
and releases the buffer exactly once with that same layout. The release is
registered with ``weakref.finalize``, so it runs on explicit ``release()``,
on garbage collection, or at interpreter exit, whichever comes first.
"""

from __future__ import annotations

import logging
import weakref
from collections.abc import Callable, Iterator
from typing import Any, Generic, TypeVar

import numpy as np
from numpy.typing import DTypeLike

from enum_collections.core.memory.models import BufferReleasedError, Layout, SlotValueError
from enum_collections.core.memory.protocols import Allocator

logger = logging.getLogger(__name__)

V = TypeVar("V")


def _checked(value: Any, layout: Layout) -> Any:
    """Return a value the slot dtype holds exactly, or raise SlotValueError.

    Object slots take any value unchanged. Numeric (and other fixed) dtypes
    must round-trip: 3.7 into int64 or 1000 into int8 is rejected rather
    than truncated or wrapped.
    """
    if layout.dtype.hasobject:
        return value

    try:
        stored = np.array(value, dtype=layout.dtype)
    except (OverflowError, TypeError, ValueError) as e:
        raise SlotValueError(value, layout, str(e)) from e

    if stored.shape != ():
        raise SlotValueError(value, layout, "slots hold scalars")

    held = stored.item()
    # NaN never equals itself but still round-trips
    if not (held == value or (held != held and value != value)):
        raise SlotValueError(value, layout, f"would be stored as {held!r}")
    return stored


class SlotBuffer(Generic[V]):
    """Fixed-size buffer of ``count`` live values.

    States: live from the end of ``__init__`` until ``release()`` (or
    collection), released afterwards. A buffer is never observable half
    initialized: if allocation fails nothing exists, and if the default
    factory raises the buffer is released before the error propagates.

    Writes to a non-object buffer are checked: a value the dtype cannot
    hold exactly raises SlotValueError and the slot keeps its old value.

    Args:
        count: Number of slots
        default_factory: Zero-argument callable, called once per slot
        allocator: Allocator that acquires and releases the buffer
        dtype: numpy dtype of the slots (``object`` stores any value)
    """

    def __init__(
        self,
        count: int,
        default_factory: Callable[[], V],
        allocator: Allocator,
        dtype: DTypeLike = object,
    ) -> None:
        layout = Layout.array(dtype, count)
        array = allocator.allocate(layout)

        try:
            for index in range(count):
                array[index] = _checked(default_factory(), layout)
        except BaseException:
            logger.debug("Default factory failed, releasing %s", layout)
            allocator.deallocate(array, layout)
            raise

        self._layout = layout
        self._array: np.ndarray | None = array
        self._finalizer = weakref.finalize(self, allocator.deallocate, array, layout)

    @property
    def layout(self) -> Layout:
        """Layout the buffer was acquired with (and will be released with)."""
        return self._layout

    @property
    def released(self) -> bool:
        """Whether the buffer has been released."""
        return not self._finalizer.alive

    def release(self) -> None:
        """Release the buffer. Safe to call multiple times (idempotent)."""
        try:
            self._finalizer()
        finally:
            self._array = None

    def _live(self) -> np.ndarray:
        if self._array is None:
            raise BufferReleasedError(f"Buffer of {self._layout} has been released")
        return self._array

    def __getitem__(self, index: int) -> V:
        return self._live()[index]

    def __setitem__(self, index: int, value: V) -> None:
        self._live()[index] = _checked(value, self._layout)

    def __len__(self) -> int:
        return self._layout.count

    def __iter__(self) -> Iterator[V]:
        return iter(self._live())

    def __enter__(self) -> SlotBuffer[V]:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.release()
