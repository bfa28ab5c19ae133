"""Models for the backing-buffer memory layer.

Provides the buffer layout description, allocator configuration,
allocation ledger events and memory exceptions.
"""

from __future__ import annotations

from typing import Literal

import numpy as np
from numpy.typing import DTypeLike
from pydantic import BaseModel, ConfigDict, Field, computed_field


class Layout(BaseModel):
    """Size and alignment description of a buffer of ``count`` values.

    Computed once when a buffer is acquired and handed back unchanged when it
    is released. Frozen, so two layouts compare (and hash) by value.

    Attributes:
        dtype: numpy dtype of every slot
        count: Number of slots
        itemsize: Bytes per slot
        alignment: Required alignment of each slot, in bytes
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    dtype: np.dtype = Field(description="numpy dtype of every slot")
    count: int = Field(ge=0, description="Number of slots")
    itemsize: int = Field(ge=0, description="Bytes per slot")
    alignment: int = Field(ge=1, description="Slot alignment in bytes")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def size(self) -> int:
        """Total buffer size in bytes."""
        return self.itemsize * self.count

    @classmethod
    def array(cls, dtype: DTypeLike, count: int) -> Layout:
        """Describe a contiguous array of ``count`` values of ``dtype``.

        Args:
            dtype: Anything ``numpy.dtype`` accepts (``object``, ``"int64"``, ...)
            count: Number of slots

        Returns:
            Layout for the array

        Raises:
            LayoutError: If ``count`` is negative or ``dtype`` is not a valid dtype

        Example:
            >>> Layout.array("int32", 4).size
            16
        """
        if count < 0:
            raise LayoutError(f"Layout count must be non-negative, got {count}")
        try:
            dt = np.dtype(dtype)
        except TypeError as e:
            raise LayoutError(f"Invalid dtype {dtype!r}: {e}") from e
        return cls(dtype=dt, count=count, itemsize=dt.itemsize, alignment=dt.alignment)

    @classmethod
    def of(cls, buffer: np.ndarray) -> Layout:
        """Describe an existing one-dimensional buffer."""
        if buffer.ndim != 1:
            raise LayoutError(f"Buffers are one-dimensional, got shape {buffer.shape}")
        return cls.array(buffer.dtype, buffer.shape[0])

    def __str__(self) -> str:
        return f"{self.count} x {self.dtype} ({self.size} bytes, align {self.alignment})"


class AllocatorConfig(BaseModel):
    """Configuration for the allocator backing dense containers.

    Args:
        backend: ``"numpy"`` allocates with ``numpy.empty``; ``"tracking"``
            additionally keeps a ledger of live buffers and checks every release.
        fail_after: Tracking only. Number of allocations that succeed before
            every further allocation fails. ``None`` never fails.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    backend: Literal["numpy", "tracking"] = "numpy"
    fail_after: int | None = Field(default=None, ge=0)


class AllocationEvent(BaseModel):
    """One entry in a tracking allocator's ledger."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["allocate", "release"]
    buffer_id: int
    layout: Layout


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class LayoutError(ValueError):
    """Raised when a layout cannot be described (negative count, bad dtype)."""


class AllocationError(MemoryError):
    """Raised when a backing buffer cannot be acquired.

    Attributes:
        layout: The layout that could not be satisfied.
    """

    def __init__(self, layout: Layout, reason: str = "allocation failed") -> None:
        self.layout = layout
        super().__init__(f"Cannot allocate {layout}: {reason}")


class LayoutMismatchError(RuntimeError):
    """Raised when a buffer is released with a layout other than its acquisition layout.

    Attributes:
        expected: Layout recorded at acquisition.
        actual: Layout passed on release.
    """

    def __init__(self, expected: Layout, actual: Layout) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Release layout {actual} does not match acquisition layout {expected}")


class DoubleReleaseError(RuntimeError):
    """Raised when a buffer that is not live is released."""


class SlotValueError(ValueError):
    """Raised when a value cannot be stored exactly in a slot of a numeric buffer.

    Attributes:
        value: The rejected value.
        layout: Layout of the buffer.
    """

    def __init__(self, value: object, layout: Layout, reason: str) -> None:
        self.value = value
        self.layout = layout
        super().__init__(f"Cannot store {value!r} in a {layout.dtype} slot: {reason}")


class BufferReleasedError(RuntimeError):
    """Raised when a released buffer (or its container) is used."""


class MemoryConfigError(ValueError):
    """Raised when the allocator configuration names an unknown backend."""
