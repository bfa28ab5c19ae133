"""Dense enum-keyed table.

Every key always has a value: each slot is filled from ``default_factory``
when the table is built, and ``reset`` puts a fresh default back. Values
live in a ``SlotBuffer`` acquired from an allocator and released exactly
once, with the layout it was acquired with.

Example:
    >>> with EnumTable(Letter, int) as counts:
    ...     counts[Letter.A] = 42
    ...     counts[Letter.B]
    0
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import Any, Generic, TypeVar

from numpy.typing import DTypeLike

from enum_collections.core.containers.base import EnumKeyed, key_name
from enum_collections.core.memory.buffer import SlotBuffer
from enum_collections.core.memory.factory import default_allocator
from enum_collections.core.memory.models import Layout
from enum_collections.core.memory.protocols import Allocator

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")


class EnumTable(EnumKeyed[K], Generic[K, V]):
    """Key-value table with one always-populated slot per key of ``key_type``.

    Args:
        key_type: Key type satisfying the key enumeration contract
        default_factory: Zero-argument callable producing the default value;
            called once per slot, so mutable defaults are never shared
        dtype: numpy dtype of the slots. ``object`` (the default) stores any
            value; a numeric dtype packs numeric values
        allocator: Allocator for the backing buffer (process default if None)

    Raises:
        KeyContractError: If ``key_type`` does not implement the contract
        AllocationError: If the backing buffer cannot be acquired
    """

    def __init__(
        self,
        key_type: type[K],
        default_factory: Callable[[], V],
        *,
        dtype: DTypeLike = object,
        allocator: Allocator | None = None,
    ) -> None:
        super().__init__(key_type)
        self._default_factory = default_factory
        self._slots: SlotBuffer[V] = SlotBuffer(
            self._len,
            default_factory,
            allocator if allocator is not None else default_allocator(),
            dtype=dtype,
        )
        logger.debug("Built EnumTable(%s) over %s", key_type.__qualname__, self._slots.layout)

    @property
    def default_factory(self) -> Callable[[], V]:
        """Callable producing the default slot value."""
        return self._default_factory

    @property
    def layout(self) -> Layout:
        """Layout of the backing buffer."""
        return self._slots.layout

    @property
    def closed(self) -> bool:
        """Whether the backing buffer has been released."""
        return self._slots.released

    def get(self, key: K) -> V:
        """Return the value stored for ``key``."""
        return self._slots[self._index(key)]

    def insert(self, key: K, value: V) -> None:
        """Store ``value`` for ``key``, dropping the previous value."""
        self._slots[self._index(key)] = value

    def reset(self, key: K) -> None:
        """Replace the value for ``key`` with a fresh default."""
        self._slots[self._index(key)] = self._default_factory()

    def close(self) -> None:
        """Release the backing buffer. Safe to call multiple times (idempotent).

        Any further access raises BufferReleasedError.
        """
        self._slots.release()

    def keys(self) -> Iterator[K]:
        """Every key in declaration order."""
        return iter(self._variants)

    def values(self) -> Iterator[V]:
        """Every value in key declaration order."""
        return iter(self._slots)

    def items(self) -> Iterator[tuple[K, V]]:
        """Every ``(key, value)`` pair in declaration order."""
        return zip(self._variants, self._slots)

    def to_dict(self) -> dict[K, V]:
        """Return every entry as a plain dict."""
        return dict(self.items())

    def __getitem__(self, key: K) -> V:
        return self._slots[self._index(key)]

    def __setitem__(self, key: K, value: V) -> None:
        self._slots[self._index(key)] = value

    def __contains__(self, key: object) -> bool:
        return isinstance(key, self._key_type)

    def __iter__(self) -> Iterator[K]:
        return self.keys()

    def __len__(self) -> int:
        return self._len

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EnumTable):
            return NotImplemented
        if self._key_type is not other._key_type:
            return False
        return all(mine == theirs for mine, theirs in zip(self.values(), other.values()))

    __hash__ = None  # type: ignore[assignment]

    def __enter__(self) -> EnumTable[K, V]:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        name = self._key_type.__qualname__
        if self.closed:
            return f"EnumTable({name}, <closed>)"
        entries = ", ".join(f"{key_name(key)}: {value!r}" for key, value in self.items())
        return f"EnumTable({name}, {{{entries}}})"
