"""Sparse enum-keyed map.

Every key has a slot that is either present or absent. Absence is stored
as ``None``, so ``None`` cannot be stored as a value: writing ``None`` is
the same as removing the key.

Example:
    >>> @enumerated
    ... class Letter(Enum):
    ...     A = auto()
    ...     B = auto()
    >>> letters = EnumMap(Letter)
    >>> letters.insert(Letter.A, 42)
    >>> letters.get(Letter.A)
    42
    >>> letters[Letter.B] is None
    True
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Generic, TypeVar, overload

from enum_collections.core.containers.base import EnumKeyed, key_name

K = TypeVar("K")
V = TypeVar("V")
D = TypeVar("D")


class EnumMap(EnumKeyed[K], Generic[K, V]):
    """Key-value map with one optional slot per key of ``key_type``.

    Storage is a list sized once to ``key_type.len()``; it never grows or
    shrinks. All key-addressed operations are O(1).

    Args:
        key_type: Key type satisfying the key enumeration contract
        initial: Optional mapping or iterable of ``(key, value)`` pairs

    Raises:
        KeyContractError: If ``key_type`` does not implement the contract
    """

    def __init__(
        self,
        key_type: type[K],
        initial: Mapping[K, V] | Iterable[tuple[K, V]] | None = None,
    ) -> None:
        super().__init__(key_type)
        self._slots: list[V | None] = [None] * self._len
        if initial is not None:
            self.update(initial)

    @overload
    def get(self, key: K) -> V | None: ...

    @overload
    def get(self, key: K, default: D) -> V | D: ...

    def get(self, key: K, default: Any = None) -> Any:
        """Return the value stored for ``key``, or ``default`` if absent."""
        value = self._slots[self._index(key)]
        return default if value is None else value

    def insert(self, key: K, value: V | None) -> None:
        """Store ``value`` for ``key``, replacing any previous value."""
        self._slots[self._index(key)] = value

    def remove(self, key: K) -> None:
        """Clear the slot for ``key``. Removing an absent key is a no-op."""
        self._slots[self._index(key)] = None

    def pop(self, key: K, default: D | None = None) -> V | D | None:
        """Clear the slot for ``key`` and return its previous value (or ``default``)."""
        index = self._index(key)
        value = self._slots[index]
        self._slots[index] = None
        return default if value is None else value

    def update(self, other: Mapping[K, V] | Iterable[tuple[K, V]]) -> None:
        """Insert every pair from a mapping or an iterable of pairs."""
        pairs = other.items() if isinstance(other, Mapping) else other
        for key, value in pairs:
            self.insert(key, value)

    def clear(self) -> None:
        """Clear every slot."""
        for index in range(len(self._slots)):
            self._slots[index] = None

    def keys(self) -> Iterator[K]:
        """Present keys in declaration order."""
        return (key for key, value in zip(self._variants, self._slots) if value is not None)

    def values(self) -> Iterator[V]:
        """Present values in key declaration order."""
        return (value for value in self._slots if value is not None)

    def items(self) -> Iterator[tuple[K, V]]:
        """Present ``(key, value)`` pairs in declaration order."""
        return (
            (key, value) for key, value in zip(self._variants, self._slots) if value is not None
        )

    def to_dict(self) -> dict[K, V]:
        """Return the present entries as a plain dict."""
        return dict(self.items())

    def __getitem__(self, key: K) -> V | None:
        return self._slots[self._index(key)]

    def __setitem__(self, key: K, value: V | None) -> None:
        self._slots[self._index(key)] = value

    def __delitem__(self, key: K) -> None:
        self.remove(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, self._key_type):
            return False
        return self._slots[self._index(key)] is not None

    def __iter__(self) -> Iterator[K]:
        return self.keys()

    def __len__(self) -> int:
        """Number of present slots."""
        return sum(1 for value in self._slots if value is not None)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EnumMap):
            return NotImplemented
        return self._key_type is other._key_type and self._slots == other._slots

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        entries = ", ".join(f"{key_name(key)}: {value!r}" for key, value in self.items())
        return f"EnumMap({self._key_type.__qualname__}, {{{entries}}})"
