"""Protocol for key types usable by enum-keyed containers.

A key type maps each of its values to a dense position in ``[0, len())``.
Containers size their storage as exactly ``len()`` slots and trust
``position()`` as an index, so the mapping must be a bijection. The
protocol is ``@runtime_checkable`` so callers can guard with
``isinstance(key, Enumerated)``.
"""

from __future__ import annotations

from typing import Protocol, Self, runtime_checkable

CONTRACT_METHODS: tuple[str, ...] = ("position", "len", "variants")


@runtime_checkable
class Enumerated(Protocol):
    """Key enumeration contract.

    Not intended to be implemented by hand: decorate an ``Enum`` with
    ``@enumerated`` instead. Hand-written implementations must pass
    ``verify_contract``.
    """

    def position(self) -> int:
        """Return the zero-based position of this key."""
        ...

    @classmethod
    def len(cls) -> int:
        """Return the total number of keys."""
        ...

    @classmethod
    def variants(cls) -> tuple[Self, ...]:
        """Return every key, ordered by position."""
        ...
