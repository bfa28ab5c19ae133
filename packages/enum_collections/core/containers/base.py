"""Shared key handling for enum-keyed containers."""

from __future__ import annotations

from typing import Generic, TypeVar

from enum_collections.core.config.loader import load_collections_config
from enum_collections.core.enumerated.errors import KeyTypeError
from enum_collections.core.enumerated.verify import require_contract, verify_contract

K = TypeVar("K")


class EnumKeyed(Generic[K]):
    """Base for containers with one slot per key of ``key_type``.

    Checks the key contract once at construction; afterwards every key is
    translated to a slot index through ``key.position()``.
    """

    def __init__(self, key_type: type[K]) -> None:
        require_contract(key_type)
        if load_collections_config().verify_contracts:
            verify_contract(key_type)

        self._key_type = key_type
        self._len: int = key_type.len()  # type: ignore[attr-defined]
        self._variants: tuple[K, ...] = tuple(key_type.variants())  # type: ignore[attr-defined]

    @property
    def key_type(self) -> type[K]:
        """Key type this container is indexed by."""
        return self._key_type

    def _index(self, key: K) -> int:
        if not isinstance(key, self._key_type):
            raise KeyTypeError(self._key_type, key)
        return key.position()  # type: ignore[attr-defined]


def key_name(key: object) -> str:
    """Short display name of a key (the member name for enums)."""
    return getattr(key, "name", repr(key))
