"""Runtime checks for the key enumeration contract.

``require_contract`` is the cheap structural check containers run on
construction. ``verify_contract`` additionally walks every variant and
proves ``position`` is a bijection onto ``[0, len())``; use it to test
hand-written key types, or enable ``verify_contracts`` in config to have
containers run it.
"""

from __future__ import annotations

import logging
import weakref

from enum_collections.core.enumerated.errors import KeyContractError
from enum_collections.core.enumerated.protocols import CONTRACT_METHODS

logger = logging.getLogger(__name__)

_verified: weakref.WeakSet[type] = weakref.WeakSet()


def is_enumerated(key_type: object) -> bool:
    """Check whether a type exposes the contract methods.

    Args:
        key_type: Candidate key type.

    Returns:
        True if ``key_type`` is a class with callable ``position``, ``len``
        and ``variants`` attributes.
    """
    return isinstance(key_type, type) and all(
        callable(getattr(key_type, name, None)) for name in CONTRACT_METHODS
    )


def require_contract(key_type: object) -> None:
    """Raise unless ``key_type`` exposes the contract methods.

    Raises:
        KeyContractError: If any contract method is missing.
    """
    if not isinstance(key_type, type):
        raise KeyContractError(key_type, "key type must be a class")

    missing = [name for name in CONTRACT_METHODS if not callable(getattr(key_type, name, None))]
    if missing:
        raise KeyContractError(
            key_type,
            f"missing {', '.join(missing)} (decorate the Enum with @enumerated)",
        )


def verify_contract(key_type: object) -> None:
    """Prove that ``key_type.position`` is a bijection onto ``[0, len())``.

    Checks that ``len()`` is a non-negative int, ``variants()`` yields exactly
    ``len()`` keys, and the key at index ``i`` of ``variants()`` reports
    position ``i``. Results are cached per type.

    Args:
        key_type: Derived or hand-written key type.

    Raises:
        KeyContractError: On the first violation found.
    """
    if key_type in _verified:
        return

    require_contract(key_type)

    count = key_type.len()  # type: ignore[attr-defined]
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise KeyContractError(key_type, f"len() must be a non-negative int, got {count!r}")

    variants = tuple(key_type.variants())  # type: ignore[attr-defined]
    if len(variants) != count:
        raise KeyContractError(
            key_type, f"variants() lists {len(variants)} keys but len() is {count}"
        )

    owners: dict[int, object] = {}
    for index, key in enumerate(variants):
        position = key.position()
        if isinstance(position, bool) or not isinstance(position, int):
            raise KeyContractError(key_type, f"{key!r}.position() returned {position!r}")
        if not 0 <= position < count:
            raise KeyContractError(
                key_type, f"{key!r}.position() is {position}, outside [0, {count})"
            )
        if position in owners:
            raise KeyContractError(
                key_type, f"{key!r} and {owners[position]!r} share position {position}"
            )
        if position != index:
            raise KeyContractError(
                key_type, f"{key!r} is listed at index {index} but reports position {position}"
            )
        owners[position] = key

    _verified.add(key_type)
    logger.debug("Verified key contract for %s (%d keys)", key_type.__qualname__, count)
