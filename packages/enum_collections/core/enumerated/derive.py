"""Derivation of the key enumeration contract for Enum classes.

``@enumerated`` walks the declared members once and installs
``position``, ``len`` and ``variants`` on the class. Positions follow
declaration order and never depend on member values.

Example:
    >>> @enumerated
    ... class Letter(Enum):
    ...     A = auto()
    ...     B = auto()
    >>> Letter.B.position()
    1
    >>> Letter.len()
    2
"""

from __future__ import annotations

import logging
from enum import Enum, Flag
from typing import TypeVar

from enum_collections.core.enumerated.errors import DerivationError
from enum_collections.core.enumerated.protocols import CONTRACT_METHODS

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=type[Enum])

# Per-member attribute holding the declaration index
_POSITION_ATTR = "_enum_position"
_VARIANTS_ATTR = "_enum_variants"


def _position(self: Enum) -> int:
    return self._enum_position  # type: ignore[attr-defined]


def _len(cls: type[Enum]) -> int:
    return len(cls._enum_variants)  # type: ignore[attr-defined]


def _variants(cls: type[Enum]) -> tuple[Enum, ...]:
    return cls._enum_variants  # type: ignore[attr-defined]


def _check_derivable(cls: object) -> None:
    """Reject anything that is not a closed enumeration of plain variants.

    Raises:
        DerivationError: On the first violation found.
    """
    if not isinstance(cls, type) or not issubclass(cls, Enum):
        raise DerivationError(cls, "only Enum subclasses can be enumerated")

    if cls.__module__ == Enum.__module__:
        raise DerivationError(cls, "the standard enum base classes are shared by every Enum")

    if issubclass(cls, Flag):
        raise DerivationError(cls, "Flag enums are open under combination")

    aliases = [name for name, member in cls.__members__.items() if member.name != name]
    if aliases:
        raise DerivationError(cls, f"aliases are not distinct variants: {', '.join(aliases)}")

    for name in CONTRACT_METHODS:
        if name in cls.__members__:
            raise DerivationError(cls, f"member {name!r} collides with the contract method")
        if name in cls.__dict__:
            raise DerivationError(cls, f"{name!r} is already defined on the class")

    for member in cls:
        # Public attributes come from a custom __init__/__new__ unpacking the value
        fields = [name for name in getattr(member, "__dict__", {}) if not name.startswith("_")]
        if fields:
            raise DerivationError(
                cls, f"variant {member.name} carries data fields: {', '.join(fields)}"
            )


def enumerated(cls: E) -> E:
    """Derive the key enumeration contract for an Enum class.

    Args:
        cls: Enum class whose members carry no attributes beyond their value.

    Returns:
        The same class with ``position``, ``len`` and ``variants`` installed.

    Raises:
        DerivationError: If ``cls`` is not an Enum, is a standard-library enum
            base, is a Flag, declares aliases, has members carrying data fields,
            or already defines a contract method.
    """
    if isinstance(cls, type) and _VARIANTS_ATTR in cls.__dict__:
        return cls

    _check_derivable(cls)

    variants = tuple(cls)
    for index, member in enumerate(variants):
        setattr(member, _POSITION_ATTR, index)

    setattr(cls, _VARIANTS_ATTR, variants)
    cls.position = _position  # type: ignore[attr-defined]
    cls.len = classmethod(_len)  # type: ignore[attr-defined]
    cls.variants = classmethod(_variants)  # type: ignore[attr-defined]

    logger.debug(
        "Derived key contract for %s: %d variants (%s)",
        cls.__qualname__,
        len(variants),
        ", ".join(member.name for member in variants),
    )
    return cls
