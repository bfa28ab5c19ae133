"""Exceptions raised by the key enumeration contract."""

from __future__ import annotations


class DerivationError(TypeError):
    """Raised when @enumerated is applied to a type that is not a closed, data-free enum.

    Attributes:
        key_type: The rejected type (or object).
        reason: Short description of the violation.
    """

    def __init__(self, key_type: object, reason: str) -> None:
        self.key_type = key_type
        self.reason = reason
        name = getattr(key_type, "__qualname__", repr(key_type))
        super().__init__(f"Cannot derive key contract for {name}: {reason}")


class KeyContractError(TypeError):
    """Raised when a key type does not satisfy the key enumeration contract.

    Attributes:
        key_type: The offending key type.
        reason: Short description of the violation.
    """

    def __init__(self, key_type: object, reason: str) -> None:
        self.key_type = key_type
        self.reason = reason
        name = getattr(key_type, "__qualname__", repr(key_type))
        super().__init__(f"{name} is not a valid key type: {reason}")


class KeyTypeError(TypeError):
    """Raised when a container is addressed with a key of the wrong type.

    Example:
        >>> table[Color.RED]  # table keyed by Letter
        KeyTypeError: Expected a Letter key, got Color.RED
    """

    def __init__(self, expected: type, key: object) -> None:
        self.expected = expected
        self.key = key
        super().__init__(f"Expected a {expected.__qualname__} key, got {key!r}")
