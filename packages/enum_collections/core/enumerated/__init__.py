"""Key enumeration contract for enum-keyed containers.

Maps every value of a closed key type to a dense position:
- ``Enumerated`` protocol (position / len / variants)
- ``@enumerated`` derivation for Enum classes
- Contract verification for derived and hand-written key types
"""

from enum_collections.core.enumerated.derive import enumerated
from enum_collections.core.enumerated.errors import DerivationError, KeyContractError, KeyTypeError
from enum_collections.core.enumerated.protocols import CONTRACT_METHODS, Enumerated
from enum_collections.core.enumerated.verify import is_enumerated, require_contract, verify_contract

__all__ = [
    # Contract
    "CONTRACT_METHODS",
    "Enumerated",
    # Derivation
    "enumerated",
    # Verification
    "is_enumerated",
    "require_contract",
    "verify_contract",
    # Errors
    "DerivationError",
    "KeyContractError",
    "KeyTypeError",
]
