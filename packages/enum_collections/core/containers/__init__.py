"""Enum-keyed containers.

- ``EnumMap``: sparse, every slot optional
- ``EnumTable``: dense, every slot populated from a default factory
"""

from enum_collections.core.containers.enum_map import EnumMap
from enum_collections.core.containers.enum_table import EnumTable

__all__ = [
    "EnumMap",
    "EnumTable",
]
