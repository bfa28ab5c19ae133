"""Test suite for enum-collections.

Unit tests live under tests/unit/<subpackage>/, mirroring
packages/enum_collections/core/<subpackage>/.
"""
