"""Tests for key contract verification, including hand-written key types."""

from __future__ import annotations

from enum import Enum

import pytest

from enum_collections.core.enumerated import (
    KeyContractError,
    is_enumerated,
    require_contract,
    verify_contract,
)


def _hand_written(positions: dict[str, int], count: int | None = None) -> type:
    """Build a key type implementing the contract by hand with the given positions."""

    class Suit(Enum):
        CLUBS = "c"
        DIAMONDS = "d"
        HEARTS = "h"

        def position(self) -> int:
            return positions[self.name]

        @classmethod
        def len(cls) -> int:
            return len(positions) if count is None else count

        @classmethod
        def variants(cls) -> tuple[Suit, ...]:
            return tuple(sorted(cls, key=lambda suit: positions[suit.name]))

    return Suit


class TestRequireContract:
    """Tests for the structural contract check."""

    def test_plain_enum_is_rejected(self):
        """Test an enum without the contract is reported with a hint."""

        class Plain(Enum):
            A = 1

        assert not is_enumerated(Plain)
        with pytest.raises(KeyContractError, match="@enumerated"):
            require_contract(Plain)

    def test_non_class_is_rejected(self):
        """Test an instance is not a key type."""
        with pytest.raises(KeyContractError, match="must be a class"):
            require_contract("Letter")

    def test_derived_type_passes(self, letter):
        """Test a derived key type passes."""
        require_contract(letter)


class TestVerifyContract:
    """Tests for bijection verification."""

    def test_valid_hand_written_contract(self):
        """Test a correct hand-written implementation verifies."""
        suit = _hand_written({"CLUBS": 0, "DIAMONDS": 1, "HEARTS": 2})
        verify_contract(suit)

    def test_duplicate_positions_rejected(self):
        """Test two keys sharing a position are rejected."""
        suit = _hand_written({"CLUBS": 0, "DIAMONDS": 1, "HEARTS": 1})
        with pytest.raises(KeyContractError, match="share position 1"):
            verify_contract(suit)

    def test_out_of_range_position_rejected(self):
        """Test a position outside [0, len) is rejected."""
        suit = _hand_written({"CLUBS": 0, "DIAMONDS": 1, "HEARTS": 3})
        with pytest.raises(KeyContractError, match="outside"):
            verify_contract(suit)

    def test_len_mismatch_rejected(self):
        """Test len() disagreeing with variants() is rejected."""
        suit = _hand_written({"CLUBS": 0, "DIAMONDS": 1, "HEARTS": 2}, count=4)
        with pytest.raises(KeyContractError, match="lists 3 keys but len\\(\\) is 4"):
            verify_contract(suit)

    def test_negative_len_rejected(self):
        """Test a negative len() is rejected."""
        suit = _hand_written({"CLUBS": 0, "DIAMONDS": 1, "HEARTS": 2}, count=-1)
        with pytest.raises(KeyContractError, match="non-negative"):
            verify_contract(suit)

    def test_misordered_variants_rejected(self):
        """Test variants() not in position order is rejected."""

        class Backwards(Enum):
            A = 1
            B = 2

            def position(self) -> int:
                return 0 if self is Backwards.A else 1

            @classmethod
            def len(cls) -> int:
                return 2

            @classmethod
            def variants(cls) -> tuple[Backwards, ...]:
                return (cls.B, cls.A)

        with pytest.raises(KeyContractError, match="listed at index 0"):
            verify_contract(Backwards)

    def test_failed_verification_is_not_cached(self):
        """Test a rejected type is rejected again on the next call."""
        suit = _hand_written({"CLUBS": 0, "DIAMONDS": 0, "HEARTS": 1})
        for _ in range(2):
            with pytest.raises(KeyContractError):
                verify_contract(suit)
