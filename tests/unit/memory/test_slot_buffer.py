"""Tests for SlotBuffer, the owning handle of a backing buffer."""

from __future__ import annotations

import gc
import math

import pytest

from enum_collections.core.memory import (
    AllocationError,
    BufferReleasedError,
    Layout,
    SlotBuffer,
    SlotValueError,
    TrackingAllocator,
)


class TestConstruction:
    """Tests for acquisition and default filling."""

    def test_every_slot_holds_a_default(self, tracking_allocator: TrackingAllocator):
        """Test each slot is filled from the factory."""
        buffer = SlotBuffer(3, lambda: "default", tracking_allocator)

        assert list(buffer) == ["default", "default", "default"]
        assert len(buffer) == 3

    def test_factory_called_once_per_slot(self, tracking_allocator: TrackingAllocator):
        """Test mutable defaults are not shared between slots."""
        buffer = SlotBuffer(2, list, tracking_allocator)
        buffer[0].append(1)

        assert buffer[0] == [1]
        assert buffer[1] == []

    def test_layout_recorded(self, tracking_allocator: TrackingAllocator):
        """Test the buffer records the layout it was acquired with."""
        buffer = SlotBuffer(4, int, tracking_allocator, dtype="int32")

        assert buffer.layout == Layout.array("int32", 4)
        assert tracking_allocator.events[0].layout == buffer.layout

    def test_allocation_failure_propagates(self):
        """Test a failed allocation raises and leaves nothing live."""
        allocator = TrackingAllocator(fail_after=0)

        with pytest.raises(AllocationError):
            SlotBuffer(2, int, allocator)
        assert allocator.live_count == 0

    def test_factory_failure_releases_buffer(self, tracking_allocator: TrackingAllocator):
        """Test the buffer is released with its layout when the factory raises."""
        calls = []

        def flaky() -> int:
            calls.append(None)
            if len(calls) == 2:
                raise RuntimeError("boom")
            return 0

        with pytest.raises(RuntimeError, match="boom"):
            SlotBuffer(3, flaky, tracking_allocator)

        assert tracking_allocator.live_count == 0
        allocated, released = tracking_allocator.events
        assert released.kind == "release"
        assert released.layout == allocated.layout


class TestRelease:
    """Tests for the single release path."""

    def test_release_uses_acquisition_layout(self, tracking_allocator: TrackingAllocator):
        """Test release hands back the exact acquisition layout."""
        buffer = SlotBuffer(2, int, tracking_allocator)
        buffer.release()

        allocated, released = tracking_allocator.events
        assert released.layout == allocated.layout == Layout.array(object, 2)
        assert buffer.released

    def test_release_is_idempotent(self, tracking_allocator: TrackingAllocator):
        """Test releasing twice releases once."""
        buffer = SlotBuffer(2, int, tracking_allocator)
        buffer.release()
        buffer.release()

        assert tracking_allocator.releases == 1

    def test_access_after_release_raises(self, tracking_allocator: TrackingAllocator):
        """Test reads and writes on a released buffer raise."""
        buffer = SlotBuffer(2, int, tracking_allocator)
        buffer.release()

        with pytest.raises(BufferReleasedError):
            buffer[0]
        with pytest.raises(BufferReleasedError):
            buffer[0] = 1

    def test_context_manager_releases_on_error(self, tracking_allocator: TrackingAllocator):
        """Test leaving the block through an exception still releases."""
        with pytest.raises(KeyError):
            with SlotBuffer(2, int, tracking_allocator):
                raise KeyError("early exit")

        assert tracking_allocator.live_count == 0

    def test_collection_releases(self, tracking_allocator: TrackingAllocator):
        """Test an unreleased buffer is released when collected."""
        buffer = SlotBuffer(2, int, tracking_allocator)
        assert tracking_allocator.live_count == 1

        del buffer
        gc.collect()

        assert tracking_allocator.live_count == 0
        assert tracking_allocator.releases == 1

    def test_many_buffers_in_sequence(self, tracking_allocator: TrackingAllocator):
        """Test repeated construction and release neither leaks nor double-releases."""
        for count in range(50):
            with SlotBuffer(count, int, tracking_allocator):
                pass

        assert tracking_allocator.allocations == 50
        assert tracking_allocator.releases == 50
        assert tracking_allocator.live_count == 0

    def test_release_clears_array_when_deallocate_raises(
        self, tracking_allocator: TrackingAllocator
    ):
        """Test a failing deallocate still leaves the buffer released."""

        class FailingRelease:
            def allocate(self, layout: Layout):
                return tracking_allocator.allocate(layout)

            def deallocate(self, buffer, layout: Layout) -> None:
                raise RuntimeError("release failed")

        buffer = SlotBuffer(2, int, FailingRelease())

        with pytest.raises(RuntimeError, match="release failed"):
            buffer.release()

        assert buffer.released
        with pytest.raises(BufferReleasedError):
            buffer[0]


class TestCheckedWrites:
    """Tests for writes into non-object buffers."""

    def test_fractional_float_into_int_rejected(self, tracking_allocator: TrackingAllocator):
        """Test 3.7 is not truncated into an int64 slot."""
        buffer = SlotBuffer(2, int, tracking_allocator, dtype="int64")
        buffer[0] = 5

        with pytest.raises(SlotValueError, match="would be stored as 3"):
            buffer[0] = 3.7

        assert buffer[0] == 5

    def test_out_of_range_int_rejected(self, tracking_allocator: TrackingAllocator):
        """Test 1000 does not wrap in an int8 slot."""
        buffer = SlotBuffer(2, int, tracking_allocator, dtype="int8")

        with pytest.raises(ValueError):
            buffer[1] = 1000

        assert buffer[1] == 0

    def test_non_numeric_rejected(self, tracking_allocator: TrackingAllocator):
        """Test a string is rejected by a float slot."""
        buffer = SlotBuffer(1, float, tracking_allocator, dtype="float64")

        with pytest.raises(SlotValueError, match="float64"):
            buffer[0] = "abc"

    def test_exact_values_accepted(self, tracking_allocator: TrackingAllocator):
        """Test values the dtype holds exactly are stored."""
        buffer = SlotBuffer(2, int, tracking_allocator, dtype="int64")
        buffer[0] = 7.0
        buffer[1] = True

        assert buffer[0] == 7
        assert buffer[1] == 1

    def test_nan_accepted(self, tracking_allocator: TrackingAllocator):
        """Test NaN is stored in a float slot."""
        buffer = SlotBuffer(1, float, tracking_allocator, dtype="float64")
        buffer[0] = math.nan

        assert math.isnan(buffer[0])

    def test_unstorable_default_releases(self, tracking_allocator: TrackingAllocator):
        """Test a default the dtype cannot hold fails construction cleanly."""
        with pytest.raises(SlotValueError):
            SlotBuffer(3, lambda: 0.5, tracking_allocator, dtype="int32")

        assert tracking_allocator.live_count == 0
        assert tracking_allocator.releases == 1
