import pytest

from conftest import seed_block, seed_vehicle
from rental_availability.exceptions import BlockedPeriodNotFoundError
from rental_availability.services.availability_service import AvailabilityService


def test_unblock_period_removes_exactly_one(store):
    vid = seed_vehicle(store)
    seed_block(store, "p1", vid, "2025-07-01", "2025-07-05")
    seed_block(store, "p2", vid, "2025-07-10", "2025-07-12")

    assert AvailabilityService.unblock_period("p1") is True
    assert set(store.blocked_periods) == {"p2"}


def test_unblock_period_twice_is_a_no_op(store):
    vid = seed_vehicle(store)
    seed_block(store, "p1", vid, "2025-07-01", "2025-07-05")
    AvailabilityService.unblock_period("p1")
    snapshot = dict(store.blocked_periods)

    assert AvailabilityService.unblock_period("p1") is False
    assert store.blocked_periods == snapshot


def test_unblock_vehicle_removes_all_of_that_vehicle_only(store):
    v1 = seed_vehicle(store, "v1")
    v2 = seed_vehicle(store, "v2")
    seed_block(store, "p1", v1, "2025-07-01", "2025-07-05")
    seed_block(store, "p2", v1, "2025-08-01", "2025-08-05")
    seed_block(store, "p3", v2, "2025-07-01", "2025-07-05")

    assert AvailabilityService.unblock_vehicle(v1) == 2
    assert set(store.blocked_periods) == {"p3"}
    assert AvailabilityService.unblock_vehicle(v1) == 0


def test_unblocked_window_can_be_blocked_again(store):
    vid = seed_vehicle(store)
    first = AvailabilityService.block_vehicle(vid, "2025-07-01", "2025-07-05", "service")
    AvailabilityService.unblock_period(first.block_id)

    again = AvailabilityService.block_vehicle(vid, "2025-07-01", "2025-07-05", "service")
    assert again.block_id != first.block_id


def test_get_blocked_period(store):
    vid = seed_vehicle(store)
    seed_block(store, "p1", vid, "2025-07-01", "2025-07-05", reason="tyres")

    assert AvailabilityService.get_blocked_period("p1").reason == "tyres"
    with pytest.raises(BlockedPeriodNotFoundError):
        AvailabilityService.get_blocked_period("missing")


def test_unblocking_unknown_ids_leaves_no_lock_entries(store):
    for i in range(500):
        assert AvailabilityService.unblock_vehicle(f"ghost-{i}") == 0

    assert store._vehicle_locks == {}


def test_lock_entry_is_released_after_block_and_unblock(store):
    vid = seed_vehicle(store)
    AvailabilityService.block_vehicle(vid, "2025-07-01", "2025-07-05", "service")
    AvailabilityService.unblock_vehicle(vid)

    assert store._vehicle_locks == {}
