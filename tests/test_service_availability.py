"""
Availability checks: maintenance veto, blocks, and Active bookings.
"""

import pytest

from conftest import seed_block, seed_booking, seed_vehicle
from rental_availability.exceptions import InvalidDateRangeError, VehicleNotFoundError
from rental_availability.services.availability_service import AvailabilityService


def test_booking_boundary_touch_is_free_and_overlap_is_not(store):
    vid = seed_vehicle(store)
    seed_booking(store, "b1", vid, "2025-06-01", "2025-06-10")

    assert AvailabilityService.is_vehicle_available(vid, "2025-06-10", "2025-06-15") is True
    assert AvailabilityService.is_vehicle_available(vid, "2025-06-09", "2025-06-11") is False


def test_maintenance_vetoes_any_window(store):
    vid = seed_vehicle(store, status="Maintenance")

    assert AvailabilityService.is_vehicle_available(vid, "2030-01-01", "2030-01-05") is False
    assert AvailabilityService.is_vehicle_available(vid, "2020-01-01", "2020-01-02") is False


def test_block_makes_vehicle_unavailable(store):
    vid = seed_vehicle(store)
    seed_block(store, "p1", vid, "2025-07-01", "2025-07-05")

    assert AvailabilityService.is_vehicle_available(vid, "2025-07-04", "2025-07-08") is False
    assert AvailabilityService.is_vehicle_available(vid, "2025-07-05", "2025-07-08") is True


@pytest.mark.parametrize("status", ["Pending", "Cancelled", "Completed"])
def test_non_active_bookings_are_not_claims(store, status):
    vid = seed_vehicle(store)
    seed_booking(store, "b1", vid, "2025-06-01", "2025-06-10", status=status)

    assert AvailabilityService.is_vehicle_available(vid, "2025-06-03", "2025-06-05") is True


def test_other_vehicles_claims_are_ignored(store):
    v1 = seed_vehicle(store, "v1")
    v2 = seed_vehicle(store, "v2")
    seed_booking(store, "b1", v2, "2025-06-01", "2025-06-10")
    seed_block(store, "p1", v2, "2025-06-11", "2025-06-20")

    assert AvailabilityService.is_vehicle_available(v1, "2025-06-01", "2025-06-20") is True


def test_unknown_vehicle_raises_not_found(store):
    with pytest.raises(VehicleNotFoundError):
        AvailabilityService.is_vehicle_available("nope", "2025-06-01", "2025-06-02")


def test_reversed_window_is_rejected(store):
    vid = seed_vehicle(store)
    with pytest.raises(InvalidDateRangeError):
        AvailabilityService.is_vehicle_available(vid, "2025-06-10", "2025-06-01")


def test_check_is_a_pure_read(store):
    vid = seed_vehicle(store)
    seed_block(store, "p1", vid, "2025-07-01", "2025-07-05")
    before = (dict(store.vehicles), dict(store.bookings), dict(store.blocked_periods))

    AvailabilityService.is_vehicle_available(vid, "2025-07-01", "2025-07-03")

    assert (store.vehicles, store.bookings, store.blocked_periods) == before
