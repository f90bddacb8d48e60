"""
Read/write views over the shared Store, one per collection.

The availability engine only talks to these classes, never to the Store's
raw dicts, so an alternative backend only needs to provide the same methods.
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from rental_availability.exceptions import VehicleNotFoundError
from rental_availability.models.blocked_period import BlockedPeriod
from rental_availability.models.booking import Booking
from rental_availability.models.store import Store
from rental_availability.models.vehicle import Vehicle
from rental_availability.services.common import overlap
from rental_availability.utils.constants import BookingStatus


class VehicleCatalog:
    """Vehicle lookup by ID plus the few writes the seed scripts need."""

    def __init__(self, store: Store):
        self.store = store

    def find(self, vehicle_id) -> Optional[Vehicle]:
        return Vehicle.from_dict(self.store.get_vehicle(vehicle_id))

    def get(self, vehicle_id) -> Vehicle:
        """Return a vehicle by ID or raise VehicleNotFoundError."""
        v = self.find(vehicle_id)
        if v is None:
            raise VehicleNotFoundError(f"Error: vehicle with ID '{vehicle_id}' not found")
        return v

    def all(self) -> list[Vehicle]:
        return [Vehicle.from_dict(d) for d in list(self.store.vehicles.values())]

    def create(self, data: dict) -> Vehicle:
        return self.get(self.store.create_vehicle(data))

    def set_status(self, vehicle_id, status: str) -> Vehicle:
        if not self.store.update_vehicle(vehicle_id, status=status):
            raise VehicleNotFoundError(f"Error: vehicle with ID '{vehicle_id}' not found")
        return self.get(vehicle_id)


class BookingStore:
    """Bookings per vehicle, ordered by pickup date then booking ID."""

    def __init__(self, store: Store):
        self.store = store

    @staticmethod
    def _sorted(bookings: list[Booking]) -> list[Booking]:
        return sorted(bookings, key=lambda b: (b.pickup_date, b.booking_id))

    def get(self, booking_id) -> Optional[Booking]:
        return Booking.from_dict(self.store.bookings.get(str(booking_id)))

    def find_all_for_vehicle(self, vehicle_id) -> list[Booking]:
        vid = str(vehicle_id)
        return self._sorted([Booking.from_dict(b) for b in list(self.store.bookings.values())
                             if str(b.get("vehicle_id")) == vid])

    def find_active_for_vehicle(self, vehicle_id) -> list[Booking]:
        return [b for b in self.find_all_for_vehicle(vehicle_id)
                if b.booking_status == BookingStatus.ACTIVE]

    def save(self, booking: Booking) -> Booking:
        bid = self.store.create_booking(booking.to_dict())
        return self.get(bid)

    def update_status(self, booking_id, status: str) -> bool:
        return self.store.update_booking(str(booking_id), {"booking_status": status})


class BlockedPeriodStore:
    """Administrator blocked periods. Expiry is a query-time filter, never a delete."""

    def __init__(self, store: Store):
        self.store = store

    @staticmethod
    def _sorted(periods: list[BlockedPeriod]) -> list[BlockedPeriod]:
        return sorted(periods, key=lambda p: (p.start_date, p.block_id))

    def get(self, block_id) -> Optional[BlockedPeriod]:
        return BlockedPeriod.from_dict(self.store.blocked_periods.get(str(block_id)))

    def find_by_vehicle(self, vehicle_id) -> list[BlockedPeriod]:
        vid = str(vehicle_id)
        return self._sorted([BlockedPeriod.from_dict(p) for p in list(self.store.blocked_periods.values())
                             if str(p.get("vehicle_id")) == vid])

    def find_overlapping(self, vehicle_id, start: date, end: date) -> list[BlockedPeriod]:
        return [p for p in self.find_by_vehicle(vehicle_id)
                if overlap(p.start_date, p.end_date, start, end)]

    def find_active(self, today: date) -> list[BlockedPeriod]:
        """Blocks whose end_date is today or later, ordered by start_date."""
        return self._sorted([p for p in map(BlockedPeriod.from_dict, list(self.store.blocked_periods.values()))
                             if p.is_active_on(today)])

    def save(self, period: BlockedPeriod) -> BlockedPeriod:
        pid = self.store.create_blocked_period(period.to_dict())
        return self.get(pid)

    def delete_by_vehicle(self, vehicle_id) -> int:
        return self.store.delete_blocked_periods_for_vehicle(str(vehicle_id))

    def delete_by_id(self, block_id) -> bool:
        return self.store.delete_blocked_period(str(block_id))
