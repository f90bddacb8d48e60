"""Booking write path: create bookings and move them through their lifecycle."""

import logging
from typing import Optional

from rental_availability.exceptions import (
    BlockConflictError,
    BookingConflictError,
    BookingNotFoundError,
    InvalidStatusError,
)
from rental_availability.models.booking import Booking
from rental_availability.models.repositories import BlockedPeriodStore, BookingStore, VehicleCatalog
from rental_availability.models.store import Store
from rental_availability.services import common
from rental_availability.services.common import date_window, overlap
from rental_availability.utils.constants import BookingStatus

logger = logging.getLogger(__name__)


class BookingService:
    """
    Create, activate, complete and cancel bookings.
    Any booking that becomes Active is checked against the vehicle's blocks and
    other Active bookings under the vehicle lock, the same way blocks are.
    """

    @staticmethod
    def _ensure_free(st: Store, vehicle_id: str, booking: Booking, ignore_id: str = ""):
        blocks = BlockedPeriodStore(st)
        bookings = BookingStore(st)
        if blocks.find_overlapping(vehicle_id, booking.pickup_date, booking.return_date):
            raise BlockConflictError("Vehicle is blocked during the selected period")
        for other in bookings.find_active_for_vehicle(vehicle_id):
            if other.booking_id == ignore_id:
                continue
            if overlap(other.pickup_date, other.return_date, booking.pickup_date, booking.return_date):
                raise BookingConflictError("Date conflict with existing booking")

    @staticmethod
    def create_booking(
            vehicle_id,
            customer_id: str,
            pickup,
            return_date,
            customer_name: str = "",
            status: str = BookingStatus.ACTIVE,
            store: Optional[Store] = None,
    ) -> Booking:
        """
        Persist a booking. Pending bookings are stored without an overlap check;
        Active ones must not overlap any block or other Active booking.
        """
        st = store or common._store()
        vehicle = VehicleCatalog(st).get(vehicle_id)
        if status not in BookingStatus.ALL:
            raise InvalidStatusError(f"Unknown booking status {status!r}")
        d1, d2 = date_window(pickup, return_date)

        booking = Booking(
            booking_id="",
            vehicle_id=vehicle.vehicle_id,
            customer_id=str(customer_id),
            customer_name=customer_name or "",
            pickup_date=d1,
            return_date=d2,
            booking_status=status,
        )
        with st.vehicle_lock(vehicle.vehicle_id):
            if booking.is_active:
                BookingService._ensure_free(st, vehicle.vehicle_id, booking)
            saved = BookingStore(st).save(booking)

        logger.info("Created %s booking %s for vehicle %s (%s..%s)",
                    status, saved.booking_id, saved.vehicle_id, d1, d2)
        return saved

    @staticmethod
    def get_booking(booking_id, store: Optional[Store] = None) -> Booking:
        b = BookingStore(store or common._store()).get(booking_id)
        if b is None:
            raise BookingNotFoundError(f"Error: booking with ID '{booking_id}' not found")
        return b

    @staticmethod
    def _transition(booking_id, allowed: tuple, status: str, message, store: Optional[Store] = None) -> Booking:
        """
        Move a booking to `status` under its vehicle's lock. The booking is
        re-read inside the lock so the status guard sees the latest write.
        """
        st = store or common._store()
        vehicle_id = BookingService.get_booking(booking_id, store=st).vehicle_id
        with st.vehicle_lock(vehicle_id):
            b = BookingService.get_booking(booking_id, store=st)
            if b.booking_status not in allowed:
                raise InvalidStatusError(message(b) if callable(message) else message)
            if status == BookingStatus.ACTIVE:
                BookingService._ensure_free(st, b.vehicle_id, b, ignore_id=b.booking_id)
            BookingStore(st).update_status(b.booking_id, status)
        return BookingService.get_booking(booking_id, store=st)

    @staticmethod
    def activate(booking_id, store: Optional[Store] = None) -> Booking:
        """Pending -> Active, subject to the same conflict check as creation."""
        b = BookingService._transition(
            booking_id, (BookingStatus.PENDING,), BookingStatus.ACTIVE,
            "Only pending bookings can be activated", store=store)
        logger.info("Activated booking %s", b.booking_id)
        return b

    @staticmethod
    def complete(booking_id, store: Optional[Store] = None) -> Booking:
        b = BookingService._transition(
            booking_id, (BookingStatus.ACTIVE,), BookingStatus.COMPLETED,
            "Only active bookings can be completed", store=store)
        logger.info("Completed booking %s", b.booking_id)
        return b

    @staticmethod
    def cancel(booking_id, store: Optional[Store] = None) -> Booking:
        def reason(b):
            if b.booking_status == BookingStatus.CANCELLED:
                return "Booking already cancelled"
            return "Completed bookings cannot be cancelled"

        b = BookingService._transition(
            booking_id, (BookingStatus.PENDING, BookingStatus.ACTIVE), BookingStatus.CANCELLED,
            reason, store=store)
        logger.info("Cancelled booking %s", b.booking_id)
        return b

    @staticmethod
    def bookings_for_vehicle(vehicle_id, store: Optional[Store] = None) -> list[Booking]:
        st = store or common._store()
        VehicleCatalog(st).get(vehicle_id)
        return BookingStore(st).find_all_for_vehicle(vehicle_id)
