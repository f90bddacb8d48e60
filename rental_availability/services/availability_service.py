"""
Availability engine: decides whether a vehicle is free for a date window and
guards the no-double-booking invariant on the blocked-period write path.

Claims on a vehicle's calendar, in order of precedence:
  1. categorical Maintenance status (absolute veto, dates ignored)
  2. administrator blocked periods
  3. Active bookings
"""
from __future__ import annotations

import logging
from datetime import timedelta
from typing import Optional

from rental_availability.exceptions import (
    BlockConflictError,
    BlockedPeriodNotFoundError,
    BookingConflictError,
    InvalidDateRangeError,
    InvalidReasonError,
)
from rental_availability.models.blocked_period import BlockedPeriod
from rental_availability.models.repositories import BlockedPeriodStore, BookingStore, VehicleCatalog
from rental_availability.models.store import Store
from rental_availability.models.vehicle import Vehicle
from rental_availability.services import common
from rental_availability.services.common import as_date, date_window, overlap
from rental_availability.utils.constants import VehicleStatus

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


def _repos(store: Optional[Store]):
    st = store or common._store()
    return st, VehicleCatalog(st), BookingStore(st), BlockedPeriodStore(st)


def _block_view(period: BlockedPeriod, catalog: VehicleCatalog) -> dict:
    out = period.to_dict()
    vehicle = catalog.find(period.vehicle_id)
    out["vehicle_description"] = vehicle.description if vehicle else None
    return out


class AvailabilityService:
    """Availability checks, block/unblock, and fleet-wide projections."""

    # --------------- Queries ---------------
    @staticmethod
    def is_vehicle_available(vehicle_id, start, end, *, store: Optional[Store] = None) -> bool:
        """
        True when no claim covers any part of [start, end].

        Raises VehicleNotFoundError for an unknown vehicle and
        InvalidDateRangeError when start > end.
        """
        _, catalog, bookings, blocks = _repos(store)
        vehicle = catalog.get(vehicle_id)
        d1, d2 = date_window(start, end)

        if vehicle.under_maintenance:
            return False

        if blocks.find_overlapping(vehicle.vehicle_id, d1, d2):
            return False

        for b in bookings.find_active_for_vehicle(vehicle.vehicle_id):
            if overlap(b.pickup_date, b.return_date, d1, d2):
                return False
        return True

    @staticmethod
    def get_blocked_period(block_id, *, store: Optional[Store] = None) -> BlockedPeriod:
        _, _, _, blocks = _repos(store)
        period = blocks.get(block_id)
        if period is None:
            raise BlockedPeriodNotFoundError(f"Error: blocked period with ID '{block_id}' not found")
        return period

    @staticmethod
    def get_all_blocked_periods(*, store: Optional[Store] = None) -> list[dict]:
        """Active (not yet expired) blocks across the fleet, ordered by start date."""
        _, catalog, _, blocks = _repos(store)
        return [_block_view(p, catalog) for p in blocks.find_active(common._today())]

    @staticmethod
    def get_all_vehicles_with_availability(*, store: Optional[Store] = None) -> list[dict]:
        """
        One row per catalog vehicle with its current occupant and next free date.

        - Active booking present: the one with the earliest pickup date is the
          current booking; next free date is the day after its return date.
        - Otherwise a block that has not ended yet (end_date after today): the
          earliest-starting one decides, next free date is the day after it ends.
        - Otherwise the vehicle is free today.
        """
        _, catalog, bookings, blocks = _repos(store)
        today = common._today()
        rows = []
        for vehicle in catalog.all():
            row = {
                "id": vehicle.vehicle_id,
                "make": vehicle.make,
                "model": vehicle.model,
                "year": vehicle.year,
                "license_plate": vehicle.license_plate,
                "status": vehicle.status,
                "current_booking": None,
                "next_available": today,
            }

            active = bookings.find_active_for_vehicle(vehicle.vehicle_id)
            if active:
                current = active[0]
                row["current_booking"] = {
                    "booking_id": current.booking_id,
                    "customer": current.customer_name,
                    "start_date": current.pickup_date,
                    "end_date": current.return_date,
                }
                row["next_available"] = current.return_date + ONE_DAY
            else:
                upcoming = [p for p in blocks.find_by_vehicle(vehicle.vehicle_id) if p.end_date > today]
                if upcoming:
                    row["next_available"] = upcoming[0].end_date + ONE_DAY

            rows.append(row)
        return rows

    @staticmethod
    def get_vehicles_by_status(status: str, *, store: Optional[Store] = None) -> list[dict]:
        """Availability rows filtered by categorical status (case-insensitive)."""
        wanted = (status or "").strip().lower()
        return [row for row in AvailabilityService.get_all_vehicles_with_availability(store=store)
                if (row["status"] or "").lower() == wanted]

    @staticmethod
    def get_availability_stats(*, store: Optional[Store] = None) -> dict:
        """
        Fleet counters. available/booked/maintenance partition vehicles by status;
        blocked counts active block records, so the numbers need not add up to total.
        """
        _, catalog, _, blocks = _repos(store)
        vehicles: list[Vehicle] = catalog.all()
        return {
            "total": len(vehicles),
            "available": sum(1 for v in vehicles if v.status == VehicleStatus.AVAILABLE),
            "booked": sum(1 for v in vehicles if v.status == VehicleStatus.RENTED),
            "maintenance": sum(1 for v in vehicles if v.status == VehicleStatus.MAINTENANCE),
            "blocked": len(blocks.find_active(common._today())),
        }

    # --------------- Commands ---------------
    @staticmethod
    def block_vehicle(vehicle_id, start, end, reason: str, *, store: Optional[Store] = None) -> BlockedPeriod:
        """
        Create a blocked period after validating it against existing claims.

        Rules:
          - both dates strictly after today (no back-dating, no same-day blocks)
          - start <= end, non-blank reason
          - no overlap with another block or an Active booking of the vehicle
        The overlap check and the insert run under the vehicle's lock.
        """
        st, catalog, bookings, blocks = _repos(store)
        vehicle = catalog.get(vehicle_id)

        reason = (reason or "").strip()
        if not reason:
            raise InvalidReasonError()

        d1, d2 = as_date(start), as_date(end)
        today = common._today()
        if d1 <= today:
            raise InvalidDateRangeError("Start date must be in the future")
        if d2 <= today:
            raise InvalidDateRangeError("End date must be in the future")
        if d1 > d2:
            raise InvalidDateRangeError("Start date must not be after end date")

        vid = vehicle.vehicle_id
        with st.vehicle_lock(vid):
            if blocks.find_overlapping(vid, d1, d2):
                logger.warning("Block rejected for vehicle %s (%s..%s): overlaps a block", vid, d1, d2)
                raise BlockConflictError()

            for b in bookings.find_active_for_vehicle(vid):
                if overlap(b.pickup_date, b.return_date, d1, d2):
                    logger.warning("Block rejected for vehicle %s (%s..%s): overlaps booking %s",
                                   vid, d1, d2, b.booking_id)
                    raise BookingConflictError()

            period = blocks.save(BlockedPeriod(
                block_id="",
                vehicle_id=vid,
                start_date=d1,
                end_date=d2,
                reason=reason,
                created_date=today,
            ))

        logger.info("Blocked vehicle %s from %s to %s (%s)", vid, d1, d2, period.block_id)
        return period

    @staticmethod
    def unblock_vehicle(vehicle_id, *, store: Optional[Store] = None) -> int:
        """Remove every blocked period of a vehicle. Nothing to remove is not an error."""
        st, _, _, blocks = _repos(store)
        with st.vehicle_lock(vehicle_id):
            removed = blocks.delete_by_vehicle(vehicle_id)
        logger.info("Unblocked vehicle %s (%d period(s) removed)", vehicle_id, removed)
        return removed

    @staticmethod
    def unblock_period(block_id, *, store: Optional[Store] = None) -> bool:
        """Remove one blocked period; deleting an already-deleted ID is a no-op."""
        _, _, _, blocks = _repos(store)
        removed = blocks.delete_by_id(block_id)
        if removed:
            logger.info("Removed blocked period %s", block_id)
        return removed
