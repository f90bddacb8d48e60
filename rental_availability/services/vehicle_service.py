from __future__ import annotations

import logging
from typing import Optional

from rental_availability.exceptions import InvalidInputError, InvalidStatusError
from rental_availability.models.repositories import BlockedPeriodStore, BookingStore, VehicleCatalog
from rental_availability.models.store import Store
from rental_availability.models.vehicle import Vehicle
from rental_availability.services import common
from rental_availability.utils.constants import VehicleStatus

logger = logging.getLogger(__name__)


class VehicleService:
    """Vehicle catalogue: create, look up, change categorical status, calendar."""

    @staticmethod
    def _catalog(store: Optional[Store] = None) -> VehicleCatalog:
        return VehicleCatalog(store or common._store())

    @staticmethod
    def create_vehicle(payload: dict, store: Optional[Store] = None) -> Vehicle:
        """
        Create a vehicle record into the given store (for testing)
        or the active store by default.
        """
        make = (payload.get("make") or "").strip()
        model = (payload.get("model") or "").strip()
        plate = (payload.get("license_plate") or "").strip().upper()
        status = payload.get("status") or VehicleStatus.AVAILABLE
        try:
            year = int(payload.get("year"))
        except (TypeError, ValueError):
            raise InvalidInputError("Year is required") from None

        if not make or not model or not plate:
            raise InvalidInputError("Make, model and license plate are required")
        if status not in VehicleStatus.ALL:
            raise InvalidStatusError(f"Unknown vehicle status {status!r}")

        vehicle = VehicleService._catalog(store).create({
            "vehicle_id": payload.get("vehicle_id"),
            "make": make,
            "model": model,
            "year": year,
            "license_plate": plate,
            "colour": payload.get("colour"),
            "status": status,
        })
        logger.info("Created vehicle %s (%s)", vehicle.vehicle_id, vehicle.description)
        return vehicle

    @staticmethod
    def get_vehicle(vid, store: Optional[Store] = None) -> Vehicle:
        """Return a vehicle by ID or raise VehicleNotFoundError."""
        return VehicleService._catalog(store).get(vid)

    @staticmethod
    def set_status(vid, status: str, store: Optional[Store] = None) -> Vehicle:
        """Change the categorical status, e.g. put a vehicle into Maintenance."""
        if status not in VehicleStatus.ALL:
            raise InvalidStatusError(f"Unknown vehicle status {status!r}")
        vehicle = VehicleService._catalog(store).set_status(vid, status)
        logger.info("Vehicle %s status -> %s", vehicle.vehicle_id, status)
        return vehicle

    @staticmethod
    def availability_calendar(vehicle_id, store: Optional[Store] = None) -> list[dict]:
        """
        Every claim on the vehicle's calendar (Active bookings and blocks),
        sorted by start date. Used by the UI to disable taken date ranges.
        """
        st = store or common._store()
        VehicleCatalog(st).get(vehicle_id)
        ranges = [{"kind": "booking", "start": b.pickup_date, "end": b.return_date}
                  for b in BookingStore(st).find_active_for_vehicle(vehicle_id)]
        ranges += [{"kind": "block", "start": p.start_date, "end": p.end_date}
                   for p in BlockedPeriodStore(st).find_by_vehicle(vehicle_id)]
        ranges.sort(key=lambda r: (r["start"], r["end"]))  # stable for UI
        return ranges
