from __future__ import annotations

from collections import Counter
from typing import Optional

from rental_availability.models.repositories import BlockedPeriodStore, BookingStore, VehicleCatalog
from rental_availability.models.store import Store
from rental_availability.services import common
from rental_availability.services.availability_service import AvailabilityService

OCCUPANCY_MAINTENANCE = "maintenance"
OCCUPANCY_OCCUPIED = "occupied"
OCCUPANCY_BLOCKED = "blocked"
OCCUPANCY_FREE = "free"


class FleetStatusService:
    """Aggregations for dashboards, built on the availability engine's projections."""

    @staticmethod
    def summary(store: Optional[Store] = None) -> dict:
        vehicles = AvailabilityService.get_all_vehicles_with_availability(store=store)
        return {
            "stats": AvailabilityService.get_availability_stats(store=store),
            "by_status": dict(Counter(v["status"] for v in vehicles)),
            "vehicles": vehicles,
        }

    @staticmethod
    def occupancy(vehicle_id, store: Optional[Store] = None) -> str:
        """
        Derived occupancy for today. Maintenance overrides everything; an Active
        booking covering today beats a block covering today.
        """
        st = store or common._store()
        vehicle = VehicleCatalog(st).get(vehicle_id)
        if vehicle.under_maintenance:
            return OCCUPANCY_MAINTENANCE

        today = common._today()
        for b in BookingStore(st).find_active_for_vehicle(vehicle.vehicle_id):
            if b.pickup_date <= today <= b.return_date:
                return OCCUPANCY_OCCUPIED
        for p in BlockedPeriodStore(st).find_by_vehicle(vehicle.vehicle_id):
            if p.start_date <= today <= p.end_date:
                return OCCUPANCY_BLOCKED
        return OCCUPANCY_FREE
