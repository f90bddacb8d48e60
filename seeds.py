from datetime import timedelta

from rental_availability import create_app
from rental_availability.models.store import Store
from rental_availability.services.availability_service import AvailabilityService
from rental_availability.services.booking_service import BookingService
from rental_availability.services.common import _today
from rental_availability.services.vehicle_service import VehicleService
from rental_availability.utils.constants import VehicleStatus


def main():
    app = create_app()
    with app.app_context():
        store = Store.instance()

        # ---- Demo fleet (create only if none exist) ----
        if store.vehicles:
            print("Store already has vehicles; nothing to seed.")
            return

        corolla = VehicleService.create_vehicle({
            "make": "Toyota", "model": "Corolla", "year": 2022, "license_plate": "KTR512",
        })
        civic = VehicleService.create_vehicle({
            "make": "Honda", "model": "Civic", "year": 2021, "license_plate": "NBX774",
        })
        hilux = VehicleService.create_vehicle({
            "make": "Toyota", "model": "Hilux", "year": 2019, "license_plate": "FGH301",
        })
        VehicleService.create_vehicle({
            "make": "Mazda", "model": "CX-5", "year": 2020, "license_plate": "QLM908",
            "status": VehicleStatus.MAINTENANCE,
        })

        today = _today()
        BookingService.create_booking(
            corolla.vehicle_id, "c-100", today, today + timedelta(days=4), customer_name="Aroha Ngata",
        )
        AvailabilityService.block_vehicle(
            civic.vehicle_id, today + timedelta(days=2), today + timedelta(days=5), "WOF inspection",
        )
        AvailabilityService.block_vehicle(
            hilux.vehicle_id, today + timedelta(days=10), today + timedelta(days=30), "Off-boarding",
        )

        store.save()
        print("Seed complete: 4 vehicles, 1 booking, 2 blocked periods.")


if __name__ == "__main__":
    main()
