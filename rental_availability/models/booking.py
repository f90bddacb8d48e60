from dataclasses import dataclass
from datetime import date
from typing import Optional

from rental_availability.utils.constants import BookingStatus


@dataclass
class Booking:
    """
    A rental window on one vehicle. Dates are calendar dates with
    pickup_date <= return_date. Only Active bookings claim the calendar.
    """
    booking_id: str
    vehicle_id: str
    customer_id: str
    pickup_date: date
    return_date: date
    booking_status: str = BookingStatus.PENDING
    customer_name: str = ""

    @property
    def is_active(self) -> bool:
        return self.booking_status == BookingStatus.ACTIVE

    @classmethod
    def from_dict(cls, d: Optional[dict]) -> Optional["Booking"]:
        if not d:
            return None
        return cls(
            booking_id=d["booking_id"],
            vehicle_id=d["vehicle_id"],
            customer_id=d.get("customer_id", ""),
            pickup_date=date.fromisoformat(d["pickup_date"]),
            return_date=date.fromisoformat(d["return_date"]),
            booking_status=d.get("booking_status") or BookingStatus.PENDING,
            customer_name=d.get("customer_name", ""),
        )

    def to_dict(self) -> dict:
        return {
            "booking_id": self.booking_id,
            "vehicle_id": self.vehicle_id,
            "customer_id": self.customer_id,
            "customer_name": self.customer_name,
            "pickup_date": self.pickup_date.isoformat(),
            "return_date": self.return_date.isoformat(),
            "booking_status": self.booking_status,
        }
