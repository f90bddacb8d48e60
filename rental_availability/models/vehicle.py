from dataclasses import dataclass, asdict
from typing import Optional

from rental_availability.utils.constants import VehicleStatus


@dataclass
class Vehicle:
    """
    Catalog vehicle. Descriptive fields never change after creation;
    `status` is the categorical lifecycle state read by the availability engine.
    """
    vehicle_id: str
    make: str
    model: str
    year: int
    license_plate: str
    status: str = VehicleStatus.AVAILABLE
    colour: Optional[str] = None

    @property
    def description(self) -> str:
        return f"{self.year} {self.make} {self.model}"

    @property
    def under_maintenance(self) -> bool:
        return self.status == VehicleStatus.MAINTENANCE

    @classmethod
    def from_dict(cls, d: Optional[dict]) -> Optional["Vehicle"]:
        """Map a stored vehicle dict to a Vehicle."""
        if not d:
            return None
        return cls(
            vehicle_id=d.get("vehicle_id") or d.get("id"),
            make=d.get("make", ""),
            model=d.get("model", ""),
            year=int(d.get("year") or 0),
            license_plate=d.get("license_plate", ""),
            status=d.get("status") or VehicleStatus.AVAILABLE,
            colour=d.get("colour"),
        )

    def to_dict(self) -> dict:
        return asdict(self)
