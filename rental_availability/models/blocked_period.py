from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class BlockedPeriod:
    """
    Administrator exclusion window for a vehicle (inspection, off-boarding, ...).
    The vehicle is referenced by ID only. A period past its end_date is
    simply no longer active; it is never deleted on expiry.
    """
    block_id: str
    vehicle_id: str
    start_date: date
    end_date: date
    reason: str
    created_date: date

    def is_active_on(self, today: date) -> bool:
        return self.end_date >= today

    @classmethod
    def from_dict(cls, d: Optional[dict]) -> Optional["BlockedPeriod"]:
        if not d:
            return None
        return cls(
            block_id=d["block_id"],
            vehicle_id=d["vehicle_id"],
            start_date=date.fromisoformat(d["start_date"]),
            end_date=date.fromisoformat(d["end_date"]),
            reason=d.get("reason", ""),
            created_date=date.fromisoformat(d["created_date"]),
        )

    def to_dict(self) -> dict:
        return {
            "block_id": self.block_id,
            "vehicle_id": self.vehicle_id,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "reason": self.reason,
            "created_date": self.created_date.isoformat(),
        }
