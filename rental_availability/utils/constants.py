# rental_availability/utils/constants.py

"""
Global constants for vehicle and booking statuses.
These constants are imported by both models and services.
"""

# Date format (used for booking and blocked-period dates)
DATE_FMT = "%Y-%m-%d"


class VehicleStatus:
    AVAILABLE = "Available"
    RENTED = "Rented"
    MAINTENANCE = "Maintenance"
    UNAVAILABLE = "Unavailable"

    ALL = (AVAILABLE, RENTED, MAINTENANCE, UNAVAILABLE)


class BookingStatus:
    PENDING = "Pending"
    ACTIVE = "Active"
    CANCELLED = "Cancelled"
    COMPLETED = "Completed"

    ALL = (PENDING, ACTIVE, CANCELLED, COMPLETED)


# --- Misc ---
DEFAULT_TIMEZONE = "Pacific/Auckland"
