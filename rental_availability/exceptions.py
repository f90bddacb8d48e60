"""
Custom exception classes for the rental availability engine.

Three families cover every rejected operation:
  - NotFoundError: a vehicle, booking or blocked-period ID does not resolve
  - ConflictError: a write would overlap an existing block or active booking
  - InvalidInputError: dates or reason fail validation

Controllers catch the family to pick an HTTP status instead of a generic 500.
"""


class AvailabilityError(Exception):
    """Base class for every error raised by the availability core."""

    default_message = "Error: availability operation failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------- NotFound ----------
class NotFoundError(AvailabilityError):
    default_message = "Error: record not found"


class VehicleNotFoundError(NotFoundError):
    """Raised when a vehicle ID cannot be found in the catalog."""

    default_message = "Error: vehicle not found"


class BookingNotFoundError(NotFoundError):
    """Raised when a booking record cannot be found."""

    default_message = "Error: booking not found"


class BlockedPeriodNotFoundError(NotFoundError):
    """Raised when a blocked period ID cannot be found."""

    default_message = "Error: blocked period not found"


# ---------- Conflict ----------
class ConflictError(AvailabilityError):
    default_message = "Error: conflicting claim on vehicle"


class BlockConflictError(ConflictError):
    """Raised when a new claim overlaps an existing blocked period."""

    default_message = "Vehicle is already blocked for the selected period"


class BookingConflictError(ConflictError):
    """Raised when a new claim overlaps an active booking."""

    default_message = "Vehicle has bookings during the selected period"


# ---------- InvalidInput ----------
class InvalidInputError(AvailabilityError):
    default_message = "Error: invalid input"


class InvalidDateRangeError(InvalidInputError):
    """Raised when start date is after end date or an invalid date is provided."""

    default_message = "Error: invalid date range"


class InvalidReasonError(InvalidInputError):
    default_message = "Reason is required"


class InvalidStatusError(InvalidInputError):
    default_message = "Error: unknown status"
