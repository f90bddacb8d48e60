"""Shared service helpers: interval overlap, date coercion, today."""

from datetime import date, datetime

import pytz
from flask import current_app, has_app_context

from rental_availability.config import Config
from rental_availability.exceptions import InvalidDateRangeError
from rental_availability.models.store import Store
from rental_availability.utils.constants import DATE_FMT


def _store() -> Store:
    """Get the singleton store instance."""
    return Store.instance()


# -------- date helpers --------
def _timezone():
    """APP_TIMEZONE of the running app, falling back to Config outside an app context."""
    if has_app_context():
        return pytz.timezone(current_app.config.get("APP_TIMEZONE") or Config.APP_TIMEZONE)
    return pytz.timezone(Config.APP_TIMEZONE)


def _today() -> date:
    """Calendar date in the configured timezone. Wrapper for easier testing/mocking."""
    return datetime.now(_timezone()).date()


def as_date(x) -> date:
    """Coerce any date-like to a naive date (supports 'YYYY-MM-DD' or ISO with T)."""
    if isinstance(x, datetime):
        return x.date()
    if isinstance(x, date):
        return x
    if isinstance(x, str):
        base = x.split("T", 1)[0].strip()
        try:
            return datetime.strptime(base, DATE_FMT).date()
        except ValueError:
            raise InvalidDateRangeError(f"Invalid date {x!r} (expected YYYY-MM-DD)") from None
    raise InvalidDateRangeError(f"Unsupported date: {x!r}")


def date_window(start, end) -> tuple[date, date]:
    """Parse a (start, end) pair and reject start > end."""
    d1, d2 = as_date(start), as_date(end)
    if d1 > d2:
        raise InvalidDateRangeError("Start date must not be after end date")
    return d1, d2


def overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    """
    Check overlap between [a_start, a_end] and [b_start, b_end].
    Both comparisons are strict, so windows that only touch on a boundary date
    (one ends on day X, the other starts on day X) do not overlap. This allows
    same-day turnover.
    """
    return a_start < b_end and a_end > b_start
