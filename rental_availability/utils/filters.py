"""Serialization helpers for JSON responses."""
from dataclasses import asdict, is_dataclass
from datetime import date, datetime


def to_jsonable(value):
    """
    Recursively turn service results into JSON-ready data.
    Dates become 'YYYY-MM-DD', dataclasses become dicts.
    """
    if is_dataclass(value) and not isinstance(value, type):
        return to_jsonable(asdict(value))
    if isinstance(value, datetime):
        return value.isoformat(timespec="seconds")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value
