from datetime import date

from rental_availability.models.blocked_period import BlockedPeriod
from rental_availability.utils.filters import to_jsonable


def test_to_jsonable_handles_nested_dates_and_dataclasses():
    period = BlockedPeriod("p1", "v1", date(2025, 7, 1), date(2025, 7, 5), "service", date(2025, 6, 1))

    out = to_jsonable({"period": period, "days": [date(2025, 1, 2)], "n": 3})

    assert out["period"]["start_date"] == "2025-07-01"
    assert out["days"] == ["2025-01-02"]
    assert out["n"] == 3
