import os
import pathlib
import sys
from datetime import date

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))
os.environ.setdefault("APP_ENV", "test")

import pytest

FIXED_TODAY = date(2025, 5, 1)


@pytest.fixture(autouse=True)
def store(tmp_path, monkeypatch):
    """
    Give every test its own Store backed by a temp pickle file and make it the
    singleton, so services that call common._store() see the same object.
    """
    from rental_availability.models.store import Store

    st = Store(tmp_path / "data.pkl")
    monkeypatch.setattr(Store, "_inst", st)
    yield st


@pytest.fixture(autouse=True)
def today(monkeypatch):
    """Pin 'today' so date-relative rules (future-only blocks, expiry) are stable."""
    from rental_availability.services import common

    monkeypatch.setattr(common, "_today", lambda: FIXED_TODAY)
    return FIXED_TODAY


@pytest.fixture
def client(store, tmp_path):
    from rental_availability import create_app

    app = create_app({"TESTING": True, "DATA_PATH": str(tmp_path / "data.pkl")})
    with app.test_client() as c:
        yield c


def seed_vehicle(store, vid="v1", status="Available", make="Toyota", model="Corolla", year=2022):
    return store.create_vehicle({
        "vehicle_id": vid,
        "make": make,
        "model": model,
        "year": year,
        "license_plate": f"PLT{vid.upper()}",
        "status": status,
    })


def seed_booking(store, bid, vehicle_id, start, end, status="Active", customer="Kiri"):
    return store.create_booking({
        "booking_id": bid,
        "vehicle_id": vehicle_id,
        "customer_id": "c1",
        "customer_name": customer,
        "pickup_date": start,
        "return_date": end,
        "booking_status": status,
    })


def seed_block(store, pid, vehicle_id, start, end, reason="service", created="2025-04-01"):
    return store.create_blocked_period({
        "block_id": pid,
        "vehicle_id": vehicle_id,
        "start_date": start,
        "end_date": end,
        "reason": reason,
        "created_date": created,
    })
