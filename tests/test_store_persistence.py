import pickle

from conftest import seed_block, seed_vehicle
from rental_availability.models.repositories import BlockedPeriodStore
from rental_availability.models.store import Store


def test_blocked_periods_survive_reload(store):
    vid = seed_vehicle(store)
    seed_block(store, "p1", vid, "2025-07-01", "2025-07-05", reason="service")

    reopened = Store(store.path)

    period = BlockedPeriodStore(reopened).get("p1")
    assert period.vehicle_id == vid
    assert period.reason == "service"
    assert str(period.end_date) == "2025-07-05"


def test_incompatible_file_is_backed_up(tmp_path):
    path = tmp_path / "legacy.pkl"
    with open(path, "wb") as f:
        pickle.dump(["not", "a", "dict"], f)

    st = Store(path)

    assert st.vehicles == {} and st.blocked_periods == {}
    assert (tmp_path / "legacy.pkl.bak").exists()


def test_clear_empties_every_collection(store):
    vid = seed_vehicle(store)
    seed_block(store, "p1", vid, "2025-07-01", "2025-07-05")

    store.clear()

    assert Store(store.path).blocked_periods == {}
    assert store.vehicles == {}
