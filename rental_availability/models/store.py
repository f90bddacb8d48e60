import atexit
import logging
import os
import pickle
import threading
import uuid
from contextlib import contextmanager

from rental_availability.config import Config

logger = logging.getLogger(__name__)


class Store:
    """
    Shared in-memory collections (vehicles, bookings, blocked periods) persisted
    to a pickle file. Records are kept as plain dicts keyed by ID; the
    repositories in models/repositories.py map them to dataclasses.
    """
    _inst = None
    _inst_lock = threading.Lock()
    _atexit_registered = False

    def __init__(self, path: str | os.PathLike | None = None):
        self.path = str(path or Config.DATA_PATH)
        self.vehicles: dict[str, dict] = {}
        self.bookings: dict[str, dict] = {}
        self.blocked_periods: dict[str, dict] = {}
        self._rw = threading.RLock()
        self._vehicle_locks: dict[str, list] = {}  # vid -> [lock, holders]
        self._vehicle_locks_guard = threading.Lock()

        logger.info("[Store] Using file: %s", self.path)
        self._load()

        # Automatically save on exit (skipped in test environments)
        if not Store._atexit_registered and os.getenv("APP_ENV") != "test":
            atexit.register(self.save)
            Store._atexit_registered = True

    # ---------- Singleton ----------
    @classmethod
    def instance(cls, path: str | os.PathLike | None = None):
        """Return the global singleton instance of Store."""
        with cls._inst_lock:
            if cls._inst is None:
                cls._inst = Store(path)
        return cls._inst

    # ---------- Locking ----------
    @contextmanager
    def vehicle_lock(self, vehicle_id: str):
        """
        Serialize check-then-write sequences for one vehicle.
        Different vehicles never wait on each other. An entry lives only while
        some caller holds or waits for it.
        """
        vid = str(vehicle_id)
        with self._vehicle_locks_guard:
            entry = self._vehicle_locks.get(vid)
            if entry is None:
                entry = self._vehicle_locks[vid] = [threading.Lock(), 0]
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._vehicle_locks_guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._vehicle_locks[vid]

    # ---------- Persistence ----------
    def _load(self):
        """Load data from the pickle file, or start empty if unavailable or invalid."""
        if not os.path.exists(self.path):
            return
        try:
            with open(self.path, "rb") as f:
                data = pickle.load(f)
        except (OSError, pickle.UnpicklingError, EOFError) as e:
            logger.warning("[Store] Load failed (%s); starting empty.", e)
            return

        if isinstance(data, dict):
            self.vehicles = data.get("vehicles", {}) or {}
            self.bookings = data.get("bookings", {}) or {}
            self.blocked_periods = data.get("blocked_periods", {}) or {}
            logger.info(
                "[Store] Loaded: vehicles=%d, bookings=%d, blocked_periods=%d",
                len(self.vehicles), len(self.bookings), len(self.blocked_periods),
            )
        else:
            # Incompatible data format: back up the old file and start empty
            bak = self.path + ".bak"
            os.replace(self.path, bak)
            logger.warning("[Store] Incompatible store (%s); backed up to %s. Starting empty.",
                           type(data).__name__, bak)

    def _dump(self):
        """Write the in-memory data to the pickle file safely (atomic replace)."""
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        tmp = self.path + ".tmp"
        payload = {
            "vehicles": self.vehicles,
            "bookings": self.bookings,
            "blocked_periods": self.blocked_periods,
        }
        with open(tmp, "wb") as f:
            pickle.dump(payload, f, protocol=pickle.HIGHEST_PROTOCOL)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, self.path)

    def save(self):
        """Thread-safe save method."""
        with self._rw:
            logger.info("[Store] Saving to %s ...", self.path)
            self._dump()

    def clear(self):
        with self._rw:
            self.vehicles.clear()
            self.bookings.clear()
            self.blocked_periods.clear()
            self._dump()

    # ---------- Vehicles ----------
    def create_vehicle(self, data: dict) -> str:
        """Create a new vehicle record and return its ID."""
        with self._rw:
            vid = str(data.get("vehicle_id") or uuid.uuid4())
            self.vehicles[vid] = {
                "vehicle_id": vid,
                "make": data.get("make", ""),
                "model": data.get("model", ""),
                "year": int(data.get("year") or 0),
                "license_plate": data.get("license_plate", ""),
                "colour": data.get("colour"),
                "status": data.get("status", "Available"),
            }
            self._dump()
            return vid

    def get_vehicle(self, vehicle_id: str) -> dict | None:
        """Get vehicle information by ID."""
        return self.vehicles.get(str(vehicle_id))

    def update_vehicle(self, vehicle_id: str, **updates) -> bool:
        """Update vehicle attributes; return True if updated successfully."""
        with self._rw:
            vid = str(vehicle_id)
            if vid not in self.vehicles:
                return False
            self.vehicles[vid].update({k: v for k, v in updates.items() if v is not None})
            self._dump()
            return True

    # ---------- Bookings ----------
    def create_booking(self, b: dict) -> str:
        """Create a new booking record."""
        with self._rw:
            bid = str(b.get("booking_id") or uuid.uuid4())
            b = dict(b)
            b["booking_id"] = bid
            self.bookings[bid] = b
            self._dump()
            return bid

    def update_booking(self, bid: str, updates: dict) -> bool:
        """Update an existing booking by ID."""
        with self._rw:
            if bid in self.bookings:
                self.bookings[bid].update(updates)
                self._dump()
                return True
            return False

    # ---------- Blocked periods ----------
    def create_blocked_period(self, p: dict) -> str:
        with self._rw:
            pid = str(p.get("block_id") or uuid.uuid4())
            p = dict(p)
            p["block_id"] = pid
            self.blocked_periods[pid] = p
            self._dump()
            return pid

    def delete_blocked_period(self, block_id: str) -> bool:
        """Delete one blocked period; False when it was already gone."""
        with self._rw:
            if block_id in self.blocked_periods:
                del self.blocked_periods[block_id]
                self._dump()
                return True
            return False

    def delete_blocked_periods_for_vehicle(self, vehicle_id: str) -> int:
        """Delete every blocked period of a vehicle and return how many went."""
        with self._rw:
            vid = str(vehicle_id)
            doomed = [pid for pid, p in self.blocked_periods.items() if p.get("vehicle_id") == vid]
            for pid in doomed:
                del self.blocked_periods[pid]
            if doomed:
                self._dump()
            return len(doomed)
