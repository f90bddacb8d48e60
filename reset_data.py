"""
reset_data.py
-------------
Utility script to clear all stored data (vehicles, bookings, blocked periods)
from the local data.pkl file.

Usage:
    $ python reset_data.py

After running this script, you can repopulate sample data by executing:
    $ python seeds.py
"""

from rental_availability.models.store import Store


def main():
    """Empty every collection of the singleton Store and save it back to disk."""
    store = Store.instance()
    store.clear()

    print(f"{store.path} has been cleared.")
    print("Tip: run `python seeds.py` to regenerate demo data.")


if __name__ == "__main__":
    main()
