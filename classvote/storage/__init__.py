"""Storage backends for the roster and the vote records."""

import threading

from .base import StoreError, VoteStore

# Store registry - import backends here to register them
_stores: list[type[VoteStore]] = []

# Open stores by normalized location, so every caller shares one lock
_open_stores: dict[tuple[str, str], VoteStore] = {}
_open_lock = threading.Lock()


def register_store(store_class: type[VoteStore]) -> type[VoteStore]:
    """Decorator to register a storage backend class."""
    _stores.append(store_class)
    return store_class


def get_all_stores() -> list[type[VoteStore]]:
    """Return all registered storage backend classes."""
    return _stores.copy()


def open_store(location: str) -> VoteStore:
    """Open the first registered backend that handles the location.

    Opening the same location twice returns the same store instance, so
    in-memory votes outlive a single request and appends from concurrent
    requests go through one lock.

    Raises:
        StoreError: If no backend handles the location
    """
    for store_class in _stores:
        if store_class.can_open(location):
            key = (store_class.__name__, store_class.normalize_location(location))
            with _open_lock:
                store = _open_stores.get(key)
                if store is None:
                    store = _open_stores[key] = store_class.open(location)
            return store
    raise StoreError(f"No storage backend for location: {location!r}")


def close_stores() -> None:
    """Forget every open store. In-memory votes are discarded."""
    with _open_lock:
        _open_stores.clear()


from . import memory  # noqa: E402,F401
from . import csv_store  # noqa: E402,F401
