import os

from facility_booking.domain.storage import KeyValueStorage


def create_storage(backend: str | None = None) -> KeyValueStorage:
    """
    Factory: create the right storage adapter based on config.

    The backend can be passed explicitly or read from the BOOKING_STORAGE
    env var. Defaults to "sqlite" at BOOKING_DB_PATH (data/booking.db).
    """
    backend = backend or os.environ.get("BOOKING_STORAGE", "sqlite")

    if backend == "sqlite":
        from .sqlite_storage import SqliteKeyValueStorage

        db_path = os.environ.get("BOOKING_DB_PATH", "data/booking.db")
        if db_path != ":memory:" and os.path.dirname(db_path):
            os.makedirs(os.path.dirname(db_path), exist_ok=True)
        return SqliteKeyValueStorage(db_path=db_path)

    if backend == "memory":
        from .memory_storage import InMemoryKeyValueStorage

        return InMemoryKeyValueStorage()

    raise ValueError(f"Unknown storage backend: {backend!r}")
