"""In-memory KeyValueStorage for tests and local development — no database required."""

from facility_booking.domain.storage import KeyValueStorage


class InMemoryKeyValueStorage(KeyValueStorage):

    def __init__(self, initial: dict[str, str] | None = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        """Test helper: every key written so far."""
        return list(self._items)
