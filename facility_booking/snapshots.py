"""
Snapshot persistence — whole collections stored as JSON under a single key.

Generic JSON decoding gives back plain strings, so date-typed fields are
revived explicitly by name: "createdAt" everywhere, plus "date" on
reservations. Snapshots written by the browser build of the application
(JavaScript Date.toJSON(), e.g. "2025-03-01T00:00:00.000Z") load as well.
"""

import json
import logging
from collections.abc import Callable, Iterable
from datetime import date, datetime
from typing import TypeVar

from facility_booking.domain.storage import KeyValueStorage

log = logging.getLogger(__name__)

T = TypeVar("T")

FACILITIES_KEY = "facilities"
RESERVATIONS_KEY = "reservations"


class SnapshotDecodeError(Exception):
    """A stored snapshot exists but cannot be turned back into entities."""

    def __init__(self, key: str, reason: str):
        super().__init__(f"Snapshot {key!r} is unreadable: {reason}")
        self.key = key
        self.reason = reason


def _parse_datetime(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _parse_date(value: str) -> date:
    # The browser build stored the calendar date as a full timestamp
    if "T" in value:
        return _parse_datetime(value).date()
    return date.fromisoformat(value)


_FIELD_PARSERS: dict[str, Callable[[str], date]] = {
    "createdAt": _parse_datetime,
    "date": _parse_date,
}

DATE_FIELDS: dict[str, frozenset[str]] = {
    FACILITIES_KEY: frozenset({"createdAt"}),
    RESERVATIONS_KEY: frozenset({"createdAt", "date"}),
}


def _encode_default(value):
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class SnapshotPersistence:
    """
    Load and save full-collection snapshots through a KeyValueStorage.

    An empty collection is written as "[]" like any other, so the presence
    of a key tells "saved empty" apart from "never saved".
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        date_fields: dict[str, frozenset[str]] | None = None,
    ):
        self._storage = storage
        self._date_fields = DATE_FIELDS if date_fields is None else date_fields

    def save(self, key: str, items: Iterable[T], encode: Callable[[T], dict]) -> None:
        records = [encode(item) for item in items]
        self._storage.set_item(key, json.dumps(records, default=_encode_default))
        log.debug("snapshot %s saved: %d record(s)", key, len(records))

    def load(self, key: str, decode: Callable[[dict], T]) -> list[T] | None:
        """
        Return the decoded collection, or None if nothing was ever saved.

        Raises SnapshotDecodeError if the stored value is corrupt or does not
        match the expected record shape.
        """
        raw = self._storage.get_item(key)
        if raw is None:
            return None

        fields = self._date_fields.get(key, frozenset())

        def revive(obj: dict) -> dict:
            for name in fields:
                value = obj.get(name)
                if isinstance(value, str):
                    obj[name] = _FIELD_PARSERS[name](value)
            return obj

        try:
            records = json.loads(raw, object_hook=revive)
        except ValueError as exc:
            raise SnapshotDecodeError(key, str(exc)) from exc

        if not isinstance(records, list):
            raise SnapshotDecodeError(key, f"expected a list, got {type(records).__name__}")

        try:
            items = [decode(record) for record in records]
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise SnapshotDecodeError(key, f"{type(exc).__name__}: {exc}") from exc

        log.debug("snapshot %s loaded: %d record(s)", key, len(items))
        return items
