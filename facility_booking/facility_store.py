"""
FacilityStore — owns the catalog of bookable facilities.

Every mutation writes the full snapshot first and only then replaces the
in-memory list. Unknown ids are a silent no-op: update() and delete() return False
instead of raising.
"""

import dataclasses
import logging
from collections.abc import Callable
from datetime import datetime, timezone

from facility_booking.domain.facility import (
    Facility,
    NewFacility,
    facility_from_record,
    facility_to_record,
    validate_capacity,
    validate_facility_status,
)
from facility_booking.ids import TimestampIdGenerator
from facility_booking.seed import default_facilities
from facility_booking.snapshots import FACILITIES_KEY, SnapshotDecodeError, SnapshotPersistence

log = logging.getLogger(__name__)

_IMMUTABLE_FIELDS = frozenset({"id", "created_at"})
_UPDATABLE_FIELDS = frozenset(f.name for f in dataclasses.fields(Facility)) - _IMMUTABLE_FIELDS


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FacilityStore:

    def __init__(
        self,
        persistence: SnapshotPersistence,
        clock: Callable[[], datetime] = _utcnow,
        ids: TimestampIdGenerator | None = None,
        seed: Callable[[datetime], list[Facility]] = default_facilities,
    ):
        self._persistence = persistence
        self._clock = clock
        self._ids = ids or TimestampIdGenerator()
        self._facilities: list[Facility] = self._restore(seed)

    def _restore(self, seed: Callable[[datetime], list[Facility]]) -> list[Facility]:
        try:
            saved = self._persistence.load(FACILITIES_KEY, facility_from_record)
        except SnapshotDecodeError as exc:
            log.warning("%s; falling back to the default catalog", exc)
            saved = None

        if saved is not None:
            log.info("Restored %d facilit(ies) from snapshot", len(saved))
            return saved

        facilities = seed(self._clock())
        self._persistence.save(FACILITIES_KEY, facilities, facility_to_record)
        log.info("No facility snapshot; seeded %d default facilities", len(facilities))
        return facilities

    def _commit(self, facilities: list[Facility]) -> None:
        # Storage first: a failed write leaves the in-memory catalog untouched
        self._persistence.save(FACILITIES_KEY, facilities, facility_to_record)
        self._facilities = facilities

    # -- queries -------------------------------------------------------------

    def all(self) -> list[Facility]:
        """All facilities in insertion order."""
        return list(self._facilities)

    def get(self, facility_id: str) -> Facility | None:
        return next((f for f in self._facilities if f.id == facility_id), None)

    def by_status(self, status: str) -> list[Facility]:
        validate_facility_status(status)
        return [f for f in self._facilities if f.status == status]

    # -- commands ------------------------------------------------------------

    def add(self, new_facility: NewFacility) -> Facility:
        """Assign a fresh id and timestamp, append, persist."""
        validate_capacity(new_facility.capacity)
        validate_facility_status(new_facility.status)

        facility = Facility(
            id=self._ids.next_id({f.id for f in self._facilities}),
            name=new_facility.name,
            capacity=new_facility.capacity,
            location=new_facility.location,
            status=new_facility.status,
            description=new_facility.description,
            image=new_facility.image,
            features=tuple(new_facility.features),
            created_at=self._clock(),
        )
        self._commit([*self._facilities, facility])
        log.info("facility=%s added: %s (capacity %d)", facility.id, facility.name, facility.capacity)
        return facility

    def update(self, facility_id: str, **changes) -> bool:
        """
        Merge the supplied fields into the facility with this id.

        Fields not passed are left untouched. Returns False (and writes
        nothing) if no facility has this id.
        """
        immutable = _IMMUTABLE_FIELDS & changes.keys()
        if immutable:
            raise ValueError(f"Cannot update immutable field(s): {', '.join(sorted(immutable))}")
        unknown = changes.keys() - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown facility field(s): {', '.join(sorted(unknown))}")
        if "capacity" in changes:
            validate_capacity(changes["capacity"])
        if "status" in changes:
            validate_facility_status(changes["status"])
        if "features" in changes:
            changes["features"] = tuple(changes["features"])

        current = self.get(facility_id)
        if current is None:
            log.debug("facility=%s update skipped: not found", facility_id)
            return False

        updated = dataclasses.replace(current, **changes)
        self._commit([updated if f.id == facility_id else f for f in self._facilities])
        log.info("facility=%s updated: %s", facility_id, ", ".join(sorted(changes)) or "(no fields)")
        return True

    def delete(self, facility_id: str) -> bool:
        """
        Remove the facility. Reservations that reference it are left alone
        and keep a dangling facility_id.
        """
        remaining = [f for f in self._facilities if f.id != facility_id]
        if len(remaining) == len(self._facilities):
            log.debug("facility=%s delete skipped: not found", facility_id)
            return False

        self._commit(remaining)
        log.info("facility=%s deleted", facility_id)
        return True
