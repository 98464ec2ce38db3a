"""
ReservationStore — owns booking requests and their status lifecycle.

Reservations are never deleted and never edited, except through
transition_status(). Every submission starts out "pending" no matter what
the caller passed in.

Re-deciding is allowed: an approved reservation can later be rejected (or
the other way round). The store logs a warning when that happens but does
not refuse it, so an administrator can correct a mistaken decision.
"""

import dataclasses
import logging
from collections.abc import Callable
from datetime import datetime, timezone

from facility_booking.domain.reservation import (
    RESERVATION_STATUSES,
    NewReservation,
    Reservation,
    ReservationStatus,
    reservation_from_record,
    reservation_to_record,
    validate_reservation_status,
)
from facility_booking.ids import TimestampIdGenerator
from facility_booking.snapshots import RESERVATIONS_KEY, SnapshotDecodeError, SnapshotPersistence

log = logging.getLogger(__name__)

OnSuccess = Callable[[Reservation], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReservationStore:

    def __init__(
        self,
        persistence: SnapshotPersistence,
        clock: Callable[[], datetime] = _utcnow,
        ids: TimestampIdGenerator | None = None,
    ):
        self._persistence = persistence
        self._clock = clock
        self._ids = ids or TimestampIdGenerator()
        self._reservations: list[Reservation] = self._restore()

    def _restore(self) -> list[Reservation]:
        try:
            saved = self._persistence.load(RESERVATIONS_KEY, reservation_from_record)
        except SnapshotDecodeError as exc:
            log.warning("%s; starting with no reservations", exc)
            return []
        if saved is None:
            return []
        log.info("Restored %d reservation(s) from snapshot", len(saved))
        return saved

    def _commit(self, reservations: list[Reservation]) -> None:
        self._persistence.save(RESERVATIONS_KEY, reservations, reservation_to_record)
        self._reservations = reservations

    # -- queries -------------------------------------------------------------

    def all(self) -> list[Reservation]:
        """All reservations in submission order."""
        return list(self._reservations)

    def get(self, reservation_id: str) -> Reservation | None:
        return next((r for r in self._reservations if r.id == reservation_id), None)

    def by_user(self, user_id: str) -> list[Reservation]:
        return [r for r in self._reservations if r.user_id == user_id]

    def by_facility(self, facility_id: str) -> list[Reservation]:
        return [r for r in self._reservations if r.facility_id == facility_id]

    def by_status(self, status: str) -> list[Reservation]:
        validate_reservation_status(status)
        return [r for r in self._reservations if r.status == status]

    def count_by_status(self, user_id: str | None = None) -> dict[str, int]:
        """Counts per status, optionally restricted to one user's reservations."""
        counts = {status: 0 for status in RESERVATION_STATUSES}
        for r in self._reservations:
            if user_id is None or r.user_id == user_id:
                counts[r.status] += 1
        return counts

    # -- commands ------------------------------------------------------------

    def submit(self, request: NewReservation, on_success: OnSuccess | None = None) -> Reservation:
        """
        Record a new reservation request as "pending", persist it, then call
        on_success with the stored reservation.

        Overlapping bookings on the same facility are accepted; approving or
        rejecting them is the administrator's call.
        """
        reservation = Reservation(
            id=self._ids.next_id({r.id for r in self._reservations}),
            facility_id=request.facility_id,
            facility_name=request.facility_name,
            user_id=request.user_id,
            date=request.date,
            start_time=request.start_time,
            end_time=request.end_time,
            purpose=request.purpose,
            status="pending",
            created_at=self._clock(),
        )
        self._commit([*self._reservations, reservation])
        log.info(
            "reservation=%s submitted: facility=%s user=%s %s %s-%s",
            reservation.id, reservation.facility_id, reservation.user_id,
            reservation.date.isoformat(), reservation.start_time, reservation.end_time,
        )
        if on_success:
            on_success(reservation)
        return reservation

    def transition_status(
        self,
        reservation_id: str,
        status: ReservationStatus,
        admin_note: str | None = None,
        on_success: OnSuccess | None = None,
    ) -> bool:
        """
        Set the status (and, when given, the admin note) of a reservation.

        Returns False without touching storage or calling on_success if the
        id is unknown.
        """
        validate_reservation_status(status)

        current = self.get(reservation_id)
        if current is None:
            log.debug("reservation=%s transition skipped: not found", reservation_id)
            return False

        if current.status != "pending":
            log.warning(
                "reservation=%s re-decided: %s -> %s", reservation_id, current.status, status,
            )

        changes: dict = {"status": status}
        if admin_note is not None:
            changes["admin_note"] = admin_note
        updated = dataclasses.replace(current, **changes)

        self._commit([updated if r.id == reservation_id else r for r in self._reservations])
        log.info("reservation=%s status -> %s", reservation_id, status)
        if on_success:
            on_success(updated)
        return True
