"""
Booking session — one set of stores per signed-in session.

Wires together the ports:
  KeyValueStorage → SnapshotPersistence → FacilityStore + ReservationStore
  IdentityProvider  (who is acting)
  Notifier          (how outcomes are reported)

Construct a BookingSession once and pass it to whatever needs it. The
stores are its only state; everything the front end shows is read back
through the store queries.

Role checks here only route commands: a plain user asking to approve a
reservation gets a warning notification, never an exception.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime, timezone

from facility_booking.domain.facility import Facility
from facility_booking.domain.identity import IdentityProvider
from facility_booking.domain.reservation import (
    RESERVATION_STATUSES,
    NewReservation,
    Reservation,
    ReservationStatus,
)
from facility_booking.domain.storage import KeyValueStorage
from facility_booking.facility_store import FacilityStore
from facility_booking.ids import TimestampIdGenerator
from facility_booking.notifications.ports import Notifier
from facility_booking.reservation_store import ReservationStore
from facility_booking.snapshots import SnapshotPersistence

log = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SessionConfig:
    storage: KeyValueStorage
    identity: IdentityProvider
    notifier: Notifier
    clock: Callable[[], datetime] = _utcnow
    ids: TimestampIdGenerator = field(default_factory=TimestampIdGenerator)


@dataclass
class ReservationView:
    """A reservation joined with its facility, if that facility still exists."""

    reservation: Reservation
    facility: Facility | None

    @property
    def facility_label(self) -> str:
        if self.facility is not None:
            return self.facility.name
        return f"{self.reservation.facility_name} (removed)"


@dataclass
class MyReservations:
    """One user's reservations: per-status counts plus the rows behind them."""

    counts: dict[str, int]
    groups: dict[str, list[Reservation]]

    @property
    def total(self) -> int:
        return sum(self.counts.values())


@dataclass
class DashboardSummary:
    total_facilities: int
    available_facilities: int
    total_reservations: int
    pending: int
    approved: int
    rejected: int


class BookingSession:

    def __init__(self, config: SessionConfig):
        self._cfg = config
        persistence = SnapshotPersistence(config.storage)
        self.facilities = FacilityStore(persistence, clock=config.clock, ids=config.ids)
        self.reservations = ReservationStore(persistence, clock=config.clock, ids=config.ids)

    # -- user side -----------------------------------------------------------

    def request_reservation(
        self,
        facility_id: str,
        on_date: date,
        start_time: str,
        end_time: str,
        purpose: str,
    ) -> Reservation | None:
        """Submit a booking request for the signed-in user."""
        user = self._cfg.identity.current_user()
        if user is None:
            self._cfg.notifier.error("Sign in to request a reservation.")
            return None

        facility = self.facilities.get(facility_id)
        if facility is None:
            self._cfg.notifier.error(f"Facility {facility_id} does not exist.")
            return None
        if facility.status != "available":
            # Still accepted; the administrator decides.
            self._cfg.notifier.warning(f"{facility.name} is currently {facility.status}.")

        request = NewReservation(
            facility_id=facility.id,
            facility_name=facility.name,
            user_id=user.id,
            date=on_date,
            start_time=start_time,
            end_time=end_time,
            purpose=purpose,
        )
        return self.reservations.submit(
            request,
            on_success=lambda r: self._cfg.notifier.success(
                f"Reservation for {r.facility_name} on {r.date.isoformat()} submitted; waiting for approval."
            ),
        )

    def my_reservations(self) -> list[Reservation]:
        user = self._cfg.identity.current_user()
        if user is None:
            return []
        return self.reservations.by_user(user.id)

    def my_reservations_by_status(self) -> MyReservations:
        """The signed-in user's reservations, counted and grouped per status."""
        user = self._cfg.identity.current_user()
        groups: dict[str, list[Reservation]] = {status: [] for status in RESERVATION_STATUSES}
        if user is None:
            return MyReservations(counts={status: 0 for status in RESERVATION_STATUSES}, groups=groups)
        for r in self.reservations.by_user(user.id):
            groups[r.status].append(r)
        return MyReservations(counts=self.reservations.count_by_status(user.id), groups=groups)

    def reservation_view(self, reservation: Reservation) -> ReservationView:
        return ReservationView(reservation, self.facilities.get(reservation.facility_id))

    # -- admin side ----------------------------------------------------------

    def _require_admin(self, action: str) -> bool:
        user = self._cfg.identity.current_user()
        if user is None or not user.is_admin:
            log.info("Refused %s for non-admin user=%s", action, user.id if user else "-")
            self._cfg.notifier.warning(f"Only administrators can {action}.")
            return False
        return True

    def decide(
        self,
        reservation_id: str,
        status: ReservationStatus,
        admin_note: str | None = None,
    ) -> bool:
        """Approve or reject a reservation. False if refused or not found."""
        if not self._require_admin("decide reservations"):
            return False

        found = self.reservations.transition_status(
            reservation_id,
            status,
            admin_note,
            on_success=lambda r: self._cfg.notifier.success(
                f"Reservation {r.id} ({r.facility_name}) is now {r.status}."
            ),
        )
        if not found:
            self._cfg.notifier.error(f"Reservation {reservation_id} not found.")
        return found

    def dashboard(self) -> DashboardSummary:
        counts = self.reservations.count_by_status()
        facilities = self.facilities.all()
        return DashboardSummary(
            total_facilities=len(facilities),
            available_facilities=sum(1 for f in facilities if f.status == "available"),
            total_reservations=sum(counts.values()),
            pending=counts["pending"],
            approved=counts["approved"],
            rejected=counts["rejected"],
        )
