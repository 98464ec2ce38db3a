#!/usr/bin/env python3
"""
Campus facility booking CLI — browse, book, and review reservations.

Usage (from project root):
    python scripts/booking.py facilities                      # list facilities
    python scripts/booking.py login EMAIL PASSWORD
    python scripts/booking.py logout
    python scripts/booking.py whoami
    python scripts/booking.py book FACILITY_ID YYYY-MM-DD HH:MM HH:MM PURPOSE...
    python scripts/booking.py mine                            # my reservations

  Admin only:
    python scripts/booking.py pending                         # reservations awaiting a decision
    python scripts/booking.py approve RESERVATION_ID [NOTE...]
    python scripts/booking.py reject RESERVATION_ID [NOTE...]
    python scripts/booking.py dashboard
    python scripts/booking.py add-facility NAME CAPACITY LOCATION
    python scripts/booking.py set-status FACILITY_ID available|maintenance|unavailable
    python scripts/booking.py delete-facility FACILITY_ID

Environment variables (all optional):
    BOOKING_STORAGE         - "sqlite" or "memory" (default: sqlite)
    BOOKING_DB_PATH         - SQLite database path (default: data/booking.db)
    BOOKING_NOTIFY_CHANNEL  - "console" or "log" (default: console)
    BOOKING_LOG_LEVEL       - logging level (default: INFO)
"""

import logging
import os
import sys
from datetime import date

# Allow running as `python scripts/booking.py` from project root.
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from facility_booking.adapters.factory import create_storage
from facility_booking.adapters.mock_identity import MockIdentityProvider
from facility_booking.domain.facility import NewFacility
from facility_booking.domain.reservation import Reservation
from facility_booking.notifications.factory import create_notifier
from facility_booking.notifications.ports import Notifier
from facility_booking.session import BookingSession, SessionConfig

def _log_level() -> str:
    return os.environ.get("BOOKING_LOG_LEVEL", "INFO").upper()


logging.basicConfig(
    level=_log_level(),
    format="%(asctime)s  %(levelname)-7s  %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
log = logging.getLogger(__name__)


def _print_reservations(session: BookingSession, reservations: list[Reservation]) -> None:
    if not reservations:
        print("No reservations.")
        return

    print(f"\n{'ID':>14}  {'Status':<9}  {'Date':<10}  {'Time':<11}  {'User':>6}  Facility")
    print("-" * 80)
    for r in reservations:
        view = session.reservation_view(r)
        print(
            f"{r.id:>14}  {r.status:<9}  {r.date.isoformat():<10}  "
            f"{r.start_time}-{r.end_time:<5}  {r.user_id:>6}  {view.facility_label}"
        )
        if r.admin_note:
            print(f"{'':>14}  note: {r.admin_note}")
    print()


def list_facilities(session: BookingSession) -> None:
    facilities = session.facilities.all()
    if not facilities:
        print("No facilities.")
        return

    print(f"\n{'ID':>14}  {'Status':<11}  {'Cap.':>5}  {'Name':<28}  Location")
    print("-" * 80)
    for f in facilities:
        print(f"{f.id:>14}  {f.status:<11}  {f.capacity:>5}  {f.name:<28}  {f.location}")
    print()


def show_my_reservations(session: BookingSession) -> None:
    mine = session.my_reservations_by_status()
    summary = "  ".join(f"{status} ({n})" for status, n in mine.counts.items())
    print(f"All ({mine.total})  {summary}")
    for status, reservations in mine.groups.items():
        if not reservations:
            continue
        print(f"\n[{status}]")
        _print_reservations(session, reservations)


def show_dashboard(session: BookingSession) -> None:
    s = session.dashboard()
    print(f"\nFacilities:   {s.total_facilities} ({s.available_facilities} available)")
    print(f"Reservations: {s.total_reservations}")
    print(f"  pending   {s.pending}")
    print(f"  approved  {s.approved}")
    print(f"  rejected  {s.rejected}\n")


def _is_admin(identity: MockIdentityProvider, notifier: Notifier) -> bool:
    user = identity.current_user()
    if user is None or not user.is_admin:
        notifier.warning("Only administrators can do that.")
        return False
    return True


def main(argv: list[str]) -> int:
    storage = create_storage()
    identity = MockIdentityProvider(storage)
    notifier = create_notifier()
    session = BookingSession(SessionConfig(storage=storage, identity=identity, notifier=notifier))

    if not argv:
        print(__doc__)
        return 1

    cmd, args = argv[0], argv[1:]
    log.debug("command=%s args=%s", cmd, args)

    if cmd == "facilities":
        list_facilities(session)
    elif cmd == "login" and len(args) == 2:
        if not identity.login(args[0], args[1]):
            print("Invalid e-mail or password.")
            return 1
        user = identity.current_user()
        print(f"Signed in as {user.name} ({user.role}).")
    elif cmd == "logout":
        identity.logout()
        print("Signed out.")
    elif cmd == "whoami":
        user = identity.current_user()
        print(f"{user.name} <{user.email}> ({user.role})" if user else "Not signed in.")
    elif cmd == "book" and len(args) >= 5:
        try:
            on_date = date.fromisoformat(args[1])
        except ValueError:
            print(f"Not a date: {args[1]!r} (expected YYYY-MM-DD)")
            return 1
        if session.request_reservation(args[0], on_date, args[2], args[3], " ".join(args[4:])) is None:
            return 1
    elif cmd == "mine":
        show_my_reservations(session)
    elif cmd == "pending":
        if not _is_admin(identity, notifier):
            return 1
        _print_reservations(session, session.reservations.by_status("pending"))
    elif cmd in ("approve", "reject") and args:
        note = " ".join(args[1:]) or None
        status = "approved" if cmd == "approve" else "rejected"
        if not session.decide(args[0], status, note):
            return 1
    elif cmd == "dashboard":
        if not _is_admin(identity, notifier):
            return 1
        show_dashboard(session)
    elif cmd == "add-facility" and len(args) == 3:
        if not _is_admin(identity, notifier):
            return 1
        try:
            facility = session.facilities.add(NewFacility(name=args[0], capacity=int(args[1]), location=args[2]))
        except ValueError as exc:
            print(exc)
            return 1
        notifier.success(f"Facility {facility.name} added with id {facility.id}.")
    elif cmd == "set-status" and len(args) == 2:
        if not _is_admin(identity, notifier):
            return 1
        try:
            found = session.facilities.update(args[0], status=args[1])
        except ValueError as exc:
            print(exc)
            return 1
        if not found:
            notifier.error(f"Facility {args[0]} not found.")
            return 1
        notifier.success(f"Facility {args[0]} is now {args[1]}.")
    elif cmd == "delete-facility" and len(args) == 1:
        if not _is_admin(identity, notifier):
            return 1
        if not session.facilities.delete(args[0]):
            notifier.error(f"Facility {args[0]} not found.")
            return 1
        notifier.success(f"Facility {args[0]} deleted.")
    else:
        print(__doc__)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
