"""
Reservation entity — a user's request to use a facility for a time window.

Status lifecycle: every reservation starts "pending"; an administrator moves
it to "approved" or "rejected" through ReservationStore.transition_status().
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal

ReservationStatus = Literal["pending", "approved", "rejected"]

RESERVATION_STATUSES: tuple[str, ...] = ("pending", "approved", "rejected")

# Keys the store assigns itself; form input carrying them is ignored.
_STORE_OWNED_KEYS = ("id", "status", "createdAt", "created_at", "adminNote", "admin_note")


@dataclass(frozen=True)
class NewReservation:
    """What a caller supplies to ReservationStore.submit()."""

    facility_id: str
    facility_name: str
    user_id: str
    date: date
    start_time: str  # "09:00"
    end_time: str    # "11:00"
    purpose: str

    @classmethod
    def from_form(cls, data: Mapping) -> "NewReservation":
        """
        Build a request from loosely-typed input (CLI args, a decoded form).

        Accepts either camelCase or snake_case keys. Any store-owned key
        (id, status, createdAt, adminNote) is dropped; the caller never
        gets to choose those.
        """
        values = {k: v for k, v in data.items() if k not in _STORE_OWNED_KEYS}

        def pick(snake: str, camel: str):
            if snake in values:
                return values[snake]
            return values[camel]

        raw_date = values["date"]
        if isinstance(raw_date, datetime):
            raw_date = raw_date.date()
        elif isinstance(raw_date, str):
            raw_date = date.fromisoformat(raw_date)

        return cls(
            facility_id=str(pick("facility_id", "facilityId")),
            facility_name=pick("facility_name", "facilityName"),
            user_id=str(pick("user_id", "userId")),
            date=raw_date,
            start_time=pick("start_time", "startTime"),
            end_time=pick("end_time", "endTime"),
            purpose=values.get("purpose", ""),
        )


@dataclass(frozen=True)
class Reservation:
    id: str
    facility_id: str
    facility_name: str
    user_id: str
    date: date
    start_time: str
    end_time: str
    purpose: str
    status: ReservationStatus
    created_at: datetime
    admin_note: str | None = None


def validate_reservation_status(status) -> None:
    if status not in RESERVATION_STATUSES:
        raise ValueError(f"Unknown reservation status: {status!r}")


def reservation_to_record(reservation: Reservation) -> dict:
    record = {
        "id": reservation.id,
        "facilityId": reservation.facility_id,
        "facilityName": reservation.facility_name,
        "userId": reservation.user_id,
        "date": reservation.date,
        "startTime": reservation.start_time,
        "endTime": reservation.end_time,
        "purpose": reservation.purpose,
        "status": reservation.status,
        "createdAt": reservation.created_at,
    }
    if reservation.admin_note is not None:
        record["adminNote"] = reservation.admin_note
    return record


def reservation_from_record(record: dict) -> Reservation:
    """Decode a persisted record. date and createdAt must already be revived."""
    if not isinstance(record["createdAt"], datetime):
        raise TypeError("createdAt must be a datetime")
    if not isinstance(record["date"], date):
        raise TypeError("date must be a date")
    validate_reservation_status(record["status"])
    return Reservation(
        id=str(record["id"]),
        facility_id=str(record["facilityId"]),
        facility_name=record.get("facilityName", ""),
        user_id=str(record["userId"]),
        date=record["date"],
        start_time=record["startTime"],
        end_time=record["endTime"],
        purpose=record.get("purpose", ""),
        status=record["status"],
        created_at=record["createdAt"],
        admin_note=record.get("adminNote"),
    )
