"""
Facility entity — a bookable campus space.

Facilities are immutable values. The FacilityStore replaces an entry
wholesale when it is updated, so a copy held by a caller never changes
under its feet (and never silently diverges from the store either).
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

FacilityStatus = Literal["available", "maintenance", "unavailable"]

FACILITY_STATUSES: tuple[str, ...] = ("available", "maintenance", "unavailable")


@dataclass(frozen=True)
class NewFacility:
    """What a caller supplies to FacilityStore.add() — no id, no timestamp."""

    name: str
    capacity: int
    location: str
    status: FacilityStatus = "available"
    description: str = ""
    image: str = ""
    features: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Facility:
    id: str
    name: str
    capacity: int
    location: str
    status: FacilityStatus
    description: str
    image: str
    features: tuple[str, ...]
    created_at: datetime


def validate_capacity(capacity) -> None:
    # bool is an int subclass; True is not a capacity
    if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
        raise ValueError(f"Facility capacity must be a positive integer, got {capacity!r}")


def validate_facility_status(status) -> None:
    if status not in FACILITY_STATUSES:
        raise ValueError(f"Unknown facility status: {status!r}")


def facility_to_record(facility: Facility) -> dict:
    """Encode as a JSON-compatible record using the persisted key names."""
    return {
        "id": facility.id,
        "name": facility.name,
        "capacity": facility.capacity,
        "location": facility.location,
        "status": facility.status,
        "description": facility.description,
        "image": facility.image,
        "features": list(facility.features),
        "createdAt": facility.created_at,
    }


def facility_from_record(record: dict) -> Facility:
    """Decode a persisted record. createdAt must already be a datetime."""
    created_at = record["createdAt"]
    if not isinstance(created_at, datetime):
        raise TypeError(f"createdAt must be a datetime, got {type(created_at).__name__}")
    validate_capacity(record["capacity"])
    validate_facility_status(record.get("status", "available"))
    return Facility(
        id=str(record["id"]),
        name=record["name"],
        capacity=record["capacity"],
        location=record.get("location", ""),
        status=record.get("status", "available"),
        description=record.get("description", ""),
        image=record.get("image", ""),
        features=tuple(record.get("features", [])),
        created_at=created_at,
    )
