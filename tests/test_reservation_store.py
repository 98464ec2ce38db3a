"""
ReservationStore behaviour: submission, status transitions, scoped queries.
"""

from datetime import date, datetime, timezone

import pytest

from facility_booking.adapters.memory_storage import InMemoryKeyValueStorage
from facility_booking.domain.reservation import NewReservation
from facility_booking.ids import TimestampIdGenerator
from facility_booking.reservation_store import ReservationStore
from facility_booking.snapshots import RESERVATIONS_KEY, SnapshotPersistence

NOW = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)
D = date(2026, 3, 10)


def _store(storage) -> ReservationStore:
    return ReservationStore(
        SnapshotPersistence(storage),
        clock=lambda: NOW,
        ids=TimestampIdGenerator(clock_ms=lambda: 1_772_355_600_000),
    )


def _request(**overrides) -> NewReservation:
    fields = dict(
        facility_id="3",
        facility_name="Lab Komputer",
        user_id="2",
        date=D,
        start_time="09:00",
        end_time="11:00",
        purpose="Kelas",
    )
    fields.update(overrides)
    return NewReservation(**fields)


@pytest.fixture
def storage():
    return InMemoryKeyValueStorage()


@pytest.fixture
def store(storage):
    return _store(storage)


# ---------------------------------------------------------------------------
# submit
# ---------------------------------------------------------------------------


def test_starts_empty(storage, store):
    assert store.all() == []
    assert storage.get_item(RESERVATIONS_KEY) is None


def test_submit_creates_pending_reservation(store):
    r = store.submit(_request())

    assert r.status == "pending"
    assert r.admin_note is None
    assert r.created_at == NOW
    assert r.facility_name == "Lab Komputer"
    assert store.by_user("2") == [r]
    assert store.by_facility("3") == [r]


def test_submit_ids_are_distinct(store):
    ids = {store.submit(_request()).id for _ in range(5)}
    assert len(ids) == 5


def test_submit_ignores_caller_status(store):
    request = NewReservation.from_form({
        "facilityId": "3",
        "facilityName": "Lab Komputer",
        "userId": "2",
        "date": "2026-03-10",
        "startTime": "09:00",
        "endTime": "11:00",
        "purpose": "Kelas",
        "status": "approved",
        "id": "chosen-by-caller",
        "adminNote": "pre-approved",
    })

    r = store.submit(request)

    assert r.status == "pending"
    assert r.id != "chosen-by-caller"
    assert r.admin_note is None
    assert r.date == D


def test_submit_calls_on_success_after_persisting(storage, store):
    seen = []

    def on_success(reservation):
        # Already persisted by the time the callback runs
        seen.append((reservation.id, storage.get_item(RESERVATIONS_KEY) is not None))

    r = store.submit(_request(), on_success=on_success)

    assert seen == [(r.id, True)]


def test_overlapping_requests_are_both_accepted(store):
    store.submit(_request(user_id="2"))
    store.submit(_request(user_id="7"))
    assert len(store.by_facility("3")) == 2


# ---------------------------------------------------------------------------
# transition_status
# ---------------------------------------------------------------------------


def test_approve_sets_status_and_note(store):
    r = store.submit(_request())

    assert store.transition_status(r.id, "approved", "Silakan") is True

    stored = store.get(r.id)
    assert stored.status == "approved"
    assert stored.admin_note == "Silakan"
    assert stored.created_at == r.created_at
    assert store.by_user("2") == [stored]


def test_reject_then_approve_is_allowed(store):
    r = store.submit(_request())

    store.transition_status(r.id, "rejected", "Bentrok jadwal")
    assert store.get(r.id).status == "rejected"
    assert store.get(r.id).admin_note == "Bentrok jadwal"

    assert store.transition_status(r.id, "approved") is True
    assert store.get(r.id).status == "approved"
    # No new note supplied, the previous one stays
    assert store.get(r.id).admin_note == "Bentrok jadwal"


def test_transition_unknown_id_is_noop(storage, store):
    store.submit(_request())
    snapshot = storage.get_item(RESERVATIONS_KEY)
    called = []

    assert store.transition_status("missing", "approved", on_success=called.append) is False

    assert called == []
    assert storage.get_item(RESERVATIONS_KEY) == snapshot


def test_transition_rejects_unknown_status(store):
    r = store.submit(_request())
    with pytest.raises(ValueError):
        store.transition_status(r.id, "cancelled")
    assert store.get(r.id).status == "pending"


def test_transition_calls_on_success_with_updated_entity(store):
    r = store.submit(_request())
    seen = []
    store.transition_status(r.id, "approved", on_success=seen.append)
    assert [x.status for x in seen] == ["approved"]


def test_transition_leaves_other_reservations_alone(store):
    a = store.submit(_request())
    b = store.submit(_request(user_id="9"))
    store.transition_status(a.id, "approved")
    assert store.get(b.id) == b


# ---------------------------------------------------------------------------
# queries
# ---------------------------------------------------------------------------


def test_queries_keep_submission_order(store):
    first = store.submit(_request(user_id="2", facility_id="1"))
    other = store.submit(_request(user_id="5", facility_id="3"))
    second = store.submit(_request(user_id="2", facility_id="3"))

    assert store.by_user("2") == [first, second]
    assert store.by_user("5") == [other]
    assert store.by_facility("3") == [other, second]
    assert store.by_facility("1") == [first]
    assert store.by_user("nobody") == []


def test_by_status_and_counts(store):
    a = store.submit(_request())
    b = store.submit(_request(user_id="5"))
    store.submit(_request())
    store.transition_status(a.id, "approved")
    store.transition_status(b.id, "rejected")

    assert [r.id for r in store.by_status("approved")] == [a.id]
    assert store.count_by_status() == {"pending": 1, "approved": 1, "rejected": 1}
    assert store.count_by_status(user_id="2") == {"pending": 1, "approved": 1, "rejected": 0}


# ---------------------------------------------------------------------------
# persistence
# ---------------------------------------------------------------------------


def test_restart_restores_reservations(storage, store):
    r = store.submit(_request())
    store.transition_status(r.id, "rejected", "Bentrok jadwal")

    reopened = _store(storage)

    [restored] = reopened.all()
    assert restored == store.get(r.id)
    assert type(restored.date) is date


def test_corrupt_snapshot_starts_empty(storage):
    storage.set_item(RESERVATIONS_KEY, '[{"id": 1}]')
    store = _store(storage)
    assert store.all() == []


def test_new_ids_skip_restored_ones(storage, store):
    first = store.submit(_request())

    reopened = _store(storage)
    second = reopened.submit(_request())

    assert second.id != first.id


# ---------------------------------------------------------------------------
# storage failures
# ---------------------------------------------------------------------------


class _BrokenWrites(InMemoryKeyValueStorage):
    """Accepts writes until `failing` is switched on, then refuses every one."""

    def __init__(self):
        super().__init__()
        self.failing = False

    def set_item(self, key: str, value: str) -> None:
        if self.failing:
            raise OSError("disk full")
        super().set_item(key, value)


def test_failed_write_leaves_reservations_unchanged():
    storage = _BrokenWrites()
    store = _store(storage)
    r = store.submit(_request())
    storage.failing = True
    called = []

    with pytest.raises(OSError):
        store.submit(_request(purpose="Rapat"), on_success=called.append)
    with pytest.raises(OSError):
        store.transition_status(r.id, "approved", "OK", on_success=called.append)

    assert store.all() == [r]
    assert store.get(r.id).status == "pending"
    assert called == []
