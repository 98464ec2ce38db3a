"""
Demo IdentityProvider — a fixed credential list, no real authentication.

Stands in for a real sign-in service. The signed-in user (never the
password) is kept in storage under the "user" key, so a CLI invocation
stays signed in until logout().
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from facility_booking.domain.identity import IdentityProvider, Role, User
from facility_booking.domain.storage import KeyValueStorage
from facility_booking.ids import TimestampIdGenerator

log = logging.getLogger(__name__)

USER_KEY = "user"


@dataclass
class _Account:
    user: User
    password: str


def _demo_accounts() -> list[_Account]:
    now = datetime.now(timezone.utc)
    return [
        _Account(User("1", "Admin User", "admin@kampus.ac.id", "admin", now), "admin123"),
        _Account(User("2", "John Doe", "user@kampus.ac.id", "user", now), "user123"),
    ]


def _user_to_json(user: User) -> str:
    return json.dumps({
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "createdAt": user.created_at.isoformat(),
    })


def _user_from_json(raw: str) -> User:
    data = json.loads(raw)
    role: Role = "admin" if data["role"] == "admin" else "user"
    return User(
        id=str(data["id"]),
        name=data["name"],
        email=data["email"],
        role=role,
        created_at=datetime.fromisoformat(data["createdAt"].replace("Z", "+00:00")),
    )


class MockIdentityProvider(IdentityProvider):

    def __init__(self, storage: KeyValueStorage, ids: TimestampIdGenerator | None = None):
        self._storage = storage
        self._ids = ids or TimestampIdGenerator()
        self._accounts = _demo_accounts()
        self._user = self._restore()

    def _restore(self) -> User | None:
        raw = self._storage.get_item(USER_KEY)
        if raw is None:
            return None
        try:
            return _user_from_json(raw)
        except (ValueError, KeyError, TypeError) as exc:
            log.warning("Stored session is unreadable (%s); signing out", exc)
            self._storage.remove_item(USER_KEY)
            return None

    def _sign_in(self, user: User) -> None:
        self._user = user
        self._storage.set_item(USER_KEY, _user_to_json(user))

    def current_user(self) -> User | None:
        return self._user

    def login(self, email: str, password: str) -> bool:
        account = next(
            (a for a in self._accounts if a.user.email == email and a.password == password),
            None,
        )
        if account is None:
            log.info("Login failed for %s", email)
            return False
        self._sign_in(account.user)
        log.info("user=%s signed in (%s)", account.user.id, account.user.role)
        return True

    def register(self, name: str, email: str, password: str) -> bool:
        """Create a "user"-role account and sign it in. False if the e-mail is taken."""
        if any(a.user.email == email for a in self._accounts):
            log.info("Registration refused: %s already registered", email)
            return False
        user = User(
            id=self._ids.next_id({a.user.id for a in self._accounts}),
            name=name,
            email=email,
            role="user",
            created_at=datetime.now(timezone.utc),
        )
        self._accounts.append(_Account(user, password))
        self._sign_in(user)
        log.info("user=%s registered", user.id)
        return True

    def logout(self) -> None:
        self._user = None
        self._storage.remove_item(USER_KEY)
