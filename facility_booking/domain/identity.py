"""
IdentityProvider port — who is acting, and in which role.

Authentication lives outside the booking core. The core reads the current
user's id and role from this port and trusts them without re-validation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

Role = Literal["user", "admin"]


@dataclass(frozen=True)
class User:
    id: str
    name: str
    email: str
    role: Role
    created_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class IdentityProvider(ABC):

    @abstractmethod
    def current_user(self) -> User | None:
        """Return the signed-in user, or None."""
        ...

    @property
    def is_authenticated(self) -> bool:
        return self.current_user() is not None
