from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal

Level = Literal["success", "error", "warning", "info"]


@dataclass
class Notification:
    """Short feedback message for whoever is driving the session."""

    level: Level
    message: str


class Notifier(ABC):
    """
    Port: how the booking session reports outcomes to the user.

    The session depends ONLY on this interface. It doesn't know whether
    the message ends up as a toast, a terminal line, or a log record.
    """

    @abstractmethod
    def notify(self, notification: Notification) -> None:
        ...

    def success(self, message: str) -> None:
        self.notify(Notification("success", message))

    def error(self, message: str) -> None:
        self.notify(Notification("error", message))

    def warning(self, message: str) -> None:
        self.notify(Notification("warning", message))

    def info(self, message: str) -> None:
        self.notify(Notification("info", message))
