import sys

from .ports import Notification, Notifier

_PREFIX = {
    "success": "[ok]",
    "error": "[error]",
    "warning": "[warn]",
    "info": "[info]",
}


class ConsoleNotifier(Notifier):
    """Adapter: print to the terminal and keep a history. For the CLI and tests."""

    def __init__(self, stream=None):
        self._stream = stream
        self.history: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.history.append(notification)
        print(f"{_PREFIX[notification.level]} {notification.message}", file=self._stream or sys.stdout)
