import logging

from .ports import Notification, Notifier

log = logging.getLogger(__name__)

_LEVELS = {
    "success": logging.INFO,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class LogNotifier(Notifier):
    """Adapter: route notifications into the logging tree (headless runs)."""

    def notify(self, notification: Notification) -> None:
        log.log(_LEVELS[notification.level], "%s: %s", notification.level, notification.message)
