import os

from .ports import Notifier


def create_notifier(channel: str | None = None) -> Notifier:
    """
    Factory: create the right adapter based on config.

    The channel can be passed explicitly or read from the
    BOOKING_NOTIFY_CHANNEL env var. Defaults to "console".
    """
    channel = channel or os.environ.get("BOOKING_NOTIFY_CHANNEL", "console")

    if channel == "console":
        from .console_notifier import ConsoleNotifier

        return ConsoleNotifier()

    if channel == "log":
        from .log_notifier import LogNotifier

        return LogNotifier()

    raise ValueError(f"Unknown notification channel: {channel!r}")
