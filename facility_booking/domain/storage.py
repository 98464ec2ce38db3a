"""
KeyValueStorage port — durable string-keyed storage for snapshots.
"""

from abc import ABC, abstractmethod


class KeyValueStorage(ABC):
    """
    Port: a durable map of string keys to string values.

    The snapshot layer serializes whole collections into a single value per
    key and overwrites it on every mutation. Implementations only need to
    survive a process restart on the same machine.
    """

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the stored value, or None if the key was never written."""
        ...

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete key. Removing an absent key is not an error."""
        ...
