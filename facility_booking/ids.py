"""Time-based opaque identifiers."""

import time
from collections.abc import Callable, Container


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class TimestampIdGenerator:
    """
    Issue string ids derived from the current time in milliseconds.

    Two ids minted within the same millisecond would collide, so every id is
    at least one greater than the previous one, and ids already present in
    the caller's collection are skipped.
    """

    def __init__(self, clock_ms: Callable[[], int] = _now_ms):
        self._clock_ms = clock_ms
        self._last = 0

    def next_id(self, taken: Container[str] = ()) -> str:
        candidate = max(self._clock_ms(), self._last + 1)
        while str(candidate) in taken:
            candidate += 1
        self._last = candidate
        return str(candidate)
