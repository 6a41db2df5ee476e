"""System Clock — UTC wall clock that never reads backwards.

Invariants:
    - now() is tz-aware UTC
    - now() is monotonically non-decreasing within one process

Design Decisions:
    - Clamp to the last reading instead of time.monotonic(): stored timestamps must
      be wall-clock datetimes, so a backwards NTP step is absorbed here
"""

import threading
from datetime import datetime, timezone


class SystemClock:
    """Default clock backed by the real system time."""

    def __init__(self):
        self._last: datetime | None = None
        self._guard = threading.Lock()

    def now(self) -> datetime:
        with self._guard:
            current = datetime.now(timezone.utc)
            if self._last is not None and current < self._last:
                current = self._last
            self._last = current
            return current
