"""Record id generation."""

import threading
import time
from collections.abc import Callable


class IdGenerator:
    """Issues unique, monotonically increasing ids.

    An id is the current time in milliseconds scaled by 1000 plus a
    counter, so several ids issued within the same millisecond stay
    distinct. Ids never decrease, even if the clock goes backwards.
    The exact format is not a compatibility contract.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            candidate = int(self._clock() * 1000) * 1000
            self._last = max(candidate, self._last + 1)
            return str(self._last)
