from __future__ import annotations

import random
import time
from typing import Callable


class Pacer:
    """
    Keeps consecutive outbound calls at least `min_delay` seconds apart.

    One pacer is shared by every operation of a gateway, so the spacing is
    global rather than per endpoint or per provider. `wait()` records the
    *start* time of the call it admits.
    """

    def __init__(
        self,
        min_delay: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        jitter: float = 0.0,
    ):
        self.min_delay = min_delay
        self.jitter = jitter
        self.last_request_at: float | None = None
        self._clock = clock
        self._sleep = sleep

    def wait(self) -> float:
        """Block until the next call may start; return the seconds slept."""
        slept = 0.0
        if self.last_request_at is not None:
            wait = self.min_delay - (self._clock() - self.last_request_at)
            if wait > 0:
                slept = wait + (random.uniform(0, self.jitter) if self.jitter else 0.0)
                self._sleep(slept)
        self.last_request_at = self._clock()
        return slept
