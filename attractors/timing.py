"""Step-rate instrumentation."""

import time


class StepRateCounter:
    """
    Counts step calls per wall-clock second.

    When the integer second changes, the count accumulated during the previous
    second becomes ``rate`` and counting restarts at 1. Approximate by design:
    a cheap signal for the HUD, not a scheduler.
    """

    def __init__(self, clock=time.time):
        self._clock = clock
        self.second = int(clock())
        self.accum = 0
        self.rate = 0

    def tick(self) -> int:
        second = int(self._clock())
        if second != self.second:
            self.rate = self.accum
            self.accum = 1
            self.second = second
        else:
            self.accum += 1
        return self.rate
