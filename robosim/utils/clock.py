"""
Time sources for phase timing.

The sequencer only ever asks "what time is it now, in seconds"; anything that
is callable with no arguments and returns a float works.  ``time.monotonic`` is
used for interactive runs, ``ManualClock`` for tests and for stepping the
simulation on sim time inside the Gymnasium environment.

Classes:
    ManualClock: A clock that only moves when told to.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

Clock = Callable[[], float]


@dataclass
class ManualClock:
    """Deterministic clock advanced explicitly by the caller.

    Attributes:
        now: Current time in seconds.
    """

    now: float = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        """Move the clock forward and return the new time.

        Args:
            seconds: Non-negative step in seconds.

        Raises:
            ValueError: If *seconds* is negative.
        """
        if seconds < 0.0:
            raise ValueError("ManualClock cannot run backwards")
        self.now += seconds
        return self.now
