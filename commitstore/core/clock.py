"""
Clock sources.

A clock is any zero-argument callable returning milliseconds since epoch.
"""

import time
from dataclasses import dataclass
from typing import Callable

Clock = Callable[[], int]


def system_clock() -> int:
    """Wall-clock time in milliseconds since epoch."""
    return time.time_ns() // 1_000_000


@dataclass(frozen=True)
class DeterministicClock:
    """
    Fixed time source for tests and replays.

    Pass the bound ``now`` method wherever a Clock is expected:

        store = DynamoDBCommitStore(clock=DeterministicClock(0).now)
    """
    current: int = 0

    def now(self) -> int:
        """Get current timestamp without advancing."""
        return self.current

    def tick(self, step: int = 1) -> "DeterministicClock":
        """
        Advance clock by step and return new clock instance.

        Since DeterministicClock is immutable, this returns a new instance.
        """
        return DeterministicClock(self.current + step)
