"""
Spacecraft Mission Simulation - Mission Clock and Pacing

The mission clock counts simulated seconds; all dwell logic (fault
escalation) is measured against it. Pacing only slows the loop down for a
live demonstration and has no effect on the simulated outcome.
"""

import time
from typing import Optional

from . import constants as C


class SimulationClock:
    """Simulated mission clock advanced by the state machine."""

    def __init__(self, tick_seconds: float = C.TICK_SECONDS, epoch: Optional[float] = None):
        """
        Args:
            tick_seconds: Simulated seconds per tick
            epoch: Wall-clock origin (s since epoch) for fault timestamps.
                Defaults to the current time.
        """
        self.tick_seconds = tick_seconds
        self.epoch = time.time() if epoch is None else float(epoch)
        self.now = 0.0
        self.ticks = 0

    def tick(self) -> float:
        """Advance one tick and return the new mission time."""
        self.ticks += 1
        self.now += self.tick_seconds
        return self.now

    def advance(self, seconds: float) -> float:
        """Advance by an arbitrary simulated interval (e.g. an orbit hold)."""
        if seconds < 0.0:
            raise ValueError(f"Cannot move the mission clock backwards ({seconds} s)")
        self.now += seconds
        return self.now

    def timestamp(self) -> float:
        """Epoch timestamp corresponding to the current mission time."""
        return self.epoch + self.now

    def elapsed_since(self, t: float) -> float:
        return self.now - t


class NoPacing:
    """Pacing strategy that never waits. Used by tests and batch runs."""

    def wait(self):
        pass


class RealTimePacing:
    """Sleeps a fixed wall-clock delay after each tick."""

    def __init__(self, delay: float = 1.0):
        self.delay = delay

    def wait(self):
        time.sleep(self.delay)


def create_pacer(delay: float):
    """Return the pacing strategy for a per-tick delay (0 disables pacing)."""
    if delay > 0.0:
        return RealTimePacing(delay)
    return NoPacing()
