"""Tick counter driving gravity and locking."""

from __future__ import annotations

from dataclasses import dataclass

# Milliseconds between two ticks of the external driver.
TICK_MS = 5
# Number of ticks after which the active piece falls one row or locks.
LONG_TICK = 100


@dataclass
class GravityTimer:
    """Count ticks until the next gravity step is due.

    The counter is reset after every gravity step and can be forced to the
    threshold so that the next :meth:`advance` reports a step immediately.
    """

    long_tick: int = LONG_TICK
    count: int = 0

    def advance(self) -> bool:
        """Add one tick and return ``True`` once the long tick is reached."""

        self.count += 1
        return self.count >= self.long_tick

    def reset(self) -> None:
        self.count = 0

    def force(self) -> None:
        """Make the next :meth:`advance` trigger a gravity step."""

        self.count = self.long_tick

    @property
    def due(self) -> bool:
        return self.count >= self.long_tick
