"""components.resources — World-level singletons (not per-entity)."""

from __future__ import annotations
from dataclasses import dataclass

from core.tuning import get as _tun


@dataclass
class GameClock:
    """Monotonic tick counter — the single source of simulation time.

    Advanced exactly once per simulation step by ``tick_colony``.
    Hours and days are derived from it using the ``[clock]`` tuning
    section, so a reload changes the day length immediately.
    """
    tick: int = 0

    @property
    def ticks_per_hour(self) -> int:
        return max(1, int(_tun("clock", "ticks_per_hour", 30)))

    @property
    def hours_per_day(self) -> int:
        return max(1, int(_tun("clock", "hours_per_day", 24)))

    @property
    def day_length(self) -> int:
        """Ticks in one game day."""
        return self.ticks_per_hour * self.hours_per_day

    @property
    def hour(self) -> int:
        return (self.tick % self.day_length) // self.ticks_per_hour

    @property
    def day(self) -> int:
        return self.tick // self.day_length

    def is_hour_start(self) -> bool:
        """True on the first tick of a game hour."""
        return self.tick % self.ticks_per_hour == 0

    def advance(self) -> int:
        self.tick += 1
        return self.tick

    def __str__(self) -> str:
        minute = (self.tick % self.ticks_per_hour) * 60 // self.ticks_per_hour
        return f"day {self.day} {self.hour:02d}:{minute:02d}"
