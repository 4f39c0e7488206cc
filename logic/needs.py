"""logic/needs.py — Daily schedule of colonist needs.

The game day is divided into hours by ``GameClock``.  On the first
tick of certain hours every colonist gains a Need:

    eat_hours    → HUNGRY   (default 07:00, 12:00, 18:00)
    sleep_hours  → SLEEPY   (default 22:00)

Needs are cleared only by operating a fixture whose shape ``clears``
them (a dining table, a bed).  Fixtures that ``require`` a Need are
only offered to colonists that have it, which is how hunger and
sleepiness pull colonists away from routine work.
"""

from __future__ import annotations
from typing import Iterable

from components import Colonist, DevLog, GameClock, Need
from core.tuning import get as _tun


def _schedule() -> list[tuple[str, Need, list[int]]]:
    return [
        ("eat", Need.HUNGRY, list(_tun("schedule", "eat_hours", [7, 12, 18]))),
        ("sleep", Need.SLEEPY, list(_tun("schedule", "sleep_hours", [22]))),
    ]


def scheduled_needs(clock: GameClock) -> list[Need]:
    """Needs that fall due on this exact tick."""
    if not clock.is_hour_start():
        return []
    hour = clock.hour
    return [need for _, need, hours in _schedule() if hour in hours]


def apply_schedule(colonists: Iterable[Colonist], clock: GameClock,
                   log: DevLog | None = None) -> list[Need]:
    """Set every Need due this tick on every colonist.  Returns them."""
    due = scheduled_needs(clock)
    if not due:
        return due

    colonists = list(colonists)
    for need in due:
        for colonist in colonists:
            colonist.status.add(need)
            if log is not None:
                log.record(colonist.eid, "need", f"became {need.value}",
                           name=colonist.name, t=clock.tick)
    print(f"[CLOCK] {clock}: {', '.join(n.value for n in due)} "
          f"({len(colonists)} colonists)")
    return due
