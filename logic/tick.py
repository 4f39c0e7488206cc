"""logic/tick.py — One simulation step.

The order is fixed and every stage finishes before the next begins:

    1. advance the GameClock
    2. apply scheduled needs (hunger, sleepiness)
    3. run the task executor for every colonist, in roster order
    4. run the job scheduler once

Running the scheduler last means it sees where colonists ended up this
tick; roster (spawn) order is the tie-break when several colonists
could take the same job.

Usage::

    from logic.tick import tick_colony
    tick_colony(world)
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from components import Colonist, DevLog, GameClock, ItemRegistry
from logic.needs import apply_schedule
from logic.tasks import run_colonist
from simulation.colony_map import ColonyMap
from simulation.jobs import JobTable
from simulation.scheduler import JobScheduler

if TYPE_CHECKING:
    from core.ecs import World


def roster(world: "World") -> list[Colonist]:
    """Every colonist in spawn order."""
    return [c for _, c in world.all_of(Colonist)]


def tick_colony(world: "World") -> int:
    """Advance the colony by one tick.  Returns the new tick number."""
    clock = world.res(GameClock)
    colony_map = world.res(ColonyMap)
    jobs = world.res(JobTable)
    items = world.res(ItemRegistry)
    scheduler = world.res(JobScheduler)
    log = world.res(DevLog)

    tick = clock.advance()
    colonists = roster(world)

    apply_schedule(colonists, clock, log)

    for colonist in colonists:
        run_colonist(colonist, jobs, items, colony_map.is_walkable, tick, log)

    scheduler.run(colony_map.rooms, jobs, items, colonists, log=log, tick=tick)
    return tick
