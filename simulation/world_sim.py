"""simulation/world_sim.py — Top-level colony simulation manager.

Provides the ``ColonySim`` class that registers every colony resource
on an ECS ``World`` and exposes a single ``step()`` for the game loop.

Usage::

    sim = ColonySim(world, colony_map)
    sim.spawn_colonist("Ada", Pos(2, 2))
    sim.place_item("rawfood", Pos(5, 3))
    sim.step()               # one tick
    snap = sim.snapshot()    # plain data for the viewer / diagnostics

Resources registered on the world:

    ColonyMap     geometry, rooms, walkability
    ItemRegistry  every item
    JobTable      live jobs + last pass's unassigned needs
    JobScheduler  scheduling pass + stats
    GameClock     tick counter
    DevLog        activity log
"""

from __future__ import annotations

from components import Colonist, DevLog, GameClock, Item, ItemRegistry, Pos
from core.ecs import World
from core.errors import InvariantError
from logic.tick import roster, tick_colony
from simulation.colony_map import ColonyMap
from simulation.jobs import JobTable, ProductionJob, TransportJob
from simulation.scheduler import JobScheduler


class ColonySim:
    """Owns the colony state for one session."""

    def __init__(self, world: World | None, colony_map: ColonyMap) -> None:
        self.world = world if world is not None else World()
        self.map = colony_map
        self.items = ItemRegistry()
        self.jobs = JobTable()
        self.scheduler = JobScheduler()
        self.clock = GameClock()
        self.log = DevLog()

        for resource in (self.map, self.items, self.jobs, self.scheduler,
                         self.clock, self.log):
            self.world.set_res(resource)

    # ── Setup ────────────────────────────────────────────────────────

    def spawn_colonist(self, name: str, pos: Pos) -> Colonist:
        eid = self.world.spawn()
        colonist = Colonist(eid=eid, name=name, pos=pos)
        self.world.add(eid, colonist)
        return colonist

    def place_item(self, item_type: str, pos: Pos) -> Item:
        return self.items.spawn(item_type, pos)

    @property
    def colonists(self) -> list[Colonist]:
        return roster(self.world)

    def colonist(self, eid: int) -> Colonist | None:
        return self.world.get(eid, Colonist)

    # ── Stepping ─────────────────────────────────────────────────────

    def step(self, n: int = 1) -> int:
        """Run *n* ticks.  Returns the current tick."""
        for _ in range(n):
            tick_colony(self.world)
        return self.clock.tick

    # ── Snapshots ────────────────────────────────────────────────────

    def snapshot(self) -> dict:
        """Plain-data copy of the state, consistent as of the last tick."""
        jobs = self.jobs.snapshot()
        return {
            "tick": self.clock.tick,
            "clock": str(self.clock),
            "hour": self.clock.hour,
            "jobs": jobs["jobs"],
            "unassigned": jobs["unassigned"],
            "items": self.items.snapshot(),
            "colonists": [c.snapshot() for c in self.colonists],
        }

    def debug_info(self) -> dict:
        return {
            "tick": self.clock.tick,
            "jobs": len(self.jobs),
            "jobs_created": self.jobs.jobs_created,
            "jobs_finished": self.jobs.jobs_finished,
            "scheduler_passes": self.scheduler.passes,
            "items": len(self.items),
            "unassigned": len(self.jobs.unassigned),
            "active": self.jobs.debug_dump(),
        }

    # ── Invariants ───────────────────────────────────────────────────

    def verify_invariants(self) -> None:
        """Check the colony invariants; raise ``InvariantError`` on the first break."""
        colonists = {c.eid: c for c in self.colonists}

        ground: set[Pos] = set()
        for item in self.items:
            if item.carrier is not None:
                holder = colonists.get(item.carrier)
                if holder is None or holder.held != item.id:
                    raise InvariantError(f"{item!r} carried by eid {item.carrier} "
                                         f"who does not hold it")
            elif item.pos is not None:
                if item.pos in ground:
                    raise InvariantError(f"two items on tile {item.pos}")
                ground.add(item.pos)
            else:
                raise InvariantError(f"{item!r} has no location")

        for colonist in colonists.values():
            if colonist.held is not None:
                item = self.items.get(colonist.held)
                if item is None or item.carrier != colonist.eid:
                    raise InvariantError(f"{colonist.name} holds item {colonist.held} "
                                         f"that is not carried by them")

        dests: set[Pos] = set()
        bound: set[int] = set()
        stands: set[Pos] = set()
        for job in self.jobs:
            if job.dest in dests:
                raise InvariantError(f"two jobs target {job.dest}")
            dests.add(job.dest)
            if job.colonist in bound:
                raise InvariantError(f"colonist {job.colonist} bound to two jobs")
            bound.add(job.colonist)
            if isinstance(job, ProductionJob) and job.stand is not None:
                if job.stand in stands:
                    raise InvariantError(f"two production jobs share stand {job.stand}")
                stands.add(job.stand)
            if isinstance(job, TransportJob) and self.items.get(job.item) is None:
                raise InvariantError(f"transport job {job.id} references missing item {job.item}")
