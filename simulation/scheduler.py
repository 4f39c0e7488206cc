"""simulation/scheduler.py — Matches fixture needs to idle colonists.

Runs once per tick, after every colonist has moved, so it always sees
post-movement positions.  Each pass rescans every room and fixture:

1. Collect every input-slot tile in the colony.  Items lying there are
   reserved for their fixture and are never hauled elsewhere.
2. Visit rooms by descending priority (ties keep map order), and the
   fixtures inside each room the same way, so urgent needs such as
   eating and sleeping claim the scarce idle colonists first.
3. A fixture whose slots all hold the right item is a **production**
   candidate; otherwise every empty slot is its own **transport**
   candidate.

Jobs that already exist are never modified here.  A candidate whose
stand or slot is already claimed is simply reported, which makes the
pass idempotent: running it twice on an unchanged world creates
nothing the second time.

Every need that cannot be matched becomes an ``Unassigned`` entry on
the job table.  These are normal under contention and never raised.

    scheduler = world.res(JobScheduler)
    new_jobs = scheduler.run(rooms, jobs, items, colonists)
"""

from __future__ import annotations
from typing import Iterable

from components import Colonist, DevLog, Item, ItemRegistry, Pos
from simulation.fixtures import Fixture, Room
from simulation.jobs import Job, JobTable, Reason, Unassigned


class JobScheduler:
    """Creates jobs for unmet fixture needs.  Stored as a world resource."""

    def __init__(self) -> None:
        # Stats
        self.passes: int = 0
        self.jobs_created: int = 0

    def run(self, rooms: Iterable[Room], jobs: JobTable, items: ItemRegistry,
            colonists: Iterable[Colonist], *,
            log: DevLog | None = None, tick: int = 0) -> list[Job]:
        """One full scheduling pass.  Returns the jobs created."""
        rooms = list(rooms)
        fixtures = [f for room in rooms for f in room.fixtures]
        reserved = {p for f in fixtures for p in f.input_positions}
        footprint = set().union(*(f.tiles for f in fixtures)) if fixtures else set()

        idle = [c for c in colonists if jobs.for_colonist(c.eid) is None]
        unassigned: list[Unassigned] = []
        created: list[Job] = []

        for room in sorted(rooms, key=lambda r: -r.priority):
            for fixture in sorted(room.fixtures, key=lambda f: -f.shape.priority):
                missing = []
                blocked = []
                for index, (slot_pos, slot) in enumerate(fixture.input_slots()):
                    item = items.find_on_tile(slot_pos)
                    if item is None:
                        missing.append((index, slot_pos, slot.item_type))
                    elif item.type != slot.item_type:
                        blocked.append(index)

                for index in blocked:
                    unassigned.append(Unassigned(room, fixture, Reason.SLOT_BLOCKED, index))

                if not missing and not blocked:
                    job = self._production(room, fixture, jobs, items, idle,
                                           footprint, unassigned)
                    if job is not None:
                        created.append(job)
                    continue

                for index, slot_pos, item_type in missing:
                    job = self._transport(room, fixture, index, slot_pos, item_type,
                                          jobs, items, idle, reserved, unassigned)
                    if job is not None:
                        created.append(job)

        jobs.unassigned = unassigned
        self.passes += 1
        self.jobs_created += len(created)

        if log is not None:
            for job in created:
                log.record(job.colonist, "job",
                           f"assigned {job.kind.value} at {job.fixture.label()} → {job.dest}",
                           t=tick, details={"job": job.id, "room": job.room.label()})
        return created

    # ── Candidates ───────────────────────────────────────────────────

    def _production(self, room: Room, fixture: Fixture, jobs: JobTable,
                    items: ItemRegistry, idle: list[Colonist],
                    footprint: set[Pos], unassigned: list[Unassigned]) -> Job | None:
        stand = fixture.stand
        if jobs.at_stand(stand) is not None:
            unassigned.append(Unassigned(room, fixture, Reason.FIXTURE_IN_USE))
            return None

        need = fixture.shape.requires
        colonist = next((c for c in idle if need is None or need in c.status), None)
        if colonist is None:
            unassigned.append(Unassigned(room, fixture, Reason.NO_AGENT))
            return None

        dest = find_delivery_tile(room, footprint, jobs, items)
        if dest is None:
            unassigned.append(Unassigned(room, fixture, Reason.NO_DELIVERY_TILE))
            return None

        idle.remove(colonist)
        return jobs.add_production(room, fixture, colonist.eid, stand, dest)

    def _transport(self, room: Room, fixture: Fixture, index: int,
                   slot_pos: Pos, item_type: str, jobs: JobTable,
                   items: ItemRegistry, idle: list[Colonist],
                   reserved: set[Pos], unassigned: list[Unassigned]) -> Job | None:
        if jobs.at_dest(slot_pos) is not None:
            unassigned.append(Unassigned(room, fixture, Reason.DEST_RESERVED, index))
            return None

        if not idle:
            unassigned.append(Unassigned(room, fixture, Reason.NO_AGENT, index))
            return None
        colonist = idle[0]

        item = find_free_item(item_type, jobs, items, reserved)
        if item is None:
            unassigned.append(Unassigned(room, fixture, Reason.NO_ITEM, index))
            return None

        idle.remove(colonist)
        return jobs.add_transport(room, fixture, colonist.eid, item.id, slot_pos)


# ── Searches ─────────────────────────────────────────────────────────

def find_delivery_tile(room: Room, footprint: set[Pos], jobs: JobTable,
                       items: ItemRegistry) -> Pos | None:
    """First free floor tile scanning from the room's far corner inward.

    Skips fixture tiles, tiles already targeted by a job, and tiles
    with an item on them.
    """
    for pos in room.rect.interior_from_far_corner():
        if pos in footprint:
            continue
        if jobs.at_dest(pos) is not None:
            continue
        if items.find_on_tile(pos) is not None:
            continue
        return pos
    return None


def find_free_item(item_type: str, jobs: JobTable, items: ItemRegistry,
                   reserved: set[Pos]) -> Item | None:
    """Oldest ground item of *item_type* that no job claims and no slot holds."""
    claimed = jobs.claimed_items()
    for item in items.find_all_of_type(item_type):
        pos = item.pos
        if pos is None or pos in reserved or item.id in claimed:
            continue
        return item
    return None
