"""simulation/jobs.py — The job table.

A job binds one colonist to one piece of work at one fixture:

    TransportJob   carry a specific ground item to a fixture input slot
    ProductionJob  stand at a fixture for its duration, then carry the
                   product (if any) to a free tile in the room

The table owns every live job by id and keeps three indices so the
scheduler can enforce, on every insert:

    * at most one job per destination tile
    * at most one job per colonist
    * at most one production job per stand tile

Breaking any of these, or deleting a job that is not in the table,
raises ``InvariantError``.

``unassigned`` holds the diagnostics of the most recent scheduler
pass: every fixture need that could not be matched this tick and why.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Iterator

from components.spatial import Pos
from core.errors import InvariantError
from simulation.fixtures import Fixture, Room


class JobKind(Enum):
    TRANSPORT = "transport"
    PRODUCTION = "production"


@dataclass(eq=False)
class Job:
    id: int
    room: Room
    fixture: Fixture
    colonist: int
    dest: Pos

    kind: ClassVar[JobKind]

    def snapshot(self) -> dict:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "room": self.room.label(),
            "fixture": self.fixture.label(),
            "colonist": self.colonist,
            "dest": (self.dest.x, self.dest.y),
        }


@dataclass(eq=False)
class TransportJob(Job):
    item: int = 0

    kind: ClassVar[JobKind] = JobKind.TRANSPORT

    def snapshot(self) -> dict:
        return {**super().snapshot(), "item": self.item}


@dataclass(eq=False)
class ProductionJob(Job):
    stand: Pos | None = None
    # Tick at which production finishes; set when the worker reaches the stand.
    time_completed: int | None = None
    # Product held by the worker, so no other job can claim it.
    item: int | None = None

    kind: ClassVar[JobKind] = JobKind.PRODUCTION

    def snapshot(self) -> dict:
        return {
            **super().snapshot(),
            "stand": (self.stand.x, self.stand.y) if self.stand else None,
            "time_completed": self.time_completed,
            "item": self.item,
        }


class Reason(Enum):
    FIXTURE_IN_USE = "fixture in use"
    NO_AGENT = "no agent available"
    NO_DELIVERY_TILE = "no delivery tile available"
    DEST_RESERVED = "destination reserved"
    NO_ITEM = "no item available"
    SLOT_BLOCKED = "input slot holds the wrong item"


@dataclass(frozen=True, eq=False)
class Unassigned:
    """Why a fixture need got no job this tick."""
    room: Room
    fixture: Fixture
    reason: Reason
    slot: int | None = None

    def snapshot(self) -> dict:
        return {
            "room": self.room.label(),
            "fixture": self.fixture.label(),
            "slot": self.slot,
            "reason": self.reason.value,
        }


class JobTable:
    """All live jobs, indexed by id, destination, colonist and stand."""

    def __init__(self) -> None:
        self._jobs: dict[int, Job] = {}
        self._by_dest: dict[Pos, int] = {}
        self._by_colonist: dict[int, int] = {}
        self._by_stand: dict[Pos, int] = {}
        self._next_id = 0
        self.unassigned: list[Unassigned] = []
        # Stats
        self.jobs_created: int = 0
        self.jobs_finished: int = 0

    # ── Insertion ────────────────────────────────────────────────────

    def add_transport(self, room: Room, fixture: Fixture, colonist: int,
                      item: int, dest: Pos) -> TransportJob:
        job = TransportJob(self._next_id + 1, room, fixture, colonist, dest,
                           item=item)
        self._insert(job)
        return job

    def add_production(self, room: Room, fixture: Fixture, colonist: int,
                       stand: Pos, dest: Pos) -> ProductionJob:
        job = ProductionJob(self._next_id + 1, room, fixture, colonist, dest,
                            stand=stand)
        self._insert(job)
        return job

    def _insert(self, job: Job) -> None:
        if job.dest in self._by_dest:
            raise InvariantError(
                f"destination {job.dest} already targeted by job {self._by_dest[job.dest]}")
        if job.colonist in self._by_colonist:
            raise InvariantError(
                f"colonist {job.colonist} already bound to job {self._by_colonist[job.colonist]}")
        stand = getattr(job, "stand", None)
        if stand is not None and stand in self._by_stand:
            raise InvariantError(
                f"stand {stand} already used by job {self._by_stand[stand]}")
        self._next_id = job.id
        self._jobs[job.id] = job
        self._by_dest[job.dest] = job.id
        self._by_colonist[job.colonist] = job.id
        if stand is not None:
            self._by_stand[stand] = job.id
        self.jobs_created += 1

    # ── Removal ──────────────────────────────────────────────────────

    def delete(self, job: Job) -> None:
        if self._jobs.get(job.id) is not job:
            raise InvariantError(f"job {job.id} is not in the table")
        del self._jobs[job.id]
        del self._by_dest[job.dest]
        del self._by_colonist[job.colonist]
        stand = getattr(job, "stand", None)
        if stand is not None:
            del self._by_stand[stand]
        self.jobs_finished += 1

    # ── Queries ──────────────────────────────────────────────────────

    def get(self, job_id: int) -> Job | None:
        return self._jobs.get(job_id)

    def for_colonist(self, eid: int) -> Job | None:
        job_id = self._by_colonist.get(eid)
        return self._jobs[job_id] if job_id is not None else None

    def at_dest(self, pos: Pos) -> Job | None:
        job_id = self._by_dest.get(pos)
        return self._jobs[job_id] if job_id is not None else None

    def at_stand(self, pos: Pos) -> Job | None:
        job_id = self._by_stand.get(pos)
        return self._jobs[job_id] if job_id is not None else None

    def claimed_items(self) -> set[int]:
        """Ids of items some job is already moving or holding."""
        return {job.item for job in self._jobs.values() if job.item is not None}

    def __iter__(self) -> Iterator[Job]:
        return iter(list(self._jobs.values()))

    def __len__(self) -> int:
        return len(self._jobs)

    def __contains__(self, job: Job) -> bool:
        return self._jobs.get(job.id) is job

    # ── Snapshot ─────────────────────────────────────────────────────

    def snapshot(self) -> dict:
        return {
            "jobs": [job.snapshot() for job in self._jobs.values()],
            "unassigned": [u.snapshot() for u in self.unassigned],
        }

    def debug_dump(self) -> list[str]:
        """Human-readable one-liners for the console."""
        return [
            f"#{j.id} {j.kind.value:<10} eid={j.colonist} {j.fixture.label()} → {j.dest}"
            for j in self._jobs.values()
        ]
