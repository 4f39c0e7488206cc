"""logic/tasks.py — Per-colonist job execution.

Called once per colonist per tick, in roster order, before the
scheduler.  Precedence is strict:

1. **Walking.**  If the colonist has path steps left it moves one tile
   and does nothing else this tick.  This also applies after its job
   has gone away, so a colonist always finishes walking off a stand.
2. **No job.**  The colonist is ``IDLE``.
3. **Job step.**  One transition function per job kind, driven by
   ``Colonist.state``:

   Transport
       IDLE / MOVING_TO_ITEM      on the item's tile → pick it up and
                                  walk to the slot (CARRYING_TO_DESTINATION);
                                  otherwise walk to the item
       CARRYING_TO_DESTINATION    drop on the slot, delete the job

   Production
       IDLE / MOVING_TO_STAND     off the stand → walk there; on the stand
                                  → set the completion tick (PRODUCING)
       PRODUCING                  wait for the completion tick, then
                                  consume the inputs, clear the shape's
                                  Need and either pick up the product
                                  (CARRYING_OUTPUT) or, with no product,
                                  delete the job and walk to the delivery
                                  tile to vacate the stand
       CARRYING_OUTPUT            drop on the delivery tile, delete the job

Anything that contradicts the job table or the item registry (carrying
but not on the destination, the transport item no longer on the ground,
a missing input at completion) raises ``InvariantError``.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable

from components import AgentState, Colonist, DevLog, ItemRegistry, Pos
from core.errors import InvariantError
from logic.pathfinding import find_path
from simulation.jobs import Job, JobTable, ProductionJob, TransportJob


@dataclass
class TaskContext:
    """Everything a job step may read or change this tick."""
    jobs: JobTable
    items: ItemRegistry
    walkable: Callable[[Pos], bool]
    tick: int
    log: DevLog | None = None

    def record(self, colonist: Colonist, cat: str, msg: str, **details) -> None:
        if self.log is not None:
            self.log.record(colonist.eid, cat, msg, name=colonist.name,
                            t=self.tick, details=details or None)


def run_colonist(colonist: Colonist, jobs: JobTable, items: ItemRegistry,
                 walkable: Callable[[Pos], bool], tick: int,
                 log: DevLog | None = None) -> None:
    """Advance one colonist by one tick."""
    if colonist.path:
        colonist.pos = colonist.path.pop()
        return

    job = jobs.for_colonist(colonist.eid)
    if job is None:
        colonist.state = AgentState.IDLE
        return

    ctx = TaskContext(jobs, items, walkable, tick, log)
    if isinstance(job, TransportJob):
        _transport_step(ctx, colonist, job)
    elif isinstance(job, ProductionJob):
        _production_step(ctx, colonist, job)
    else:
        raise InvariantError(f"unknown job type {type(job).__name__}")


# ── Movement ─────────────────────────────────────────────────────────

def walk_to(ctx: TaskContext, colonist: Colonist, goal: Pos) -> bool:
    """Replace the colonist's path with a route to *goal*.

    Returns False when the pathfinder fails; the colonist is then left
    without a path for this tick.
    """
    path = find_path(ctx.walkable, colonist.pos, goal)
    if path is None:
        print(f"[PATH] {colonist.name}: no path {colonist.pos} → {goal}")
        ctx.record(colonist, "path", f"no path to {goal}",
                   start=colonist.pos.key, goal=goal.key)
        colonist.path = []
        return False
    path.reverse()  # nearest step last, popped one per tick
    colonist.path = path
    return True


def _deliver(ctx: TaskContext, colonist: Colonist, job: Job, item_id: int | None) -> None:
    """Drop the carried item on the job's destination and retire the job."""
    if colonist.held is None or colonist.held != item_id:
        raise InvariantError(
            f"{colonist.name} should be carrying item {item_id} for job {job.id}, "
            f"holds {colonist.held}")
    if colonist.pos != job.dest:
        raise InvariantError(
            f"{colonist.name} carries item {item_id} at {colonist.pos}, "
            f"not at job {job.id} destination {job.dest}")
    item = ctx.items.get(item_id)
    ctx.items.drop(colonist, item)
    ctx.jobs.delete(job)
    colonist.state = AgentState.IDLE
    ctx.record(colonist, "item", f"dropped {item.type}#{item.id} at {job.dest}")
    ctx.record(colonist, "job", f"finished {job.kind.value} at {job.fixture.label()}",
               job=job.id)


# ── Transport ────────────────────────────────────────────────────────

_TRANSPORT_STATES = {
    AgentState.IDLE,
    AgentState.MOVING_TO_ITEM,
    AgentState.CARRYING_TO_DESTINATION,
}


def _transport_step(ctx: TaskContext, colonist: Colonist, job: TransportJob) -> None:
    if colonist.state not in _TRANSPORT_STATES:
        raise InvariantError(
            f"{colonist.name} in state {colonist.state.value} on transport job {job.id}")

    if colonist.state is AgentState.CARRYING_TO_DESTINATION:
        _deliver(ctx, colonist, job, job.item)
        return

    item = ctx.items.get(job.item)
    if item is None or item.pos is None:
        raise InvariantError(
            f"item {job.item} for transport job {job.id} is no longer on the ground")

    if colonist.pos == item.pos:
        ctx.items.pick_up(colonist, item)
        colonist.state = AgentState.CARRYING_TO_DESTINATION
        ctx.record(colonist, "item", f"picked up {item.type}#{item.id}")
        walk_to(ctx, colonist, job.dest)
    else:
        colonist.state = AgentState.MOVING_TO_ITEM
        walk_to(ctx, colonist, item.pos)


# ── Production ───────────────────────────────────────────────────────

_PRODUCTION_STATES = {
    AgentState.IDLE,
    AgentState.MOVING_TO_STAND,
    AgentState.PRODUCING,
    AgentState.CARRYING_OUTPUT,
}


def _production_step(ctx: TaskContext, colonist: Colonist, job: ProductionJob) -> None:
    if colonist.state not in _PRODUCTION_STATES:
        raise InvariantError(
            f"{colonist.name} in state {colonist.state.value} on production job {job.id}")

    if colonist.state is AgentState.CARRYING_OUTPUT:
        _deliver(ctx, colonist, job, job.item)
        return

    if colonist.state is AgentState.PRODUCING:
        if job.time_completed is None:
            raise InvariantError(f"production job {job.id} has no completion tick")
        if ctx.tick >= job.time_completed:
            _finish_production(ctx, colonist, job)
        return

    # IDLE or MOVING_TO_STAND
    if colonist.pos != job.stand:
        colonist.state = AgentState.MOVING_TO_STAND
        walk_to(ctx, colonist, job.stand)
        return

    if job.time_completed is not None:
        raise InvariantError(
            f"production job {job.id} already started at {job.fixture.label()}")
    job.time_completed = ctx.tick + job.fixture.shape.ticks
    colonist.state = AgentState.PRODUCING
    ctx.record(colonist, "job", f"working {job.fixture.label()} until tick {job.time_completed}",
               job=job.id)


def _finish_production(ctx: TaskContext, colonist: Colonist, job: ProductionJob) -> None:
    shape = job.fixture.shape
    job.time_completed = None

    for slot_pos in job.fixture.input_positions:
        item = ctx.items.find_on_tile(slot_pos)
        if item is None:
            raise InvariantError(
                f"input slot {slot_pos} of {job.fixture.label()} emptied during production")
        ctx.items.destroy(item)
        ctx.record(colonist, "item", f"consumed {item.type}#{item.id}")

    if shape.clears is not None and shape.clears in colonist.status:
        colonist.status.discard(shape.clears)
        ctx.record(colonist, "need", f"no longer {shape.clears.value}")

    if shape.output is not None:
        product = ctx.items.create(shape.output, colonist)
        job.item = product.id
        colonist.state = AgentState.CARRYING_OUTPUT
        ctx.record(colonist, "item", f"produced {product.type}#{product.id}")
        walk_to(ctx, colonist, job.dest)
        return

    # Nothing to carry: the job ends now, the colonist still steps off the stand.
    ctx.jobs.delete(job)
    colonist.state = AgentState.IDLE
    ctx.record(colonist, "job", f"finished production at {job.fixture.label()}", job=job.id)
    walk_to(ctx, colonist, job.dest)
