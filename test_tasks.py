"""test_tasks.py — Colonist task execution, tick by tick.

Drives small colonies through ``ColonySim.step()`` and checks exactly
where each colonist is, what it holds and which job it has at known
ticks.  Invariants are verified after every step.

Run:  python test_tasks.py
"""
from __future__ import annotations
import sys, traceback

from components import AgentState, Need, Pos, Rect
from core.constants import ITEM_COOKED_FOOD, ITEM_RAW_FOOD
from core.errors import InvariantError
from simulation.colony_map import ColonyMap
from simulation.fixtures import FixtureShape, InputSlot, Room, RoomType, SHAPES, FixtureType
from simulation.jobs import ProductionJob, Reason, TransportJob
from simulation.world_sim import ColonySim


# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")

def fail(label: str, detail: str = ""):
    global _failed
    _failed += 1
    msg = f"  [FAIL] {label}"
    if detail:
        msg += f" — {detail}"
    print(msg)

class CheckFailed(AssertionError):
    """Raised by check() so pytest sees the failure too."""

def check(cond: bool, label: str, detail: str = ""):
    if cond:
        ok(label)
    else:
        fail(label, detail)
        raise CheckFailed(f"{label} {detail}".strip())


# ── Scenario builders ────────────────────────────────────────────────

WOODPILE = FixtureShape(
    name="woodpile",
    stand=Pos(0, 1),
    inputs=(InputSlot(Pos(0, 0), "wood"),),
    ticks=10,
)

SLEEP_SPOT = FixtureShape(
    name="cot",
    stand=Pos(0, 1),
    ticks=60,
    requires=Need.SLEEPY,
    clears=Need.SLEEPY,
)


def _field(w: int, h: int) -> tuple[ColonySim, Room]:
    """An open w×h field whose whole area is one room's floor."""
    room = Room(RoomType.OPEN, Rect(-1, -1, w, h), unlocked=True, name="field")
    sim = ColonySim(None, ColonyMap.open(Rect(0, 0, w, h), [room]))
    return sim, room


def _step(sim: ColonySim, n: int = 1):
    for _ in range(n):
        sim.step()
        sim.verify_invariants()


# ═══════════════════════════════════════════════════════════════════════
#  1 — Haul one item, then work the fixture
# ═══════════════════════════════════════════════════════════════════════

def test_transport_then_produce():
    print("\n=== 1: Haul, then produce ===")
    sim, room = _field(8, 3)
    pile = room.place_fixture(Pos(5, 0), WOODPILE)
    ada = sim.spawn_colonist("Ada", Pos(0, 0))
    wood = sim.place_item("wood", Pos(2, 0))

    _step(sim)                                                    # tick 1
    job = sim.jobs.for_colonist(ada.eid)
    check(isinstance(job, TransportJob) and job.dest == Pos(5, 0) and job.item == wood.id,
          "1a: tick 1 — transport job to the input slot", f"{job}")
    check(ada.pos == Pos(0, 0) and ada.path == [], "1b: nobody moves on the tick a job appears")

    _step(sim)                                                    # tick 2
    check(ada.path == [Pos(2, 0), Pos(1, 0)] and ada.state is AgentState.MOVING_TO_ITEM,
          "1c: tick 2 — path to the item, nearest step last", f"{ada.path}")

    _step(sim, 2)                                                 # tick 4
    check(ada.pos == Pos(2, 0) and wood.pos == Pos(2, 0), "1d: tick 4 — standing on the item")

    _step(sim)                                                    # tick 5
    check(ada.held == wood.id and wood.carrier == ada.eid,
          "1e: tick 5 — item picked up")
    check(ada.path == [Pos(5, 0), Pos(4, 0), Pos(3, 0)]
          and ada.state is AgentState.CARRYING_TO_DESTINATION,
          "1f: tick 5 — path to the slot", f"{ada.path}")

    _step(sim, 3)                                                 # tick 8
    check(ada.pos == Pos(5, 0) and ada.held == wood.id, "1g: tick 8 — at the slot, still carrying")

    _step(sim)                                                    # tick 9
    check(wood.pos == Pos(5, 0) and ada.held is None and sim.jobs.get(job.id) is None,
          "1h: tick 9 — dropped in the slot and the transport job is gone")
    prod = sim.jobs.for_colonist(ada.eid)
    check(isinstance(prod, ProductionJob) and prod.stand == pile.stand
          and prod.dest == Pos(7, 2),
          "1i: tick 9 — the filled fixture gets a production job", f"{prod}")

    _step(sim)                                                    # tick 10
    check(ada.path == [Pos(5, 1)] and ada.state is AgentState.MOVING_TO_STAND,
          "1j: tick 10 — walking to the stand")

    _step(sim, 2)                                                 # tick 12
    check(ada.pos == Pos(5, 1) and prod.time_completed == 22
          and ada.state is AgentState.PRODUCING,
          "1k: tick 12 — on the stand, finishes at tick 22", f"{prod.time_completed}")

    _step(sim, 9)                                                 # tick 21
    check(wood in sim.items and sim.jobs.get(prod.id) is prod,
          "1l: tick 21 — still working")

    _step(sim)                                                    # tick 22
    check(wood not in sim.items, "1m: tick 22 — input consumed")
    check(sim.jobs.for_colonist(ada.eid) is None and ada.path and ada.path[0] == Pos(7, 2),
          "1n: outputless job ends and the colonist walks to the delivery tile",
          f"{ada.path}")
    reasons = [(u.reason, u.slot) for u in sim.jobs.unassigned]
    check(reasons == [(Reason.NO_ITEM, 0)],
          "1o: the empty slot now reports no item available", f"{reasons}")

    _step(sim, len(ada.path))
    check(ada.pos == Pos(7, 2) and ada.state is AgentState.IDLE,
          "1p: colonist ends idle on the delivery tile")


# ═══════════════════════════════════════════════════════════════════════
#  2 — Sleep: required need, duration, need cleared
# ═══════════════════════════════════════════════════════════════════════

def test_sleep():
    print("\n=== 2: Sleep ===")
    sim, room = _field(8, 3)
    cot = room.place_fixture(Pos(3, 0), SLEEP_SPOT)
    ada = sim.spawn_colonist("Ada", Pos(0, 0))
    ada.status.add(Need.SLEEPY)

    _step(sim)                                                    # tick 1
    job = sim.jobs.for_colonist(ada.eid)
    check(isinstance(job, ProductionJob) and job.stand == Pos(3, 1),
          "2a: sleepy colonist gets the cot")

    _step(sim, 5)                                                 # tick 6
    check(ada.pos == cot.stand, "2b: tick 6 — arrived at the stand", f"{ada.pos}")

    _step(sim)                                                    # tick 7
    check(job.time_completed == 67, "2c: tick 7 — sleeps until tick 67",
          f"{job.time_completed}")

    _step(sim, 59)                                                # tick 66
    check(Need.SLEEPY in ada.status and ada.pos == cot.stand,
          "2d: tick 66 — still asleep")

    _step(sim)                                                    # tick 67
    check(Need.SLEEPY not in ada.status, "2e: tick 67 — no longer sleepy")
    check(sim.jobs.get(job.id) is None and job.time_completed is None,
          "2f: job deleted, completion tick cleared")
    check(ada.path and ada.path[0] == job.dest, "2g: walking off the stand to the delivery tile")
    check([u.reason for u in sim.jobs.unassigned] == [Reason.NO_AGENT],
          "2h: nobody else is sleepy, the cot waits")

    _step(sim)
    check(sim.jobs.for_colonist(ada.eid) is None, "2i: Ada is not sent back to bed")


# ═══════════════════════════════════════════════════════════════════════
#  3 — Production with an output
# ═══════════════════════════════════════════════════════════════════════

def test_output_delivery():
    print("\n=== 3: Cooking ===")
    sim, room = _field(8, 4)
    stove = room.place_fixture(Pos(2, 0), SHAPES[FixtureType.STOVE])
    ada = sim.spawn_colonist("Ada", Pos(0, 0))
    raw = sim.place_item(ITEM_RAW_FOOD, Pos(0, 3))

    seen_carrying_output = False
    for _ in range(200):
        _step(sim)
        if ada.state is AgentState.CARRYING_OUTPUT:
            seen_carrying_output = True
        if not sim.items.find_all_of_type(ITEM_RAW_FOOD) and not len(sim.jobs):
            break

    check(seen_carrying_output, "3a: the cook carried the product")
    cooked = sim.items.find_all_of_type(ITEM_COOKED_FOOD)
    check(raw not in sim.items and len(cooked) == 1, "3b: raw food became one cooked meal")
    check(cooked[0].pos == Pos(7, 3) and ada.held is None,
          "3c: the meal was put down on the far corner", f"{cooked[0]!r}")
    check(stove.input_positions[0] not in {i.pos for i in sim.items},
          "3d: the stove slot is empty again")
    entries = [e["msg"] for e in sim.log.for_eid(ada.eid, n=100)]
    check(any(m.startswith("produced cookedfood") for m in entries),
          "3e: production is in the dev log", f"{entries}")


# ═══════════════════════════════════════════════════════════════════════
#  4 — Fatal conditions
# ═══════════════════════════════════════════════════════════════════════

def _raises_invariant(sim: ColonySim) -> bool:
    try:
        sim.step()
    except InvariantError:
        return True
    return False


def test_fatal():
    print("\n=== 4: Fatal conditions ===")
    sim, room = _field(8, 3)
    room.place_fixture(Pos(5, 0), WOODPILE)
    ada = sim.spawn_colonist("Ada", Pos(0, 0))
    wood = sim.place_item("wood", Pos(2, 0))
    _step(sim)
    sim.items.destroy(wood)
    check(_raises_invariant(sim), "4a: the transport item vanished → InvariantError")

    sim, room = _field(8, 3)
    room.place_fixture(Pos(5, 0), WOODPILE)
    ada = sim.spawn_colonist("Ada", Pos(0, 0))
    sim.place_item("wood", Pos(2, 0))
    _step(sim, 5)
    check(ada.held is not None, "4b: setup — carrying the wood")
    ada.path = []
    check(_raises_invariant(sim), "4c: carrying but not at the destination → InvariantError")

    sim, room = _field(8, 3)
    room.place_fixture(Pos(5, 0), WOODPILE)
    ada = sim.spawn_colonist("Ada", Pos(0, 0))
    sim.place_item("wood", Pos(2, 0))
    _step(sim)
    ada.state = AgentState.PRODUCING
    check(_raises_invariant(sim), "4d: production state on a transport job → InvariantError")


def test_unreachable():
    print("\n=== 5: Unreachable item ===")
    # Two islands: x 0..2 and x 5..7 on one row.
    walkable = [Pos(x, 0) for x in (0, 1, 2, 5, 6, 7)] + [Pos(6, 1)]
    room = Room(RoomType.OPEN, Rect(-1, -1, 8, 2), unlocked=True)
    room.place_fixture(Pos(1, 0), FixtureShape(
        name="crate", stand=Pos(1, 0), inputs=(InputSlot(Pos(0, 0), "wood"),), ticks=1))
    sim = ColonySim(None, ColonyMap(Rect(0, 0, 8, 2), walkable, [room]))
    ada = sim.spawn_colonist("Ada", Pos(0, 0))
    sim.place_item("wood", Pos(6, 1))

    _step(sim, 3)
    check(ada.pos == Pos(0, 0) and ada.path == [] and ada.state is AgentState.MOVING_TO_ITEM,
          "5a: no path is not fatal; the colonist waits")
    check(len(sim.log.for_cat("path")) >= 1, "5b: the failure is in the dev log")
    check(isinstance(sim.jobs.for_colonist(ada.eid), TransportJob),
          "5c: the job is kept")


# ═══════════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sections = [
        ("Haul, then produce", test_transport_then_produce),
        ("Sleep", test_sleep),
        ("Cooking", test_output_delivery),
        ("Fatal conditions", test_fatal),
        ("Unreachable item", test_unreachable),
    ]

    for name, fn in sections:
        try:
            fn()
        except CheckFailed:
            print(f"  [ABORT] {name} — stopped at the first failure")
        except Exception:
            _failed += 1
            print(f"\n  [CRASH] {name} — unhandled exception:")
            traceback.print_exc()

    total = _passed + _failed
    print(f"\n{'=' * 60}")
    print(f"  Task Tests: {_passed} passed, {_failed} failed  "
          f"(total {total})")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
