"""test_colony.py — Clock, needs schedule, tuning and the demo colony.

Tests four things:
1. GameClock hour/day arithmetic and the daily needs schedule
2. Tuning values override the code defaults and can be cleared
3. ColonySim registers its resources and snapshots plain data
4. The demo colony runs for several game hours without breaking an
   invariant, and actually cooks food

Run:  python test_colony.py
"""
from __future__ import annotations
import os, sys, tempfile, traceback

from components import Colonist, GameClock, ItemRegistry, Need, Pos
from core import tuning
from core.constants import ITEM_COOKED_FOOD
from core.ecs import World
from core.errors import InvariantError
from logic.needs import apply_schedule, scheduled_needs
from logic.pathfinding import find_path
from simulation.colony_map import ColonyMap
from simulation.jobs import JobTable
from simulation.layout import COLONISTS, build_demo_colony, build_demo_map


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


# ═══════════════════════════════════════════════════════════════════════
#  1 — Clock and schedule
# ═══════════════════════════════════════════════════════════════════════

def test_clock():
    print("\n=== 1: Clock and needs schedule ===")
    tuning.clear()
    clock = GameClock()
    check(clock.ticks_per_hour == 30 and clock.day_length == 720,
          "1a: defaults are 30 ticks/hour, 24 hours/day")

    clock.tick = 210
    check(clock.hour == 7 and clock.day == 0 and clock.is_hour_start(),
          "1b: tick 210 is 07:00 on day 0")
    check(str(clock) == "day 0 07:00", "1c: clock string", str(clock))

    clock.tick = 720 + 660 + 15
    check(clock.hour == 22 and clock.day == 1 and not clock.is_hour_start()
          and str(clock) == "day 1 22:30",
          "1d: half past ten on day 1", str(clock))

    a = Colonist(eid=1, name="Ada", pos=Pos(0, 0))
    b = Colonist(eid=2, name="Bram", pos=Pos(0, 0))

    clock.tick = 209
    check(apply_schedule([a, b], clock) == [] and not a.status,
          "1e: nothing due the tick before breakfast")

    clock.tick = 210
    check(apply_schedule([a, b], clock) == [Need.HUNGRY]
          and a.status == {Need.HUNGRY} and b.status == {Need.HUNGRY},
          "1f: 07:00 makes everyone hungry")

    clock.tick = 211
    check(scheduled_needs(clock) == [], "1g: only the first tick of the hour counts")

    clock.tick = 660
    check(apply_schedule([a, b], clock) == [Need.SLEEPY]
          and a.status == {Need.HUNGRY, Need.SLEEPY},
          "1h: 22:00 adds sleepiness on top")

    clock.tick = 720 + 360
    check(scheduled_needs(clock) == [Need.HUNGRY], "1i: lunch on the next day")


# ═══════════════════════════════════════════════════════════════════════
#  2 — Tuning
# ═══════════════════════════════════════════════════════════════════════

def test_tuning():
    print("\n=== 2: Tuning ===")
    fd, path = tempfile.mkstemp(suffix=".toml")
    try:
        with os.fdopen(fd, "w") as f:
            f.write("[clock]\nticks_per_hour = 10\n\n[schedule]\neat_hours = [3]\n")
        tuning.load(path)
        clock = GameClock(tick=30)
        check(clock.ticks_per_hour == 10 and clock.hour == 3,
              "2a: loaded value overrides the default")
        check(tuning.get("clock", "hours_per_day", 24) == 24,
              "2b: a missing key falls back to the default")
        check(scheduled_needs(clock) == [Need.HUNGRY],
              "2c: the schedule follows the tuning file")

        tuning.clear()
        check(GameClock(tick=30).hour == 1, "2d: clear() restores the defaults")

        tuning.load(path + ".missing")
        check(tuning.get("clock", "ticks_per_hour", 30) == 30,
              "2e: a missing file means defaults")

        tuning.load()
        check(tuning.get("pathfinding", "max_nodes", 0) == 100000,
              "2f: the shipped tuning file loads")
    finally:
        tuning.clear()
        os.remove(path)


# ═══════════════════════════════════════════════════════════════════════
#  3 — ColonySim facade
# ═══════════════════════════════════════════════════════════════════════

def test_facade():
    print("\n=== 3: ColonySim ===")
    tuning.clear()
    world = World()
    sim = build_demo_colony(world)

    check(world.res(ColonyMap) is sim.map and world.res(JobTable) is sim.jobs
          and world.res(ItemRegistry) is sim.items and world.res(GameClock) is sim.clock,
          "3a: resources are registered on the world")
    check([c.name for c in sim.colonists] == [name for name, _ in COLONISTS],
          "3b: roster follows spawn order")
    check(list(world.all_of(JobTable)) == [] and
          [eid for eid, _ in world.all_of(Colonist)] == [c.eid for c in sim.colonists],
          "3b2: resources never show up as entities")

    snap = sim.snapshot()
    check(set(snap) == {"tick", "clock", "hour", "jobs", "unassigned", "items", "colonists"},
          "3c: snapshot sections", f"{sorted(snap)}")
    check(snap["tick"] == 0 and len(snap["items"]) == 3 and snap["jobs"] == [],
          "3d: nothing has happened yet")
    ada = snap["colonists"][0]
    check(ada["name"] == "Ada" and ada["pos"] == (2, 2) and ada["held"] is None
          and ada["state"] == "idle",
          "3e: colonist snapshot is plain data", f"{ada}")

    sim.step(3)
    snap["colonists"][0]["pos"] = (99, 99)
    check(sim.snapshot()["tick"] == 3 and sim.colonists[0].pos != Pos(99, 99),
          "3f: editing a snapshot never touches the simulation")

    sim.verify_invariants()
    ok("3g: invariants hold")

    victim = sim.colonists[0]
    if victim.held is None:
        victim.held = 12345
    else:
        victim.held = None
    try:
        sim.verify_invariants()
        caught = False
    except InvariantError:
        caught = True
    check(caught, "3h: a colonist holding an unknown item is detected")


# ═══════════════════════════════════════════════════════════════════════
#  4 — Demo colony
# ═══════════════════════════════════════════════════════════════════════

def test_demo_map():
    print("\n=== 4: Demo map ===")
    cmap = build_demo_map()
    fixtures = [f for room in cmap.rooms for f in room.fixtures]
    check(len(cmap.rooms) == 5 and len(fixtures) == 9,
          "4a: five rooms, nine fixtures", f"{len(cmap.rooms)} / {len(fixtures)}")
    check(all(cmap.is_walkable(t) for f in fixtures for t in f.tiles),
          "4b: every fixture tile is floor")

    start = COLONISTS[0][1]
    unreachable = [f.label() for f in fixtures
                   if find_path(cmap.is_walkable, start, f.stand) is None]
    check(unreachable == [], "4c: every stand is reachable from the wilderness",
          f"{unreachable}")

    walls = [p for p in cmap.bounds.tiles() if cmap.is_wall(p)]
    check(walls and all(not cmap.is_walkable(p) for p in walls),
          "4d: walls are not walkable")
    check(cmap.tile_at(Pos(0, 5)) == "river" and cmap.tile_at(Pos(8, 5)) == "plains"
          and cmap.tile_at(Pos(10, 0)) == "void",
          "4e: tile lookup for rendering")
    check(cmap.room_at(Pos(12, 5)).name == "farm" and cmap.room_at(Pos(5, 5)) is None,
          "4f: room lookup")


def test_demo_run():
    print("\n=== 5: Demo colony, 800 ticks ===")
    tuning.clear()
    sim = build_demo_colony()
    cooked_seen = False
    hungry_seen = False
    for _ in range(800):
        sim.step()
        sim.verify_invariants()
        if sim.items.find_all_of_type(ITEM_COOKED_FOOD):
            cooked_seen = True
        if any(Need.HUNGRY in c.status for c in sim.colonists):
            hungry_seen = True

    check(sim.clock.tick == 800, "5a: 800 ticks without an invariant error")
    check(sim.jobs.jobs_finished > 0 and sim.scheduler.passes == 800,
          "5b: jobs were completed", f"{sim.debug_info()}")
    check(cooked_seen, "5c: somebody cooked a meal")
    check(hungry_seen, "5d: meal times made colonists hungry")
    check(len(sim.log.for_cat("job")) > 0 and len(sim.log.entries) <= sim.log.max_entries,
          "5e: dev log is populated and bounded")


# ═══════════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sections = [
        ("Clock and needs", test_clock),
        ("Tuning", test_tuning),
        ("ColonySim", test_facade),
        ("Demo map", test_demo_map),
        ("Demo run", test_demo_run),
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
    print(f"  Colony Tests: {_passed} passed, {_failed} failed  "
          f"(total {total})")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
