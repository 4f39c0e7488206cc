"""components.dev_log — Structured colony activity log.

A ring-buffer resource that records what each colonist did and why:
jobs assigned and finished, items picked up, dropped, produced and
consumed, path failures, and schedule effects.  The viewer shows the
tail; tests use it to check the order of events.

Usage:
    log = world.res(DevLog)
    log.record(eid, "item", "picked up rawfood#3", name="Ada", t=clock.tick)

Each entry is a dict:
    {"t": int, "eid": int, "name": str, "cat": str,
     "msg": str, "details": dict | None}

Categories: "job", "item", "path", "need".
"""

from __future__ import annotations
from dataclasses import dataclass, field

from core.tuning import get as _tun


@dataclass
class DevLog:
    """Ring-buffer of colony events."""

    entries: list[dict] = field(default_factory=list)
    max_entries: int = field(
        default_factory=lambda: int(_tun("devlog", "max_entries", 500)))

    # If non-empty, only entries whose ``cat`` is in the set are kept.
    cat_filter: set[str] = field(default_factory=set)

    def record(self, eid: int, cat: str, msg: str, *,
               name: str = "", t: int = 0,
               details: dict | None = None) -> None:
        if self.cat_filter and cat not in self.cat_filter:
            return
        self.entries.append({
            "t": t,
            "eid": eid,
            "name": name,
            "cat": cat,
            "msg": msg,
            "details": details,
        })
        if len(self.entries) > self.max_entries:
            del self.entries[:len(self.entries) - self.max_entries]

    def clear(self):
        self.entries.clear()

    def recent(self, n: int = 50) -> list[dict]:
        """Return the *n* most recent entries (newest last)."""
        return self.entries[-n:]

    def for_eid(self, eid: int, n: int = 30) -> list[dict]:
        """Return last *n* entries for one colonist."""
        return [e for e in self.entries if e["eid"] == eid][-n:]

    def for_cat(self, cat: str, n: int = 50) -> list[dict]:
        """Return last *n* entries in a category."""
        return [e for e in self.entries if e["cat"] == cat][-n:]
