"""core/tuning.py — Data-driven tuning constants.

Every simulation number that a designer might want to tweak (day
length, meal hours, pathfinding limits, viewer speed) lives in
``data/tuning.toml`` and is loaded once at startup.  Any system can
read a value with::

    from core.tuning import get
    tph = get("clock", "ticks_per_hour", 30)

Callers always pass a default, so the simulation runs unchanged when
the file was never loaded (headless tests do exactly that).

Hot-reload: call ``reload()`` to re-read the file.  In the viewer,
press F4.
"""

from __future__ import annotations
from pathlib import Path

try:
    import tomllib                         # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib                # pip install tomli


_data: dict = {}
_path: Path | None = None


def default_path() -> Path:
    """``data/tuning.toml`` relative to the project root."""
    return Path(__file__).resolve().parent.parent / "data" / "tuning.toml"


def load(path: str | Path | None = None) -> None:
    """Load (or reload) tuning constants from *path*."""
    global _data, _path

    path = default_path() if path is None else Path(path)
    _path = path

    if not path.exists():
        print(f"[TUNING] {path} not found — using defaults")
        _data = {}
        return

    with open(path, "rb") as f:
        _data = tomllib.load(f)

    print(f"[TUNING] Loaded {_count_leaves(_data)} values from {path}")


def reload() -> None:
    """Re-read the tuning file from disk (hot-reload)."""
    load(_path)


def clear() -> None:
    """Forget every loaded value; ``get`` returns defaults again."""
    global _data
    _data = {}


def _node(section_path: str):
    node = _data
    for part in section_path.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(part)
        if node is None:
            return None
    return node


def get(section: str, key: str, default=None):
    """Read a tuning value.

    *section* uses dot-notation to traverse nested tables.

    >>> get("schedule", "eat_hours", [7, 12, 18])
    [7, 12, 18]
    """
    node = _node(section)
    if isinstance(node, dict):
        return node.get(key, default)
    return default


def section(section_path: str) -> dict:
    """Return an entire section dict (shallow copy), or empty dict."""
    node = _node(section_path)
    return dict(node) if isinstance(node, dict) else {}


def _count_leaves(d: dict) -> int:
    return sum(_count_leaves(v) if isinstance(v, dict) else 1
               for v in d.values())
