"""core/errors.py — Fatal error types for the colony core.

An ``InvariantError`` means the scheduler and the task executor
disagree about the world: an item vanished under an active job, a
colonist tried to carry two things, a job was deleted twice.  These
are defects, not runtime conditions, so nothing in the core catches
them.

Soft outcomes ("no idle colonist", "no free tile") are never raised;
they are recorded as ``Unassigned`` entries on the job table.
"""

from __future__ import annotations


class InvariantError(AssertionError):
    """A colony invariant was broken.  Never recovered from."""
