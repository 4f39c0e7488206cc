"""logic — Per-tick colony systems.

Top-level modules
-----------------
tick         — per-tick orchestrator (clock → needs → tasks → scheduler)
tasks        — per-colonist job execution state machine
needs        — daily hunger / sleep schedule
pathfinding  — breadth-first grid navigation
"""
